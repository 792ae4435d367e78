"""
Application lifecycle management for the Apothecary service.

Startup configures logging and builds the ApplicationContainer (database,
repositories, services); shutdown releases it. A container already placed
on app.state before startup is used as-is.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import get_config
from ..container import ApplicationContainer
from ..structured_logging.enhanced_logging_config import get_logger, setup_enhanced_logging

logger = get_logger("apothecary.lifespan")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    config = get_config()
    setup_enhanced_logging(config.to_legacy_dict())

    container = getattr(app.state, "container", None)
    owns_container = container is None
    if owns_container:
        container = ApplicationContainer()
        app.state.container = container

    logger.info("Apothecary startup", environment=config.logging.environment)
    await container.initialize()
    try:
        yield
    finally:
        if owns_container:
            await container.shutdown()
        logger.info("Apothecary shutdown complete")
