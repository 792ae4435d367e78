"""
FastAPI application factory for the Apothecary service.

This module handles app creation, middleware configuration and router
registration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..api import (
    health_router,
    house_router,
    mastery_router,
    potions_router,
    scrolls_router,
    templates_router,
)
from ..config import get_config
from ..middleware.correlation_middleware import CorrelationMiddleware, IdentityMiddleware
from ..middleware.error_handling_middleware import register_error_handlers
from ..structured_logging.enhanced_logging_config import get_logger
from .lifespan import lifespan

logger = get_logger(__name__)

API_PREFIX = "/v1"


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    config = get_config()
    app = FastAPI(
        title="Apothecary API",
        description="Potion and scroll lifecycle with character mastery progression",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Middleware added last runs first: correlation wraps identity
    app.add_middleware(IdentityMiddleware, identity_header=config.security.identity_header)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_credentials=True,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
    )
    app.add_middleware(CorrelationMiddleware)

    register_error_handlers(app, include_details=config.server.include_error_details)

    for router in (health_router, potions_router, scrolls_router, mastery_router, templates_router, house_router):
        app.include_router(router, prefix=API_PREFIX)

    logger.info("Application created", identity_header=config.security.identity_header)
    return app
