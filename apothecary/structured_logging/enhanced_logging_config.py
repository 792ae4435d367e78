"""
Structlog-based logging configuration for the Apothecary service.

This is the main entry point for the logging system: configure it once with
setup_enhanced_logging() and obtain loggers everywhere with get_logger().
"""

import json
import logging
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

from .logging_context import bind_request_context, clear_request_context, get_current_context
from .logging_file_setup import setup_file_logging
from .logging_processors import add_correlation_id, add_request_context, sanitize_sensitive_data

__all__ = [
    "bind_request_context",
    "clear_request_context",
    "configure_enhanced_structlog",
    "get_current_context",
    "get_logger",
    "setup_enhanced_logging",
]

logger = structlog.get_logger(__name__)


class _LoggingState:
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def _select_renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer(default=str)
    if log_format == "human":
        return structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event", "logger"])
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_enhanced_structlog(
    environment: str = "local",
    log_level: str = "INFO",
    log_config: dict[str, Any] | None = None,
) -> None:
    """
    Configure structlog with request context, sanitization and a renderer.

    Args:
        environment: Environment name, used as log subdirectory
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_config: Logging configuration dictionary
    """
    log_config = log_config or {}

    processors = [
        sanitize_sensitive_data,
        merge_contextvars,
        add_correlation_id,
        add_request_context,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _select_renderer(log_config.get("format", "colored")),
    ]

    if log_config.get("disable_logging", False):
        logging.getLogger().setLevel(logging.CRITICAL + 1)
    else:
        setup_file_logging(environment, log_config, log_level)

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_enhanced_logging(config: dict[str, Any], *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from the application configuration dictionary.

    Args:
        config: Configuration dictionary with a nested "logging" section
        force_reconfigure: When True, reconfigure even if already initialized
    """
    config_signature = json.dumps(config, sort_keys=True, default=str)

    if _logging_state.initialized and not force_reconfigure:
        get_logger(__name__).debug(
            "setup_enhanced_logging skipped; logging system already initialized",
            config_signature=_logging_state.signature,
        )
        return

    logging_config = config.get("logging", {})
    environment = logging_config.get("environment", "local")
    log_level = logging_config.get("level", "INFO")

    configure_enhanced_structlog(environment, log_level, logging_config)
    _configure_uvicorn_logging()

    get_logger(__name__).info(
        "Logging system initialized",
        environment=environment,
        log_level=log_level,
        log_base=logging_config.get("log_base", "logs"),
        log_format=logging_config.get("format", "colored"),
    )

    _logging_state.initialized = True
    _logging_state.signature = config_signature


def _configure_uvicorn_logging() -> None:
    """Route uvicorn's loggers through the root handlers."""
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a structlog logger with the specified name.

    This is the public API for obtaining loggers. Application code should use
    this function rather than calling structlog.get_logger() directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)
