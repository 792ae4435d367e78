"""ASGI middleware and exception handler registration."""

from .correlation_middleware import CorrelationMiddleware, IdentityMiddleware
from .error_handling_middleware import register_error_handlers

__all__ = ["CorrelationMiddleware", "IdentityMiddleware", "register_error_handlers"]
