"""
Exception handler registration for FastAPI integration.

Installs handlers so every exception leaving an endpoint is rendered with
the standard error envelope.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..error_handlers.standardized_responses import StandardizedErrorResponse
from ..exceptions import ApothecaryError
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI, include_details: bool = False):
    """
    Register error handlers for FastAPI application.

    Args:
        app: FastAPI application instance
        include_details: Whether to include detailed error information in responses
    """

    @app.exception_handler(ApothecaryError)
    async def apothecary_error_handler(request: Request, exc: ApothecaryError):
        """Handle ApothecaryError exceptions."""
        handler = StandardizedErrorResponse(request=request)
        return handler.handle_exception(exc, include_details=include_details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        handler = StandardizedErrorResponse(request=request)
        return handler.handle_exception(exc, include_details=include_details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTPException and LoggedHTTPException exceptions."""
        handler = StandardizedErrorResponse(request=request)
        return handler.handle_exception(exc, include_details=include_details)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        handler = StandardizedErrorResponse(request=request)
        return handler.handle_exception(exc, include_details=include_details)

    logger.info("Error handlers registered for FastAPI application", include_details=include_details)
