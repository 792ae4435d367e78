"""
Standardized error response formats for all API endpoints.

Every exception that reaches the HTTP boundary is converted into the same
envelope, produced by create_standard_error_response. Domain errors keep
their message; internal failures are reduced to a generic message unless
error details are explicitly enabled.
"""

from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ..error_types import ErrorMessages, ErrorSeverity, ErrorType, create_standard_error_response
from ..exceptions import (
    ApothecaryError,
    AuthenticationError,
    ConfigurationError,
    DatabaseError,
    InvalidStateTransitionError,
    ResourceNotFoundError,
    ValidationError,
)
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import create_context_from_request

logger = get_logger(__name__)


class StandardizedErrorResponse:
    """
    Standardized error response handler for all API endpoints.

    Detects the error type of an exception, picks the HTTP status for it and
    renders the standard error envelope.
    """

    STATUS_CODE_MAPPINGS = {
        ErrorType.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
        ErrorType.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
        ErrorType.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
        ErrorType.MISSING_REQUIRED_FIELD: status.HTTP_400_BAD_REQUEST,
        ErrorType.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
        ErrorType.INVALID_STATE_TRANSITION: status.HTTP_409_CONFLICT,
        ErrorType.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorType.CONFIGURATION_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorType.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    USER_FRIENDLY_MESSAGES = {
        ErrorType.AUTHENTICATION_REQUIRED: ErrorMessages.AUTHENTICATION_REQUIRED,
        ErrorType.VALIDATION_ERROR: ErrorMessages.INVALID_INPUT,
        ErrorType.INVALID_INPUT: ErrorMessages.INVALID_INPUT,
        ErrorType.MISSING_REQUIRED_FIELD: ErrorMessages.INVALID_INPUT,
        ErrorType.RESOURCE_NOT_FOUND: ErrorMessages.RESOURCE_NOT_FOUND,
        ErrorType.INVALID_STATE_TRANSITION: "The item cannot be changed in its current state",
        ErrorType.DATABASE_ERROR: ErrorMessages.DATABASE_UNAVAILABLE,
        ErrorType.CONFIGURATION_ERROR: ErrorMessages.INTERNAL_ERROR,
        ErrorType.INTERNAL_ERROR: ErrorMessages.INTERNAL_ERROR,
    }

    # Error types whose message is safe to show to the caller
    CLIENT_ERROR_TYPES = frozenset(
        {
            ErrorType.AUTHENTICATION_REQUIRED,
            ErrorType.VALIDATION_ERROR,
            ErrorType.INVALID_INPUT,
            ErrorType.MISSING_REQUIRED_FIELD,
            ErrorType.RESOURCE_NOT_FOUND,
            ErrorType.INVALID_STATE_TRANSITION,
        }
    )

    def __init__(self, request: Request | None = None):
        self.request = request
        self.context = create_context_from_request(request)

    def handle_exception(self, exc: Exception, include_details: bool = False) -> JSONResponse:
        """
        Handle any exception and return a standardized error response.

        Args:
            exc: The exception to handle
            include_details: Whether to include detailed error information

        Returns:
            Standardized JSONResponse
        """
        if isinstance(exc, ApothecaryError):
            return self._handle_apothecary_error(exc, include_details)
        if isinstance(exc, RequestValidationError):
            return self._handle_request_validation_error(exc)
        if isinstance(exc, HTTPException):
            return self._handle_http_exception(exc, include_details)
        return self._handle_generic_exception(exc, include_details)

    def _handle_apothecary_error(self, error: ApothecaryError, include_details: bool) -> JSONResponse:
        error_type = self._determine_error_type_from_exception(error)
        status_code = self.STATUS_CODE_MAPPINGS.get(error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)

        if error_type in self.CLIENT_ERROR_TYPES:
            message = error.message
            user_friendly = error.user_friendly or message
            details = dict(error.details)
            severity = ErrorSeverity.LOW
        else:
            message = error.message if include_details else ErrorMessages.INTERNAL_ERROR
            user_friendly = self.USER_FRIENDLY_MESSAGES.get(error_type, ErrorMessages.INTERNAL_ERROR)
            details = self._create_error_details(error) if include_details else {}
            severity = ErrorSeverity.HIGH

        response_data = create_standard_error_response(
            error_type=error_type,
            message=message,
            user_friendly=user_friendly,
            details=details,
            severity=severity,
        )
        return JSONResponse(status_code=status_code, content=response_data)

    def _handle_request_validation_error(self, exc: RequestValidationError) -> JSONResponse:
        """Handle request body and parameter validation failures raised by FastAPI."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        response_data = create_standard_error_response(
            error_type=ErrorType.VALIDATION_ERROR,
            message="Request validation failed",
            user_friendly=ErrorMessages.INVALID_INPUT,
            details={"validation_errors": errors},
            severity=ErrorSeverity.LOW,
        )
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=response_data)

    def _handle_http_exception(self, exc: HTTPException, include_details: bool) -> JSONResponse:
        """Handle HTTPException and LoggedHTTPException instances."""
        error_type = self._map_status_code_to_error_type(exc.status_code)
        user_friendly = self.USER_FRIENDLY_MESSAGES.get(error_type, ErrorMessages.INTERNAL_ERROR)

        details: dict[str, Any] = {"status_code": exc.status_code}
        if include_details:
            details["original_detail"] = str(exc.detail)

        response_data = create_standard_error_response(
            error_type=error_type,
            message=str(exc.detail),
            user_friendly=user_friendly,
            details=details,
            severity=ErrorSeverity.MEDIUM,
        )
        return JSONResponse(status_code=exc.status_code, content=response_data, headers=exc.headers)

    def _handle_generic_exception(self, exc: Exception, include_details: bool) -> JSONResponse:
        """Handle exceptions that escaped every other layer."""
        logger.error("Unhandled exception", exc_info=exc, context=self.context.to_dict())

        details: dict[str, Any] = {}
        if include_details:
            details["exception_type"] = type(exc).__name__
            details["exception_message"] = str(exc)

        response_data = create_standard_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message=ErrorMessages.INTERNAL_ERROR,
            user_friendly=ErrorMessages.INTERNAL_ERROR,
            details=details,
            severity=ErrorSeverity.HIGH,
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=response_data)

    def _determine_error_type_from_exception(self, error: ApothecaryError) -> ErrorType:
        """Determine ErrorType from an ApothecaryError instance."""
        if isinstance(error, AuthenticationError):
            return ErrorType.AUTHENTICATION_REQUIRED
        if isinstance(error, ValidationError):
            return ErrorType.VALIDATION_ERROR
        if isinstance(error, ResourceNotFoundError):
            return ErrorType.RESOURCE_NOT_FOUND
        if isinstance(error, InvalidStateTransitionError):
            return ErrorType.INVALID_STATE_TRANSITION
        if isinstance(error, DatabaseError):
            return ErrorType.DATABASE_ERROR
        if isinstance(error, ConfigurationError):
            return ErrorType.CONFIGURATION_ERROR
        return ErrorType.INTERNAL_ERROR

    def _map_status_code_to_error_type(self, status_code: int) -> ErrorType:
        mapping = {
            400: ErrorType.INVALID_INPUT,
            401: ErrorType.AUTHENTICATION_REQUIRED,
            404: ErrorType.RESOURCE_NOT_FOUND,
            409: ErrorType.INVALID_STATE_TRANSITION,
            422: ErrorType.VALIDATION_ERROR,
        }
        return mapping.get(status_code, ErrorType.INTERNAL_ERROR)

    def _create_error_details(self, error: ApothecaryError) -> dict[str, Any]:
        details = dict(error.details)
        details["context"] = {
            "user_id": error.context.user_id,
            "request_id": error.context.request_id,
            "operation": error.context.operation,
        }
        return details
