"""
Exception hierarchy for the Apothecary item ledger.

Every error raised by the services derives from ApothecaryError, which
carries a structured ErrorContext and logs itself on construction. The
HTTP layer maps each subclass onto a caller-visible status class.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fastapi import HTTPException

from .structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """
    Contextual information for error handling.

    Carried by every ApothecaryError so the log line and the error response
    can name the acting user, request and operation.
    """

    user_id: str | None = None
    request_id: str | None = None
    operation: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "user_id": self.user_id,
            "request_id": self.request_id,
            "operation": self.operation,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class ApothecaryError(Exception):
    """
    Base exception for all Apothecary errors.

    Provides structured error handling with context and metadata
    for proper error categorization and debugging.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
        user_friendly: str | None = None,
    ):
        """
        Initialize an Apothecary error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
            user_friendly: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.user_friendly = user_friendly or message
        self.timestamp = datetime.now(UTC)

        self._log_error()

    def _log_error(self):
        """Log the error with structured context."""
        log_data = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }
        logger.error("Apothecary error occurred", **log_data)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_friendly": self.user_friendly,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class AuthenticationError(ApothecaryError):
    """No acting principal was supplied with the request."""

    def __init__(self, message: str, context: ErrorContext | None = None, auth_type: str = "identity_header", **kwargs):
        super().__init__(message, context, **kwargs)
        self.auth_type = auth_type
        self.details["auth_type"] = auth_type


class DatabaseError(ApothecaryError):
    """Database operation errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        operation: str = "unknown",
        table: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.operation = operation
        self.table = table
        self.details["operation"] = operation
        if table:
            self.details["table"] = table


class ValidationError(ApothecaryError):
    """Malformed or missing input. No mutation has occurred."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        field: str | None = None,
        value: Any | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.field = field
        self.value = value
        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = str(value)


class InvalidStateTransitionError(ApothecaryError):
    """An item is already in a terminal or incompatible state for the requested operation."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        item_type: str | None = None,
        item_id: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.item_type = item_type
        self.item_id = item_id
        if item_type:
            self.details["item_type"] = item_type
        if item_id:
            self.details["item_id"] = item_id


class ConfigurationError(ApothecaryError):
    """Configuration and setup errors."""

    def __init__(self, message: str, context: ErrorContext | None = None, config_key: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class ResourceNotFoundError(ApothecaryError):
    """
    Resource not found errors.

    Also raised when a resource exists but is not owned by the caller, so
    callers cannot learn who owns it.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.resource_type = resource_type
        self.resource_id = resource_id
        if resource_type:
            self.details["resource_type"] = resource_type
        if resource_id:
            self.details["resource_id"] = resource_id


class LoggedHTTPException(HTTPException):
    """HTTPException that logs itself when raised from an endpoint."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        context: ErrorContext | None = None,
        headers: dict[str, str] | None = None,
        **log_kwargs: Any,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.context = context or ErrorContext()
        log_method = logger.error if status_code >= 500 else logger.warning
        log_method(
            "HTTP error raised",
            status_code=status_code,
            detail=detail,
            context=self.context.to_dict(),
            **log_kwargs,
        )


def create_error_context(**kwargs) -> ErrorContext:
    """
    Create an error context with the given parameters.

    Args:
        **kwargs: Context parameters

    Returns:
        ErrorContext object
    """
    return ErrorContext(**kwargs)
