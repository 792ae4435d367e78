"""
Centralized error types and constants for Apothecary.

Standardized error types and messages keep error handling consistent across
the service, persistence and HTTP layers.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorType(Enum):
    """Standardized error types for consistent categorization."""

    # Authentication
    AUTHENTICATION_REQUIRED = "authentication_required"

    # Validation
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED_FIELD = "missing_required_field"

    # Resources
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Item lifecycle
    INVALID_STATE_TRANSITION = "invalid_state_transition"

    # Database
    DATABASE_ERROR = "database_error"

    # Configuration and system
    CONFIGURATION_ERROR = "configuration_error"
    INTERNAL_ERROR = "internal_error"


class ErrorSeverity(Enum):
    """Error severity levels for logging and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def create_standard_error_response(
    error_type: ErrorType,
    message: str,
    user_friendly: str | None = None,
    details: dict[str, Any] | None = None,
    severity: ErrorSeverity = ErrorSeverity.MEDIUM,
) -> dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        error_type: The type of error
        message: Technical error message
        user_friendly: User-friendly error message (optional)
        details: Additional error details (optional)
        severity: Error severity level (optional)

    Returns:
        Standardized error response dictionary
    """
    return {
        "error": {
            "type": error_type.value,
            "message": message,
            "user_friendly": user_friendly or message,
            "details": details or {},
            "severity": severity.value,
            "timestamp": datetime.now(UTC).isoformat(),
        }
    }


class ErrorMessages:
    """Common error messages for consistent user experience."""

    # Authentication
    AUTHENTICATION_REQUIRED = "Authentication required"

    # Validation
    INVALID_INPUT = "Invalid input provided"
    CONSUMER_NAME_REQUIRED = "Consumer name is required"
    CONSUMPTION_DATE_REQUIRED = "Consumption date is required"
    CRAFTED_BY_REQUIRED = "Crafter name is required"
    INVALID_ACTUAL_POTENCY = "Invalid actual potency for unknown success potion"
    INVALID_SELL_PRICE = "Sell price must be a non-negative number"
    INVALID_WEIGHT = "Weight must be a number"
    MASTERY_TEMPLATE_REQUIRED = "Exactly one of potion_template_id or spell_template_id must be provided"
    NO_HOUSE_FOR_TREASURY = "No house found. Create a house to add gold to treasury."
    TREASURY_CREDIT_WHOLE_GOLD = "Sell price must be a whole number of gold pieces to credit the treasury"

    # Resources
    RESOURCE_NOT_FOUND = "Resource not found"
    POTION_NOT_FOUND = "Potion not found or not owned by user"
    SCROLL_NOT_FOUND = "Scroll not found or not owned by user"
    POTION_TEMPLATE_NOT_FOUND = "Potion template not found or not discovered"
    SPELL_TEMPLATE_NOT_FOUND = "Spell template not found or not discovered"
    HOUSE_NOT_FOUND = "No house found for user"

    # Item lifecycle
    CONCURRENT_MODIFICATION = "Item was modified concurrently. Reload and try again."

    # System
    INTERNAL_ERROR = "An internal error occurred"
    DATABASE_UNAVAILABLE = "Storage temporarily unavailable"
