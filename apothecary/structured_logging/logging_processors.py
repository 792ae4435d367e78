"""
Logging processors for structlog event processing.

Processors for redacting sensitive data and guaranteeing that every entry
carries a correlation id and request context.
"""

import re
import uuid
from datetime import UTC, datetime
from typing import Any

SENSITIVE_PATTERNS = [
    r"\bpassword\b",
    r"\btoken\b",
    r"\bsecret\b",
    r"_key\b",
    r"^key$",
    r"\bcredential\b",
    r"\bauthorization\b",
    r"\bcookie\b",
    r"\bbearer\b",
]

# Domain fields that happen to match the patterns above.
SAFE_FIELDS = {"mastery_key", "lock_key"}


def sanitize_sensitive_data(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive data from log entries.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name (unused)
        event_dict: Event dictionary to sanitize

    Returns:
        Sanitized event dictionary
    """

    def sanitize_dict(d: dict[str, Any]) -> dict[str, Any]:
        sanitized: dict[str, Any] = {}
        for key, value in d.items():
            key_lower = str(key).lower()
            if isinstance(value, dict):
                sanitized[key] = sanitize_dict(value)
            elif key_lower in SAFE_FIELDS:
                sanitized[key] = value
            elif any(re.search(pattern, key_lower) for pattern in SENSITIVE_PATTERNS):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = value
        return sanitized

    return sanitize_dict(event_dict)


def add_correlation_id(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add a correlation ID to log entries that were emitted outside a request."""
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = str(uuid.uuid4())
    return event_dict


def add_request_context(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Add request context information to log entries.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name
        event_dict: Event dictionary to enhance

    Returns:
        Enhanced event dictionary with request context
    """
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(UTC).isoformat()

    if "logger_name" not in event_dict:
        event_dict["logger_name"] = _name

    return event_dict
