"""Error response standardization for the HTTP layer."""

from .standardized_responses import StandardizedErrorResponse

__all__ = ["StandardizedErrorResponse"]
