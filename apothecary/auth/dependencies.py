"""FastAPI dependency resolving the acting user forwarded by the gateway."""

from fastapi import Request

from ..error_types import ErrorMessages
from ..exceptions import LoggedHTTPException, create_error_context


def get_current_user_id(request: Request) -> str | None:
    """
    Return the acting user id placed on request.state by IdentityMiddleware.

    None means the gateway forwarded no principal; endpoints answer 401.
    """
    return getattr(request.state, "user_id", None)


def require_request_user(user_id: str | None, operation: str) -> str:
    """
    Return user_id, or answer 401 when the request carried no principal.

    Raises:
        LoggedHTTPException: 401 Authentication required
    """
    if not user_id:
        raise LoggedHTTPException(
            status_code=401,
            detail=ErrorMessages.AUTHENTICATION_REQUIRED,
            context=create_error_context(operation=operation),
        )
    return user_id
