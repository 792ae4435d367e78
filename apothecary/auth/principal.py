"""Guard used by every service operation that acts on behalf of a user."""

from ..error_types import ErrorMessages
from ..exceptions import AuthenticationError, create_error_context


def require_user_id(user_id: str | None, operation: str) -> str:
    """
    Return the acting user id, or raise before any state is touched.

    Raises:
        AuthenticationError: no principal was supplied
    """
    if user_id is None or not str(user_id).strip():
        raise AuthenticationError(
            ErrorMessages.AUTHENTICATION_REQUIRED,
            context=create_error_context(operation=operation),
        )
    return str(user_id).strip()
