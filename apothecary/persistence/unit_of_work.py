"""
Transaction boundary for logical operations.

Each service operation (create, consume, sell, mastery update) runs inside a
single session and transaction, so a failure part-way rolls back every write.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from ..error_types import ErrorMessages
from ..exceptions import DatabaseError, ErrorContext, InvalidStateTransitionError
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import create_error_context, log_and_raise

logger = get_logger(__name__)


@asynccontextmanager
async def unit_of_work(
    session_maker: async_sessionmaker[AsyncSession],
    operation: str,
    context: ErrorContext | None = None,
) -> AsyncIterator[AsyncSession]:
    """
    Open a session with a transaction that commits on success and rolls back on error.

    StaleDataError (a version check lost a race) becomes InvalidStateTransitionError;
    any other SQLAlchemyError becomes DatabaseError. Domain errors propagate unchanged.
    """
    context = context or create_error_context(operation=operation)
    try:
        async with session_maker() as session, session.begin():
            yield session
    except StaleDataError as e:
        log_and_raise(
            InvalidStateTransitionError,
            f"Item was modified concurrently during {operation}",
            context=context,
            details={"operation": operation, "error": str(e)},
            user_friendly=ErrorMessages.CONCURRENT_MODIFICATION,
        )
    except SQLAlchemyError as e:
        log_and_raise(
            DatabaseError,
            f"Database error during {operation}: {e}",
            context=context,
            details={"operation": operation, "error": str(e)},
            user_friendly=ErrorMessages.DATABASE_UNAVAILABLE,
            operation=operation,
        )
