"""
Database configuration for the Apothecary service.

Provides the engine and session maker singleton plus startup and shutdown
helpers. Initialization is lazy and fails loudly when configuration is missing.
"""

import threading
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import configure_mappers
from sqlalchemy.pool import StaticPool

from .exceptions import ConfigurationError
from .models import Base
from .structured_logging.enhanced_logging_config import get_logger
from .utils.error_logging import create_error_context, log_and_raise

logger = get_logger(__name__)


class DatabaseManager:
    """
    Thread-safe singleton for database management.

    Owns the async engine and session maker built from DatabaseConfig.
    """

    _instance: "DatabaseManager | None" = None
    _lock: threading.Lock = threading.Lock()

    def __init__(self) -> None:
        if DatabaseManager._instance is not None:
            raise RuntimeError("Use DatabaseManager.get_instance()")

        self.engine: AsyncEngine | None = None
        self.session_maker: async_sessionmaker[AsyncSession] | None = None
        self.database_url: str | None = None
        self._initialized: bool = False

    @classmethod
    def get_instance(cls) -> "DatabaseManager":
        """Get the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton for testing."""
        with cls._lock:
            cls._instance = None

    def _initialize_database(self) -> None:
        """
        Initialize database engine and session maker from configuration.

        Raises:
            ConfigurationError: If configuration is missing or invalid
        """
        if self._initialized:
            return

        context = create_error_context(operation="database_initialization")

        from .config import get_config

        try:
            database_config = get_config().database
        except ValueError as e:
            log_and_raise(
                ConfigurationError,
                f"Failed to load database configuration: {e}",
                context=context,
                details={"config_error": str(e)},
                user_friendly="Database cannot be initialized: configuration not loaded or invalid",
                config_key="database.url",
            )

        database_url = database_config.url
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        self.database_url = database_url

        engine_kwargs: dict[str, Any] = {"echo": database_config.echo}
        if database_config.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in database_url:
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_pre_ping": True,
                    "pool_size": database_config.pool_size,
                    "max_overflow": database_config.max_overflow,
                    "pool_timeout": database_config.pool_timeout,
                }
            )

        self.engine = create_async_engine(database_url, **engine_kwargs)
        logger.info("Database engine created", backend="sqlite" if database_config.is_sqlite else "postgresql")

        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._initialized = True

    def get_engine(self) -> AsyncEngine:
        """Get the database engine, initializing if necessary."""
        if not self._initialized:
            self._initialize_database()
        assert self.engine is not None, "Database engine not initialized"
        return self.engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        """Get the async session maker, initializing if necessary."""
        if not self._initialized:
            self._initialize_database()
        assert self.session_maker is not None, "Session maker not initialized"
        return self.session_maker

    async def close(self) -> None:
        """Dispose of pooled connections."""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.session_maker = None
        self._initialized = False


def get_database_manager() -> DatabaseManager:
    """Get the database manager singleton."""
    return DatabaseManager.get_instance()


def get_engine() -> AsyncEngine:
    return get_database_manager().get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the async session maker, initializing if necessary.

    Raises:
        ConfigurationError: If database cannot be initialized
    """
    return get_database_manager().get_session_maker()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency yielding a database session.

    Yields:
        AsyncSession: Database session for async operations
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        try:
            yield session
        except Exception as e:
            logger.error("Database session error", error=str(e), error_type=type(e).__name__)
            await session.rollback()
            raise


async def init_db(create_schema: bool = False) -> None:
    """
    Initialize the database connection and verify connectivity.

    Production DDL lives in db/schema/ and is applied outside the service.
    create_schema builds the tables from model metadata, for local SQLite runs.
    """
    logger.info("Initializing database connection")

    configure_mappers()
    engine = get_engine()

    try:
        async with engine.begin() as conn:
            if create_schema:
                await conn.run_sync(Base.metadata.create_all)
                logger.info("Database schema created from model metadata")
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database initialization failed", error=str(e), error_type=type(e).__name__)
        raise

    logger.info("Database connection verified successfully")


async def close_db() -> None:
    """Close database connections."""
    logger.info("Closing database connections")
    await get_database_manager().close()
