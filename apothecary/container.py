"""
ApplicationContainer: wires configuration, the database and services together.

Created once in the application lifespan and stored on app.state; endpoint
dependencies read services from it. Tests may pass their own session maker.
"""

from typing import Any

from anyio import Lock
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .config import AppConfig, get_config
from .database import DatabaseManager, close_db, init_db
from .game.disposition_service import DispositionService
from .game.item_service import ItemService
from .game.mastery_service import MasteryService
from .persistence.repositories import (
    POTION_KIND,
    SCROLL_KIND,
    HouseRepository,
    ItemRepository,
    MasteryRepository,
    TemplateRepository,
)
from .services.mutation_guard import MutationGuard
from .structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class ApplicationContainer:
    """Dependency injection container for the Apothecary service."""

    def __init__(self) -> None:
        """Services are NOT initialized here - use initialize()."""
        self.config: AppConfig | None = None
        self.database_manager: DatabaseManager | None = None
        self.session_maker: async_sessionmaker[AsyncSession] | None = None

        self.mutation_guard: MutationGuard | None = None
        self.template_repository: TemplateRepository | None = None
        self.house_repository: HouseRepository | None = None

        self.item_service: ItemService | None = None
        self.mastery_service: MasteryService | None = None
        self.disposition_service: DispositionService | None = None

        self._initialized = False
        self._owns_database = False
        self._lock = Lock()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self, session_maker: async_sessionmaker[AsyncSession] | None = None) -> None:
        """
        Build every service.

        Args:
            session_maker: Use this session maker instead of the configured database
        """
        async with self._lock:
            if self._initialized:
                logger.debug("ApplicationContainer already initialized")
                return

            if session_maker is None:
                self.config = get_config()
                self.database_manager = DatabaseManager.get_instance()
                await init_db(create_schema=self.config.database.create_schema)
                session_maker = self.database_manager.get_session_maker()
                self._owns_database = True
            self.session_maker = session_maker

            self.wire_services(session_maker)
            self._initialized = True
            logger.info("ApplicationContainer initialized", owns_database=self._owns_database)

    def wire_services(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        """Construct repositories and services around one session maker."""
        self.mutation_guard = MutationGuard()
        self.template_repository = TemplateRepository(session_maker)
        self.house_repository = HouseRepository()
        potion_repository = ItemRepository(POTION_KIND)
        scroll_repository = ItemRepository(SCROLL_KIND)

        self.mastery_service = MasteryService(
            session_maker, MasteryRepository(), self.template_repository, self.mutation_guard
        )
        self.item_service = ItemService(
            session_maker,
            self.template_repository,
            potion_repository,
            scroll_repository,
            self.mastery_service,
            self.mutation_guard,
        )
        self.disposition_service = DispositionService(
            session_maker, potion_repository, scroll_repository, self.house_repository, self.mutation_guard
        )

    async def shutdown(self) -> None:
        """Release the database when this container opened it."""
        async with self._lock:
            if self._owns_database:
                await close_db()
            self._initialized = False
            logger.info("ApplicationContainer shut down")

    def get_status(self) -> dict[str, Any]:
        return {
            "initialized": self._initialized,
            "owns_database": self._owns_database,
            "active_mutation_keys": len(self.mutation_guard.active_keys()) if self.mutation_guard else 0,
        }
