"""
Template catalog repository.

Templates are read-only reference data. Listing methods manage their own
session; lookups used inside a unit of work take the caller's session.
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...exceptions import DatabaseError
from ...models import PotionTemplate, SpellTemplate
from ...structured_logging.enhanced_logging_config import get_logger
from ...utils.error_logging import log_and_raise

logger = get_logger(__name__)


class TemplateRepository:
    """Repository for potion_templates and spell_templates."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker
        self._logger = get_logger(__name__)

    async def list_discovered_potion_templates(self) -> list[PotionTemplate]:
        """Return every discovered potion template ordered by name."""
        try:
            async with self._session_maker() as session:
                stmt = select(PotionTemplate).where(PotionTemplate.is_discovered.is_(True)).order_by(PotionTemplate.name)
                rows = list((await session.execute(stmt)).scalars().all())
                self._logger.debug("Loaded discovered potion templates", count=len(rows))
                return rows
        except SQLAlchemyError as e:
            log_and_raise(
                DatabaseError,
                f"Database error loading potion templates: {e}",
                operation="list_discovered_potion_templates",
                table="potion_templates",
                details={"error": str(e)},
                user_friendly="Failed to load potion templates",
            )

    async def list_discovered_spell_templates(self) -> list[SpellTemplate]:
        """Return every discovered spell template ordered by level, then name."""
        try:
            async with self._session_maker() as session:
                stmt = (
                    select(SpellTemplate)
                    .where(SpellTemplate.is_discovered.is_(True))
                    .order_by(SpellTemplate.level, SpellTemplate.name)
                )
                rows = list((await session.execute(stmt)).scalars().all())
                self._logger.debug("Loaded discovered spell templates", count=len(rows))
                return rows
        except SQLAlchemyError as e:
            log_and_raise(
                DatabaseError,
                f"Database error loading spell templates: {e}",
                operation="list_discovered_spell_templates",
                table="spell_templates",
                details={"error": str(e)},
                user_friendly="Failed to load spell templates",
            )

    async def get_potion_template(self, session: AsyncSession, template_id: str) -> PotionTemplate | None:
        return await session.get(PotionTemplate, template_id)

    async def get_spell_template(self, session: AsyncSession, template_id: str) -> SpellTemplate | None:
        return await session.get(SpellTemplate, template_id)
