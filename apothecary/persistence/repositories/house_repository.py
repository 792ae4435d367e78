"""House (treasury) repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import House
from ...structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class HouseRepository:
    """Repository for the houses table."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    async def get_by_user_id(self, session: AsyncSession, user_id: str, *, for_update: bool = False) -> House | None:
        stmt = select(House).where(House.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        return (await session.execute(stmt)).scalars().first()

    async def add_gold(self, session: AsyncSession, house: House, amount: int) -> House:
        """Credit the treasury. The house row must have been loaded for update."""
        house.gold = house.gold + amount
        await session.flush()
        self._logger.info("Treasury credited", house_id=house.id, amount=amount, balance=house.gold)
        return house
