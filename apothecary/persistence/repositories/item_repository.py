"""
Item instance repository shared by potions and scrolls.

Both item kinds have the same shape: an instance table plus an ownership
table keyed by (user_id, item id). ItemKind describes one of them so the
same queries serve both. Every lookup in a user context joins through the
ownership table, so an instance owned by someone else is never returned.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Potion, Scroll, UserPotion, UserScroll
from ...structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ItemKind:
    """Describes one item table and its ownership table."""

    label: str
    model: type[Any]
    ownership_model: type[Any]
    ownership_item_column: str
    template_id_column: str

    @property
    def resource_type(self) -> str:
        return self.label.lower()


POTION_KIND = ItemKind(
    label="Potion",
    model=Potion,
    ownership_model=UserPotion,
    ownership_item_column="potion_id",
    template_id_column="potion_template_id",
)

SCROLL_KIND = ItemKind(
    label="Scroll",
    model=Scroll,
    ownership_model=UserScroll,
    ownership_item_column="scroll_id",
    template_id_column="spell_template_id",
)


class ItemRepository:
    """Repository for one item kind and its ownership links."""

    def __init__(self, kind: ItemKind) -> None:
        self.kind = kind
        self._logger = get_logger(__name__)

    def _ownership_item_id(self):
        return getattr(self.kind.ownership_model, self.kind.ownership_item_column)

    async def add(self, session: AsyncSession, item: Any, user_id: str) -> Any:
        """Insert a new instance and link it to its owner in the caller's transaction."""
        session.add(item)
        await session.flush()
        ownership = self.kind.ownership_model(user_id=user_id, **{self.kind.ownership_item_column: item.id})
        session.add(ownership)
        await session.flush()
        self._logger.debug("Item instance created", item_type=self.kind.label, item_id=item.id, user_id=user_id)
        return item

    async def get_owned(self, session: AsyncSession, item_id: str, user_id: str) -> Any | None:
        """Return the instance if it exists and is linked to user_id, else None."""
        model = self.kind.model
        stmt = (
            select(model)
            .join(self.kind.ownership_model, self._ownership_item_id() == model.id)
            .where(model.id == item_id, self.kind.ownership_model.user_id == user_id)
        )
        return (await session.execute(stmt)).scalars().first()

    async def get_ownership(self, session: AsyncSession, item_id: str, user_id: str) -> Any | None:
        ownership_model = self.kind.ownership_model
        stmt = select(ownership_model).where(self._ownership_item_id() == item_id, ownership_model.user_id == user_id)
        return (await session.execute(stmt)).scalars().first()

    async def list_owned(self, session: AsyncSession, user_id: str) -> list[Any]:
        """Return every instance linked to user_id, newest first."""
        model = self.kind.model
        stmt = (
            select(model)
            .join(self.kind.ownership_model, self._ownership_item_id() == model.id)
            .where(self.kind.ownership_model.user_id == user_id)
            .order_by(model.crafted_at.desc())
        )
        return list((await session.execute(stmt)).scalars().unique().all())

    async def delete(self, session: AsyncSession, item: Any, ownership: Any) -> None:
        """Delete the ownership link, then the instance (version-checked)."""
        await session.delete(ownership)
        await session.flush()
        await session.delete(item)
        await session.flush()
        self._logger.debug("Item instance deleted", item_type=self.kind.label, item_id=item.id)
