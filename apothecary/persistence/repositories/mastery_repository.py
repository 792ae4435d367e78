"""
Mastery ledger repository.

Potion and spell mastery live in two tables with the same shape; a
MasteryTarget names which table, which character and which template.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import CharacterPotionMastery, CharacterSpellMastery, PotionTemplate, SpellTemplate
from ...structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class MasteryKind(str, Enum):
    POTION = "potion"
    SPELL = "spell"


@dataclass(frozen=True)
class MasteryTarget:
    """One (character, template) cell of the mastery ledger."""

    character_id: str
    template_id: str
    kind: MasteryKind

    @property
    def lock_key(self) -> str:
        return f"mastery:{self.kind.value}:{self.character_id}:{self.template_id}"


_MODELS: dict[MasteryKind, tuple[type[Any], str]] = {
    MasteryKind.POTION: (CharacterPotionMastery, "potion_template_id"),
    MasteryKind.SPELL: (CharacterSpellMastery, "spell_template_id"),
}


class MasteryRepository:
    """Repository for character_potion_mastery and character_spell_mastery."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    async def get(self, session: AsyncSession, target: MasteryTarget) -> Any | None:
        """Load the record for update, or None when the character has no mastery yet."""
        model, template_column = _MODELS[target.kind]
        stmt = (
            select(model)
            .where(model.character_id == target.character_id, getattr(model, template_column) == target.template_id)
            .with_for_update()
        )
        return (await session.execute(stmt)).scalars().first()

    async def create(self, session: AsyncSession, target: MasteryTarget, level: int) -> Any:
        model, template_column = _MODELS[target.kind]
        record = model(
            character_id=target.character_id,
            mastery_level=level,
            last_updated=datetime.now(UTC),
            **{template_column: target.template_id},
        )
        session.add(record)
        await session.flush()
        return record

    async def set_level(self, session: AsyncSession, record: Any, level: int) -> Any:
        record.mastery_level = level
        record.last_updated = datetime.now(UTC)
        await session.flush()
        return record

    async def list_for_character(self, session: AsyncSession, character_id: str) -> dict[MasteryKind, list[tuple[Any, str]]]:
        """Return each mastery record of a character paired with its template name."""
        potion_stmt = (
            select(CharacterPotionMastery, PotionTemplate.name)
            .join(PotionTemplate, PotionTemplate.id == CharacterPotionMastery.potion_template_id)
            .where(CharacterPotionMastery.character_id == character_id)
            .order_by(PotionTemplate.name)
        )
        spell_stmt = (
            select(CharacterSpellMastery, SpellTemplate.name)
            .join(SpellTemplate, SpellTemplate.id == CharacterSpellMastery.spell_template_id)
            .where(CharacterSpellMastery.character_id == character_id)
            .order_by(SpellTemplate.name)
        )
        potions = [(row[0], row[1]) for row in (await session.execute(potion_stmt)).all()]
        spells = [(row[0], row[1]) for row in (await session.execute(spell_stmt)).all()]
        self._logger.debug(
            "Loaded character mastery", character_id=character_id, potions=len(potions), spells=len(spells)
        )
        return {MasteryKind.POTION: potions, MasteryKind.SPELL: spells}
