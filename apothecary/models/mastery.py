"""
Mastery ledger models.

One row per (character, template) pair holding a bounded 0-10 level.
Rows are created lazily on the first award or explicit set and never deleted.
"""

# pylint: disable=too-few-public-methods  # Reason: SQLAlchemy model data class

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

MIN_MASTERY_LEVEL = 0
MAX_MASTERY_LEVEL = 10


class CharacterPotionMastery(Base):
    """Mastery of one character over one potion template."""

    __tablename__ = "character_potion_mastery"
    __table_args__ = (CheckConstraint("mastery_level BETWEEN 0 AND 10", name="mastery_level_range"),)

    character_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    potion_template_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("potion_templates.id"), primary_key=True
    )
    mastery_level: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    def __repr__(self) -> str:
        return (
            f"<CharacterPotionMastery(character_id={self.character_id!r}, "
            f"potion_template_id={self.potion_template_id!r}, level={self.mastery_level})>"
        )


class CharacterSpellMastery(Base):
    """Mastery of one character over one spell template."""

    __tablename__ = "character_spell_mastery"
    __table_args__ = (CheckConstraint("mastery_level BETWEEN 0 AND 10", name="mastery_level_range"),)

    character_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    spell_template_id: Mapped[str] = mapped_column(String(36), ForeignKey("spell_templates.id"), primary_key=True)
    mastery_level: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    def __repr__(self) -> str:
        return (
            f"<CharacterSpellMastery(character_id={self.character_id!r}, "
            f"spell_template_id={self.spell_template_id!r}, level={self.mastery_level})>"
        )
