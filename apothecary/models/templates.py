"""
Template catalog models.

Potion and spell templates are read-only reference data: the item services
never write them. Scroll crafting is gated on SpellTemplate.level; potion
templates may carry a split_amount label meaning the potion holds several doses.
"""

# pylint: disable=too-few-public-methods  # Reason: SQLAlchemy model data class

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id


class PotionTemplate(Base):
    """Catalog definition of a brewable potion."""

    __tablename__ = "potion_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    level: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)
    school: Mapped[str] = mapped_column(String(100), nullable=False)
    rarity: Mapped[str] = mapped_column(String(50), nullable=False)
    potency_fail_effect: Mapped[str] = mapped_column(Text(), nullable=False)
    potency_success_effect: Mapped[str] = mapped_column(Text(), nullable=False)
    potency_critical_success_effect: Mapped[str] = mapped_column(Text(), nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    cost: Mapped[int] = mapped_column(Integer(), nullable=False, default=0)
    split_amount: Mapped[str | None] = mapped_column(String(100), nullable=True)
    special_ingredient: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_discovered: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False)
    props_json: Mapped[dict[str, Any] | None] = mapped_column(JSON(), nullable=True)

    def __repr__(self) -> str:
        return f"<PotionTemplate(id={self.id!r}, name={self.name!r}, split_amount={self.split_amount!r})>"


class SpellTemplate(Base):
    """Catalog definition of a spell that can be inscribed on a scroll."""

    __tablename__ = "spell_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    school: Mapped[str] = mapped_column(String(100), nullable=False)
    level: Mapped[int] = mapped_column(Integer(), nullable=False)
    base_effect: Mapped[str] = mapped_column(Text(), nullable=False)
    associated_skill: Mapped[str | None] = mapped_column(String(100), nullable=True)
    inversion_effect: Mapped[str | None] = mapped_column(Text(), nullable=True)
    mastery_effect: Mapped[str | None] = mapped_column(Text(), nullable=True)
    is_invertable: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False)
    is_discovered: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False)
    is_inversion_public: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False)
    props_json: Mapped[dict[str, Any] | None] = mapped_column(JSON(), nullable=True)

    def __repr__(self) -> str:
        return f"<SpellTemplate(id={self.id!r}, name={self.name!r}, level={self.level})>"
