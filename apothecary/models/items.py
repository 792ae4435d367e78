"""
SQLAlchemy models for crafted item instances and their ownership links.

Potions and scrolls are separate tables that share one consumption
lifecycle. Each instance carries a version counter used for optimistic
locking, and exactly one ownership row linking it to a user until sold.
"""

# pylint: disable=too-few-public-methods  # Reason: SQLAlchemy model data class

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id
from .templates import PotionTemplate, SpellTemplate


class Potency(str, Enum):
    """Quality tier of a crafting result."""

    CRITICAL_FAIL = "critical_fail"
    FAIL = "fail"
    SUCCESS = "success"
    CRITICAL_SUCCESS = "critical_success"
    SUCCESS_UNKNOWN = "success_unknown"


class CraftingRole(str, Enum):
    """Part a character played in crafting an item."""

    DIRECT_CRAFTER = "direct_crafter"
    SUBORDINATE = "subordinate"
    SUPERVISOR = "supervisor"


class Potion(Base):
    """A brewed potion owned by exactly one user."""

    __tablename__ = "potions"
    __table_args__ = (Index("ix_potions_template", "potion_template_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    custom_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    potion_template_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("potion_templates.id"), nullable=False
    )
    crafted_potency: Mapped[str] = mapped_column(String(32), nullable=False)
    crafted_by: Mapped[str] = mapped_column(String(255), nullable=False)
    crafted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),  # pylint: disable=not-callable
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    special_ingredient_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    crafter_character_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    crafting_role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=CraftingRole.DIRECT_CRAFTER.value
    )
    supervisor_character_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    consumed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    consumed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    used_amount: Mapped[str | None] = mapped_column(String(100), nullable=True)
    remaining_amount: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_fully_consumed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    template: Mapped[PotionTemplate] = relationship(PotionTemplate, lazy="joined")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return (
            f"<Potion(id={self.id!r}, template={self.potion_template_id!r}, "
            f"potency={self.crafted_potency!r}, fully_consumed={self.is_fully_consumed})>"
        )


class Scroll(Base):
    """A spell scroll owned by exactly one user. Scrolls carry no crafting outcome."""

    __tablename__ = "scrolls"
    __table_args__ = (Index("ix_scrolls_template", "spell_template_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    spell_template_id: Mapped[str] = mapped_column(String(36), ForeignKey("spell_templates.id"), nullable=False)
    material: Mapped[str] = mapped_column(String(100), nullable=False, default="paper")
    crafted_by: Mapped[str] = mapped_column(String(255), nullable=False)
    crafted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),  # pylint: disable=not-callable
    )
    crafter_level: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    consumed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    consumed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    used_amount: Mapped[str | None] = mapped_column(String(100), nullable=True)
    remaining_amount: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_fully_consumed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    template: Mapped[SpellTemplate] = relationship(SpellTemplate, lazy="joined")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Scroll(id={self.id!r}, template={self.spell_template_id!r}, fully_consumed={self.is_fully_consumed})>"


class UserPotion(Base):
    """Ownership link between a user and a potion."""

    __tablename__ = "user_potions"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    potion_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("potions.id", ondelete="CASCADE"), primary_key=True, unique=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )


class UserScroll(Base):
    """Ownership link between a user and a scroll."""

    __tablename__ = "user_scrolls"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    scroll_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("scrolls.id", ondelete="CASCADE"), primary_key=True, unique=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
