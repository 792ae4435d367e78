"""House model holding a user's shared treasury."""

# pylint: disable=too-few-public-methods  # Reason: SQLAlchemy model data class

from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id


class House(Base):
    """A user's house. gold is the treasury balance credited by item sales."""

    __tablename__ = "houses"
    __table_args__ = (CheckConstraint("gold >= 0", name="gold_non_negative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    motto: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    gold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<House(id={self.id!r}, user_id={self.user_id!r}, gold={self.gold})>"
