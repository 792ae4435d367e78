"""
Shared SQLAlchemy DeclarativeBase for all models.

All models must inherit from this Base so string references in
relationships resolve within one registry.
"""

import uuid

from sqlalchemy.orm import DeclarativeBase

from ..metadata import metadata


def new_id() -> str:
    """Generate an opaque, stable primary key."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Shared declarative base for all Apothecary models."""

    metadata = metadata
