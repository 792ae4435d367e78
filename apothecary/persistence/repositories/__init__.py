"""Async repositories for the Apothecary tables."""

from .house_repository import HouseRepository
from .item_repository import POTION_KIND, SCROLL_KIND, ItemKind, ItemRepository
from .mastery_repository import MasteryKind, MasteryRepository, MasteryTarget
from .template_repository import TemplateRepository

__all__ = [
    "HouseRepository",
    "ItemKind",
    "ItemRepository",
    "MasteryKind",
    "MasteryRepository",
    "MasteryTarget",
    "POTION_KIND",
    "SCROLL_KIND",
    "TemplateRepository",
]
