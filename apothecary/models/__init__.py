"""SQLAlchemy models for the Apothecary item ledger."""

from .base import Base
from .house import House
from .items import CraftingRole, Potency, Potion, Scroll, UserPotion, UserScroll
from .mastery import MAX_MASTERY_LEVEL, MIN_MASTERY_LEVEL, CharacterPotionMastery, CharacterSpellMastery
from .templates import PotionTemplate, SpellTemplate

__all__ = [
    "Base",
    "CharacterPotionMastery",
    "CharacterSpellMastery",
    "CraftingRole",
    "House",
    "MAX_MASTERY_LEVEL",
    "MIN_MASTERY_LEVEL",
    "Potency",
    "Potion",
    "PotionTemplate",
    "Scroll",
    "SpellTemplate",
    "UserPotion",
    "UserScroll",
]
