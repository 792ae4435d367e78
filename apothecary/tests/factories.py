"""Model builders and identifiers shared by the test suite."""

from datetime import UTC, datetime

from apothecary.models import CraftingRole, Potency, Potion, PotionTemplate, Scroll, SpellTemplate

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
AUTH_HEADERS = {"X-User-Id": USER_ID}
CRAFTED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
CONSUMED_AT = datetime(2024, 3, 5, 18, 30, tzinfo=UTC)


def make_potion_template(**overrides) -> PotionTemplate:
    values = {
        "id": "pt-healing",
        "name": "Healing Draught",
        "level": 1,
        "school": "restoration",
        "rarity": "common",
        "potency_fail_effect": "Tastes of ash",
        "potency_success_effect": "Heals 2d4",
        "potency_critical_success_effect": "Heals 4d4",
        "description": "A red draught",
        "cost": 50,
        "split_amount": None,
        "is_discovered": True,
    }
    values.update(overrides)
    return PotionTemplate(**values)


def make_spell_template(**overrides) -> SpellTemplate:
    values = {
        "id": "st-fireball",
        "name": "Fireball",
        "school": "evocation",
        "level": 3,
        "base_effect": "8d6 fire",
        "is_discovered": True,
    }
    values.update(overrides)
    return SpellTemplate(**values)


def make_potion(**overrides) -> Potion:
    """Detached potion for pure state machine tests; column defaults are spelled out."""
    values = {
        "id": "potion-1",
        "potion_template_id": "pt-healing",
        "crafted_potency": Potency.SUCCESS.value,
        "crafted_by": "Elrond",
        "crafted_at": CRAFTED_AT,
        "weight": 0.5,
        "crafting_role": CraftingRole.DIRECT_CRAFTER.value,
        "consumed_by": None,
        "consumed_at": None,
        "used_amount": None,
        "remaining_amount": None,
        "is_fully_consumed": False,
    }
    values.update(overrides)
    return Potion(**values)


def make_scroll(**overrides) -> Scroll:
    values = {
        "id": "scroll-1",
        "spell_template_id": "st-fireball",
        "material": "paper",
        "crafted_by": "Gandalf",
        "crafted_at": CRAFTED_AT,
        "crafter_level": 5,
        "weight": 0.1,
        "consumed_by": None,
        "consumed_at": None,
        "used_amount": None,
        "remaining_amount": None,
        "is_fully_consumed": False,
    }
    values.update(overrides)
    return Scroll(**values)
