"""
Crafting validation: decides whether a template may be crafted by a given
crafter and normalizes numeric crafting inputs before persistence.
"""

import math
from dataclasses import dataclass
from typing import Any

from ..error_types import ErrorMessages
from ..exceptions import ResourceNotFoundError, ValidationError
from ..models import PotionTemplate, SpellTemplate

# A crafter can inscribe spells up to one level above their own.
SPELL_LEVEL_HEADROOM = 1


@dataclass(frozen=True)
class CraftingPlan:
    """Outcome of a successful crafting validation."""

    template_id: str
    max_craftable_level: int | None


def max_craftable_spell_level(crafter_level: int) -> int:
    return crafter_level + SPELL_LEVEL_HEADROOM


def _require_level(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Crafter level must be a whole number", field="crafter_level", value=value)
    if value < 0:
        raise ValidationError("Crafter level cannot be negative", field="crafter_level", value=value)
    return value


def validate_and_prepare_crafting(
    template: PotionTemplate | SpellTemplate | None,
    requested_crafter_level: int | None = None,
) -> CraftingPlan:
    """
    Check that template may be crafted.

    Spell templates are gated on level: the crafter may inscribe spells up to
    requested_crafter_level + 1. Potion templates have no level gate. Undiscovered
    templates are reported as missing, the same as unknown ones.

    Raises:
        ResourceNotFoundError: template is None or not yet discovered
        ValidationError: the spell is above the crafter's maximum level
    """
    if isinstance(template, SpellTemplate):
        if not template.is_discovered:
            raise ResourceNotFoundError(
                ErrorMessages.SPELL_TEMPLATE_NOT_FOUND, resource_type="spell_template", resource_id=template.id
            )
        crafter_level = _require_level(requested_crafter_level)
        max_level = max_craftable_spell_level(crafter_level)
        if template.level > max_level:
            raise ValidationError(
                f"Cannot craft level {template.level} spell with crafter level {crafter_level}. "
                f"Maximum craftable: level {max_level}",
                field="crafter_level",
                value=crafter_level,
            )
        return CraftingPlan(template_id=template.id, max_craftable_level=max_level)

    if isinstance(template, PotionTemplate) and template.is_discovered:
        return CraftingPlan(template_id=template.id, max_craftable_level=None)

    raise ResourceNotFoundError(
        ErrorMessages.POTION_TEMPLATE_NOT_FOUND,
        resource_type="potion_template",
        resource_id=getattr(template, "id", None),
    )


def normalize_weight(value: Any) -> float:
    """
    Coerce a weight given as a number or numeric string to float.

    Raises:
        ValidationError: value is not a finite, non-negative number
    """
    if isinstance(value, bool):
        raise ValidationError(ErrorMessages.INVALID_WEIGHT, field="weight", value=value)
    if isinstance(value, int | float):
        weight = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            weight = float(value.strip())
        except ValueError:
            raise ValidationError(ErrorMessages.INVALID_WEIGHT, field="weight", value=value) from None
    else:
        raise ValidationError(ErrorMessages.INVALID_WEIGHT, field="weight", value=value)

    if not math.isfinite(weight) or weight < 0:
        raise ValidationError("Weight must be a non-negative number", field="weight", value=value)
    return weight
