"""
Potion and scroll API schemas.

Request models accept loosely typed values for fields whose rules live in
the services (weight, sell price, crafter level) so that a bad value is
reported with the domain's message rather than a generic 422.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..game.consumption import ConsumptionRequest
from ..models import CraftingRole, Potency, Potion, Scroll

_REQUEST_CONFIG = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)
_RESPONSE_CONFIG = ConfigDict(extra="forbid", validate_assignment=True, validate_default=True)


class CreatePotionRequest(BaseModel):
    """Request body for POST /v1/potions."""

    model_config = _REQUEST_CONFIG

    potion_template_id: str = Field(..., description="Template the potion was brewed from")
    crafted_by: str = Field(..., description="Name of whoever brewed the potion")
    crafted_potency: Potency = Field(..., description="Crafting outcome")
    weight: Any = Field(default=0, description="Weight as a number or numeric string")
    crafted_at: datetime | None = Field(default=None, description="Craft time; defaults to now")
    custom_id: str | None = Field(default=None, description="Player-facing label")
    special_ingredient_details: str | None = Field(default=None)
    crafter_character_id: str | None = Field(default=None, description="Character credited with mastery")
    crafting_role: CraftingRole = Field(default=CraftingRole.DIRECT_CRAFTER)
    supervisor_character_id: str | None = Field(default=None, description="Supervisor of subordinate crafting")


class CreateScrollRequest(BaseModel):
    """Request body for POST /v1/scrolls."""

    model_config = _REQUEST_CONFIG

    spell_template_id: str = Field(..., description="Spell inscribed on the scroll")
    crafted_by: str = Field(..., description="Name of whoever inscribed the scroll")
    crafter_level: Any = Field(..., description="Crafter's character level")
    weight: Any = Field(default=0, description="Weight as a number or numeric string")
    crafted_at: datetime | None = Field(default=None)
    material: str | None = Field(default=None, description="Scroll material; defaults to paper")


class ConsumePotionRequest(BaseModel):
    """Request body for POST /v1/potions/{potion_id}/consume."""

    model_config = _REQUEST_CONFIG

    consumed_by: str | None = Field(default=None, description="Name of the consumer")
    consumed_at: datetime | None = Field(default=None, description="When the potion was consumed")
    actual_potency: Potency | None = Field(default=None, description="Resolution of a success_unknown potion")
    amount_used: str | None = Field(default=None, description="Dose label for partial consumption")
    is_full_consumption: bool = Field(default=True)

    def to_domain(self) -> ConsumptionRequest:
        return ConsumptionRequest(
            consumer_name=self.consumed_by,
            consumed_at=self.consumed_at,
            actual_potency=self.actual_potency,
            amount_used=self.amount_used,
            is_full_consumption=self.is_full_consumption,
        )


class ConsumeScrollRequest(BaseModel):
    """Request body for POST /v1/scrolls/{scroll_id}/consume."""

    model_config = _REQUEST_CONFIG

    consumed_by: str | None = Field(default=None)
    consumed_at: datetime | None = Field(default=None)
    amount_used: str | None = Field(default=None)
    is_full_consumption: bool = Field(default=True)

    def to_domain(self) -> ConsumptionRequest:
        return ConsumptionRequest(
            consumer_name=self.consumed_by,
            consumed_at=self.consumed_at,
            amount_used=self.amount_used,
            is_full_consumption=self.is_full_consumption,
        )


class SellItemRequest(BaseModel):
    """Request body for the sell endpoints."""

    model_config = ConfigDict(extra="forbid")

    sell_price: Any = Field(..., description="Non-negative sale price in gold pieces")
    credit_treasury: bool = Field(default=False, description="Add the price to the seller's house treasury")


class PotionTemplateSummary(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: str
    name: str
    school: str
    rarity: str
    split_amount: str | None = None
    potency_fail_effect: str
    potency_success_effect: str
    potency_critical_success_effect: str


class SpellTemplateSummary(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: str
    name: str
    school: str
    level: int
    base_effect: str


class PotionResponse(BaseModel):
    """A potion owned by the acting user."""

    model_config = _RESPONSE_CONFIG

    id: str
    custom_id: str | None = None
    potion_template_id: str
    crafted_potency: Potency
    crafted_by: str
    crafted_at: datetime
    weight: float
    special_ingredient_details: str | None = None
    crafter_character_id: str | None = None
    crafting_role: CraftingRole
    supervisor_character_id: str | None = None
    consumed_by: str | None = None
    consumed_at: datetime | None = None
    used_amount: str | None = None
    remaining_amount: str | None = None
    is_fully_consumed: bool
    template: PotionTemplateSummary | None = None

    @classmethod
    def from_model(cls, potion: Potion) -> "PotionResponse":
        template = potion.template
        return cls(
            id=potion.id,
            custom_id=potion.custom_id,
            potion_template_id=potion.potion_template_id,
            crafted_potency=Potency(potion.crafted_potency),
            crafted_by=potion.crafted_by,
            crafted_at=potion.crafted_at,
            weight=potion.weight,
            special_ingredient_details=potion.special_ingredient_details,
            crafter_character_id=potion.crafter_character_id,
            crafting_role=CraftingRole(potion.crafting_role),
            supervisor_character_id=potion.supervisor_character_id,
            consumed_by=potion.consumed_by,
            consumed_at=potion.consumed_at,
            used_amount=potion.used_amount,
            remaining_amount=potion.remaining_amount,
            is_fully_consumed=potion.is_fully_consumed,
            template=(
                PotionTemplateSummary(
                    id=template.id,
                    name=template.name,
                    school=template.school,
                    rarity=template.rarity,
                    split_amount=template.split_amount,
                    potency_fail_effect=template.potency_fail_effect,
                    potency_success_effect=template.potency_success_effect,
                    potency_critical_success_effect=template.potency_critical_success_effect,
                )
                if template is not None
                else None
            ),
        )


class ScrollResponse(BaseModel):
    """A scroll owned by the acting user."""

    model_config = _RESPONSE_CONFIG

    id: str
    spell_template_id: str
    material: str
    crafted_by: str
    crafted_at: datetime
    crafter_level: int
    weight: float
    consumed_by: str | None = None
    consumed_at: datetime | None = None
    used_amount: str | None = None
    remaining_amount: str | None = None
    is_fully_consumed: bool
    template: SpellTemplateSummary | None = None

    @classmethod
    def from_model(cls, scroll: Scroll) -> "ScrollResponse":
        template = scroll.template
        return cls(
            id=scroll.id,
            spell_template_id=scroll.spell_template_id,
            material=scroll.material,
            crafted_by=scroll.crafted_by,
            crafted_at=scroll.crafted_at,
            crafter_level=scroll.crafter_level,
            weight=scroll.weight,
            consumed_by=scroll.consumed_by,
            consumed_at=scroll.consumed_at,
            used_amount=scroll.used_amount,
            remaining_amount=scroll.remaining_amount,
            is_fully_consumed=scroll.is_fully_consumed,
            template=(
                SpellTemplateSummary(
                    id=template.id,
                    name=template.name,
                    school=template.school,
                    level=template.level,
                    base_effect=template.base_effect,
                )
                if template is not None
                else None
            ),
        )


class PotionListResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    potions: list[PotionResponse] = Field(..., description="Potions owned by the acting user")


class ScrollListResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    scrolls: list[ScrollResponse] = Field(..., description="Scrolls owned by the acting user")


class SaleResponse(BaseModel):
    """Outcome of a sale."""

    model_config = _RESPONSE_CONFIG

    success: bool
    message: str
    item_id: str
    sell_price: float
    credited_treasury: bool
    treasury_balance: int | None = None
