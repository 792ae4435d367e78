"""Template catalog API response schemas."""

from pydantic import BaseModel, ConfigDict, Field

_CONFIG = ConfigDict(extra="forbid", validate_assignment=True, validate_default=True, from_attributes=True)


class PotionTemplateData(BaseModel):
    """Single discovered potion template."""

    model_config = _CONFIG

    id: str
    name: str
    level: int
    school: str
    rarity: str
    description: str
    cost: int
    split_amount: str | None = None
    special_ingredient: str | None = None
    potency_fail_effect: str
    potency_success_effect: str
    potency_critical_success_effect: str


class SpellTemplateData(BaseModel):
    """Single discovered spell template."""

    model_config = _CONFIG

    id: str
    name: str
    school: str
    level: int
    base_effect: str
    associated_skill: str | None = None
    mastery_effect: str | None = None
    is_invertable: bool
    inversion_effect: str | None = None


class PotionTemplateListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    templates: list[PotionTemplateData] = Field(..., description="Discovered potion templates")


class SpellTemplateListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    templates: list[SpellTemplateData] = Field(..., description="Discovered spell templates")
