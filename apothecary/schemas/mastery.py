"""Mastery ledger API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ..game.mastery_service import MasteryChange


class MasteryUpdateRequest(BaseModel):
    """Request body for PATCH /v1/characters/{character_id}/mastery."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    mastery_level: StrictInt = Field(..., description="New level; clamped to 0-10")
    potion_template_id: str | None = Field(default=None)
    spell_template_id: str | None = Field(default=None)


class MasteryAwardRequest(BaseModel):
    """Request body for POST /v1/characters/{character_id}/mastery/award."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    points: StrictInt = Field(..., description="Points to add; non-positive awards are ignored")
    potion_template_id: str | None = Field(default=None)
    spell_template_id: str | None = Field(default=None)


class MasteryChangeResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True, validate_default=True)

    character_id: str
    template_id: str
    kind: str
    previous_level: int | None = None
    mastery_level: int
    changed: bool

    @classmethod
    def from_change(cls, change: MasteryChange) -> "MasteryChangeResponse":
        return cls(
            character_id=change.character_id,
            template_id=change.template_id,
            kind=change.kind.value,
            previous_level=change.previous_level,
            mastery_level=change.mastery_level,
            changed=change.changed,
        )


class MasteryEntry(BaseModel):
    """One mastery record with the name of its template."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, validate_default=True)

    template_id: str
    template_name: str
    mastery_level: int
    last_updated: datetime | None = None


class CharacterMasteryResponse(BaseModel):
    """Response for GET /v1/characters/{character_id}/mastery."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, validate_default=True)

    character_id: str
    potion_mastery: list[MasteryEntry] = Field(default_factory=list)
    spell_mastery: list[MasteryEntry] = Field(default_factory=list)
