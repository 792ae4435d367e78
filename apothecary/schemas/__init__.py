"""Pydantic request and response models for the HTTP API."""

from .house import HouseResponse
from .items import (
    ConsumePotionRequest,
    ConsumeScrollRequest,
    CreatePotionRequest,
    CreateScrollRequest,
    PotionListResponse,
    PotionResponse,
    PotionTemplateSummary,
    SaleResponse,
    ScrollListResponse,
    ScrollResponse,
    SellItemRequest,
    SpellTemplateSummary,
)
from .mastery import (
    CharacterMasteryResponse,
    MasteryAwardRequest,
    MasteryChangeResponse,
    MasteryEntry,
    MasteryUpdateRequest,
)
from .templates import (
    PotionTemplateData,
    PotionTemplateListResponse,
    SpellTemplateData,
    SpellTemplateListResponse,
)

__all__ = [
    "CharacterMasteryResponse",
    "ConsumePotionRequest",
    "ConsumeScrollRequest",
    "CreatePotionRequest",
    "CreateScrollRequest",
    "HouseResponse",
    "MasteryAwardRequest",
    "MasteryChangeResponse",
    "MasteryEntry",
    "MasteryUpdateRequest",
    "PotionListResponse",
    "PotionResponse",
    "PotionTemplateData",
    "PotionTemplateListResponse",
    "PotionTemplateSummary",
    "SaleResponse",
    "ScrollListResponse",
    "ScrollResponse",
    "SellItemRequest",
    "SpellTemplateData",
    "SpellTemplateListResponse",
    "SpellTemplateSummary",
]
