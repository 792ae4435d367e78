"""
Character mastery API endpoints.

PATCH sets a level directly (GM override); POST .../award adds points.
Both take exactly one of potion_template_id or spell_template_id.
"""

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_current_user_id, require_request_user
from ..dependencies import MasteryServiceDep
from ..game.mastery_service import MasteryService
from ..persistence.repositories import MasteryKind
from ..schemas.mastery import (
    CharacterMasteryResponse,
    MasteryAwardRequest,
    MasteryChangeResponse,
    MasteryEntry,
    MasteryUpdateRequest,
)
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

mastery_router = APIRouter(prefix="/characters/{character_id}/mastery", tags=["mastery"])


@mastery_router.get("", response_model=CharacterMasteryResponse)
async def get_character_mastery(
    character_id: str,
    user_id: str | None = Depends(get_current_user_id),
    mastery_service: MasteryService = MasteryServiceDep,
) -> CharacterMasteryResponse:
    """Return every potion and spell mastery record of a character."""
    require_request_user(user_id, "get_character_mastery")
    records = await mastery_service.get_character_mastery(character_id)
    return CharacterMasteryResponse(
        character_id=character_id,
        potion_mastery=[
            MasteryEntry(
                template_id=record.potion_template_id,
                template_name=name,
                mastery_level=record.mastery_level,
                last_updated=record.last_updated,
            )
            for record, name in records[MasteryKind.POTION]
        ],
        spell_mastery=[
            MasteryEntry(
                template_id=record.spell_template_id,
                template_name=name,
                mastery_level=record.mastery_level,
                last_updated=record.last_updated,
            )
            for record, name in records[MasteryKind.SPELL]
        ],
    )


@mastery_router.patch("", response_model=MasteryChangeResponse)
async def set_mastery_level(
    character_id: str,
    payload: MasteryUpdateRequest,
    user_id: str | None = Depends(get_current_user_id),
    mastery_service: MasteryService = MasteryServiceDep,
) -> MasteryChangeResponse:
    user_id = require_request_user(user_id, "set_mastery_level")
    change = await mastery_service.set_mastery_level(
        character_id,
        payload.mastery_level,
        potion_template_id=payload.potion_template_id,
        spell_template_id=payload.spell_template_id,
    )
    logger.info("Mastery override applied", character_id=character_id, user_id=user_id)
    return MasteryChangeResponse.from_change(change)


@mastery_router.post("/award", response_model=MasteryChangeResponse)
async def award_mastery(
    character_id: str,
    payload: MasteryAwardRequest,
    user_id: str | None = Depends(get_current_user_id),
    mastery_service: MasteryService = MasteryServiceDep,
) -> MasteryChangeResponse:
    require_request_user(user_id, "award_mastery")
    change = await mastery_service.award_mastery(
        character_id,
        payload.points,
        potion_template_id=payload.potion_template_id,
        spell_template_id=payload.spell_template_id,
    )
    return MasteryChangeResponse.from_change(change)
