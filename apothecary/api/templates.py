"""
Template catalog API endpoints.

Only discovered templates are listed. A spell's inversion effect is hidden
unless the inversion is public.
"""

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_current_user_id, require_request_user
from ..dependencies import TemplateRepositoryDep
from ..persistence.repositories import TemplateRepository
from ..schemas.templates import (
    PotionTemplateData,
    PotionTemplateListResponse,
    SpellTemplateData,
    SpellTemplateListResponse,
)

templates_router = APIRouter(prefix="/templates", tags=["templates"])


@templates_router.get("/potions", response_model=PotionTemplateListResponse)
async def list_potion_templates(
    user_id: str | None = Depends(get_current_user_id),
    template_repository: TemplateRepository = TemplateRepositoryDep,
) -> PotionTemplateListResponse:
    require_request_user(user_id, "list_potion_templates")
    templates = await template_repository.list_discovered_potion_templates()
    return PotionTemplateListResponse(templates=[PotionTemplateData.model_validate(t) for t in templates])


@templates_router.get("/spells", response_model=SpellTemplateListResponse)
async def list_spell_templates(
    user_id: str | None = Depends(get_current_user_id),
    template_repository: TemplateRepository = TemplateRepositoryDep,
) -> SpellTemplateListResponse:
    require_request_user(user_id, "list_spell_templates")
    templates = await template_repository.list_discovered_spell_templates()
    data = []
    for template in templates:
        entry = SpellTemplateData.model_validate(template)
        if not template.is_inversion_public:
            entry.inversion_effect = None
        data.append(entry)
    return SpellTemplateListResponse(templates=data)
