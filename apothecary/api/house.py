"""House treasury API endpoint."""

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_current_user_id, require_request_user
from ..dependencies import DispositionServiceDep
from ..game.disposition_service import DispositionService
from ..schemas.house import HouseResponse

house_router = APIRouter(prefix="/house", tags=["house"])


@house_router.get("", response_model=HouseResponse)
async def get_house(
    user_id: str | None = Depends(get_current_user_id),
    disposition_service: DispositionService = DispositionServiceDep,
) -> HouseResponse:
    """Return the acting user's house and its treasury balance."""
    user_id = require_request_user(user_id, "get_house")
    house = await disposition_service.get_treasury(user_id)
    return HouseResponse.model_validate(house)
