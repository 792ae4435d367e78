"""
Potion API endpoints.

Crafting, listing, consuming and selling potions owned by the acting user.
Domain errors raised by the services propagate to the registered error
handlers, which map them onto status codes.
"""

from fastapi import APIRouter, Depends, status

from ..auth.dependencies import get_current_user_id, require_request_user
from ..dependencies import DispositionServiceDep, ItemServiceDep
from ..game.disposition_service import DispositionService
from ..game.item_service import ItemService
from ..schemas.items import (
    ConsumePotionRequest,
    CreatePotionRequest,
    PotionListResponse,
    PotionResponse,
    SaleResponse,
    SellItemRequest,
)
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

potions_router = APIRouter(prefix="/potions", tags=["potions"])


@potions_router.post("", response_model=PotionResponse, status_code=status.HTTP_201_CREATED)
async def create_potion(
    payload: CreatePotionRequest,
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> PotionResponse:
    """Record a freshly brewed potion in the acting user's holdings."""
    user_id = require_request_user(user_id, "create_potion")
    potion = await item_service.create_potion(user_id, **payload.model_dump())
    return PotionResponse.from_model(potion)


@potions_router.get("", response_model=PotionListResponse)
async def list_potions(
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> PotionListResponse:
    user_id = require_request_user(user_id, "list_potions")
    potions = await item_service.list_potions(user_id)
    return PotionListResponse(potions=[PotionResponse.from_model(p) for p in potions])


@potions_router.get("/{potion_id}", response_model=PotionResponse)
async def get_potion(
    potion_id: str,
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> PotionResponse:
    user_id = require_request_user(user_id, "get_potion")
    potion = await item_service.get_potion(user_id, potion_id)
    return PotionResponse.from_model(potion)


@potions_router.post("/{potion_id}/consume", response_model=PotionResponse)
async def consume_potion(
    potion_id: str,
    payload: ConsumePotionRequest,
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> PotionResponse:
    """Consume a potion fully or, for split potions, one dose at a time."""
    user_id = require_request_user(user_id, "consume_potion")
    potion = await item_service.consume_potion(user_id, potion_id, payload.to_domain())
    return PotionResponse.from_model(potion)


@potions_router.post("/{potion_id}/sell", response_model=SaleResponse)
async def sell_potion(
    potion_id: str,
    payload: SellItemRequest,
    user_id: str | None = Depends(get_current_user_id),
    disposition_service: DispositionService = DispositionServiceDep,
) -> SaleResponse:
    user_id = require_request_user(user_id, "sell_potion")
    result = await disposition_service.sell_potion(
        user_id, potion_id, payload.sell_price, credit_treasury=payload.credit_treasury
    )
    return SaleResponse(
        success=result.success,
        message=result.message,
        item_id=result.item_id,
        sell_price=result.sell_price,
        credited_treasury=result.credited_treasury,
        treasury_balance=result.treasury_balance,
    )
