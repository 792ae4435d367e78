"""Scroll API endpoints."""

from fastapi import APIRouter, Depends, status

from ..auth.dependencies import get_current_user_id, require_request_user
from ..dependencies import DispositionServiceDep, ItemServiceDep
from ..game.disposition_service import DispositionService
from ..game.item_service import ItemService
from ..schemas.items import (
    ConsumeScrollRequest,
    CreateScrollRequest,
    SaleResponse,
    ScrollListResponse,
    ScrollResponse,
    SellItemRequest,
)
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

scrolls_router = APIRouter(prefix="/scrolls", tags=["scrolls"])


@scrolls_router.post("", response_model=ScrollResponse, status_code=status.HTTP_201_CREATED)
async def create_scroll(
    payload: CreateScrollRequest,
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> ScrollResponse:
    """Inscribe a scroll. The spell level is gated on the crafter's level."""
    user_id = require_request_user(user_id, "create_scroll")
    scroll = await item_service.create_scroll(user_id, **payload.model_dump())
    return ScrollResponse.from_model(scroll)


@scrolls_router.get("", response_model=ScrollListResponse)
async def list_scrolls(
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> ScrollListResponse:
    user_id = require_request_user(user_id, "list_scrolls")
    scrolls = await item_service.list_scrolls(user_id)
    return ScrollListResponse(scrolls=[ScrollResponse.from_model(s) for s in scrolls])


@scrolls_router.get("/{scroll_id}", response_model=ScrollResponse)
async def get_scroll(
    scroll_id: str,
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> ScrollResponse:
    user_id = require_request_user(user_id, "get_scroll")
    return ScrollResponse.from_model(await item_service.get_scroll(user_id, scroll_id))


@scrolls_router.post("/{scroll_id}/consume", response_model=ScrollResponse)
async def consume_scroll(
    scroll_id: str,
    payload: ConsumeScrollRequest,
    user_id: str | None = Depends(get_current_user_id),
    item_service: ItemService = ItemServiceDep,
) -> ScrollResponse:
    user_id = require_request_user(user_id, "consume_scroll")
    scroll = await item_service.consume_scroll(user_id, scroll_id, payload.to_domain())
    return ScrollResponse.from_model(scroll)


@scrolls_router.post("/{scroll_id}/sell", response_model=SaleResponse)
async def sell_scroll(
    scroll_id: str,
    payload: SellItemRequest,
    user_id: str | None = Depends(get_current_user_id),
    disposition_service: DispositionService = DispositionServiceDep,
) -> SaleResponse:
    user_id = require_request_user(user_id, "sell_scroll")
    result = await disposition_service.sell_scroll(
        user_id, scroll_id, payload.sell_price, credit_treasury=payload.credit_treasury
    )
    return SaleResponse(
        success=result.success,
        message=result.message,
        item_id=result.item_id,
        sell_price=result.sell_price,
        credited_treasury=result.credited_treasury,
        treasury_balance=result.treasury_balance,
    )
