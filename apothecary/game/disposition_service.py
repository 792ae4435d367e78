"""
DispositionService: selling items back out of a user's holdings.

A sale deletes the ownership link and then the instance, optionally
crediting the seller's house treasury, all in one transaction.
"""

import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..auth.principal import require_user_id
from ..error_types import ErrorMessages
from ..exceptions import InvalidStateTransitionError, ResourceNotFoundError, ValidationError
from ..persistence.repositories import HouseRepository, ItemRepository
from ..persistence.unit_of_work import unit_of_work
from ..services.mutation_guard import MutationGuard
from ..structured_logging.enhanced_logging_config import get_logger
from .consumption import is_sellable
from .item_service import item_lock_key

logger = get_logger(__name__)


@dataclass(frozen=True)
class SaleResult:
    success: bool
    message: str
    item_id: str
    sell_price: float
    credited_treasury: bool
    treasury_balance: int | None = None


def validate_sell_price(sell_price: Any) -> float:
    """Accept any finite, non-negative int or float. Strings and booleans are rejected."""
    if isinstance(sell_price, bool) or not isinstance(sell_price, int | float):
        raise ValidationError(ErrorMessages.INVALID_SELL_PRICE, field="sell_price", value=sell_price)
    if not math.isfinite(sell_price) or sell_price < 0:
        raise ValidationError(ErrorMessages.INVALID_SELL_PRICE, field="sell_price", value=sell_price)
    return sell_price


def validate_treasury_credit(price: float) -> int:
    """Return price as whole gold pieces. The treasury holds integers, so fractional prices are rejected."""
    if not float(price).is_integer():
        raise ValidationError(ErrorMessages.TREASURY_CREDIT_WHOLE_GOLD, field="sell_price", value=price)
    return int(price)


def format_price(price: float) -> str:
    return str(int(price)) if float(price).is_integer() else str(price)


class DispositionService:
    """Service for selling potions and scrolls."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        potion_repository: ItemRepository,
        scroll_repository: ItemRepository,
        house_repository: HouseRepository,
        mutation_guard: MutationGuard,
    ) -> None:
        self._session_maker = session_maker
        self._potion_repo = potion_repository
        self._scroll_repo = scroll_repository
        self._house_repo = house_repository
        self._guard = mutation_guard
        self._logger = get_logger(__name__)

    async def sell_potion(
        self, user_id: str | None, potion_id: str, sell_price: Any, credit_treasury: bool = False
    ) -> SaleResult:
        return await self._sell(self._potion_repo, user_id, potion_id, sell_price, credit_treasury)

    async def sell_scroll(
        self, user_id: str | None, scroll_id: str, sell_price: Any, credit_treasury: bool = False
    ) -> SaleResult:
        return await self._sell(self._scroll_repo, user_id, scroll_id, sell_price, credit_treasury)

    async def _sell(
        self, repo: ItemRepository, user_id: str | None, item_id: str, sell_price: Any, credit_treasury: bool
    ) -> SaleResult:
        kind = repo.kind
        operation = f"sell_{kind.resource_type}"
        user_id = require_user_id(user_id, operation)
        price = validate_sell_price(sell_price)
        credit_amount = validate_treasury_credit(price) if credit_treasury and price > 0 else 0
        treasury_balance = None
        credited = False

        async with self._guard.acquire(item_lock_key(kind, item_id)):
            async with unit_of_work(self._session_maker, operation) as session:
                item = await repo.get_owned(session, item_id, user_id)
                ownership = await repo.get_ownership(session, item_id, user_id) if item is not None else None
                if item is None or ownership is None:
                    raise ResourceNotFoundError(
                        f"{kind.label} not found or not owned by user",
                        resource_type=kind.resource_type,
                        resource_id=item_id,
                    )

                if not is_sellable(item):
                    raise InvalidStateTransitionError(
                        f"Cannot sell a consumed {kind.resource_type}", item_type=kind.resource_type, item_id=item_id
                    )

                if credit_amount > 0:
                    house = await self._house_repo.get_by_user_id(session, user_id, for_update=True)
                    if house is None:
                        raise ValidationError(ErrorMessages.NO_HOUSE_FOR_TREASURY, field="credit_treasury")
                    await self._house_repo.add_gold(session, house, credit_amount)
                    treasury_balance = house.gold
                    credited = True

                await repo.delete(session, item, ownership)

        message = f"{kind.label} sold for {format_price(price)} gold pieces"
        if credited:
            message += " and added to house treasury"
        self._logger.info(
            "Item sold",
            item_type=kind.resource_type,
            item_id=item_id,
            user_id=user_id,
            sell_price=price,
            credited_treasury=credited,
        )
        return SaleResult(
            success=True,
            message=message,
            item_id=item_id,
            sell_price=price,
            credited_treasury=credited,
            treasury_balance=treasury_balance,
        )

    async def get_treasury(self, user_id: str | None) -> Any:
        """Return the acting user's house, whose gold is the treasury sales credit."""
        user_id = require_user_id(user_id, "get_treasury")
        async with unit_of_work(self._session_maker, "get_treasury") as session:
            house = await self._house_repo.get_by_user_id(session, user_id)
        if house is None:
            raise ResourceNotFoundError(ErrorMessages.HOUSE_NOT_FOUND, resource_type="house", resource_id=user_id)
        return house
