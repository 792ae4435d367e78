"""
Consumption state machine shared by potions and scrolls.

    OWNED --partial--> PARTIALLY_CONSUMED --partial--> PARTIALLY_CONSUMED
      |                        |
      +------full------> FULLY_CONSUMED <------full-----+

Partial consumption is only possible when the template has a split_amount.
Remaining doses are tracked coarsely: remaining_amount holds the template's
split label rather than a running count.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from ..error_types import ErrorMessages
from ..exceptions import InvalidStateTransitionError, ValidationError
from ..models import Potency
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

FULL_ITEM_LABEL = "Full Item"

RESOLVABLE_POTENCIES = frozenset({Potency.SUCCESS, Potency.CRITICAL_SUCCESS})


class ItemState(str, Enum):
    OWNED = "owned"
    PARTIALLY_CONSUMED = "partially_consumed"
    FULLY_CONSUMED = "fully_consumed"


@dataclass(frozen=True)
class ConsumptionRequest:
    consumer_name: str | None
    consumed_at: datetime | None
    actual_potency: Potency | None = None
    amount_used: str | None = None
    is_full_consumption: bool = True


@dataclass(frozen=True)
class ConsumptionResult:
    """What a consumption did to the item."""

    previous_state: ItemState
    new_state: ItemState
    first_consumption: bool
    resolved_potency: Potency | None


def item_state(item: Any) -> ItemState:
    if item.is_fully_consumed:
        return ItemState.FULLY_CONSUMED
    if item.consumed_by is not None:
        return ItemState.PARTIALLY_CONSUMED
    return ItemState.OWNED


def is_sellable(item: Any) -> bool:
    """
    Fully consumed items cannot be sold. A consumed item with a tracked
    used_amount is a partially used split item and may still be sold.
    """
    if item.is_fully_consumed:
        return False
    return not (item.consumed_by is not None and not item.used_amount)


def validate_consumption_request(request: ConsumptionRequest) -> str:
    """Return the trimmed consumer name, or raise when the name or date is missing."""
    name = (request.consumer_name or "").strip()
    if not name:
        raise ValidationError(ErrorMessages.CONSUMER_NAME_REQUIRED, field="consumed_by")
    if request.consumed_at is None:
        raise ValidationError(ErrorMessages.CONSUMPTION_DATE_REQUIRED, field="consumed_at")
    return name


def _resolve_potency(item: Any, actual_potency: Potency | None) -> Potency | None:
    """
    Return the potency the item should carry after consumption.

    Only a success_unknown potion can be resolved, and only to success or
    critical_success. A supplied actual potency is ignored for any other item.
    """
    current = getattr(item, "crafted_potency", None)
    if current is None:
        return None
    current = Potency(current)
    if actual_potency is None or current is not Potency.SUCCESS_UNKNOWN:
        return current
    actual = Potency(actual_potency)
    if actual not in RESOLVABLE_POTENCIES:
        raise ValidationError(ErrorMessages.INVALID_ACTUAL_POTENCY, field="actual_potency", value=actual.value)
    return actual


def apply_consumption(
    item: Any,
    split_amount: str | None,
    request: ConsumptionRequest,
    item_label: str = "Potion",
) -> ConsumptionResult:
    """
    Validate and apply one consumption event to item in place.

    Args:
        item: Potion or Scroll instance
        split_amount: The template's split label, or None for single-use items
        request: Consumer, date and optional partial/resolution details
        item_label: "Potion" or "Scroll", used in messages

    Raises:
        ValidationError: missing consumer name or date, or an invalid resolved potency
        InvalidStateTransitionError: the item is already consumed
    """
    consumer_name = validate_consumption_request(request)

    previous_state = item_state(item)
    if previous_state is ItemState.FULLY_CONSUMED or (previous_state is ItemState.PARTIALLY_CONSUMED and not split_amount):
        raise InvalidStateTransitionError(
            f"{item_label} has already been consumed", item_type=item_label.lower(), item_id=item.id
        )

    resolved = _resolve_potency(item, request.actual_potency)
    if resolved is not None:
        item.crafted_potency = resolved.value

    first_consumption = item.consumed_by is None

    if split_amount and not request.is_full_consumption:
        item.used_amount = request.amount_used or split_amount
        item.remaining_amount = split_amount
        if first_consumption:
            item.consumed_by = consumer_name
            item.consumed_at = request.consumed_at
        new_state = ItemState.PARTIALLY_CONSUMED
    else:
        item.consumed_by = consumer_name
        item.consumed_at = request.consumed_at
        item.is_fully_consumed = True
        item.used_amount = split_amount or FULL_ITEM_LABEL
        item.remaining_amount = None
        new_state = ItemState.FULLY_CONSUMED

    logger.info(
        "Item consumed",
        item_type=item_label.lower(),
        item_id=item.id,
        previous_state=previous_state.value,
        new_state=new_state.value,
        first_consumption=first_consumption,
        used_amount=item.used_amount,
    )
    return ConsumptionResult(
        previous_state=previous_state,
        new_state=new_state,
        first_consumption=first_consumption,
        resolved_potency=resolved,
    )
