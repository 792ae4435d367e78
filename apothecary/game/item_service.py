"""
ItemService: crafting, reading and consuming potions and scrolls.

Every mutating operation is one unit of work: the instance write, its
ownership link and any mastery award commit or roll back together.
"""

from contextlib import AsyncExitStack
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..auth.principal import require_user_id
from ..error_types import ErrorMessages
from ..exceptions import ResourceNotFoundError, ValidationError
from ..models import CraftingRole, Potency, Potion, Scroll
from ..persistence.repositories import ItemKind, ItemRepository, TemplateRepository
from ..persistence.unit_of_work import unit_of_work
from ..services.mutation_guard import MutationGuard
from ..structured_logging.enhanced_logging_config import get_logger
from .consumption import ConsumptionRequest, apply_consumption, validate_consumption_request
from .crafting_validator import normalize_weight, validate_and_prepare_crafting
from .mastery_service import MasteryService, crafting_award_targets

logger = get_logger(__name__)

DEFAULT_SCROLL_MATERIAL = "paper"

_NOT_FOUND_MESSAGES = {
    "Potion": ErrorMessages.POTION_NOT_FOUND,
    "Scroll": ErrorMessages.SCROLL_NOT_FOUND,
}


def _require_text(value: str | None, field: str, message: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(message, field=field)
    return text


def item_lock_key(kind: ItemKind, item_id: str) -> str:
    return f"{kind.resource_type}:{item_id}"


class ItemService:
    """Service for the item instance store and the consumption state machine."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        template_repository: TemplateRepository,
        potion_repository: ItemRepository,
        scroll_repository: ItemRepository,
        mastery_service: MasteryService,
        mutation_guard: MutationGuard,
    ) -> None:
        self._session_maker = session_maker
        self._template_repo = template_repository
        self._potion_repo = potion_repository
        self._scroll_repo = scroll_repository
        self._mastery_service = mastery_service
        self._guard = mutation_guard
        self._logger = get_logger(__name__)

    # --- creation ---

    async def create_potion(
        self,
        user_id: str | None,
        *,
        potion_template_id: str,
        crafted_by: str,
        crafted_potency: Potency | str,
        weight: Any,
        crafted_at: datetime | None = None,
        custom_id: str | None = None,
        special_ingredient_details: str | None = None,
        crafter_character_id: str | None = None,
        crafting_role: CraftingRole | str = CraftingRole.DIRECT_CRAFTER,
        supervisor_character_id: str | None = None,
    ) -> Potion:
        """Craft a potion and link it to the acting user."""
        user_id = require_user_id(user_id, "create_potion")
        crafted_by = _require_text(crafted_by, "crafted_by", ErrorMessages.CRAFTED_BY_REQUIRED)
        try:
            potency = Potency(crafted_potency)
        except ValueError:
            raise ValidationError("Invalid crafted potency", field="crafted_potency", value=crafted_potency) from None
        try:
            role = CraftingRole(crafting_role)
        except ValueError:
            raise ValidationError("Invalid crafting role", field="crafting_role", value=crafting_role) from None
        if role is CraftingRole.SUPERVISOR:
            raise ValidationError(
                "A potion's crafter is either a direct crafter or a subordinate", field="crafting_role", value=role.value
            )
        if supervisor_character_id and role is not CraftingRole.SUBORDINATE:
            raise ValidationError(
                "A supervisor can only be recorded for subordinate crafting", field="supervisor_character_id"
            )
        normalized_weight = normalize_weight(weight)

        async with unit_of_work(self._session_maker, "create_potion") as session:
            template = await self._template_repo.get_potion_template(session, potion_template_id)
            validate_and_prepare_crafting(template)
            potion = Potion(
                potion_template_id=template.id,
                custom_id=custom_id,
                crafted_potency=potency.value,
                crafted_by=crafted_by,
                crafted_at=crafted_at or datetime.now(UTC),
                weight=normalized_weight,
                special_ingredient_details=special_ingredient_details,
                crafter_character_id=crafter_character_id,
                crafting_role=role.value,
                supervisor_character_id=supervisor_character_id,
                is_fully_consumed=False,
            )
            potion.template = template
            await self._potion_repo.add(session, potion, user_id)

        self._logger.info(
            "Potion crafted",
            potion_id=potion.id,
            template_id=potion.potion_template_id,
            potency=potency.value,
            user_id=user_id,
        )
        return potion

    async def create_scroll(
        self,
        user_id: str | None,
        *,
        spell_template_id: str,
        crafted_by: str,
        crafter_level: int,
        weight: Any,
        crafted_at: datetime | None = None,
        material: str | None = None,
    ) -> Scroll:
        """Inscribe a scroll, gated on the crafter's level, and link it to the acting user."""
        user_id = require_user_id(user_id, "create_scroll")
        crafted_by = _require_text(crafted_by, "crafted_by", ErrorMessages.CRAFTED_BY_REQUIRED)
        normalized_weight = normalize_weight(weight)

        async with unit_of_work(self._session_maker, "create_scroll") as session:
            template = await self._template_repo.get_spell_template(session, spell_template_id)
            if template is None:
                raise ResourceNotFoundError(
                    ErrorMessages.SPELL_TEMPLATE_NOT_FOUND, resource_type="spell_template", resource_id=spell_template_id
                )
            plan = validate_and_prepare_crafting(template, crafter_level)
            scroll = Scroll(
                spell_template_id=template.id,
                material=(material or "").strip() or DEFAULT_SCROLL_MATERIAL,
                crafted_by=crafted_by,
                crafted_at=crafted_at or datetime.now(UTC),
                crafter_level=crafter_level,
                weight=normalized_weight,
                is_fully_consumed=False,
            )
            scroll.template = template
            await self._scroll_repo.add(session, scroll, user_id)

        self._logger.info(
            "Scroll crafted",
            scroll_id=scroll.id,
            template_id=scroll.spell_template_id,
            spell_level=template.level,
            max_craftable_level=plan.max_craftable_level,
            user_id=user_id,
        )
        return scroll

    # --- reads ---

    async def _get_owned(self, repo: ItemRepository, user_id: str | None, item_id: str) -> Any:
        user_id = require_user_id(user_id, f"get_{repo.kind.resource_type}")
        async with unit_of_work(self._session_maker, f"get_{repo.kind.resource_type}") as session:
            item = await repo.get_owned(session, item_id, user_id)
        if item is None:
            raise ResourceNotFoundError(
                _NOT_FOUND_MESSAGES[repo.kind.label], resource_type=repo.kind.resource_type, resource_id=item_id
            )
        return item

    async def get_potion(self, user_id: str | None, potion_id: str) -> Potion:
        return await self._get_owned(self._potion_repo, user_id, potion_id)

    async def get_scroll(self, user_id: str | None, scroll_id: str) -> Scroll:
        return await self._get_owned(self._scroll_repo, user_id, scroll_id)

    async def list_potions(self, user_id: str | None) -> list[Potion]:
        user_id = require_user_id(user_id, "list_potions")
        async with unit_of_work(self._session_maker, "list_potions") as session:
            return await self._potion_repo.list_owned(session, user_id)

    async def list_scrolls(self, user_id: str | None) -> list[Scroll]:
        user_id = require_user_id(user_id, "list_scrolls")
        async with unit_of_work(self._session_maker, "list_scrolls") as session:
            return await self._scroll_repo.list_owned(session, user_id)

    # --- consumption ---

    async def _consume(self, repo: ItemRepository, user_id: str | None, item_id: str, request: ConsumptionRequest) -> Any:
        kind = repo.kind
        operation = f"consume_{kind.resource_type}"
        user_id = require_user_id(user_id, operation)
        validate_consumption_request(request)

        async with self._guard.acquire(item_lock_key(kind, item_id)), AsyncExitStack() as award_guards:
            async with unit_of_work(self._session_maker, operation) as session:
                item = await repo.get_owned(session, item_id, user_id)
                if item is None:
                    raise ResourceNotFoundError(
                        _NOT_FOUND_MESSAGES[kind.label], resource_type=kind.resource_type, resource_id=item_id
                    )

                # Mastery keys are held from before the first write until after commit.
                awards_due = isinstance(item, Potion) and item.consumed_by is None and bool(item.crafter_character_id)
                if awards_due:
                    targets = crafting_award_targets(
                        item.potion_template_id,
                        item.crafted_potency,
                        item.crafter_character_id,
                        item.crafting_role,
                        item.supervisor_character_id,
                    )
                    await award_guards.enter_async_context(
                        self._guard.acquire_many(target.lock_key for target in targets)
                    )

                split_amount = item.template.split_amount if isinstance(item, Potion) else None
                result = apply_consumption(item, split_amount, request, kind.label)
                await session.flush()

                if awards_due and result.first_consumption:
                    await self._mastery_service.apply_crafting_awards(
                        session,
                        item.potion_template_id,
                        item.crafted_potency,
                        item.crafter_character_id,
                        item.crafting_role,
                        item.supervisor_character_id,
                    )
        return item

    async def consume_potion(self, user_id: str | None, potion_id: str, request: ConsumptionRequest) -> Potion:
        """Consume a potion, resolving an unknown success and scoring the crafter's mastery on first use."""
        return await self._consume(self._potion_repo, user_id, potion_id, request)

    async def consume_scroll(self, user_id: str | None, scroll_id: str, request: ConsumptionRequest) -> Scroll:
        """Consume a scroll. Scrolls carry no outcome, so no mastery is scored."""
        scroll_request = ConsumptionRequest(
            consumer_name=request.consumer_name,
            consumed_at=request.consumed_at,
            amount_used=request.amount_used,
            is_full_consumption=request.is_full_consumption,
        )
        return await self._consume(self._scroll_repo, user_id, scroll_id, scroll_request)
