"""
MasteryService: the per-character, per-template mastery ledger.

Levels are bounded to 0-10. Awards add points and never exceed the cap;
explicit sets (GM override) clamp and upsert without any monotonic rule.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..error_types import ErrorMessages
from ..exceptions import ResourceNotFoundError, ValidationError
from ..models import MAX_MASTERY_LEVEL, MIN_MASTERY_LEVEL, CraftingRole, Potency
from ..persistence.repositories import MasteryKind, MasteryRepository, MasteryTarget, TemplateRepository
from ..persistence.unit_of_work import unit_of_work
from ..services.mutation_guard import MutationGuard
from ..structured_logging.enhanced_logging_config import get_logger
from .mastery_scoring import crafting_awards

logger = get_logger(__name__)


@dataclass(frozen=True)
class MasteryChange:
    """Result of one award or set against the ledger."""

    character_id: str
    template_id: str
    kind: MasteryKind
    previous_level: int | None
    mastery_level: int
    changed: bool


def resolve_target(
    character_id: str,
    potion_template_id: str | None = None,
    spell_template_id: str | None = None,
) -> MasteryTarget:
    """Build the ledger target; exactly one template id must be supplied."""
    if not character_id or not str(character_id).strip():
        raise ValidationError("Character id is required", field="character_id")
    if bool(potion_template_id) == bool(spell_template_id):
        raise ValidationError(
            ErrorMessages.MASTERY_TEMPLATE_REQUIRED,
            field="potion_template_id",
            details={"potion_template_id": potion_template_id, "spell_template_id": spell_template_id},
        )
    if potion_template_id:
        return MasteryTarget(character_id, potion_template_id, MasteryKind.POTION)
    return MasteryTarget(character_id, str(spell_template_id), MasteryKind.SPELL)


def crafting_award_targets(
    template_id: str,
    potency: Potency | str,
    crafter_character_id: str,
    role: CraftingRole | str = CraftingRole.DIRECT_CRAFTER,
    supervisor_character_id: str | None = None,
) -> list[MasteryTarget]:
    """Ledger cells a potion crafting outcome touches: the crafter and any supervisor."""
    return [
        MasteryTarget(award.character_id, template_id, MasteryKind.POTION)
        for award in crafting_awards(potency, crafter_character_id, role, supervisor_character_id)
    ]


def clamp_level(level: int) -> int:
    return max(MIN_MASTERY_LEVEL, min(MAX_MASTERY_LEVEL, level))


def _require_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be a whole number", field=field, value=value)
    return value


class MasteryService:
    """Service for awarding, setting and reading character mastery."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        mastery_repository: MasteryRepository,
        template_repository: TemplateRepository,
        mutation_guard: MutationGuard,
    ) -> None:
        self._session_maker = session_maker
        self._mastery_repo = mastery_repository
        self._template_repo = template_repository
        self._guard = mutation_guard
        self._logger = get_logger(__name__)

    async def _require_template(self, session: AsyncSession, target: MasteryTarget, *, discovered: bool) -> None:
        if target.kind is MasteryKind.POTION:
            template = await self._template_repo.get_potion_template(session, target.template_id)
            message = ErrorMessages.POTION_TEMPLATE_NOT_FOUND
        else:
            template = await self._template_repo.get_spell_template(session, target.template_id)
            message = ErrorMessages.SPELL_TEMPLATE_NOT_FOUND
        if template is None or (discovered and not template.is_discovered):
            raise ResourceNotFoundError(
                message, resource_type=f"{target.kind.value}_template", resource_id=target.template_id
            )

    async def apply_award(self, session: AsyncSession, target: MasteryTarget, points: int) -> MasteryChange:
        """
        Add points to one ledger cell inside the caller's transaction.

        No-op for points <= 0 and for a character already at the cap.
        The caller must hold the mutation guard for target.lock_key.
        """
        record = await self._mastery_repo.get(session, target)
        previous = record.mastery_level if record is not None else None

        if points <= 0:
            self._logger.debug("Non-positive mastery award ignored", character_id=target.character_id, points=points)
            return MasteryChange(
                target.character_id, target.template_id, target.kind, previous, previous or MIN_MASTERY_LEVEL, False
            )

        if record is None:
            level = min(points, MAX_MASTERY_LEVEL)
            await self._mastery_repo.create(session, target, level)
            self._logger.info(
                "Mastery record created",
                character_id=target.character_id,
                template_id=target.template_id,
                kind=target.kind.value,
                mastery_level=level,
            )
            return MasteryChange(target.character_id, target.template_id, target.kind, None, level, True)

        if record.mastery_level >= MAX_MASTERY_LEVEL:
            self._logger.info(
                "Mastery already at maximum level, award skipped",
                character_id=target.character_id,
                template_id=target.template_id,
                kind=target.kind.value,
                points=points,
            )
            return MasteryChange(
                target.character_id, target.template_id, target.kind, previous, record.mastery_level, False
            )

        level = min(record.mastery_level + points, MAX_MASTERY_LEVEL)
        await self._mastery_repo.set_level(session, record, level)
        self._logger.info(
            "Mastery increased",
            character_id=target.character_id,
            template_id=target.template_id,
            kind=target.kind.value,
            previous_level=previous,
            mastery_level=level,
        )
        return MasteryChange(target.character_id, target.template_id, target.kind, previous, level, True)

    async def apply_crafting_awards(
        self,
        session: AsyncSession,
        template_id: str,
        potency: Potency | str,
        crafter_character_id: str,
        role: CraftingRole | str = CraftingRole.DIRECT_CRAFTER,
        supervisor_character_id: str | None = None,
    ) -> list[MasteryChange]:
        """
        Score a potion crafting outcome for the crafter (and supervisor) in the caller's transaction.

        The caller must already hold the mutation guard for every key from
        crafting_award_targets, taken before its first write in the transaction.
        """
        changes = []
        for award in crafting_awards(potency, crafter_character_id, role, supervisor_character_id):
            target = MasteryTarget(award.character_id, template_id, MasteryKind.POTION)
            changes.append(await self.apply_award(session, target, award.points))
        return changes

    async def award_mastery(
        self,
        character_id: str,
        points: int,
        *,
        potion_template_id: str | None = None,
        spell_template_id: str | None = None,
    ) -> MasteryChange:
        """Award points to one (character, template) pair in its own transaction."""
        target = resolve_target(character_id, potion_template_id, spell_template_id)
        points = _require_int(points, "points")
        async with self._guard.acquire(target.lock_key):
            async with unit_of_work(self._session_maker, "award_mastery") as session:
                await self._require_template(session, target, discovered=False)
                return await self.apply_award(session, target, points)

    async def set_mastery_level(
        self,
        character_id: str,
        level: int,
        *,
        potion_template_id: str | None = None,
        spell_template_id: str | None = None,
    ) -> MasteryChange:
        """
        Set a mastery level directly (GM override).

        The level is clamped to 0-10 and the record is created when missing.
        The template must exist and be discovered.
        """
        target = resolve_target(character_id, potion_template_id, spell_template_id)
        clamped = clamp_level(_require_int(level, "mastery_level"))
        async with self._guard.acquire(target.lock_key):
            async with unit_of_work(self._session_maker, "set_mastery_level") as session:
                await self._require_template(session, target, discovered=True)
                record = await self._mastery_repo.get(session, target)
                if record is None:
                    await self._mastery_repo.create(session, target, clamped)
                    previous = None
                else:
                    previous = record.mastery_level
                    await self._mastery_repo.set_level(session, record, clamped)

        self._logger.info(
            "Mastery level set",
            character_id=target.character_id,
            template_id=target.template_id,
            kind=target.kind.value,
            previous_level=previous,
            mastery_level=clamped,
            requested_level=level,
        )
        return MasteryChange(target.character_id, target.template_id, target.kind, previous, clamped, True)

    async def get_character_mastery(self, character_id: str) -> dict[MasteryKind, list[tuple[Any, str]]]:
        """Return the character's potion and spell mastery records with template names."""
        async with unit_of_work(self._session_maker, "get_character_mastery") as session:
            return await self._mastery_repo.list_for_character(session, character_id)
