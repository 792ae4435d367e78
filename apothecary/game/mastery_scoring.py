"""Mastery points awarded per crafting outcome and crafting role."""

from dataclasses import dataclass

from ..models import CraftingRole, Potency

# Every (potency, role) pair is listed; a missing entry is a KeyError, not a silent zero.
MASTERY_POINTS: dict[tuple[Potency, CraftingRole], int] = {
    (Potency.CRITICAL_SUCCESS, CraftingRole.DIRECT_CRAFTER): 2,
    (Potency.CRITICAL_SUCCESS, CraftingRole.SUBORDINATE): 1,
    (Potency.CRITICAL_SUCCESS, CraftingRole.SUPERVISOR): 2,
    (Potency.SUCCESS, CraftingRole.DIRECT_CRAFTER): 1,
    (Potency.SUCCESS, CraftingRole.SUBORDINATE): 1,
    (Potency.SUCCESS, CraftingRole.SUPERVISOR): 1,
    # Should be resolved before scoring; scored as a plain success if it is not.
    (Potency.SUCCESS_UNKNOWN, CraftingRole.DIRECT_CRAFTER): 1,
    (Potency.SUCCESS_UNKNOWN, CraftingRole.SUBORDINATE): 1,
    (Potency.SUCCESS_UNKNOWN, CraftingRole.SUPERVISOR): 1,
    (Potency.FAIL, CraftingRole.DIRECT_CRAFTER): 0,
    (Potency.FAIL, CraftingRole.SUBORDINATE): 0,
    (Potency.FAIL, CraftingRole.SUPERVISOR): 0,
    (Potency.CRITICAL_FAIL, CraftingRole.DIRECT_CRAFTER): 0,
    (Potency.CRITICAL_FAIL, CraftingRole.SUBORDINATE): 0,
    (Potency.CRITICAL_FAIL, CraftingRole.SUPERVISOR): 0,
}


@dataclass(frozen=True)
class MasteryAward:
    character_id: str
    role: CraftingRole
    points: int


def calculate_mastery_points(potency: Potency | str, role: CraftingRole | str) -> int:
    return MASTERY_POINTS[(Potency(potency), CraftingRole(role))]


def crafting_awards(
    potency: Potency | str,
    crafter_character_id: str,
    role: CraftingRole | str = CraftingRole.DIRECT_CRAFTER,
    supervisor_character_id: str | None = None,
) -> list[MasteryAward]:
    """
    List the awards one crafting outcome earns.

    The crafter is scored for their own role. A supervisor of subordinate
    crafting is always scored at the supervisor (full) value.
    """
    role = CraftingRole(role)
    awards = [MasteryAward(crafter_character_id, role, calculate_mastery_points(potency, role))]
    if role is CraftingRole.SUBORDINATE and supervisor_character_id:
        awards.append(
            MasteryAward(
                supervisor_character_id,
                CraftingRole.SUPERVISOR,
                calculate_mastery_points(potency, CraftingRole.SUPERVISOR),
            )
        )
    return awards
