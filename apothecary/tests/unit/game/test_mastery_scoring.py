"""Unit tests for mastery point scoring."""

import itertools

import pytest

from apothecary.game.mastery_scoring import MASTERY_POINTS, calculate_mastery_points, crafting_awards
from apothecary.models import CraftingRole, Potency


def test_scoring_table_covers_every_potency_and_role():
    assert set(MASTERY_POINTS) == set(itertools.product(Potency, CraftingRole))


@pytest.mark.parametrize(
    ("potency", "role", "points"),
    [
        (Potency.CRITICAL_SUCCESS, CraftingRole.DIRECT_CRAFTER, 2),
        (Potency.CRITICAL_SUCCESS, CraftingRole.SUBORDINATE, 1),
        (Potency.CRITICAL_SUCCESS, CraftingRole.SUPERVISOR, 2),
        (Potency.SUCCESS, CraftingRole.DIRECT_CRAFTER, 1),
        (Potency.SUCCESS, CraftingRole.SUBORDINATE, 1),
        (Potency.SUCCESS_UNKNOWN, CraftingRole.DIRECT_CRAFTER, 1),
        (Potency.FAIL, CraftingRole.DIRECT_CRAFTER, 0),
        (Potency.CRITICAL_FAIL, CraftingRole.SUPERVISOR, 0),
    ],
)
def test_calculate_mastery_points(potency, role, points):
    assert calculate_mastery_points(potency, role) == points


def test_calculate_mastery_points_accepts_stored_string_values():
    assert calculate_mastery_points("critical_success", "direct_crafter") == 2


def test_calculate_mastery_points_rejects_unknown_potency():
    with pytest.raises(ValueError):
        calculate_mastery_points("legendary", "direct_crafter")


def test_direct_crafter_gets_single_award():
    awards = crafting_awards(Potency.CRITICAL_SUCCESS, "char-1")

    assert len(awards) == 1
    assert awards[0].character_id == "char-1"
    assert awards[0].points == 2


def test_subordinate_with_supervisor_awards_supervisor_full_value():
    awards = crafting_awards(Potency.CRITICAL_SUCCESS, "apprentice", CraftingRole.SUBORDINATE, "master")

    assert [(a.character_id, a.role, a.points) for a in awards] == [
        ("apprentice", CraftingRole.SUBORDINATE, 1),
        ("master", CraftingRole.SUPERVISOR, 2),
    ]


def test_supervisor_is_ignored_for_direct_crafting():
    awards = crafting_awards(Potency.SUCCESS, "char-1", CraftingRole.DIRECT_CRAFTER, "master")
    assert [a.character_id for a in awards] == ["char-1"]


def test_failed_outcome_awards_zero_points():
    awards = crafting_awards(Potency.FAIL, "apprentice", CraftingRole.SUBORDINATE, "master")
    assert all(a.points == 0 for a in awards)
