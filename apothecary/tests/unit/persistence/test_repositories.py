"""Tests for the item, house, mastery and template repositories against in-memory SQLite."""

import pytest

from apothecary.persistence.repositories import (
    POTION_KIND,
    SCROLL_KIND,
    HouseRepository,
    ItemRepository,
    MasteryKind,
    MasteryRepository,
    MasteryTarget,
    TemplateRepository,
)
from apothecary.persistence.unit_of_work import unit_of_work
from apothecary.tests.factories import OTHER_USER_ID, USER_ID, make_potion, make_scroll


@pytest.mark.asyncio
async def test_item_repository_scopes_lookups_to_owner(seeded_session_maker):
    repo = ItemRepository(POTION_KIND)
    async with unit_of_work(seeded_session_maker, "test") as session:
        await repo.add(session, make_potion(id="potion-a"), USER_ID)

    async with unit_of_work(seeded_session_maker, "test") as session:
        owned = await repo.get_owned(session, "potion-a", USER_ID)
        foreign = await repo.get_owned(session, "potion-a", OTHER_USER_ID)
        ownership = await repo.get_ownership(session, "potion-a", USER_ID)

    assert owned.id == "potion-a"
    assert owned.template.name == "Healing Draught"
    assert foreign is None
    assert ownership.user_id == USER_ID


@pytest.mark.asyncio
async def test_item_repository_lists_and_deletes(seeded_session_maker):
    repo = ItemRepository(SCROLL_KIND)
    async with unit_of_work(seeded_session_maker, "test") as session:
        await repo.add(session, make_scroll(id="scroll-a"), USER_ID)
        await repo.add(session, make_scroll(id="scroll-b"), OTHER_USER_ID)

    async with unit_of_work(seeded_session_maker, "test") as session:
        listed = await repo.list_owned(session, USER_ID)
        assert [s.id for s in listed] == ["scroll-a"]
        await repo.delete(session, listed[0], await repo.get_ownership(session, "scroll-a", USER_ID))

    async with unit_of_work(seeded_session_maker, "test") as session:
        assert await repo.list_owned(session, USER_ID) == []
        assert [s.id for s in await repo.list_owned(session, OTHER_USER_ID)] == ["scroll-b"]


@pytest.mark.asyncio
async def test_house_repository_credits_gold(seeded_session_maker):
    repo = HouseRepository()
    async with unit_of_work(seeded_session_maker, "test") as session:
        house = await repo.get_by_user_id(session, USER_ID, for_update=True)
        await repo.add_gold(session, house, 25)

    async with unit_of_work(seeded_session_maker, "test") as session:
        house = await repo.get_by_user_id(session, USER_ID)
        missing = await repo.get_by_user_id(session, OTHER_USER_ID)

    assert house.gold == 125
    assert missing is None


@pytest.mark.asyncio
async def test_mastery_repository_round_trip(seeded_session_maker):
    repo = MasteryRepository()
    potion_target = MasteryTarget("char-1", "pt-vigor", MasteryKind.POTION)
    spell_target = MasteryTarget("char-1", "st-fireball", MasteryKind.SPELL)

    async with unit_of_work(seeded_session_maker, "test") as session:
        assert await repo.get(session, potion_target) is None
        await repo.create(session, potion_target, 2)
        await repo.create(session, spell_target, 7)
        await repo.create(session, MasteryTarget("char-2", "pt-vigor", MasteryKind.POTION), 9)

    async with unit_of_work(seeded_session_maker, "test") as session:
        record = await repo.get(session, potion_target)
        await repo.set_level(session, record, 4)

    async with unit_of_work(seeded_session_maker, "test") as session:
        ledger = await repo.list_for_character(session, "char-1")

    assert [(r.potion_template_id, r.mastery_level, name) for r, name in ledger[MasteryKind.POTION]] == [
        ("pt-vigor", 4, "Vigor Tonic")
    ]
    assert [(r.spell_template_id, r.mastery_level, name) for r, name in ledger[MasteryKind.SPELL]] == [
        ("st-fireball", 7, "Fireball")
    ]


def test_mastery_target_lock_key_separates_kinds():
    potion = MasteryTarget("char-1", "t-1", MasteryKind.POTION)
    spell = MasteryTarget("char-1", "t-1", MasteryKind.SPELL)

    assert potion.lock_key != spell.lock_key


@pytest.mark.asyncio
async def test_template_repository_lists_discovered_only(seeded_session_maker):
    repo = TemplateRepository(seeded_session_maker)

    potions = await repo.list_discovered_potion_templates()
    spells = await repo.list_discovered_spell_templates()

    assert [t.id for t in potions] == ["pt-healing", "pt-vigor"]
    assert [t.id for t in spells] == ["st-fireball", "st-wish"]


@pytest.mark.asyncio
async def test_template_repository_get_includes_undiscovered(seeded_session_maker):
    repo = TemplateRepository(seeded_session_maker)
    async with seeded_session_maker() as session:
        hidden = await repo.get_potion_template(session, "pt-hidden")
        missing = await repo.get_spell_template(session, "st-nope")

    assert hidden.is_discovered is False
    assert missing is None
