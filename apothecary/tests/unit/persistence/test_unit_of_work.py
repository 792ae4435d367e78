"""Tests for the unit_of_work transaction boundary."""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

from apothecary.exceptions import DatabaseError, InvalidStateTransitionError, ValidationError
from apothecary.models import House, Potion
from apothecary.persistence.unit_of_work import unit_of_work
from apothecary.tests.factories import USER_ID, make_potion


@pytest.mark.asyncio
async def test_commits_on_success(seeded_session_maker):
    async with unit_of_work(seeded_session_maker, "credit") as session:
        house = (await session.execute(select(House).where(House.user_id == USER_ID))).scalars().one()
        house.gold = 150

    async with seeded_session_maker() as session:
        gold = (await session.execute(select(House.gold).where(House.user_id == USER_ID))).scalar_one()
    assert gold == 150


@pytest.mark.asyncio
async def test_domain_error_rolls_back_and_propagates(seeded_session_maker):
    with pytest.raises(ValidationError):
        async with unit_of_work(seeded_session_maker, "credit") as session:
            house = (await session.execute(select(House).where(House.user_id == USER_ID))).scalars().one()
            house.gold = 999
            await session.flush()
            raise ValidationError("nope")

    async with seeded_session_maker() as session:
        gold = (await session.execute(select(House.gold).where(House.user_id == USER_ID))).scalar_one()
    assert gold == 100


@pytest.mark.asyncio
async def test_stale_version_becomes_invalid_state_transition(seeded_session_maker):
    async with unit_of_work(seeded_session_maker, "seed") as session:
        session.add(make_potion(id="potion-stale"))

    with pytest.raises(InvalidStateTransitionError) as exc_info:
        async with unit_of_work(seeded_session_maker, "consume_potion") as session:
            potion = await session.get(Potion, "potion-stale")
            await session.execute(text("UPDATE potions SET version = version + 1 WHERE id = 'potion-stale'"))
            potion.consumed_by = "Aragorn"
            await session.flush()

    assert exc_info.value.message == "Item was modified concurrently during consume_potion"
    assert exc_info.value.user_friendly == "Item was modified concurrently. Reload and try again."


@pytest.mark.asyncio
async def test_sqlalchemy_error_becomes_database_error(seeded_session_maker):
    with pytest.raises(DatabaseError) as exc_info:
        async with unit_of_work(seeded_session_maker, "list_potions"):
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    assert exc_info.value.operation == "list_potions"
    assert exc_info.value.context.operation == "list_potions"
    assert "disk I/O error" in exc_info.value.details["error"]
