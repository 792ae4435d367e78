"""Tests for ApplicationContainer wiring."""

import pytest

from apothecary.container import ApplicationContainer


@pytest.mark.asyncio
async def test_initialize_with_injected_session_maker(session_maker):
    container = ApplicationContainer()

    await container.initialize(session_maker=session_maker)

    assert container.is_initialized
    assert container.session_maker is session_maker
    assert container.get_status() == {"initialized": True, "owns_database": False, "active_mutation_keys": 0}


@pytest.mark.asyncio
async def test_services_share_one_mutation_guard(container):
    guard = container.mutation_guard

    assert container.item_service._guard is guard
    assert container.mastery_service._guard is guard
    assert container.disposition_service._guard is guard


@pytest.mark.asyncio
async def test_initialize_is_idempotent(container):
    item_service = container.item_service

    await container.initialize()

    assert container.item_service is item_service


@pytest.mark.asyncio
async def test_shutdown_without_owned_database(container):
    await container.shutdown()

    assert not container.is_initialized
    assert container.get_status()["owns_database"] is False
