"""API tests for the scroll endpoints."""

import pytest

from apothecary.tests.factories import AUTH_HEADERS


@pytest.mark.asyncio
async def test_scroll_above_crafter_level_is_400(client):
    response = await client.post(
        "/v1/scrolls",
        json={"spell_template_id": "st-wish", "crafted_by": "Gandalf", "crafter_level": 2},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == (
        "Cannot craft level 9 spell with crafter level 2. Maximum craftable: level 3"
    )


@pytest.mark.asyncio
async def test_scroll_lifecycle(client):
    created = await client.post(
        "/v1/scrolls",
        json={"spell_template_id": "st-wish", "crafted_by": "Gandalf", "crafter_level": 8, "weight": 0.2},
        headers=AUTH_HEADERS,
    )
    assert created.status_code == 201
    scroll = created.json()
    assert scroll["material"] == "paper"
    assert scroll["template"]["level"] == 9

    listed = await client.get("/v1/scrolls", headers=AUTH_HEADERS)
    assert [s["id"] for s in listed.json()["scrolls"]] == [scroll["id"]]

    consumed = await client.post(
        f"/v1/scrolls/{scroll['id']}/consume",
        json={"consumed_by": "Gandalf", "consumed_at": "2024-03-05T18:30:00Z"},
        headers=AUTH_HEADERS,
    )
    assert consumed.json()["is_fully_consumed"] is True

    sold = await client.post(f"/v1/scrolls/{scroll['id']}/sell", json={"sell_price": 5}, headers=AUTH_HEADERS)
    assert sold.status_code == 409


@pytest.mark.asyncio
async def test_sell_unconsumed_scroll(client):
    created = await client.post(
        "/v1/scrolls",
        json={"spell_template_id": "st-fireball", "crafted_by": "Gandalf", "crafter_level": 2},
        headers=AUTH_HEADERS,
    )
    scroll_id = created.json()["id"]

    sold = await client.post(f"/v1/scrolls/{scroll_id}/sell", json={"sell_price": 12.5}, headers=AUTH_HEADERS)

    assert sold.status_code == 200
    assert sold.json()["message"] == "Scroll sold for 12.5 gold pieces"
    assert (await client.get(f"/v1/scrolls/{scroll_id}", headers=AUTH_HEADERS)).status_code == 404


@pytest.mark.asyncio
async def test_scroll_without_identity_is_401(client):
    response = await client.post(
        "/v1/scrolls", json={"spell_template_id": "st-fireball", "crafted_by": "Gandalf", "crafter_level": 2}
    )
    assert response.status_code == 401
