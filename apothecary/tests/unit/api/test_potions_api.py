"""API tests for the potion endpoints."""

import pytest

from apothecary.tests.factories import AUTH_HEADERS, OTHER_USER_ID

CONSUME_BODY = {"consumed_by": "Aragorn", "consumed_at": "2024-03-05T18:30:00Z"}


async def _create_potion(client, **overrides):
    body = {
        "potion_template_id": "pt-healing",
        "crafted_by": "Elrond",
        "crafted_potency": "success",
        "weight": "0.5",
    }
    body.update(overrides)
    response = await client.post("/v1/potions", json=body, headers=AUTH_HEADERS)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_potion_returns_unconsumed_potion_with_template(client):
    potion = await _create_potion(client)

    assert potion["weight"] == 0.5
    assert potion["is_fully_consumed"] is False
    assert potion["consumed_by"] is None
    assert potion["crafting_role"] == "direct_crafter"
    assert potion["template"]["name"] == "Healing Draught"


@pytest.mark.asyncio
async def test_requests_without_identity_are_unauthorized(client):
    response = await client.get("/v1/potions")

    assert response.status_code == 401
    assert response.json()["error"]["type"] == "authentication_required"


@pytest.mark.asyncio
async def test_create_potion_rejects_unknown_fields(client):
    response = await client.post(
        "/v1/potions",
        json={
            "potion_template_id": "pt-healing",
            "crafted_by": "Elrond",
            "crafted_potency": "success",
            "is_fully_consumed": True,
        },
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_potion_with_bad_weight_is_400(client):
    response = await client.post(
        "/v1/potions",
        json={"potion_template_id": "pt-healing", "crafted_by": "Elrond", "crafted_potency": "success", "weight": "x"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Weight must be a number"


@pytest.mark.asyncio
async def test_undiscovered_template_is_404(client):
    response = await client.post(
        "/v1/potions",
        json={"potion_template_id": "pt-hidden", "crafted_by": "Elrond", "crafted_potency": "success"},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_and_get_are_filtered_by_owner(client):
    potion = await _create_potion(client)

    listed = await client.get("/v1/potions", headers=AUTH_HEADERS)
    assert [p["id"] for p in listed.json()["potions"]] == [potion["id"]]

    other = await client.get(f"/v1/potions/{potion['id']}", headers={"X-User-Id": OTHER_USER_ID})
    assert other.status_code == 404
    assert other.json()["error"]["message"] == "Potion not found or not owned by user"


@pytest.mark.asyncio
async def test_consume_single_use_potion(client):
    potion = await _create_potion(client)

    response = await client.post(f"/v1/potions/{potion['id']}/consume", json=CONSUME_BODY, headers=AUTH_HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["is_fully_consumed"] is True
    assert body["consumed_by"] == "Aragorn"
    assert body["remaining_amount"] is None

    again = await client.post(f"/v1/potions/{potion['id']}/consume", json=CONSUME_BODY, headers=AUTH_HEADERS)
    assert again.status_code == 409
    assert again.json()["error"]["message"] == "Potion has already been consumed"


@pytest.mark.asyncio
async def test_consume_requires_consumer_and_date(client):
    potion = await _create_potion(client)

    no_name = await client.post(
        f"/v1/potions/{potion['id']}/consume",
        json={"consumed_by": "  ", "consumed_at": "2024-03-05T18:30:00Z"},
        headers=AUTH_HEADERS,
    )
    no_date = await client.post(
        f"/v1/potions/{potion['id']}/consume", json={"consumed_by": "Aragorn"}, headers=AUTH_HEADERS
    )

    assert no_name.status_code == 400
    assert no_name.json()["error"]["message"] == "Consumer name is required"
    assert no_date.status_code == 400
    assert no_date.json()["error"]["message"] == "Consumption date is required"


@pytest.mark.asyncio
async def test_split_potion_partial_consumption(client):
    potion = await _create_potion(client, potion_template_id="pt-vigor")

    response = await client.post(
        f"/v1/potions/{potion['id']}/consume",
        json={**CONSUME_BODY, "is_full_consumption": False, "amount_used": "1 Dose"},
        headers=AUTH_HEADERS,
    )

    body = response.json()
    assert body["is_fully_consumed"] is False
    assert body["used_amount"] == "1 Dose"
    assert body["remaining_amount"] == "3 Doses"


@pytest.mark.asyncio
async def test_resolving_unknown_success_awards_mastery(client):
    potion = await _create_potion(client, crafted_potency="success_unknown", crafter_character_id="char-elrond")

    response = await client.post(
        f"/v1/potions/{potion['id']}/consume",
        json={**CONSUME_BODY, "actual_potency": "critical_success"},
        headers=AUTH_HEADERS,
    )
    assert response.json()["crafted_potency"] == "critical_success"

    mastery = await client.get("/v1/characters/char-elrond/mastery", headers=AUTH_HEADERS)
    assert mastery.json()["potion_mastery"][0]["mastery_level"] == 2


@pytest.mark.asyncio
async def test_invalid_resolution_is_400(client):
    potion = await _create_potion(client, crafted_potency="success_unknown")

    response = await client.post(
        f"/v1/potions/{potion['id']}/consume",
        json={**CONSUME_BODY, "actual_potency": "fail"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid actual potency for unknown success potion"


@pytest.mark.asyncio
async def test_sell_with_treasury_credit(client):
    potion = await _create_potion(client)

    response = await client.post(
        f"/v1/potions/{potion['id']}/sell", json={"sell_price": 30, "credit_treasury": True}, headers=AUTH_HEADERS
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Potion sold for 30 gold pieces and added to house treasury"
    house = await client.get("/v1/house", headers=AUTH_HEADERS)
    assert house.json()["gold"] == 130
    gone = await client.get(f"/v1/potions/{potion['id']}", headers=AUTH_HEADERS)
    assert gone.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("price", [-1, "10", None, True])
async def test_sell_rejects_invalid_price(client, price):
    potion = await _create_potion(client)

    response = await client.post(
        f"/v1/potions/{potion['id']}/sell", json={"sell_price": price}, headers=AUTH_HEADERS
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Sell price must be a non-negative number"


@pytest.mark.asyncio
async def test_sell_consumed_potion_is_409(client):
    potion = await _create_potion(client)
    await client.post(f"/v1/potions/{potion['id']}/consume", json=CONSUME_BODY, headers=AUTH_HEADERS)

    response = await client.post(f"/v1/potions/{potion['id']}/sell", json={"sell_price": 5}, headers=AUTH_HEADERS)

    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Cannot sell a consumed potion"


@pytest.mark.asyncio
async def test_sell_with_credit_and_no_house_rejects_sale(client):
    other_headers = {"X-User-Id": OTHER_USER_ID}
    created = await client.post(
        "/v1/potions",
        json={"potion_template_id": "pt-healing", "crafted_by": "Frodo", "crafted_potency": "fail"},
        headers=other_headers,
    )
    potion_id = created.json()["id"]

    response = await client.post(
        f"/v1/potions/{potion_id}/sell", json={"sell_price": 10, "credit_treasury": True}, headers=other_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "No house found. Create a house to add gold to treasury."
    still_there = await client.get(f"/v1/potions/{potion_id}", headers=other_headers)
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_fractional_price_cannot_credit_treasury(client):
    potion = await _create_potion(client)

    response = await client.post(
        f"/v1/potions/{potion['id']}/sell", json={"sell_price": 0.5, "credit_treasury": True}, headers=AUTH_HEADERS
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == (
        "Sell price must be a whole number of gold pieces to credit the treasury"
    )
    house = await client.get("/v1/house", headers=AUTH_HEADERS)
    assert house.json()["gold"] == 100
