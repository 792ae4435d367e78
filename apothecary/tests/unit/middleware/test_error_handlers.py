"""
Tests for the standardized error responses.

Each exception class maps onto one status code and the shared envelope;
internal failures never leak their message unless details are enabled.
"""

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from apothecary.error_handlers.standardized_responses import StandardizedErrorResponse
from apothecary.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DatabaseError,
    InvalidStateTransitionError,
    LoggedHTTPException,
    ResourceNotFoundError,
    ValidationError,
)
from apothecary.middleware.error_handling_middleware import register_error_handlers


class _Body(BaseModel):
    points: int


def _build_app(include_details: bool = False) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app, include_details=include_details)

    @app.get("/validation")
    async def raise_validation():
        raise ValidationError("Consumer name is required", field="consumed_by")

    @app.get("/not-found")
    async def raise_not_found():
        raise ResourceNotFoundError("Potion not found or not owned by user", resource_type="potion", resource_id="p-1")

    @app.get("/state")
    async def raise_state():
        raise InvalidStateTransitionError("Potion has already been consumed", item_type="potion", item_id="p-1")

    @app.get("/auth")
    async def raise_auth():
        raise AuthenticationError("Authentication required")

    @app.get("/database")
    async def raise_database():
        raise DatabaseError("connection refused to 10.0.0.5", operation="sell_potion")

    @app.get("/http")
    async def raise_http():
        raise LoggedHTTPException(status_code=401, detail="Authentication required")

    @app.post("/body")
    async def with_body(body: _Body):
        return {"points": body.points}

    return app


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "status_code", "error_type", "message"),
    [
        ("/validation", 400, "validation_error", "Consumer name is required"),
        ("/not-found", 404, "resource_not_found", "Potion not found or not owned by user"),
        ("/state", 409, "invalid_state_transition", "Potion has already been consumed"),
        ("/auth", 401, "authentication_required", "Authentication required"),
        ("/http", 401, "authentication_required", "Authentication required"),
    ],
)
async def test_client_errors_keep_their_message(path, status_code, error_type, message):
    async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://test") as client:
        response = await client.get(path)

    assert response.status_code == status_code
    error = response.json()["error"]
    assert error["type"] == error_type
    assert error["message"] == message


@pytest.mark.asyncio
async def test_database_error_hides_internals():
    async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://test") as client:
        response = await client.get("/database")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["type"] == "database_error"
    assert "10.0.0.5" not in response.text
    assert error["details"] == {}


@pytest.mark.asyncio
async def test_database_error_details_when_enabled():
    app = _build_app(include_details=True)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/database")

    error = response.json()["error"]
    assert "10.0.0.5" in error["message"]
    assert error["details"]["operation"] == "sell_potion"


@pytest.mark.asyncio
async def test_request_validation_error_envelope():
    async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://test") as client:
        response = await client.post("/body", json={"points": "many"})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["type"] == "validation_error"
    assert error["details"]["validation_errors"][0]["field"] == "body.points"


@pytest.mark.asyncio
async def test_unknown_route_keeps_404():
    async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://test") as client:
        response = await client.get("/missing")

    assert response.status_code == 404
    assert response.json()["error"]["type"] == "resource_not_found"


@pytest.mark.parametrize("exc_class", [RuntimeError, ValueError, KeyError, TypeError])
def test_generic_exception_is_internal_error(exc_class):
    response = StandardizedErrorResponse().handle_exception(exc_class("secret stack detail"))

    assert response.status_code == 500
    assert b"secret stack detail" not in response.body
    assert b"internal_error" in response.body


def test_configuration_error_maps_to_500():
    response = StandardizedErrorResponse().handle_exception(ConfigurationError("missing url", config_key="url"))
    assert response.status_code == 500
    assert b"configuration_error" in response.body


def _request(state: dict) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/v1/potions/p-1/sell",
        "query_string": b"",
        "headers": [(b"user-agent", b"pytest")],
        "client": ("10.0.0.7", 5000),
        "server": ("test", 80),
        "scheme": "http",
        "state": state,
    }
    return Request(scope)


def test_context_is_built_from_request_state():
    handler = StandardizedErrorResponse(_request({"user_id": "user-1", "correlation_id": "corr-9"}))

    assert handler.context.user_id == "user-1"
    assert handler.context.request_id == "corr-9"
    assert handler.context.metadata["path"] == "/v1/potions/p-1/sell"
    assert handler.context.metadata["method"] == "POST"
    assert handler.context.metadata["remote_addr"] == "10.0.0.7"


def test_context_without_request():
    handler = StandardizedErrorResponse()

    assert handler.context.user_id is None
    assert handler.context.request_id == "unknown"
