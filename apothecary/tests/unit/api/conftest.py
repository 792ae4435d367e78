"""Fixtures for API tests: the real application wired to the seeded database."""

from collections.abc import AsyncIterator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from apothecary.app.factory import create_app


@pytest_asyncio.fixture
async def client(container) -> AsyncIterator[AsyncClient]:
    """HTTP client over the app; the container is attached directly so lifespan is not needed."""
    app = create_app()
    app.state.container = container
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
