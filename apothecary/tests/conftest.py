"""
Test configuration and fixtures for the Apothecary test suite.

Environment variables are set before any apothecary module is imported so
module-level configuration loading never touches a real database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOGGING_ENVIRONMENT", "unit_test")
os.environ.setdefault("LOGGING_DISABLE_LOGGING", "true")
os.environ.setdefault("SERVER_PORT", "54731")
os.environ.setdefault("SERVER_HOST", "127.0.0.1")

# pylint: disable=wrong-import-position  # Reason: environment must be set before apothecary imports
# pylint: disable=redefined-outer-name  # Reason: pytest fixture parameter names match fixture names
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from apothecary.config import reset_config
from apothecary.container import ApplicationContainer
from apothecary.models import Base, House

from .factories import USER_ID, make_potion_template, make_spell_template


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Iterator[None]:
    """Each test sees configuration freshly loaded from the environment."""
    reset_config()
    yield
    reset_config()


@pytest_asyncio.fixture
async def session_maker() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """In-memory SQLite session maker with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_session_maker(session_maker) -> async_sessionmaker[AsyncSession]:
    """
    Session maker over a catalog of templates plus one house for USER_ID.

    Templates: pt-healing (single use), pt-vigor ("3 Doses"), pt-hidden
    (undiscovered), st-fireball (level 3), st-wish (level 9), st-hidden (undiscovered).
    """
    async with session_maker() as session, session.begin():
        session.add_all(
            [
                make_potion_template(),
                make_potion_template(id="pt-vigor", name="Vigor Tonic", split_amount="3 Doses", cost=120),
                make_potion_template(id="pt-hidden", name="Secret Elixir", is_discovered=False),
                make_spell_template(),
                make_spell_template(id="st-wish", name="Wish", level=9, base_effect="Anything"),
                make_spell_template(
                    id="st-hidden",
                    name="Forgotten Word",
                    level=1,
                    is_discovered=False,
                ),
                House(id="house-1", name="House Stark", user_id=USER_ID, motto="Winter is coming", gold=100),
            ]
        )
    return session_maker


@pytest_asyncio.fixture
async def container(seeded_session_maker) -> ApplicationContainer:
    """ApplicationContainer wired to the seeded in-memory database."""
    app_container = ApplicationContainer()
    await app_container.initialize(session_maker=seeded_session_maker)
    return app_container
