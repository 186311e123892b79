"""Integration fixtures: a fresh SQLite database per test."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.infrastructure.persistence import Database
from marketplace_auth.infrastructure.persistence.repositories import UserRepository
from tests.utils.doubles import make_user


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'integration.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
async def session(database) -> AsyncGenerator[AsyncSession, None]:
    """Bare session; tests commit explicitly."""
    async with database.async_session() as session:
        yield session


@pytest.fixture
async def saved_user(database):
    """Confirmed user committed in its own transaction."""
    user = make_user("stored@example.com")
    async with database.get_session() as session:
        await UserRepository(session).add(user)
    return user
