"""API test fixtures.

``client`` runs against stubbed handlers; ``live_client`` runs the real
handlers against a throwaway SQLite database.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from uuid_extensions import uuid7

from marketplace_auth.core.container import get_db_session
from marketplace_auth.infrastructure.persistence import Database
from marketplace_auth.main import app
from marketplace_auth.presentation.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
    get_refresh_caller,
)


@pytest.fixture
def current_user() -> CurrentUser:
    return CurrentUser(user_id=uuid7(), email="buyer@example.com", roles=["customer"])


@pytest.fixture
def override_auth(current_user):
    """Authenticate every request as ``current_user``."""

    async def mock_current_user():
        return current_user

    app.dependency_overrides[get_current_user] = mock_current_user
    app.dependency_overrides[get_refresh_caller] = mock_current_user
    yield current_user
    app.dependency_overrides.pop(get_current_user, None)
    app.dependency_overrides.pop(get_refresh_caller, None)


@pytest.fixture
def override_handler():
    """Install a stub for a handler factory; removed after the test."""
    installed = []

    def install(factory, handler):
        app.dependency_overrides[factory] = lambda: handler
        installed.append(factory)

    yield install
    for factory in installed:
        app.dependency_overrides.pop(factory, None)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
async def live_client(tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """Client wired to the real handlers and a fresh database."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    await database.create_all()

    async def session_override():
        async with database.get_session() as session:
            yield session

    app.dependency_overrides[get_db_session] = session_override
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as http:
        yield http
    app.dependency_overrides.pop(get_db_session, None)
    await database.close()
