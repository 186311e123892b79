"""Pytest configuration.

Environment variables are set before anything from ``marketplace_auth`` is
imported, because settings are loaded once at import time.
"""

import asyncio
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'marketplace_auth_default.db'}",
)
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("TOKEN_CLEANUP_INTERVAL_SECONDS", "0")
os.environ.setdefault("PASSWORD_RESET_URL_BASE", "https://shop.example.com/reset-password")

import pytest  # noqa: E402

from tests.utils.doubles import FakeClock  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def logger() -> Mock:
    """LoggerProtocol test double."""
    return Mock()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: HTTP tests against the FastAPI application")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
