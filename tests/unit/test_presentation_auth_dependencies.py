"""Unit tests for bearer token dependencies."""

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from freezegun import freeze_time
from uuid_extensions import uuid7

from marketplace_auth.infrastructure.security import JWTService
from marketplace_auth.presentation.api.middleware.auth_dependencies import (
    get_current_user,
    get_refresh_caller,
)


@pytest.fixture
def token_service() -> JWTService:
    return JWTService(
        "s" * 48, issuer="marketplace-auth", audience="marketplace-api", expiration_minutes=15
    )


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.mark.unit
class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_valid_token_yields_current_user(self, token_service):
        user_id = uuid7()
        token = token_service.generate_access_token(user_id, "a@example.com", ["vendor"])

        user = await get_current_user(_credentials(token), token_service)

        assert user.user_id == user_id
        assert user.email == "a@example.com"
        assert user.roles == ["vendor"]
        assert user.token_jti

    @pytest.mark.asyncio
    async def test_missing_credentials(self, token_service):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None, token_service)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Not authenticated"
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    @pytest.mark.asyncio
    async def test_expired_token(self, token_service):
        with freeze_time("2026-01-15 12:00:00"):
            token = token_service.generate_access_token(uuid7(), "a@example.com", [])

        with freeze_time("2026-01-15 13:00:00"):
            with pytest.raises(HTTPException) as exc_info:
                await get_current_user(_credentials(token), token_service)

        assert exc_info.value.detail == "Token expired"


@pytest.mark.unit
class TestGetRefreshCaller:
    @pytest.mark.asyncio
    async def test_expired_token_still_identifies_caller(self, token_service):
        user_id = uuid7()
        with freeze_time("2026-01-15 12:00:00"):
            token = token_service.generate_access_token(user_id, "a@example.com", [])

        with freeze_time("2026-01-15 13:00:00"):
            caller = await get_refresh_caller(_credentials(token), token_service)

        assert caller.user_id == user_id

    @pytest.mark.asyncio
    async def test_invalid_signature_still_rejected(self, token_service):
        other = JWTService("o" * 48, issuer="marketplace-auth", audience="marketplace-api")
        token = other.generate_access_token(uuid7(), "a@example.com", [])

        with pytest.raises(HTTPException) as exc_info:
            await get_refresh_caller(_credentials(token), token_service)

        assert exc_info.value.detail == "Invalid token"
