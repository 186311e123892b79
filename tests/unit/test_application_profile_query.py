"""Unit tests for GetUserProfileHandler."""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from marketplace_auth.application.queries import GetUserProfile
from marketplace_auth.application.queries.handlers import GetUserProfileHandler
from marketplace_auth.core.enums import ErrorKind
from marketplace_auth.core.result import Failure, Success
from marketplace_auth.domain.enums import UserRole
from tests.utils.doubles import make_user


@pytest.mark.unit
class TestGetUserProfileHandler:
    @pytest.mark.asyncio
    async def test_returns_summary(self):
        user = make_user("vendor@example.com", role=UserRole.VENDOR)
        user.first_name = "Grace"
        repo = AsyncMock()
        repo.find_by_id.return_value = user

        result = await GetUserProfileHandler(repo).handle(GetUserProfile(user_id=user.id))

        assert isinstance(result, Success)
        assert result.value.user_id == user.id
        assert result.value.email == "vendor@example.com"
        assert result.value.roles == ["vendor"]
        assert result.value.first_name == "Grace"
        assert result.value.email_confirmed is True

    @pytest.mark.asyncio
    async def test_missing_user_is_not_found(self):
        repo = AsyncMock()
        repo.find_by_id.return_value = None

        result = await GetUserProfileHandler(repo).handle(GetUserProfile(user_id=uuid7()))

        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.NOT_FOUND
