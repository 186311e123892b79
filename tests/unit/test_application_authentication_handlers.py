"""Unit tests for AuthenticateUserHandler and GenerateAuthTokensHandler."""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from marketplace_auth.application.commands.auth_commands import AuthenticateUser
from marketplace_auth.application.commands.handlers import (
    AuthenticateUserHandler,
    GenerateAuthTokensHandler,
)
from marketplace_auth.application.commands.token_commands import GenerateAuthTokens
from marketplace_auth.application.services import LockoutGuard, RefreshTokenLedger
from marketplace_auth.core.enums import ErrorCode, ErrorKind
from marketplace_auth.core.result import Failure, Success
from marketplace_auth.core.token_hashing import hash_token
from tests.utils.doubles import FixedRandomSource, make_user

EMAIL = "buyer@example.com"


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def password_service() -> Mock:
    service = Mock()
    service.verify_password.return_value = True
    return service


@pytest.fixture
def transaction() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def handler(user_repo, password_service, transaction, logger, clock) -> AuthenticateUserHandler:
    guard = LockoutGuard(
        max_failed_attempts=3, lockout_duration=timedelta(minutes=15), clock=clock
    )
    return AuthenticateUserHandler(user_repo, password_service, guard, transaction, logger)


@pytest.mark.unit
class TestAuthenticateUserHandler:
    @pytest.mark.asyncio
    async def test_unknown_email_is_invalid_credentials(self, handler, user_repo):
        user_repo.find_by_email.return_value = None

        result = await handler.handle(AuthenticateUser(email=EMAIL, password="whatever"))

        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.UNAUTHORIZED
        assert result.error.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_wrong_password_matches_unknown_email(
        self, handler, user_repo, password_service
    ):
        user_repo.find_by_email.return_value = None
        unknown = await handler.handle(AuthenticateUser(email=EMAIL, password="x"))

        user_repo.find_by_email.return_value = make_user(EMAIL)
        password_service.verify_password.return_value = False
        wrong = await handler.handle(AuthenticateUser(email=EMAIL, password="x"))

        assert unknown.error.kind == wrong.error.kind
        assert unknown.error.message == wrong.error.message

    @pytest.mark.asyncio
    async def test_wrong_password_records_failure_and_commits(
        self, handler, user_repo, password_service, transaction
    ):
        user = make_user(EMAIL)
        user_repo.find_by_email.return_value = user
        password_service.verify_password.return_value = False

        await handler.handle(AuthenticateUser(email=EMAIL, password="wrong"))

        assert user.failed_access_count == 1
        user_repo.update.assert_awaited_once_with(user)
        transaction.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_threshold_failure_locks_account(
        self, handler, user_repo, password_service, clock
    ):
        user = make_user(EMAIL, failed_access_count=2)
        user_repo.find_by_email.return_value = user
        password_service.verify_password.return_value = False

        result = await handler.handle(AuthenticateUser(email=EMAIL, password="wrong"))

        assert result.error.message == "Invalid credentials"
        assert user.lockout_end == clock.now + timedelta(minutes=15)
        assert user.failed_access_count == 0

    @pytest.mark.asyncio
    async def test_locked_account_skips_password_check(
        self, handler, user_repo, password_service, clock
    ):
        user_repo.find_by_email.return_value = make_user(
            EMAIL, lockout_end=clock.now + timedelta(minutes=5)
        )

        result = await handler.handle(AuthenticateUser(email=EMAIL, password="right"))

        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.BAD_REQUEST
        assert result.error.code == ErrorCode.ACCOUNT_LOCKED
        assert result.error.message == "Account locked. Please try again later."
        password_service.verify_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_elapsed_lockout_allows_login(self, handler, user_repo, clock):
        user_repo.find_by_email.return_value = make_user(
            EMAIL, lockout_end=clock.now - timedelta(seconds=1)
        )

        result = await handler.handle(AuthenticateUser(email=EMAIL, password="right"))

        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_unconfirmed_email_is_unauthorized(self, handler, user_repo):
        user_repo.find_by_email.return_value = make_user(EMAIL, email_confirmed=False)

        result = await handler.handle(AuthenticateUser(email=EMAIL, password="right"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.EMAIL_NOT_VERIFIED
        assert result.error.message == "Please verify your email first."

    @pytest.mark.asyncio
    async def test_success_resets_failure_counter(self, handler, user_repo, transaction):
        user = make_user(EMAIL, failed_access_count=2)
        user_repo.find_by_email.return_value = user

        result = await handler.handle(AuthenticateUser(email=EMAIL, password="right"))

        assert isinstance(result, Success)
        assert result.value.user_id == user.id
        assert result.value.roles == ["customer"]
        assert user.failed_access_count == 0
        transaction.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_success_without_failures_writes_nothing(
        self, handler, user_repo, transaction
    ):
        user_repo.find_by_email.return_value = make_user(EMAIL)

        await handler.handle(AuthenticateUser(email=EMAIL, password="right"))

        user_repo.update.assert_not_awaited()
        transaction.commit.assert_not_awaited()


@pytest.mark.unit
class TestGenerateAuthTokensHandler:
    @pytest.mark.asyncio
    async def test_issues_pair_and_commits(self, transaction, logger, clock):
        token_repo = AsyncMock()
        token_service = Mock()
        token_service.generate_access_token.return_value = "header.payload.signature"
        token_service.expires_in_seconds = 900
        ledger = RefreshTokenLedger(token_repo, FixedRandomSource(), clock=clock)
        handler = GenerateAuthTokensHandler(token_service, ledger, transaction, logger)
        user = make_user(EMAIL)

        result = await handler.handle(
            GenerateAuthTokens(
                user_id=user.id, email=user.email, roles=user.roles, ip_address="10.0.0.1"
            )
        )

        assert isinstance(result, Success)
        tokens = result.value
        assert tokens.access_token == "header.payload.signature"
        assert tokens.expires_in == 900
        assert tokens.token_type == "Bearer"
        stored = token_repo.add.await_args.args[0]
        assert stored.token_hash == hash_token(tokens.refresh_token)
        assert stored.user_id == user.id
        token_service.generate_access_token.assert_called_once_with(
            user_id=user.id, email=EMAIL, roles=["customer"]
        )
        transaction.commit.assert_awaited_once()
