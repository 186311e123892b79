"""Integration tests: handlers over real repositories and SQLite.

Each ``async with database.get_session()`` block stands in for one HTTP
request, mirroring the request-scoped session the API uses.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from marketplace_auth.application.commands.auth_commands import (
    AuthenticateUser,
    RegisterUser,
    ResendVerificationOtp,
    VerifyEmailOtp,
)
from marketplace_auth.application.commands.handlers import (
    AuthenticateUserHandler,
    GenerateAuthTokensHandler,
    RefreshAccessTokenHandler,
    RegisterUserHandler,
    ResendVerificationOtpHandler,
    VerifyEmailOtpHandler,
)
from marketplace_auth.application.commands.token_commands import (
    GenerateAuthTokens,
    RefreshAccessToken,
)
from marketplace_auth.application.services import LockoutGuard, OtpVault, RefreshTokenLedger
from marketplace_auth.core.enums import ErrorCode, ErrorKind
from marketplace_auth.core.result import Failure, Success
from marketplace_auth.infrastructure.email import StubEmailService
from marketplace_auth.infrastructure.jobs import TokenCleanupJob
from marketplace_auth.infrastructure.persistence.models.email_otp import (
    EmailOtp as EmailOtpModel,
)
from marketplace_auth.infrastructure.persistence.models.refresh_token import (
    RefreshToken as RefreshTokenModel,
)
from marketplace_auth.infrastructure.persistence.models.user import User as UserModel
from marketplace_auth.infrastructure.persistence.repositories import (
    EmailOtpRepository,
    RefreshTokenRepository,
    UserRepository,
)
from marketplace_auth.infrastructure.security import (
    BcryptPasswordService,
    JWTService,
    SystemRandomSource,
)

EMAIL = "shopper@example.com"
PASSWORD = "Str0ng!Pass"


@pytest.fixture(scope="module")
def password_service() -> BcryptPasswordService:
    return BcryptPasswordService(cost_factor=10)


@pytest.fixture
def email_service() -> StubEmailService:
    return StubEmailService(Mock())


@pytest.fixture
def token_service() -> JWTService:
    return JWTService("s" * 48, issuer="marketplace-auth", audience="marketplace-api")


def _vault(session, **policy) -> OtpVault:
    return OtpVault(EmailOtpRepository(session), SystemRandomSource(), Mock(), **policy)


def _ledger(session) -> RefreshTokenLedger:
    return RefreshTokenLedger(RefreshTokenRepository(session), SystemRandomSource())


async def _count(database, model) -> int:
    async with database.get_session() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def _register(
    database, password_service, email_service, email=EMAIL, password=PASSWORD, **policy
):
    async with database.get_session() as session:
        handler = RegisterUserHandler(
            UserRepository(session),
            _vault(session, **policy),
            password_service,
            email_service,
            session,
            Mock(),
        )
        return await handler.handle(RegisterUser(email=email, password=password))


async def _verify(database, email, code):
    async with database.get_session() as session:
        handler = VerifyEmailOtpHandler(UserRepository(session), _vault(session), session, Mock())
        return await handler.handle(VerifyEmailOtp(email=email, code=code))


async def _confirmed_user(database, password_service, email_service, email=EMAIL):
    registered = await _register(database, password_service, email_service, email)
    code = email_service.last_to(email, "verification_code").payload["code"]
    await _verify(database, email, code)
    return registered.value


async def _login(database, password_service, token_service, email=EMAIL, password=PASSWORD):
    async with database.get_session() as session:
        authenticate = AuthenticateUserHandler(
            UserRepository(session),
            password_service,
            LockoutGuard(max_failed_attempts=3, lockout_duration=timedelta(minutes=5)),
            session,
            Mock(),
        )
        result = await authenticate.handle(AuthenticateUser(email=email, password=password))
        if isinstance(result, Failure):
            return result
        summary = result.value
        generate = GenerateAuthTokensHandler(token_service, _ledger(session), session, Mock())
        return await generate.handle(
            GenerateAuthTokens(user_id=summary.user_id, email=summary.email, roles=summary.roles)
        )


async def _refresh(database, token_service, refresh_token, caller_id):
    async with database.get_session() as session:
        handler = RefreshAccessTokenHandler(
            UserRepository(session), _ledger(session), token_service, session, Mock()
        )
        return await handler.handle(
            RefreshAccessToken(refresh_token=refresh_token, caller_id=caller_id)
        )


@pytest.mark.integration
class TestRegistrationFlow:
    @pytest.mark.asyncio
    async def test_register_verify_login(
        self, database, password_service, email_service, token_service
    ):
        registered = await _register(database, password_service, email_service)
        assert isinstance(registered, Success)

        before = await _login(database, password_service, token_service)
        assert before.error.code == ErrorCode.EMAIL_NOT_VERIFIED

        code = email_service.last_to(EMAIL, "verification_code").payload["code"]
        assert isinstance(await _verify(database, EMAIL, code), Success)

        tokens = await _login(database, password_service, token_service)
        assert isinstance(tokens, Success)
        assert tokens.value.refresh_token

    @pytest.mark.asyncio
    async def test_code_is_single_use(self, database, password_service, email_service):
        await _register(database, password_service, email_service)
        code = email_service.last_to(EMAIL, "verification_code").payload["code"]

        assert isinstance(await _verify(database, EMAIL, code), Success)
        again = await _verify(database, EMAIL, code)

        assert isinstance(again, Failure)
        assert again.error.code == ErrorCode.OTP_INVALID

    @pytest.mark.asyncio
    async def test_resend_leaves_one_active_code(
        self, database, password_service, email_service
    ):
        await _register(
            database, password_service, email_service, resend_cooldown_seconds=0
        )
        first_code = email_service.last_to(EMAIL, "verification_code").payload["code"]

        async with database.get_session() as session:
            handler = ResendVerificationOtpHandler(
                UserRepository(session),
                _vault(session, resend_cooldown_seconds=0),
                email_service,
                session,
                Mock(),
            )
            assert isinstance(await handler.handle(ResendVerificationOtp(email=EMAIL)), Success)
        second_code = email_service.last_to(EMAIL, "verification_code").payload["code"]

        async with database.get_session() as session:
            outstanding = await session.execute(
                select(func.count())
                .select_from(EmailOtpModel)
                .where(EmailOtpModel.consumed.is_(False))
            )
            assert outstanding.scalar_one() == 1

        if first_code != second_code:
            assert isinstance(await _verify(database, EMAIL, first_code), Failure)
        assert isinstance(await _verify(database, EMAIL, second_code), Success)

    @pytest.mark.asyncio
    async def test_throttled_registration_leaves_no_account(
        self, database, password_service, email_service
    ):
        await _register(database, password_service, email_service, "first@example.com")
        users_before = await _count(database, UserModel)

        result = await _register(
            database, password_service, email_service, "first@example.com"
        )

        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.RATE_LIMITED
        assert await _count(database, UserModel) == users_before

    @pytest.mark.asyncio
    async def test_confirmed_email_cannot_register_again(
        self, database, password_service, email_service
    ):
        await _confirmed_user(database, password_service, email_service)

        result = await _register(database, password_service, email_service)

        assert result.error.kind == ErrorKind.CONFLICT

    @pytest.mark.asyncio
    async def test_second_registration_cannot_replace_pending_password(
        self, database, password_service, email_service, token_service
    ):
        await _register(database, password_service, email_service)
        code = email_service.last_to(EMAIL, "verification_code").payload["code"]

        second = await _register(
            database,
            password_service,
            email_service,
            password="0ther!Secret",
            resend_cooldown_seconds=0,
        )

        assert isinstance(second, Failure)
        assert second.error.kind == ErrorKind.CONFLICT
        assert email_service.last_to(EMAIL, "verification_code").payload["code"] == code
        assert await _count(database, UserModel) == 1

        assert isinstance(await _verify(database, EMAIL, code), Success)
        rejected = await _login(
            database, password_service, token_service, password="0ther!Secret"
        )
        assert isinstance(rejected, Failure)
        assert rejected.error.code == ErrorCode.INVALID_CREDENTIALS
        assert isinstance(await _login(database, password_service, token_service), Success)


@pytest.mark.integration
class TestLockoutFlow:
    @pytest.mark.asyncio
    async def test_lockout_blocks_even_correct_password(
        self, database, password_service, email_service, token_service
    ):
        await _confirmed_user(database, password_service, email_service)

        for _ in range(3):
            failed = await _login(database, password_service, token_service, password="wrong")
            assert failed.error.message == "Invalid credentials"

        locked = await _login(database, password_service, token_service)

        assert isinstance(locked, Failure)
        assert locked.error.code == ErrorCode.ACCOUNT_LOCKED
        async with database.get_session() as session:
            user = await UserRepository(session).find_by_email(EMAIL)
            assert user.lockout_end is not None
            assert user.failed_access_count == 0


@pytest.mark.integration
class TestRotationFlow:
    @pytest.mark.asyncio
    async def test_rotation_then_replay_revokes_chain(
        self, database, password_service, email_service, token_service
    ):
        registered = await _confirmed_user(database, password_service, email_service)
        first = (await _login(database, password_service, token_service)).value.refresh_token

        rotated = await _refresh(database, token_service, first, registered.user_id)
        assert isinstance(rotated, Success)
        second = rotated.value.refresh_token

        replay = await _refresh(database, token_service, first, registered.user_id)
        assert replay.error.code == ErrorCode.TOKEN_REUSED

        after_replay = await _refresh(database, token_service, second, registered.user_id)
        assert isinstance(after_replay, Failure)

    @pytest.mark.asyncio
    async def test_foreign_token_is_rejected_and_stays_active(
        self, database, password_service, email_service, token_service
    ):
        owner = await _confirmed_user(database, password_service, email_service)
        other = await _confirmed_user(
            database, password_service, email_service, "other@example.com"
        )
        token = (await _login(database, password_service, token_service)).value.refresh_token

        stolen = await _refresh(database, token_service, token, other.user_id)
        assert stolen.error.code == ErrorCode.TOKEN_NOT_OWNED

        assert isinstance(await _refresh(database, token_service, token, owner.user_id), Success)

    @pytest.mark.asyncio
    async def test_database_failure_leaves_no_partial_rotation(
        self, database, password_service, email_service, token_service, monkeypatch
    ):
        registered = await _confirmed_user(database, password_service, email_service)
        token = (await _login(database, password_service, token_service)).value.refresh_token
        rows_before = await _count(database, RefreshTokenModel)

        async def failing_revoke(self, *args, **kwargs):
            raise OperationalError("UPDATE refresh_tokens", {}, Exception("database is locked"))

        with monkeypatch.context() as patch:
            patch.setattr(RefreshTokenRepository, "revoke", failing_revoke)
            result = await _refresh(database, token_service, token, registered.user_id)

        assert result.error.code == ErrorCode.TOKEN_REFRESH_FAILED
        assert await _count(database, RefreshTokenModel) == rows_before
        assert isinstance(await _refresh(database, token_service, token, registered.user_id), Success)


@pytest.mark.integration
class TestTokenCleanupJob:
    @pytest.mark.asyncio
    async def test_sweeps_only_expired_rows(
        self, database, password_service, email_service, token_service
    ):
        await _confirmed_user(database, password_service, email_service)
        await _login(database, password_service, token_service)
        live_tokens = await _count(database, RefreshTokenModel)

        job = TokenCleanupJob(database, Mock())
        first = await job.run_once()

        assert isinstance(first, Success)
        assert first.value.refresh_tokens == 0
        assert await _count(database, RefreshTokenModel) == live_tokens

        later = TokenCleanupJob(
            database, Mock(), clock=lambda: datetime.now(UTC) + timedelta(days=30)
        )
        swept = await later.run_once()

        assert swept.value.refresh_tokens == live_tokens
        assert swept.value.email_otps >= 1
        assert await _count(database, RefreshTokenModel) == 0
        assert (await later.run_once()).value.total == 0
