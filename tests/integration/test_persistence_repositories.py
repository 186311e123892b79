"""Integration tests for the SQLAlchemy repositories (real SQLite)."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from uuid_extensions import uuid7

from marketplace_auth.domain.entities import EmailOtp, PasswordResetToken, RefreshToken
from marketplace_auth.domain.enums import OtpPurpose, UserRole
from marketplace_auth.infrastructure.persistence.repositories import (
    EmailOtpRepository,
    PasswordResetTokenRepository,
    RefreshTokenRepository,
    UserRepository,
)
from tests.utils.doubles import FakeClock, make_user

PURPOSE = OtpPurpose.EMAIL_VERIFICATION


def _refresh_token(user_id, clock, *, hash_suffix="1", lifetime=timedelta(days=7)):
    return RefreshToken(
        id=uuid7(),
        user_id=user_id,
        token_hash=hash_suffix.rjust(64, "0"),
        created_at=clock.now,
        expires_at=clock.now + lifetime,
        created_by_ip="10.0.0.1",
    )


def _otp(email, clock, *, code="123456", created_offset=timedelta(0)):
    created_at = clock.now + created_offset
    return EmailOtp(
        id=uuid7(),
        email=email,
        purpose=PURPOSE,
        code=code,
        created_at=created_at,
        expires_at=created_at + timedelta(minutes=10),
    )


@pytest.mark.integration
class TestUserRepository:
    @pytest.mark.asyncio
    async def test_add_and_find(self, session):
        repo = UserRepository(session)
        user = make_user("Vendor@Example.com", role=UserRole.VENDOR)
        await repo.add(user)
        await session.commit()

        by_id = await repo.find_by_id(user.id)
        by_email = await repo.find_by_email("vendor@example.com")

        assert by_id.email == "Vendor@Example.com"
        assert by_id.role == UserRole.VENDOR
        assert by_email.id == user.id
        assert by_id.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_missing_user_is_none(self, session):
        repo = UserRepository(session)

        assert await repo.find_by_id(uuid7()) is None
        assert await repo.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_raises(self, session):
        repo = UserRepository(session)
        await repo.add(make_user("dup@example.com"))

        with pytest.raises(IntegrityError):
            await repo.add(make_user("dup@example.com"))

    @pytest.mark.asyncio
    async def test_update_persists_lockout_state(self, session, clock):
        repo = UserRepository(session)
        user = make_user("locked@example.com")
        await repo.add(user)

        user.failed_access_count = 3
        user.lockout_end = clock.now + timedelta(minutes=15)
        user.email_confirmed = False
        await repo.update(user)
        await session.commit()

        reloaded = await repo.find_by_id(user.id)
        assert reloaded.failed_access_count == 3
        assert reloaded.lockout_end == clock.now + timedelta(minutes=15)
        assert reloaded.email_confirmed is False


@pytest.mark.integration
class TestRefreshTokenRepository:
    @pytest.mark.asyncio
    async def test_find_by_hash_and_id(self, session, saved_user, clock):
        repo = RefreshTokenRepository(session)
        token = _refresh_token(saved_user.id, clock)
        await repo.add(token)

        by_hash = await repo.find_by_token_hash(token.token_hash, for_update=True)
        by_id = await repo.find_by_id(token.id)

        assert by_hash.id == token.id
        assert by_id.token_hash == token.token_hash
        assert by_id.created_by_ip == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_revoke_is_compare_and_set(self, session, saved_user, clock):
        repo = RefreshTokenRepository(session)
        token = _refresh_token(saved_user.id, clock)
        successor = _refresh_token(saved_user.id, clock, hash_suffix="2")
        await repo.add(token)
        await repo.add(successor)

        first = await repo.revoke(
            token.id,
            revoked_at=clock.now,
            revoked_by_ip="10.0.0.2",
            reason="rotated",
            replaced_by_token_id=successor.id,
        )
        second = await repo.revoke(
            token.id, revoked_at=clock.now, revoked_by_ip=None, reason="logout"
        )

        assert first is True
        assert second is False
        stored = await repo.find_by_id(token.id)
        assert stored.revoked_reason == "rotated"
        assert stored.revoked_by_ip == "10.0.0.2"
        assert stored.replaced_by_token_id == successor.id
        assert stored.was_rotated

    @pytest.mark.asyncio
    async def test_revoke_all_skips_revoked_and_expired(self, session, saved_user, clock):
        repo = RefreshTokenRepository(session)
        active_a = _refresh_token(saved_user.id, clock, hash_suffix="a")
        active_b = _refresh_token(saved_user.id, clock, hash_suffix="b")
        expired = _refresh_token(
            saved_user.id, FakeClock(clock.now - timedelta(days=8)), hash_suffix="c"
        )
        for token in (active_a, active_b, expired):
            await repo.add(token)
        await repo.revoke(active_b.id, revoked_at=clock.now, revoked_by_ip=None, reason="logout")

        count = await repo.revoke_all_for_user(
            saved_user.id, revoked_at=clock.now, revoked_by_ip=None, reason="logout_all"
        )

        assert count == 1
        assert (await repo.find_by_id(active_a.id)).revoked_reason == "logout_all"
        assert (await repo.find_by_id(expired.id)).revoked_at is None

    @pytest.mark.asyncio
    async def test_delete_expired_only(self, session, saved_user, clock):
        repo = RefreshTokenRepository(session)
        live = _refresh_token(saved_user.id, clock, hash_suffix="live")
        dead = _refresh_token(
            saved_user.id, FakeClock(clock.now - timedelta(days=8)), hash_suffix="dead"
        )
        await repo.add(live)
        await repo.add(dead)

        assert await repo.delete_expired(clock.now) == 1
        assert await repo.delete_expired(clock.now) == 0
        assert await repo.find_by_id(live.id) is not None


@pytest.mark.integration
class TestEmailOtpRepository:
    @pytest.mark.asyncio
    async def test_latest_outstanding_and_supersede(self, session, clock):
        repo = EmailOtpRepository(session)
        older = _otp("a@example.com", clock, code="111111", created_offset=timedelta(seconds=-30))
        newer = _otp("a@example.com", clock, code="222222")
        await repo.add(older)
        await repo.add(newer)

        assert (await repo.find_latest_outstanding("a@example.com", PURPOSE)).code == "222222"
        assert await repo.consume_outstanding("a@example.com", PURPOSE) == 2
        assert await repo.find_latest_outstanding("a@example.com", PURPOSE) is None
        assert (await repo.find_latest_issued("a@example.com", PURPOSE)).code == "222222"

    @pytest.mark.asyncio
    async def test_mark_consumed_once(self, session, clock):
        repo = EmailOtpRepository(session)
        otp = _otp("a@example.com", clock)
        await repo.add(otp)

        assert await repo.mark_consumed(otp.id) is True
        assert await repo.mark_consumed(otp.id) is False

    @pytest.mark.asyncio
    async def test_count_issued_since_is_per_email(self, session, clock):
        repo = EmailOtpRepository(session)
        await repo.add(_otp("a@example.com", clock, created_offset=timedelta(minutes=-90)))
        await repo.add(_otp("a@example.com", clock, created_offset=timedelta(minutes=-10)))
        await repo.add(_otp("a@example.com", clock))
        await repo.add(_otp("b@example.com", clock))

        since = clock.now - timedelta(minutes=60)
        assert await repo.count_issued_since("a@example.com", PURPOSE, since) == 2
        assert await repo.count_issued_since("b@example.com", PURPOSE, since) == 1


@pytest.mark.integration
class TestPasswordResetTokenRepository:
    @pytest.mark.asyncio
    async def test_mark_used_once_and_invalidate(self, session, saved_user, clock):
        repo = PasswordResetTokenRepository(session)
        first = PasswordResetToken(
            id=uuid7(),
            user_id=saved_user.id,
            token_hash="1" * 64,
            created_at=clock.now,
            expires_at=clock.now + timedelta(hours=1),
        )
        second = PasswordResetToken(
            id=uuid7(),
            user_id=saved_user.id,
            token_hash="2" * 64,
            created_at=clock.now,
            expires_at=clock.now + timedelta(hours=1),
        )
        await repo.add(first)
        await repo.add(second)

        assert await repo.mark_used(first.id, clock.now) is True
        assert await repo.mark_used(first.id, clock.now) is False
        assert await repo.invalidate_for_user(saved_user.id, clock.now) == 1
        assert (await repo.find_by_token_hash("2" * 64)).is_used
        assert await repo.find_by_token_hash("f" * 64) is None
