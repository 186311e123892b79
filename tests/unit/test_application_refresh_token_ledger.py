"""Unit tests for RefreshTokenLedger."""

import base64
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from marketplace_auth.application.services import RefreshTokenLedger, RevocationReason
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import ConflictError, UnauthorizedError
from marketplace_auth.core.result import Failure, Success
from marketplace_auth.core.token_hashing import hash_token
from marketplace_auth.domain.entities import RefreshToken
from tests.utils.doubles import FixedRandomSource


def _record(clock, *, user_id=None, revoked=False, expired=False, replaced_by=None):
    created_at = clock.now - timedelta(days=8 if expired else 1)
    return RefreshToken(
        id=uuid7(),
        user_id=user_id or uuid7(),
        token_hash="a" * 64,
        created_at=created_at,
        expires_at=created_at + timedelta(days=7),
        revoked_at=clock.now if revoked else None,
        replaced_by_token_id=replaced_by,
    )


@pytest.fixture
def token_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.revoke.return_value = True
    return repo


@pytest.fixture
def ledger(token_repo, clock) -> RefreshTokenLedger:
    return RefreshTokenLedger(token_repo, FixedRandomSource(), expire_days=7, clock=clock)


@pytest.mark.unit
class TestConstruction:
    def test_requires_random_source(self, token_repo):
        with pytest.raises(ValueError):
            RefreshTokenLedger(token_repo, None)

    def test_rejects_short_tokens(self, token_repo):
        with pytest.raises(ValueError, match="at least 32"):
            RefreshTokenLedger(token_repo, FixedRandomSource(), token_bytes=16)


@pytest.mark.unit
class TestGenerate:
    @pytest.mark.asyncio
    async def test_stores_hash_not_plaintext(self, ledger, token_repo, clock):
        user_id = uuid7()

        issued = await ledger.generate(user_id, "203.0.113.7")

        stored: RefreshToken = token_repo.add.await_args.args[0]
        assert stored is issued.record
        assert stored.token_hash == hash_token(issued.token)
        assert stored.token_hash != issued.token
        assert stored.user_id == user_id
        assert stored.created_by_ip == "203.0.113.7"
        assert stored.expires_at == clock.now + timedelta(days=7)

    @pytest.mark.asyncio
    async def test_token_is_base64_of_64_bytes(self, ledger):
        issued = await ledger.generate(uuid7(), None)

        assert len(base64.b64decode(issued.token)) == 64

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, ledger):
        first = await ledger.generate(uuid7(), None)
        second = await ledger.generate(uuid7(), None)

        assert first.token != second.token


@pytest.mark.unit
class TestRevoke:
    @pytest.mark.asyncio
    async def test_unknown_token_is_unauthorized(self, ledger, token_repo):
        token_repo.find_by_token_hash.return_value = None

        result = await ledger.revoke("missing", "10.0.0.1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, UnauthorizedError)
        assert result.error.message == "Invalid token"
        token_repo.find_by_token_hash.assert_awaited_once_with(
            hash_token("missing"), for_update=False
        )

    @pytest.mark.asyncio
    async def test_active_token_is_revoked(self, ledger, token_repo, clock):
        record = _record(clock)
        token_repo.find_by_token_hash.return_value = record

        result = await ledger.revoke("plain", "10.0.0.1", reason=RevocationReason.LOGOUT)

        assert result == Success(value=record)
        token_repo.revoke.assert_awaited_once_with(
            record.id,
            revoked_at=clock.now,
            revoked_by_ip="10.0.0.1",
            reason=RevocationReason.LOGOUT,
            replaced_by_token_id=None,
        )

    @pytest.mark.asyncio
    async def test_revoked_token_conflicts(self, ledger, token_repo, clock):
        token_repo.find_by_token_hash.return_value = _record(clock, revoked=True)

        result = await ledger.revoke("plain", None)

        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.TOKEN_ALREADY_REVOKED
        token_repo.revoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_token_conflicts(self, ledger, token_repo, clock):
        token_repo.find_by_token_hash.return_value = _record(clock, expired=True)

        result = await ledger.revoke("plain", None)

        assert isinstance(result.error, ConflictError)

    @pytest.mark.asyncio
    async def test_lost_compare_and_set_conflicts(self, ledger, token_repo, clock):
        token_repo.find_by_token_hash.return_value = _record(clock)
        token_repo.revoke.return_value = False

        result = await ledger.revoke("plain", None)

        assert isinstance(result.error, ConflictError)


@pytest.mark.unit
class TestRevokeAllForUser:
    @pytest.mark.asyncio
    async def test_returns_repository_count(self, ledger, token_repo, clock):
        user_id = uuid7()
        token_repo.revoke_all_for_user.return_value = 3

        count = await ledger.revoke_all_for_user(
            user_id, "10.0.0.1", reason=RevocationReason.PASSWORD_CHANGED
        )

        assert count == 3
        token_repo.revoke_all_for_user.assert_awaited_once_with(
            user_id,
            revoked_at=clock.now,
            revoked_by_ip="10.0.0.1",
            reason=RevocationReason.PASSWORD_CHANGED,
        )


@pytest.mark.unit
class TestRevokeDescendants:
    @pytest.mark.asyncio
    async def test_follows_chain_and_revokes_active_successors(
        self, ledger, token_repo, clock
    ):
        user_id = uuid7()
        tail = _record(clock, user_id=user_id)
        middle = _record(clock, user_id=user_id, revoked=True, replaced_by=tail.id)
        replayed = _record(clock, user_id=user_id, revoked=True, replaced_by=middle.id)
        by_id = {middle.id: middle, tail.id: tail}
        token_repo.find_by_id.side_effect = lambda token_id: by_id.get(token_id)

        count = await ledger.revoke_descendants(replayed, "10.0.0.1")

        assert count == 1
        token_repo.revoke.assert_awaited_once_with(
            tail.id,
            revoked_at=clock.now,
            revoked_by_ip="10.0.0.1",
            reason=RevocationReason.REUSE_DETECTED,
        )

    @pytest.mark.asyncio
    async def test_token_never_rotated_has_no_descendants(self, ledger, token_repo, clock):
        count = await ledger.revoke_descendants(_record(clock, revoked=True), None)

        assert count == 0
        token_repo.find_by_id.assert_not_awaited()


@pytest.mark.unit
class TestCleanup:
    @pytest.mark.asyncio
    async def test_deletes_expired_as_of_now(self, ledger, token_repo, clock):
        token_repo.delete_expired.return_value = 2

        assert await ledger.cleanup() == 2
        token_repo.delete_expired.assert_awaited_once_with(clock.now)
