"""RefreshTokenLedger - issuance, lookup and revocation of refresh tokens.

Tokens are opaque secrets (64 random bytes, base64) handed to the client
once; the ledger stores only their SHA-256 hash. Revocation is terminal and
records who revoked the token, why, and (for rotation) which token replaced
it, forming a singly linked chain per login session.

The ledger never commits. Rotation composes ``generate`` and ``revoke``
inside the caller's transaction so that both happen or neither does.
"""

import base64
from datetime import timedelta
from uuid import UUID

from uuid_extensions import uuid7

from marketplace_auth.application.services.clock import Clock, utc_now
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import ConflictError, DomainError, UnauthorizedError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.core.token_hashing import hash_token
from marketplace_auth.domain.entities import IssuedRefreshToken, RefreshToken
from marketplace_auth.domain.protocols import (
    RandomSourceProtocol,
    RefreshTokenRepository,
)


class RevocationReason:
    """Audit values stored in ``revoked_reason``."""

    ROTATED = "rotated"
    LOGOUT = "logout"
    LOGOUT_ALL = "logout_all"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_RESET = "password_reset"
    REUSE_DETECTED = "reuse_detected"


class RefreshTokenLedger:
    """Persistent ledger of refresh tokens.

    Args:
        token_repo: Persistence for tokens.
        random_source: Cryptographically secure randomness (required).
        expire_days: Token lifetime.
        token_bytes: Entropy per token in bytes (at least 32).
        clock: Source of the current time.
    """

    def __init__(
        self,
        token_repo: RefreshTokenRepository,
        random_source: RandomSourceProtocol,
        *,
        expire_days: int = 7,
        token_bytes: int = 64,
        clock: Clock = utc_now,
    ) -> None:
        if random_source is None:
            raise ValueError("RefreshTokenLedger requires a secure random source")
        if token_bytes < 32:
            raise ValueError("token_bytes must be at least 32 (256 bits)")

        self._token_repo = token_repo
        self._random = random_source
        self._lifetime = timedelta(days=expire_days)
        self._token_bytes = token_bytes
        self._clock = clock

    async def generate(self, user_id: UUID, ip_address: str | None) -> IssuedRefreshToken:
        """Create and stage a new token for a user.

        Returns:
            The plaintext token plus its persisted record.
        """
        now = self._clock()
        token = base64.b64encode(self._random.token_bytes(self._token_bytes)).decode("ascii")

        record = RefreshToken(
            id=uuid7(),
            user_id=user_id,
            token_hash=hash_token(token),
            created_at=now,
            expires_at=now + self._lifetime,
            created_by_ip=ip_address,
        )
        await self._token_repo.add(record)
        return IssuedRefreshToken(token=token, record=record)

    async def lookup(self, token: str, *, for_update: bool = False) -> RefreshToken | None:
        """Find the record for a presented token, whatever its state."""
        return await self._token_repo.find_by_token_hash(
            hash_token(token), for_update=for_update
        )

    async def revoke(
        self,
        token: str,
        ip_address: str | None,
        *,
        reason: str = RevocationReason.LOGOUT,
        replaced_by: UUID | None = None,
    ) -> Result[RefreshToken, DomainError]:
        """Revoke a presented token.

        Returns:
            Success with the record as it was before revocation.
            Failure(UnauthorizedError "Invalid token") if unknown.
            Failure(ConflictError) if already revoked or expired.
        """
        record = await self.lookup(token)
        if record is None:
            return Failure(
                error=UnauthorizedError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid token",
                )
            )
        return await self.revoke_record(
            record, ip_address, reason=reason, replaced_by=replaced_by
        )

    async def revoke_record(
        self,
        record: RefreshToken,
        ip_address: str | None,
        *,
        reason: str,
        replaced_by: UUID | None = None,
    ) -> Result[RefreshToken, DomainError]:
        """Revoke an already loaded record (compare-and-set)."""
        now = self._clock()
        already_revoked = ConflictError(
            code=ErrorCode.TOKEN_ALREADY_REVOKED,
            message="Token is already revoked or expired",
            resource_type="RefreshToken",
        )
        if not record.is_active(now):
            return Failure(error=already_revoked)

        revoked = await self._token_repo.revoke(
            record.id,
            revoked_at=now,
            revoked_by_ip=ip_address,
            reason=reason,
            replaced_by_token_id=replaced_by,
        )
        if not revoked:
            return Failure(error=already_revoked)
        return Success(value=record)

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        ip_address: str | None,
        *,
        reason: str = RevocationReason.LOGOUT_ALL,
    ) -> int:
        """Revoke every active token of a user.

        Returns:
            Number of tokens revoked.
        """
        return await self._token_repo.revoke_all_for_user(
            user_id,
            revoked_at=self._clock(),
            revoked_by_ip=ip_address,
            reason=reason,
        )

    async def revoke_descendants(
        self,
        record: RefreshToken,
        ip_address: str | None,
    ) -> int:
        """Revoke every active token downstream of a replayed token.

        Follows ``replaced_by_token_id`` from ``record`` to the end of the
        chain. Tokens already revoked are skipped but still followed.

        Returns:
            Number of tokens revoked.
        """
        now = self._clock()
        revoked = 0
        seen: set[UUID] = {record.id}
        next_id = record.replaced_by_token_id

        while next_id is not None and next_id not in seen:
            seen.add(next_id)
            successor = await self._token_repo.find_by_id(next_id)
            if successor is None:
                break
            if successor.is_active(now) and await self._token_repo.revoke(
                successor.id,
                revoked_at=now,
                revoked_by_ip=ip_address,
                reason=RevocationReason.REUSE_DETECTED,
            ):
                revoked += 1
            next_id = successor.replaced_by_token_id

        return revoked

    async def cleanup(self) -> int:
        """Delete tokens past their expiry. Idempotent."""
        return await self._token_repo.delete_expired(self._clock())
