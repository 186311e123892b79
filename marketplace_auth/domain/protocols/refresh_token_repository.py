"""RefreshTokenRepository protocol (port).

Persistence for the refresh token ledger. Revocation methods are
compare-and-set: they only touch rows whose ``revoked_at`` is still NULL and
report how many rows changed, so concurrent revocations of the same token
resolve to exactly one winner.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from marketplace_auth.domain.entities import RefreshToken


class RefreshTokenRepository(Protocol):
    """Persistence port for RefreshToken entities."""

    async def add(self, token: RefreshToken) -> None:
        """Stage a new token for insertion."""
        ...

    async def find_by_token_hash(
        self,
        token_hash: str,
        *,
        for_update: bool = False,
    ) -> RefreshToken | None:
        """Point lookup by hashed secret (unique index).

        Returns revoked and expired tokens too; the caller decides.

        Args:
            token_hash: SHA-256 hex digest of the presented secret.
            for_update: Lock the row until the transaction ends, where the
                backend supports row locks.
        """
        ...

    async def find_by_id(self, token_id: UUID) -> RefreshToken | None:
        ...

    async def revoke(
        self,
        token_id: UUID,
        *,
        revoked_at: datetime,
        revoked_by_ip: str | None,
        reason: str,
        replaced_by_token_id: UUID | None = None,
    ) -> bool:
        """Revoke one token if it is not revoked yet.

        Returns:
            True if this call revoked the token, False if it was already revoked
            (or does not exist).
        """
        ...

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        *,
        revoked_at: datetime,
        revoked_by_ip: str | None,
        reason: str,
    ) -> int:
        """Revoke every currently active token of a user.

        Returns:
            Number of tokens revoked.
        """
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens whose ``expires_at`` lies before ``now``.

        Returns:
            Number of rows deleted.
        """
        ...
