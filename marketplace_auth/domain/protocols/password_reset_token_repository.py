"""PasswordResetTokenRepository protocol (port)."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from marketplace_auth.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(Protocol):
    """Persistence port for PasswordResetToken entities."""

    async def add(self, token: PasswordResetToken) -> None:
        ...

    async def find_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        ...

    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """Redeem a token if it has not been used yet.

        Returns:
            True if this call redeemed it.
        """
        ...

    async def invalidate_for_user(self, user_id: UUID, used_at: datetime) -> int:
        """Mark every unused token of a user as used.

        Returns:
            Number of tokens invalidated.
        """
        ...

    async def delete_expired(self, now: datetime) -> int:
        ...
