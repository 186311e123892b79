"""EmailOtpRepository protocol (port)."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from marketplace_auth.domain.entities import EmailOtp
from marketplace_auth.domain.enums import OtpPurpose


class EmailOtpRepository(Protocol):
    """Persistence port for EmailOtp entities."""

    async def add(self, otp: EmailOtp) -> None:
        """Stage a new code for insertion."""
        ...

    async def consume_outstanding(self, email: str, purpose: OtpPurpose) -> int:
        """Mark every non-consumed code for ``(email, purpose)`` consumed.

        Returns:
            Number of codes consumed.
        """
        ...

    async def find_latest_outstanding(
        self, email: str, purpose: OtpPurpose
    ) -> EmailOtp | None:
        """Most recently issued non-consumed code for ``(email, purpose)``."""
        ...

    async def find_latest_issued(
        self, email: str, purpose: OtpPurpose
    ) -> EmailOtp | None:
        """Most recently issued code, consumed or not (drives the cooldown)."""
        ...

    async def count_issued_since(
        self, email: str, purpose: OtpPurpose, since: datetime
    ) -> int:
        """Number of codes issued for ``(email, purpose)`` at or after ``since``."""
        ...

    async def mark_consumed(self, otp_id: UUID) -> bool:
        """Consume one code if it is still outstanding.

        Returns:
            True if this call consumed it, False if it was already consumed.
        """
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete codes whose ``expires_at`` lies before ``now``."""
        ...
