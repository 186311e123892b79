"""PasswordResetToken domain entity.

Single-use, short-lived token emailed as a link. Stored as a SHA-256 hash.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class PasswordResetToken:
    """Password reset token record.

    Attributes:
        id: Unique identifier.
        user_id: User the reset applies to.
        token_hash: SHA-256 hex digest of the emailed token.
        expires_at: Absolute expiry.
        created_at: Issuance timestamp.
        used_at: Set once the token has been redeemed.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    used_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(UTC))

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    def is_valid(self, now: datetime | None = None) -> bool:
        return not self.is_used and not self.is_expired(now)
