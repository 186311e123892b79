"""EmailOtp domain entity.

A six-digit code bound to an email address and a purpose. At most one
non-consumed code per ``(email, purpose)`` is valid: issuing a new code
consumes all outstanding ones.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from marketplace_auth.domain.enums import OtpPurpose


@dataclass
class EmailOtp:
    """One-time code record.

    Attributes:
        id: Unique identifier.
        email: Normalized recipient address.
        purpose: What the code may be used for.
        code: Six-digit numeric string.
        expires_at: Absolute expiry.
        created_at: Issuance timestamp (drives throttling).
        consumed: True once validated or superseded.
    """

    id: UUID
    email: str
    purpose: OtpPurpose
    code: str
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    consumed: bool = False

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at < (now or datetime.now(UTC))
