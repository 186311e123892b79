"""RefreshToken domain entity.

A persisted, opaque, long-lived credential. Only the SHA-256 hash of the
secret is stored; the plaintext leaves the service exactly once, in the
response that issued it.

Lifecycle:
    created (login/refresh) -> revoked (rotation, logout, password change)
    Revocation is terminal. Rows are only deleted by the expiry sweep.

Rotation chain:
    ``replaced_by_token_id`` links a rotated token to its successor. Successors
    are always created after their predecessor for the same user, so the chain
    is singly linked and acyclic.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class RefreshToken:
    """Refresh token record.

    Attributes:
        id: Unique token identifier.
        user_id: Owning user (immutable after creation).
        token_hash: SHA-256 hex digest of the opaque secret (lookup key).
        expires_at: Absolute expiry.
        created_at: Creation timestamp.
        created_by_ip: Client address that obtained the token.
        revoked_at: Revocation timestamp, None while not revoked.
        revoked_by_ip: Client address that caused revocation.
        revoked_reason: Short audit reason (rotated, logout, password_changed, ...).
        replaced_by_token_id: Successor in the rotation chain.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    created_by_ip: str | None = None
    revoked_at: datetime | None = None
    revoked_by_ip: str | None = None
    revoked_reason: str | None = None
    replaced_by_token_id: UUID | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(UTC))

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_active(self, now: datetime | None = None) -> bool:
        """Active means not revoked and not yet expired."""
        return not self.is_revoked and not self.is_expired(now)

    @property
    def was_rotated(self) -> bool:
        """True when this token was revoked by rotation (has a successor)."""
        return self.is_revoked and self.replaced_by_token_id is not None


@dataclass(frozen=True)
class IssuedRefreshToken:
    """A freshly generated token together with its plaintext secret.

    Attributes:
        token: Opaque secret to hand to the client (never persisted).
        record: The persisted record (holds only the hash).
    """

    token: str
    record: RefreshToken
