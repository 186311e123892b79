"""User domain entity.

Owned by the credential store. The session core reads the confirmation flag
and the lockout counters and mutates them through ``LockoutGuard``.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from marketplace_auth.domain.enums import UserRole


@dataclass
class User:
    """User account with credential and lockout state.

    Business Rules:
        - Email confirmation required before login
        - ``lockout_end`` is either None or a timestamp; once it has passed the
          account is implicitly unlocked (read-time check, no unlock job)
        - ``failed_access_count`` resets on successful password check

    Attributes:
        id: Unique user identifier.
        email: Normalized (lowercase) email address, unique.
        password_hash: Bcrypt hash (never plaintext).
        email_confirmed: Email verification status (blocks login if False).
        failed_access_count: Consecutive failed password checks.
        lockout_end: End of the current lockout window, if any.
        role: Marketplace role.
        first_name: Optional given name.
        last_name: Optional family name.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> user = User(id=uuid7(), email="a@b.com", password_hash="$2b$12$...")
        >>> user.is_locked()
        False
    """

    id: UUID
    email: str
    password_hash: str
    email_confirmed: bool = False
    failed_access_count: int = 0
    lockout_end: datetime | None = None
    role: UserRole = UserRole.CUSTOMER
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check whether a lockout window is still running.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True while ``lockout_end`` lies in the future.
        """
        if self.lockout_end is None:
            return False
        return self.lockout_end > (now or datetime.now(UTC))

    @property
    def roles(self) -> list[str]:
        """Role claim values for access tokens."""
        return [self.role.value]

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None
