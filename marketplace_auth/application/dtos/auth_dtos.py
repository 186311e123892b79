"""Authentication DTOs returned by command and query handlers."""

from dataclasses import dataclass
from uuid import UUID

from marketplace_auth.core.constants import TOKEN_TYPE_BEARER
from marketplace_auth.domain.entities import User


@dataclass(frozen=True, kw_only=True)
class UserSummary:
    """Public view of a user account.

    Attributes:
        user_id: User's unique identifier.
        email: Normalized email.
        roles: Role names.
        email_confirmed: Whether the email has been verified.
        first_name: Optional given name.
        last_name: Optional family name.
    """

    user_id: UUID
    email: str
    roles: list[str]
    email_confirmed: bool
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisteredUser:
    """Result of a registration: the pending account and code lifetime."""

    user_id: UUID
    email: str
    otp_expires_in_minutes: int


@dataclass(frozen=True, kw_only=True)
class AuthTokens:
    """Access and refresh token pair returned to the client.

    Attributes:
        access_token: Signed JWT (short-lived).
        refresh_token: Opaque refresh token (long-lived, single use).
        expires_in: Access token lifetime in seconds.
        token_type: Always "Bearer".
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = TOKEN_TYPE_BEARER


def to_user_summary(user: User) -> UserSummary:
    """Build the public summary of a user entity."""
    return UserSummary(
        user_id=user.id,
        email=user.email,
        roles=user.roles,
        email_confirmed=user.email_confirmed,
        first_name=user.first_name,
        last_name=user.last_name,
    )
