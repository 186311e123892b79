"""Token commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class GenerateAuthTokens:
    """Issue an access token and a refresh token for an authenticated user.

    Attributes:
        user_id: User's unique identifier.
        email: Email included in the access token.
        roles: Roles included in the access token.
        ip_address: Client address recorded on the refresh token.
    """

    user_id: UUID
    email: str
    roles: list[str]
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Rotate a refresh token.

    Attributes:
        refresh_token: Opaque token presented by the client.
        caller_id: User id taken from the caller's bearer token; the
            presented token must belong to this user.
        ip_address: Client address recorded on both tokens.
    """

    refresh_token: str
    caller_id: UUID
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeRefreshToken:
    """Revoke one refresh token owned by the caller (logout)."""

    refresh_token: str
    caller_id: UUID
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeAllRefreshTokens:
    """Revoke every active refresh token of the caller (logout everywhere)."""

    caller_id: UUID
    ip_address: str | None = None
