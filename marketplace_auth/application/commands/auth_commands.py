"""Account commands (CQRS write operations).

Commands are immutable data containers. Field values arrive already
validated and normalized by the request schemas; handlers execute the
business logic and return Result types.
"""

from dataclasses import dataclass
from uuid import UUID

from marketplace_auth.domain.types import Email, OtpCode, Password


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register a new (unconfirmed) account and send a verification code.

    Attributes:
        email: Normalized email address.
        password: Plaintext password meeting the strength policy.
        first_name: Optional given name.
        last_name: Optional family name.

    Example:
        >>> command = RegisterUser(email="a@b.com", password="P@ssw0rd1")
        >>> result = await handler.handle(command)
    """

    email: Email
    password: Password
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class VerifyEmailOtp:
    """Confirm an email address with a one-time code."""

    email: Email
    code: OtpCode


@dataclass(frozen=True, kw_only=True)
class ResendVerificationOtp:
    """Issue a fresh verification code for an unconfirmed account."""

    email: Email


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Verify credentials (lookup, lockout, password, confirmation).

    Does not issue tokens. See GenerateAuthTokens.

    Attributes:
        email: Normalized email address.
        password: Plaintext password (not policy-checked on login).
    """

    email: Email
    password: str


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Change the password of an authenticated user.

    Revokes every refresh token of the user on success.
    """

    user_id: UUID
    current_password: str
    new_password: Password
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Email a password reset link if the account exists."""

    email: Email


@dataclass(frozen=True, kw_only=True)
class ResetPassword:
    """Set a new password using an emailed reset token.

    Revokes every refresh token of the user on success.
    """

    token: str
    new_password: Password
    ip_address: str | None = None
