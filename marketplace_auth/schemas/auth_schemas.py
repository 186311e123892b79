"""Account request/response schemas.

Pydantic models for request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints (prefix /api/account):
    POST /register                 - Create an unconfirmed account
    GET|POST /verify-email-otp     - Confirm email with a code
    POST /resend-verification-otp  - Send a fresh code
    POST /login                    - Credentials for a token pair
    POST /refresh-token            - Rotate a refresh token
    POST /revoke-token             - Revoke one refresh token
    POST /revoke-all-tokens        - Revoke every refresh token
    POST /change-password          - Change password (authenticated)
    POST /forgot-password          - Email a reset link
    POST /reset-password           - Reset password with a link token
    GET  /profile                  - Caller's account
"""

from uuid import UUID

from pydantic import Field

from marketplace_auth.core.constants import TOKEN_TYPE_BEARER
from marketplace_auth.domain.types import Email, OtpCode, Password, RefreshTokenStr
from marketplace_auth.schemas.common_schemas import CamelModel


# =============================================================================
# Registration and email confirmation
# =============================================================================


class RegisterRequest(CamelModel):
    """Request schema for registration.

    POST /register → 201 Created
    """

    email: Email
    password: Password
    first_name: str | None = Field(None, max_length=100, examples=["Ada"])
    last_name: str | None = Field(None, max_length=100, examples=["Lovelace"])


class RegisterResponse(CamelModel):
    """Pending account created; a code was emailed."""

    user_id: UUID
    email: str
    otp_expires_in_minutes: int


class VerifyEmailOtpRequest(CamelModel):
    """Request schema for email confirmation (body or query string)."""

    email: Email
    code: OtpCode


class EmailRequest(CamelModel):
    """Request schema carrying only an email address.

    Used by resend-verification-otp and forgot-password.
    """

    email: Email


# =============================================================================
# Login and token management
# =============================================================================


class LoginRequest(CamelModel):
    """Request schema for login.

    The password is not policy-checked so that tightening the password
    rules never locks existing users out.
    """

    email: Email
    password: str = Field(..., min_length=1, max_length=128)


class UserSummaryResponse(CamelModel):
    """Public view of an account."""

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    roles: list[str]
    email_confirmed: bool


class TokenPairResponse(CamelModel):
    """Access/refresh token pair."""

    access_token: str
    refresh_token: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    token_type: str = TOKEN_TYPE_BEARER


class LoginResponse(TokenPairResponse):
    """Token pair plus the authenticated account."""

    user: UserSummaryResponse


class RefreshTokenRequest(CamelModel):
    """Request schema for refresh-token and revoke-token."""

    refresh_token: RefreshTokenStr


class RevokeAllResponse(CamelModel):
    """Number of refresh tokens revoked."""

    revoked_count: int


# =============================================================================
# Password management
# =============================================================================


class ChangePasswordRequest(CamelModel):
    """Request schema for change-password."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: Password


class ResetPasswordRequest(CamelModel):
    """Request schema for reset-password."""

    token: str = Field(..., min_length=16, max_length=256)
    new_password: Password
