"""Annotated types with centralized validation.

Usage:
    from marketplace_auth.domain.types import Email, Password

    class RegisterRequest(BaseModel):
        email: Email
        password: Password
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from marketplace_auth.domain.validators import (
    validate_email,
    validate_otp_code,
    validate_refresh_token_format,
    validate_strong_password,
)

Email = Annotated[
    str,
    Field(
        min_length=5,
        max_length=255,
        description="Email address",
        examples=["user@example.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address, validated and normalized to lowercase."""

Password = Annotated[
    str,
    Field(
        min_length=8,
        max_length=128,
        description="Password with strength requirements",
        examples=["P@ssw0rd1"],
    ),
    AfterValidator(validate_strong_password),
]
"""New password with strength validation.

Only used where a password is being *set*. Login accepts any non-empty
string so that policy changes never lock existing users out.
"""

OtpCode = Annotated[
    str,
    Field(
        min_length=6,
        max_length=8,
        description="Six-digit verification code",
        examples=["482913"],
    ),
    AfterValidator(validate_otp_code),
]

RefreshTokenStr = Annotated[
    str,
    Field(
        min_length=16,
        max_length=512,
        description="Opaque refresh token (base64)",
    ),
    AfterValidator(validate_refresh_token_format),
]
