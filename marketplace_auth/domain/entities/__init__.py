"""Domain entities."""

from marketplace_auth.domain.entities.email_otp import EmailOtp
from marketplace_auth.domain.entities.password_reset_token import PasswordResetToken
from marketplace_auth.domain.entities.refresh_token import (
    IssuedRefreshToken,
    RefreshToken,
)
from marketplace_auth.domain.entities.user import User

__all__ = [
    "User",
    "RefreshToken",
    "IssuedRefreshToken",
    "EmailOtp",
    "PasswordResetToken",
]
