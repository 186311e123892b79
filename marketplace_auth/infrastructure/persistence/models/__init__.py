"""Database models.

Importing this package registers every table on ``BaseModel.metadata``.
"""

from marketplace_auth.infrastructure.persistence.models.email_otp import EmailOtp
from marketplace_auth.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from marketplace_auth.infrastructure.persistence.models.refresh_token import (
    RefreshToken,
)
from marketplace_auth.infrastructure.persistence.models.user import User

__all__ = ["User", "RefreshToken", "EmailOtp", "PasswordResetToken"]
