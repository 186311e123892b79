"""SQLAlchemy repository adapters."""

from marketplace_auth.infrastructure.persistence.repositories.email_otp_repository import (
    EmailOtpRepository,
)
from marketplace_auth.infrastructure.persistence.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from marketplace_auth.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from marketplace_auth.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "UserRepository",
    "RefreshTokenRepository",
    "EmailOtpRepository",
    "PasswordResetTokenRepository",
]
