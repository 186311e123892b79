"""Security adapters: access tokens, password hashing, randomness."""

from marketplace_auth.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from marketplace_auth.infrastructure.security.jwt_service import JWTService
from marketplace_auth.infrastructure.security.password_reset_token_service import (
    PasswordResetTokenService,
)
from marketplace_auth.infrastructure.security.random_source import SystemRandomSource

__all__ = [
    "BcryptPasswordService",
    "JWTService",
    "PasswordResetTokenService",
    "SystemRandomSource",
]
