"""Commands (write operations)."""

from marketplace_auth.application.commands.auth_commands import (
    AuthenticateUser,
    ChangePassword,
    RegisterUser,
    RequestPasswordReset,
    ResendVerificationOtp,
    ResetPassword,
    VerifyEmailOtp,
)
from marketplace_auth.application.commands.token_commands import (
    GenerateAuthTokens,
    RefreshAccessToken,
    RevokeAllRefreshTokens,
    RevokeRefreshToken,
)

__all__ = [
    "RegisterUser",
    "VerifyEmailOtp",
    "ResendVerificationOtp",
    "AuthenticateUser",
    "ChangePassword",
    "RequestPasswordReset",
    "ResetPassword",
    "GenerateAuthTokens",
    "RefreshAccessToken",
    "RevokeRefreshToken",
    "RevokeAllRefreshTokens",
]
