"""Command handlers."""

from marketplace_auth.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from marketplace_auth.application.commands.handlers.change_password_handler import (
    ChangePasswordHandler,
)
from marketplace_auth.application.commands.handlers.generate_auth_tokens_handler import (
    GenerateAuthTokensHandler,
)
from marketplace_auth.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from marketplace_auth.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from marketplace_auth.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from marketplace_auth.application.commands.handlers.resend_verification_otp_handler import (
    ResendVerificationOtpHandler,
)
from marketplace_auth.application.commands.handlers.reset_password_handler import (
    ResetPasswordHandler,
)
from marketplace_auth.application.commands.handlers.revoke_all_refresh_tokens_handler import (
    RevokeAllRefreshTokensHandler,
)
from marketplace_auth.application.commands.handlers.revoke_refresh_token_handler import (
    RevokeRefreshTokenHandler,
)
from marketplace_auth.application.commands.handlers.verify_email_otp_handler import (
    VerifyEmailOtpHandler,
)

__all__ = [
    "AuthenticateUserHandler",
    "ChangePasswordHandler",
    "GenerateAuthTokensHandler",
    "RefreshAccessTokenHandler",
    "RegisterUserHandler",
    "RequestPasswordResetHandler",
    "ResendVerificationOtpHandler",
    "ResetPasswordHandler",
    "RevokeAllRefreshTokensHandler",
    "RevokeRefreshTokenHandler",
    "VerifyEmailOtpHandler",
]
