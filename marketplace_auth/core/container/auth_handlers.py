"""Authentication handler dependency factories.

Request-scoped handler instances. Every handler built for one request shares
the request's database session, which is also the handler's transaction.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.core.config import settings
from marketplace_auth.core.container.infrastructure import (
    get_db_session,
    get_email_service,
    get_logger,
    get_password_reset_token_service,
    get_password_service,
    get_token_service,
)
from marketplace_auth.core.container.services import (
    build_otp_vault,
    build_refresh_token_ledger,
    get_lockout_guard,
)

if TYPE_CHECKING:
    from marketplace_auth.application.commands.handlers import (
        AuthenticateUserHandler,
        ChangePasswordHandler,
        GenerateAuthTokensHandler,
        RefreshAccessTokenHandler,
        RegisterUserHandler,
        RequestPasswordResetHandler,
        ResendVerificationOtpHandler,
        ResetPasswordHandler,
        RevokeAllRefreshTokensHandler,
        RevokeRefreshTokenHandler,
        VerifyEmailOtpHandler,
    )
    from marketplace_auth.application.queries.handlers import GetUserProfileHandler


# ============================================================================
# Registration and Email Confirmation
# ============================================================================


async def get_register_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterUserHandler":
    """Get RegisterUser command handler (request-scoped).

    Dependencies:
    - UserRepository (request-scoped, uses session)
    - OtpVault (request-scoped, uses session)
    - BcryptPasswordService (app-scoped singleton)
    - EmailService (app-scoped singleton)
    """
    from marketplace_auth.application.commands.handlers import RegisterUserHandler
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return RegisterUserHandler(
        user_repo=UserRepository(session=session),
        otp_vault=build_otp_vault(session),
        password_service=get_password_service(),
        email_service=get_email_service(),
        transaction=session,
        logger=get_logger(),
    )


async def get_verify_email_otp_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "VerifyEmailOtpHandler":
    """Get VerifyEmailOtp command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import VerifyEmailOtpHandler
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return VerifyEmailOtpHandler(
        user_repo=UserRepository(session=session),
        otp_vault=build_otp_vault(session),
        transaction=session,
        logger=get_logger(),
    )


async def get_resend_verification_otp_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ResendVerificationOtpHandler":
    """Get ResendVerificationOtp command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import (
        ResendVerificationOtpHandler,
    )
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return ResendVerificationOtpHandler(
        user_repo=UserRepository(session=session),
        otp_vault=build_otp_vault(session),
        email_service=get_email_service(),
        transaction=session,
        logger=get_logger(),
    )


# ============================================================================
# Login and Session Tokens
# ============================================================================


async def get_authenticate_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "AuthenticateUserHandler":
    """Get AuthenticateUser command handler (request-scoped).

    Dependencies:
    - UserRepository (request-scoped, uses session)
    - BcryptPasswordService (app-scoped singleton)
    - LockoutGuard (app-scoped singleton)
    """
    from marketplace_auth.application.commands.handlers import AuthenticateUserHandler
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return AuthenticateUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        lockout_guard=get_lockout_guard(),
        transaction=session,
        logger=get_logger(),
    )


async def get_generate_auth_tokens_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GenerateAuthTokensHandler":
    """Get GenerateAuthTokens command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import GenerateAuthTokensHandler

    return GenerateAuthTokensHandler(
        token_service=get_token_service(),
        ledger=build_refresh_token_ledger(session),
        transaction=session,
        logger=get_logger(),
    )


async def get_refresh_access_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshAccessTokenHandler":
    """Get RefreshAccessToken command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import RefreshAccessTokenHandler
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return RefreshAccessTokenHandler(
        user_repo=UserRepository(session=session),
        ledger=build_refresh_token_ledger(session),
        token_service=get_token_service(),
        transaction=session,
        logger=get_logger(),
        reuse_detection=settings.refresh_token_reuse_detection,
    )


async def get_revoke_refresh_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeRefreshTokenHandler":
    """Get RevokeRefreshToken command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import RevokeRefreshTokenHandler

    return RevokeRefreshTokenHandler(
        ledger=build_refresh_token_ledger(session),
        transaction=session,
        logger=get_logger(),
    )


async def get_revoke_all_refresh_tokens_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeAllRefreshTokensHandler":
    """Get RevokeAllRefreshTokens command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import (
        RevokeAllRefreshTokensHandler,
    )

    return RevokeAllRefreshTokensHandler(
        ledger=build_refresh_token_ledger(session),
        transaction=session,
        logger=get_logger(),
    )


# ============================================================================
# Password Management
# ============================================================================


async def get_change_password_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ChangePasswordHandler":
    """Get ChangePassword command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import ChangePasswordHandler
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return ChangePasswordHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        ledger=build_refresh_token_ledger(session),
        email_service=get_email_service(),
        transaction=session,
        logger=get_logger(),
    )


async def get_request_password_reset_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RequestPasswordResetHandler":
    """Get RequestPasswordReset command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import (
        RequestPasswordResetHandler,
    )
    from marketplace_auth.infrastructure.persistence.repositories import (
        PasswordResetTokenRepository,
        UserRepository,
    )

    return RequestPasswordResetHandler(
        user_repo=UserRepository(session=session),
        reset_token_repo=PasswordResetTokenRepository(session=session),
        reset_token_service=get_password_reset_token_service(),
        email_service=get_email_service(),
        transaction=session,
        logger=get_logger(),
        reset_url_base=settings.password_reset_url_base,
    )


async def get_reset_password_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ResetPasswordHandler":
    """Get ResetPassword command handler (request-scoped)."""
    from marketplace_auth.application.commands.handlers import ResetPasswordHandler
    from marketplace_auth.infrastructure.persistence.repositories import (
        PasswordResetTokenRepository,
        UserRepository,
    )

    return ResetPasswordHandler(
        user_repo=UserRepository(session=session),
        reset_token_repo=PasswordResetTokenRepository(session=session),
        password_service=get_password_service(),
        ledger=build_refresh_token_ledger(session),
        email_service=get_email_service(),
        transaction=session,
        logger=get_logger(),
    )


# ============================================================================
# Queries
# ============================================================================


async def get_user_profile_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetUserProfileHandler":
    """Get GetUserProfile query handler (request-scoped)."""
    from marketplace_auth.application.queries.handlers import GetUserProfileHandler
    from marketplace_auth.infrastructure.persistence.repositories import UserRepository

    return GetUserProfileHandler(user_repo=UserRepository(session=session))
