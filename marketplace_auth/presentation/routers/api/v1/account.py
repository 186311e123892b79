"""Account router.

Registration, email confirmation, login, refresh token rotation and
revocation, password management and profile. Every route builds a command,
runs its handler and maps the Result onto the response envelopes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from marketplace_auth.application.commands.auth_commands import (
    AuthenticateUser,
    ChangePassword,
    RegisterUser,
    RequestPasswordReset,
    ResendVerificationOtp,
    ResetPassword,
    VerifyEmailOtp,
)
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
from marketplace_auth.application.commands.token_commands import (
    GenerateAuthTokens,
    RefreshAccessToken,
    RevokeAllRefreshTokens,
    RevokeRefreshToken,
)
from marketplace_auth.application.dtos import AuthTokens, UserSummary
from marketplace_auth.application.queries import GetUserProfile
from marketplace_auth.application.queries.handlers import GetUserProfileHandler
from marketplace_auth.core.container import (
    get_authenticate_user_handler,
    get_change_password_handler,
    get_generate_auth_tokens_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
    get_resend_verification_otp_handler,
    get_reset_password_handler,
    get_revoke_all_refresh_tokens_handler,
    get_revoke_refresh_token_handler,
    get_user_profile_handler,
    get_verify_email_otp_handler,
)
from marketplace_auth.core.result import Failure, Success
from marketplace_auth.presentation.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
    get_refresh_caller,
)
from marketplace_auth.presentation.api.v1.errors import ErrorResponseBuilder
from marketplace_auth.schemas.auth_schemas import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    RevokeAllResponse,
    TokenPairResponse,
    UserSummaryResponse,
    VerifyEmailOtpRequest,
)
from marketplace_auth.schemas.common_schemas import ApiResponse, ErrorResponse

router = APIRouter(tags=["Account"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
}


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _user_response(summary: UserSummary) -> UserSummaryResponse:
    return UserSummaryResponse(
        id=summary.user_id,
        email=summary.email,
        first_name=summary.first_name,
        last_name=summary.last_name,
        roles=summary.roles,
        email_confirmed=summary.email_confirmed,
    )


def _token_pair(tokens: AuthTokens) -> TokenPairResponse:
    return TokenPairResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
        token_type=tokens.token_type,
    )


# =============================================================================
# Registration and email confirmation
# =============================================================================


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[RegisterResponse],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Register",
    description="Create an unconfirmed account and email a verification code.",
)
async def register(
    data: RegisterRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> ApiResponse[RegisterResponse] | JSONResponse:
    result = await handler.handle(
        RegisterUser(
            email=data.email,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
        )
    )

    match result:
        case Success(value=registered):
            return ApiResponse(
                data=RegisterResponse(
                    user_id=registered.user_id,
                    email=registered.email,
                    otp_expires_in_minutes=registered.otp_expires_in_minutes,
                ),
                message="Registration successful. Check your email for the verification code.",
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


async def _verify_email_otp(
    data: VerifyEmailOtpRequest,
    handler: VerifyEmailOtpHandler,
) -> ApiResponse[None] | JSONResponse:
    result = await handler.handle(VerifyEmailOtp(email=data.email, code=data.code))

    match result:
        case Success():
            return ApiResponse(message="Email verified successfully")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


@router.get(
    "/verify-email-otp",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Verify email (link)",
)
async def verify_email_otp_link(
    data: Annotated[VerifyEmailOtpRequest, Query()],
    handler: VerifyEmailOtpHandler = Depends(get_verify_email_otp_handler),
) -> ApiResponse[None] | JSONResponse:
    """Confirm an email from a link carrying ``?email=...&code=...``."""
    return await _verify_email_otp(data, handler)


@router.post(
    "/verify-email-otp",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Verify email",
)
async def verify_email_otp(
    data: VerifyEmailOtpRequest,
    handler: VerifyEmailOtpHandler = Depends(get_verify_email_otp_handler),
) -> ApiResponse[None] | JSONResponse:
    return await _verify_email_otp(data, handler)


@router.post(
    "/resend-verification-otp",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Resend verification code",
)
async def resend_verification_otp(
    data: EmailRequest,
    handler: ResendVerificationOtpHandler = Depends(get_resend_verification_otp_handler),
) -> ApiResponse[None] | JSONResponse:
    """Send a fresh code. Unknown and confirmed emails get the same reply."""
    result = await handler.handle(ResendVerificationOtp(email=data.email))

    match result:
        case Success():
            return ApiResponse(
                message="If the account is awaiting verification, a new code has been sent."
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


# =============================================================================
# Login and token management
# =============================================================================


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Login",
    description="Exchange credentials for an access token and a refresh token.",
)
async def login(
    request: Request,
    data: LoginRequest,
    authenticate_handler: AuthenticateUserHandler = Depends(get_authenticate_user_handler),
    tokens_handler: GenerateAuthTokensHandler = Depends(get_generate_auth_tokens_handler),
) -> ApiResponse[LoginResponse] | JSONResponse:
    """Authenticate, then issue a token pair.

    Both handlers share the request's database session.
    """
    auth_result = await authenticate_handler.handle(
        AuthenticateUser(email=data.email, password=data.password)
    )

    match auth_result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)
        case Success(value=summary):
            pass

    tokens_result = await tokens_handler.handle(
        GenerateAuthTokens(
            user_id=summary.user_id,
            email=summary.email,
            roles=summary.roles,
            ip_address=_client_ip(request),
        )
    )

    match tokens_result:
        case Success(value=tokens):
            return ApiResponse(
                data=LoginResponse(
                    **_token_pair(tokens).model_dump(),
                    user=_user_response(summary),
                ),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


@router.post(
    "/refresh-token",
    response_model=ApiResponse[TokenPairResponse],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Refresh tokens",
    description="Rotate a refresh token: the presented token is revoked and replaced.",
)
async def refresh_token(
    request: Request,
    data: RefreshTokenRequest,
    caller: CurrentUser = Depends(get_refresh_caller),
    handler: RefreshAccessTokenHandler = Depends(get_refresh_access_token_handler),
) -> ApiResponse[TokenPairResponse] | JSONResponse:
    result = await handler.handle(
        RefreshAccessToken(
            refresh_token=data.refresh_token,
            caller_id=caller.user_id,
            ip_address=_client_ip(request),
        )
    )

    match result:
        case Success(value=tokens):
            return ApiResponse(data=_token_pair(tokens))
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


@router.post(
    "/revoke-token",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Revoke refresh token",
)
async def revoke_token(
    request: Request,
    data: RefreshTokenRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: RevokeRefreshTokenHandler = Depends(get_revoke_refresh_token_handler),
) -> ApiResponse[None] | JSONResponse:
    result = await handler.handle(
        RevokeRefreshToken(
            refresh_token=data.refresh_token,
            caller_id=current_user.user_id,
            ip_address=_client_ip(request),
        )
    )

    match result:
        case Success():
            return ApiResponse(message="Token revoked")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


@router.post(
    "/revoke-all-tokens",
    response_model=ApiResponse[RevokeAllResponse],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Logout everywhere",
)
async def revoke_all_tokens(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    handler: RevokeAllRefreshTokensHandler = Depends(get_revoke_all_refresh_tokens_handler),
) -> ApiResponse[RevokeAllResponse] | JSONResponse:
    result = await handler.handle(
        RevokeAllRefreshTokens(
            caller_id=current_user.user_id,
            ip_address=_client_ip(request),
        )
    )

    match result:
        case Success(value=count):
            return ApiResponse(
                data=RevokeAllResponse(revoked_count=count),
                message="All sessions revoked",
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


# =============================================================================
# Password management
# =============================================================================


@router.post(
    "/change-password",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Change password",
    description="Change password and revoke every refresh token of the account.",
)
async def change_password(
    request: Request,
    data: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: ChangePasswordHandler = Depends(get_change_password_handler),
) -> ApiResponse[None] | JSONResponse:
    result = await handler.handle(
        ChangePassword(
            user_id=current_user.user_id,
            current_password=data.current_password,
            new_password=data.new_password,
            ip_address=_client_ip(request),
        )
    )

    match result:
        case Success():
            return ApiResponse(message="Password changed successfully")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


@router.post(
    "/forgot-password",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Forgot password",
)
async def forgot_password(
    data: EmailRequest,
    handler: RequestPasswordResetHandler = Depends(get_request_password_reset_handler),
) -> ApiResponse[None] | JSONResponse:
    """Email a reset link. The reply never reveals whether the account exists."""
    result = await handler.handle(RequestPasswordReset(email=data.email))

    match result:
        case Success():
            return ApiResponse(
                message="If the email is registered, a password reset link has been sent."
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


@router.post(
    "/reset-password",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Reset password",
)
async def reset_password(
    request: Request,
    data: ResetPasswordRequest,
    handler: ResetPasswordHandler = Depends(get_reset_password_handler),
) -> ApiResponse[None] | JSONResponse:
    result = await handler.handle(
        ResetPassword(
            token=data.token,
            new_password=data.new_password,
            ip_address=_client_ip(request),
        )
    )

    match result:
        case Success():
            return ApiResponse(message="Password has been reset")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)


# =============================================================================
# Profile
# =============================================================================


@router.get(
    "/profile",
    response_model=ApiResponse[UserSummaryResponse],
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Profile",
)
async def profile(
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetUserProfileHandler = Depends(get_user_profile_handler),
) -> ApiResponse[UserSummaryResponse] | JSONResponse:
    result = await handler.handle(GetUserProfile(user_id=current_user.user_id))

    match result:
        case Success(value=summary):
            return ApiResponse(data=_user_response(summary))
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error)
