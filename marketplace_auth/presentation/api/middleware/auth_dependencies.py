"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating access tokens.

Usage:
    @router.get("/profile")
    async def profile(
        current_user: CurrentUser = Depends(get_current_user),
    ):
        return {"user_id": str(current_user.user_id)}
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace_auth.core.container import get_token_service
from marketplace_auth.core.result import Failure, Success
from marketplace_auth.domain.protocols import TokenGenerationProtocol

# auto_error=False so that a missing header yields our 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated user information from JWT.

    Attributes:
        user_id: User's unique identifier (from JWT 'sub' claim).
        email: User's email address (from JWT 'email' claim).
        roles: User's roles (from JWT 'roles' claim).
        token_jti: JWT unique identifier.
    """

    user_id: UUID
    email: str
    roles: list[str]
    token_jti: str | None = None


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    token_service: TokenGenerationProtocol,
    *,
    allow_expired: bool,
) -> CurrentUser:
    if credentials is None:
        raise _unauthorized("Not authenticated")

    result = token_service.validate_access_token(
        credentials.credentials, allow_expired=allow_expired
    )

    match result:
        case Success(value=payload):
            try:
                roles_raw = payload.get("roles", [])
                jti_raw = payload.get("jti")
                return CurrentUser(
                    user_id=UUID(str(payload["sub"])),
                    email=str(payload["email"]),
                    roles=roles_raw if isinstance(roles_raw, list) else [],
                    token_jti=str(jti_raw) if jti_raw else None,
                )
            except (KeyError, ValueError) as e:
                raise _unauthorized("Invalid token payload") from e
        case Failure(error=error):
            raise _unauthorized(
                "Token expired" if error == "token_expired" else "Invalid token"
            )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Get current authenticated user from a valid, unexpired access token.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired.
    """
    return _authenticate(credentials, token_service, allow_expired=False)


async def get_refresh_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Identify the caller of the refresh endpoint.

    Signature, issuer and audience are still enforced; only the expiry check
    is skipped, since refreshing is how an expired access token gets
    replaced. The refresh token itself remains the credential.

    Raises:
        HTTPException 401: If token is missing or invalid.
    """
    return _authenticate(credentials, token_service, allow_expired=True)
