"""JWT access token service (adapter).

Implements TokenGenerationProtocol with PyJWT and HMAC-SHA256.

Security:
    - HS256 with a secret of at least 256 bits
    - iss and aud are set on issue and verified on every decode
    - Zero clock-skew tolerance (leeway=0)
    - Unique jti per token

Access tokens are never persisted: validity is signature + claims + expiry.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.result import Failure, Result, Success

_REQUIRED_CLAIMS = ["sub", "exp", "iat", "iss", "aud"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JWTService:
    """JWT token generation and validation service.

    Usage:
        from marketplace_auth.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.generate_access_token(
            user_id=user.id, email=user.email, roles=user.roles,
        )
        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        *,
        issuer: str,
        audience: str,
        expiration_minutes: int = 60,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Symmetric signing key, at least 32 bytes.
            issuer: Value of the iss claim.
            audience: Value of the aud claim.
            expiration_minutes: Token lifetime.
            algorithm: HMAC algorithm name.
            clock: Source of the issued-at time.

        Raises:
            ValueError: If secret_key is shorter than 32 bytes.
        """
        if len(secret_key.encode("utf-8")) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm
        self._clock = clock

    @property
    def expires_in_seconds(self) -> int:
        return self._expiration_minutes * 60

    def generate_access_token(
        self,
        user_id: UUID,
        email: str,
        roles: list[str],
    ) -> str:
        """Generate a signed access token.

        Args:
            user_id: User's unique identifier (sub claim).
            email: User's email address.
            roles: Role names (roles claim).

        Returns:
            Encoded JWT (header.payload.signature).

        Example:
            >>> service = JWTService("x" * 32, issuer="auth", audience="api")
            >>> token = service.generate_access_token(uuid7(), "a@b.com", ["customer"])
            >>> len(token.split("."))
            3
        """
        now = self._clock()
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "email": email,
            "roles": roles,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._issuer,
            "aud": self._audience,
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self,
        token: str,
        *,
        allow_expired: bool = False,
    ) -> Result[dict[str, Any], str]:
        """Validate an access token and extract its claims.

        Args:
            token: Encoded JWT.
            allow_expired: Skip only the exp check (used to identify the
                caller of the refresh endpoint). Signature, issuer and
                audience are still enforced.

        Returns:
            Success with the claims, or Failure with ``token_expired`` /
            ``token_invalid``.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                leeway=0,
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": not allow_expired,
                },
            )
        except ExpiredSignatureError:
            return Failure(error=ErrorCode.TOKEN_EXPIRED.value)
        except InvalidTokenError:
            return Failure(error=ErrorCode.TOKEN_INVALID.value)

        return Success(value=payload)
