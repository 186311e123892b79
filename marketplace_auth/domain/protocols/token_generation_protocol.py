"""Access token issuance protocol (port).

Access tokens are short-lived, signed and self-contained. Nothing is stored
server-side; validity is signature + issuer + audience + expiry.
"""

from typing import Any, Protocol
from uuid import UUID

from marketplace_auth.core.result import Result


class TokenGenerationProtocol(Protocol):
    """Access token generation and validation interface.

    Implementations:
        - JWTService: HMAC-SHA256 signed JWT (production)

    Usage:
        token = token_service.generate_access_token(
            user_id=user.id, email=user.email, roles=user.roles,
        )

        match token_service.validate_access_token(token):
            case Success(value=payload):
                user_id = UUID(payload["sub"])
            case Failure(error=reason):
                ...
    """

    @property
    def expires_in_seconds(self) -> int:
        """Lifetime of newly generated tokens, reported to clients as expiresIn."""
        ...

    def generate_access_token(
        self,
        user_id: UUID,
        email: str,
        roles: list[str],
    ) -> str:
        """Generate a signed access token.

        Claims: sub, email, roles, iat, exp, iss, aud, jti.
        """
        ...

    def validate_access_token(
        self,
        token: str,
        *,
        allow_expired: bool = False,
    ) -> Result[dict[str, Any], str]:
        """Validate a token and return its claims.

        Args:
            token: Encoded token.
            allow_expired: Skip only the expiry check. Signature, issuer and
                audience are always verified.

        Returns:
            Success with the claim dict, or Failure with a short reason.
        """
        ...
