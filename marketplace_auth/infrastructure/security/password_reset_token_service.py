"""Password reset token service.

Token strategy:
    - 32 random bytes from the injected secure source, hex encoded
    - Stored as a SHA-256 hash, emailed in plaintext as part of a link
    - Single use, short-lived (configurable, default 60 minutes)
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from marketplace_auth.core.constants import RESET_TOKEN_BYTES
from marketplace_auth.domain.protocols import RandomSourceProtocol


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PasswordResetTokenService:
    """Password reset token generation service.

    Usage:
        service = PasswordResetTokenService(SystemRandomSource(), expiration_minutes=60)
        token = service.generate_token()
        expires_at = service.calculate_expiration()
    """

    def __init__(
        self,
        random_source: RandomSourceProtocol,
        expiration_minutes: int = 60,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._random = random_source
        self._expiration_minutes = expiration_minutes
        self._clock = clock

    def generate_token(self) -> str:
        """Generate a reset token.

        Returns:
            64-character hex string (32 bytes of entropy).
        """
        return self._random.token_bytes(RESET_TOKEN_BYTES).hex()

    def calculate_expiration(self) -> datetime:
        return self._clock() + timedelta(minutes=self._expiration_minutes)
