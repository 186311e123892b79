"""Password reset token service protocol (port)."""

from datetime import datetime
from typing import Protocol


class PasswordResetTokenServiceProtocol(Protocol):
    """Generate unguessable reset tokens and their expiry."""

    def generate_token(self) -> str:
        """Return a new token (hex, 256 bits of entropy)."""
        ...

    def calculate_expiration(self) -> datetime:
        """Return the expiry for a token issued now."""
        ...
