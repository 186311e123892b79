"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol. The cost factor comes from settings; each
+1 doubles the work (12 is roughly 250ms).
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from marketplace_auth.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("P@ssw0rd1")
        password_service.verify_password("P@ssw0rd1", password_hash)  # True
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (10-20).

        Raises:
            ValueError: If the cost factor is outside 10-20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            bcrypt hash string ($2b$<cost>$...), 60 characters.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        bcrypt.checkpw compares in constant time. Malformed hashes and
        over-long inputs yield False instead of raising.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
