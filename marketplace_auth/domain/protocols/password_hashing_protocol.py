"""Password hashing protocol (port)."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Hash and verify passwords.

    Implementations:
        - BcryptPasswordService: marketplace_auth/infrastructure/security/
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Encoded hash including algorithm parameters and salt.
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Must run in constant time with respect to the password and must
        return False (not raise) for malformed hashes.
        """
        ...
