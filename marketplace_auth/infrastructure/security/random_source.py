"""Operating-system backed randomness (adapter for RandomSourceProtocol)."""

import secrets


class SystemRandomSource:
    """Cryptographically secure random source backed by ``secrets``.

    This is the only production implementation. Tests inject deterministic
    sources instead.
    """

    def randbelow(self, upper: int) -> int:
        return secrets.randbelow(upper)

    def token_bytes(self, length: int) -> bytes:
        return secrets.token_bytes(length)
