"""Cryptographically secure randomness (port).

OTP codes, refresh token secrets and password reset tokens all draw from an
injected random source. There is no default: every component that needs
randomness receives one explicitly, so tests can pass a fixed source and
production can never silently fall back to a non-cryptographic generator.
"""

from typing import Protocol


class RandomSourceProtocol(Protocol):
    """Source of unpredictable integers and bytes."""

    def randbelow(self, upper: int) -> int:
        """Return a uniformly distributed integer in ``[0, upper)``."""
        ...

    def token_bytes(self, length: int) -> bytes:
        """Return ``length`` random bytes."""
        ...
