"""Hashing of opaque bearer secrets before storage.

Refresh tokens and password reset tokens carry 256+ bits of entropy, so a
single unsalted SHA-256 is sufficient and keeps the hash usable as a unique
lookup key (unlike bcrypt, which salts every hash).
"""

import hashlib


def hash_token(token: str) -> str:
    """Return the SHA-256 hex digest of a token.

    Example:
        >>> len(hash_token("abc"))
        64
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
