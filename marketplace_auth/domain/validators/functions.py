"""Centralized validation functions.

Validators are pure functions that raise ValueError on failure. They are
attached to request fields through the Annotated types in
``marketplace_auth.domain.types``.
"""

import re

from marketplace_auth.core.constants import BCRYPT_MAX_PASSWORD_BYTES, PASSWORD_MIN_LENGTH

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_OTP_PATTERN = re.compile(r"^\d{6}$")
_REFRESH_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")


def validate_email(v: str) -> str:
    """Validate email format.

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (stripped, lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("User@Example.COM")
        'user@example.com'
    """
    v = v.strip()
    if not _EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email format")
    return v.lower()


def validate_strong_password(v: str) -> str:
    """Validate password strength.

    Requirements: at least 8 characters, an uppercase letter, a lowercase
    letter, a digit and a non-alphanumeric character. Passwords longer than
    bcrypt's 72-byte input limit are rejected rather than silently truncated.

    Raises:
        ValueError: If the password doesn't meet requirements.

    Example:
        >>> validate_strong_password("P@ssw0rd1")
        'P@ssw0rd1'
        >>> validate_strong_password("weak")
        ValueError: Password must be at least 8 characters
    """
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
        )
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain digit")
    if all(c.isalnum() for c in v):
        raise ValueError("Password must contain special character")
    return v


def validate_otp_code(v: str) -> str:
    """Validate a six-digit one-time code.

    Example:
        >>> validate_otp_code(" 123456 ")
        '123456'
    """
    v = v.strip()
    if not _OTP_PATTERN.match(v):
        raise ValueError("Code must be 6 digits")
    return v


def validate_refresh_token_format(v: str) -> str:
    """Validate refresh token format (standard base64)."""
    if not v:
        raise ValueError("Token cannot be empty")
    if not _REFRESH_TOKEN_PATTERN.match(v):
        raise ValueError("Token must be base64 encoded")
    return v
