"""Centralized constants for internal implementation details.

Environment-specific policy lives in ``marketplace_auth.core.config``; the
values here are fixed by the protocol and never change per deployment.
"""

# =============================================================================
# One-time codes
# =============================================================================

OTP_MIN: int = 100000
"""Smallest six-digit code (inclusive)."""

OTP_MAX: int = 999999
"""Largest six-digit code (inclusive)."""

# =============================================================================
# Tokens
# =============================================================================

RESET_TOKEN_BYTES: int = 32
"""Entropy of password reset tokens in bytes (256 bits)."""

TOKEN_TYPE_BEARER: str = "Bearer"
"""token_type value returned with every access token."""

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

# =============================================================================
# Passwords
# =============================================================================

PASSWORD_MIN_LENGTH: int = 8
"""Minimum password length."""

BCRYPT_MAX_PASSWORD_BYTES: int = 72
"""bcrypt ignores input beyond this many bytes; longer passwords are rejected."""

# =============================================================================
# Tracing
# =============================================================================

TRACE_ID_HEADER: str = "X-Trace-Id"
"""Response header carrying the per-request trace identifier."""
