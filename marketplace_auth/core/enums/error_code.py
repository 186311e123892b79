"""Machine-readable error codes.

Codes follow the ENTITY_ACTION_REASON naming convention. The code explains
*why* an operation failed; the ``ErrorKind`` on the error decides how it is
surfaced.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes."""

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    PASSWORD_TOO_WEAK = "password_too_weak"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    TOKEN_ALREADY_REVOKED = "token_already_revoked"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_REUSED = "token_reused"
    TOKEN_NOT_OWNED = "token_not_owned"

    # Account state
    ACCOUNT_LOCKED = "account_locked"
    CURRENT_PASSWORD_INCORRECT = "current_password_incorrect"

    # OTP
    OTP_INVALID = "otp_invalid"
    OTP_EXPIRED = "otp_expired"
    OTP_RATE_LIMITED = "otp_rate_limited"

    # Password reset
    RESET_TOKEN_INVALID = "reset_token_invalid"
    RESET_TOKEN_EXPIRED = "reset_token_expired"
    RESET_TOKEN_USED = "reset_token_used"

    # Persistence
    TOKEN_REFRESH_FAILED = "token_refresh_failed"
    DATABASE_ERROR = "database_error"
