"""Validation functions."""

from marketplace_auth.domain.validators.functions import (
    validate_email,
    validate_otp_code,
    validate_refresh_token_format,
    validate_strong_password,
)

__all__ = [
    "validate_email",
    "validate_otp_code",
    "validate_refresh_token_format",
    "validate_strong_password",
]
