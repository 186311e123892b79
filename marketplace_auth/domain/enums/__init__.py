"""Domain enums."""

from marketplace_auth.domain.enums.otp_purpose import OtpPurpose
from marketplace_auth.domain.enums.user_role import UserRole

__all__ = ["OtpPurpose", "UserRole"]
