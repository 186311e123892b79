"""Purposes a one-time code can be bound to."""

from enum import Enum


class OtpPurpose(str, Enum):
    """Discriminator stored with every EmailOtp row.

    A code issued for one purpose never validates for another.
    """

    EMAIL_VERIFICATION = "email_verification"
