"""Application services shared by command handlers."""

from marketplace_auth.application.services.clock import Clock, utc_now
from marketplace_auth.application.services.lockout_guard import (
    LockoutGuard,
    LockoutOutcome,
)
from marketplace_auth.application.services.otp_vault import OtpVault
from marketplace_auth.application.services.refresh_token_ledger import (
    RefreshTokenLedger,
    RevocationReason,
)

__all__ = [
    "Clock",
    "utc_now",
    "LockoutGuard",
    "LockoutOutcome",
    "OtpVault",
    "RefreshTokenLedger",
    "RevocationReason",
]
