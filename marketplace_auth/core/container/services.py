"""Application service factories.

The OTP vault and the refresh token ledger wrap request-scoped repositories,
so they are built per request. The lockout guard is stateless and shared.
"""

from datetime import timedelta
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.application.services import LockoutGuard, OtpVault, RefreshTokenLedger
from marketplace_auth.core.config import settings
from marketplace_auth.core.container.infrastructure import (
    get_logger,
    get_random_source,
)


@lru_cache()
def get_lockout_guard() -> LockoutGuard:
    """Get lockout policy singleton (app-scoped)."""
    return LockoutGuard(
        max_failed_attempts=settings.lockout_max_failed_attempts,
        lockout_duration=timedelta(minutes=settings.lockout_duration_minutes),
    )


def build_otp_vault(session: AsyncSession) -> OtpVault:
    """Build an OTP vault bound to ``session``."""
    from marketplace_auth.infrastructure.persistence.repositories import (
        EmailOtpRepository,
    )

    return OtpVault(
        otp_repo=EmailOtpRepository(session=session),
        random_source=get_random_source(),
        logger=get_logger(),
        ttl_minutes=settings.otp_ttl_minutes,
        resend_cooldown_seconds=settings.otp_resend_cooldown_seconds,
        max_per_window=settings.otp_max_per_window,
        window_minutes=settings.otp_window_minutes,
    )


def build_refresh_token_ledger(session: AsyncSession) -> RefreshTokenLedger:
    """Build a refresh token ledger bound to ``session``."""
    from marketplace_auth.infrastructure.persistence.repositories import (
        RefreshTokenRepository,
    )

    return RefreshTokenLedger(
        token_repo=RefreshTokenRepository(session=session),
        random_source=get_random_source(),
        expire_days=settings.refresh_token_expire_days,
        token_bytes=settings.refresh_token_bytes,
    )
