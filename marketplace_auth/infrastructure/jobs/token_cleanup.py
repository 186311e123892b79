"""Expired credential sweep.

Deletes refresh tokens, one-time codes and password reset tokens whose expiry
has passed. Each statement is a plain ``DELETE ... WHERE expires_at < now``:
it never touches an active row, so it is safe to run while rotations are in
flight and safe to run repeatedly.

The sweep can be driven by an external scheduler (``run_once``) or by the
in-process loop started from the application lifespan (``run_forever``).
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from marketplace_auth.application.services import RefreshTokenLedger
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import DomainError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.protocols import LoggerProtocol
from marketplace_auth.infrastructure.persistence.database import Database
from marketplace_auth.infrastructure.persistence.repositories import (
    EmailOtpRepository,
    PasswordResetTokenRepository,
    RefreshTokenRepository,
)
from marketplace_auth.infrastructure.security.random_source import SystemRandomSource


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class CleanupReport:
    """Rows removed by one sweep."""

    refresh_tokens: int
    email_otps: int
    password_reset_tokens: int

    @property
    def total(self) -> int:
        return self.refresh_tokens + self.email_otps + self.password_reset_tokens


class TokenCleanupJob:
    """Periodic sweep of expired credentials.

    Args:
        database: Database providing sessions.
        logger: Structured logger.
        clock: Source of the current time.
    """

    def __init__(
        self,
        database: Database,
        logger: LoggerProtocol,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._database = database
        self._logger = logger
        self._clock = clock

    async def run_once(self) -> Result[CleanupReport, DomainError]:
        """Run one sweep in a single transaction.

        Returns:
            Success with row counts, or Failure if the database rejected it.
        """
        now = self._clock()
        try:
            async with self._database.get_session() as session:
                ledger = RefreshTokenLedger(
                    RefreshTokenRepository(session),
                    SystemRandomSource(),
                    clock=lambda: now,
                )
                report = CleanupReport(
                    refresh_tokens=await ledger.cleanup(),
                    email_otps=await EmailOtpRepository(session).delete_expired(now),
                    password_reset_tokens=await PasswordResetTokenRepository(
                        session
                    ).delete_expired(now),
                )
        except SQLAlchemyError as e:
            self._logger.error("token_cleanup_failed", error=e)
            return Failure(
                error=DomainError(
                    code=ErrorCode.DATABASE_ERROR,
                    message="Token cleanup failed",
                )
            )

        self._logger.info(
            "token_cleanup_completed",
            refresh_tokens=report.refresh_tokens,
            email_otps=report.email_otps,
            password_reset_tokens=report.password_reset_tokens,
        )
        return Success(value=report)

    async def run_forever(self, interval_seconds: float) -> None:
        """Sweep, sleep, repeat until cancelled."""
        while True:
            await self.run_once()
            await asyncio.sleep(interval_seconds)
