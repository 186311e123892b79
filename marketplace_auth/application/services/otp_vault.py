"""OtpVault - generation, throttling and validation of one-time codes.

Invariants:
    - At most one non-consumed code per ``(email, purpose)``: issuing a new
      code consumes every outstanding one first.
    - Codes are single use: a correct guess consumes the code with a
      compare-and-set update, so two concurrent correct submissions cannot
      both succeed.
    - A wrong guess does not burn the code; only expiry or a correct guess
      does.
    - Comparison is constant time (``hmac.compare_digest``).

Throttling is checked by the caller *before* any account mutation. The
check-then-insert is not atomic: under concurrency one extra code beyond the
cap can slip through, which is acceptable for a denial-of-service control.

The vault never sends email. It returns the plaintext code to the caller.
"""

import hmac
from datetime import timedelta
from math import ceil

from uuid_extensions import uuid7

from marketplace_auth.application.services.clock import Clock, utc_now
from marketplace_auth.core.constants import OTP_MAX, OTP_MIN
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import RateLimitedError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.entities import EmailOtp
from marketplace_auth.domain.enums import OtpPurpose
from marketplace_auth.domain.protocols import (
    EmailOtpRepository,
    LoggerProtocol,
    RandomSourceProtocol,
)


class OtpVault:
    """One-time code store bound to an email and a purpose.

    Args:
        otp_repo: Persistence for codes.
        random_source: Cryptographically secure randomness. Required: there is
            deliberately no default generator.
        logger: Structured logger (codes are never logged).
        ttl_minutes: Default code lifetime.
        resend_cooldown_seconds: Minimum gap between two codes for one email.
        max_per_window: Cap on codes per email within the rolling window.
        window_minutes: Length of the rolling window.
        clock: Source of the current time.
    """

    def __init__(
        self,
        otp_repo: EmailOtpRepository,
        random_source: RandomSourceProtocol,
        logger: LoggerProtocol,
        *,
        ttl_minutes: int = 10,
        resend_cooldown_seconds: int = 60,
        max_per_window: int = 5,
        window_minutes: int = 60,
        clock: Clock = utc_now,
    ) -> None:
        if random_source is None:
            raise ValueError("OtpVault requires a secure random source")

        self._otp_repo = otp_repo
        self._random = random_source
        self._logger = logger
        self._ttl_minutes = ttl_minutes
        self._cooldown = timedelta(seconds=resend_cooldown_seconds)
        self._max_per_window = max_per_window
        self._window = timedelta(minutes=window_minutes)
        self._clock = clock

    @property
    def ttl_minutes(self) -> int:
        return self._ttl_minutes

    async def check_throttle(
        self,
        email: str,
        purpose: OtpPurpose = OtpPurpose.EMAIL_VERIFICATION,
    ) -> Result[None, RateLimitedError]:
        """Decide whether another code may be issued for this email.

        Two rules, cooldown first:
            1. No code issued within the last ``resend_cooldown_seconds``.
            2. Fewer than ``max_per_window`` codes within ``window_minutes``.

        Returns:
            Success(None) if allowed, Failure(RateLimitedError) otherwise.
        """
        now = self._clock()

        latest = await self._otp_repo.find_latest_issued(email, purpose)
        if latest is not None and self._cooldown:
            next_allowed = latest.created_at + self._cooldown
            if next_allowed > now:
                retry_after = ceil((next_allowed - now).total_seconds())
                self._logger.info(
                    "otp_rate_limited",
                    email=email,
                    purpose=purpose.value,
                    rule="cooldown",
                    retry_after_seconds=retry_after,
                )
                return Failure(
                    error=RateLimitedError(
                        code=ErrorCode.OTP_RATE_LIMITED,
                        message="Please wait before requesting another verification code.",
                        retry_after_seconds=retry_after,
                    )
                )

        window_start = now - self._window
        issued = await self._otp_repo.count_issued_since(email, purpose, window_start)
        if issued >= self._max_per_window:
            self._logger.info(
                "otp_rate_limited",
                email=email,
                purpose=purpose.value,
                rule="window_cap",
                issued_in_window=issued,
            )
            return Failure(
                error=RateLimitedError(
                    code=ErrorCode.OTP_RATE_LIMITED,
                    message="Too many verification codes requested. Please try again later.",
                    retry_after_seconds=int(self._window.total_seconds()),
                )
            )

        return Success(value=None)

    async def generate(
        self,
        email: str,
        purpose: OtpPurpose = OtpPurpose.EMAIL_VERIFICATION,
        ttl_minutes: int | None = None,
    ) -> str:
        """Issue a new code, superseding all outstanding ones.

        Steps:
            1. Draw a uniform six-digit code from the secure random source.
            2. Consume every outstanding code for ``(email, purpose)``.
            3. Stage the new code with ``expires_at = now + ttl``.

        Returns:
            The plaintext code, for delivery by the caller.
        """
        now = self._clock()
        code = str(OTP_MIN + self._random.randbelow(OTP_MAX - OTP_MIN + 1))

        superseded = await self._otp_repo.consume_outstanding(email, purpose)

        await self._otp_repo.add(
            EmailOtp(
                id=uuid7(),
                email=email,
                purpose=purpose,
                code=code,
                created_at=now,
                expires_at=now + timedelta(minutes=ttl_minutes or self._ttl_minutes),
            )
        )

        self._logger.info(
            "otp_generated",
            email=email,
            purpose=purpose.value,
            superseded=superseded,
        )
        return code

    async def validate(
        self,
        email: str,
        code: str,
        purpose: OtpPurpose = OtpPurpose.EMAIL_VERIFICATION,
    ) -> bool:
        """Check a submitted code and consume it on a match.

        Steps:
            1. Fetch the most recent outstanding code; fail if none.
            2. Fail if it has expired.
            3. Constant-time comparison of the submitted and stored codes.
            4. On a match, consume it (compare-and-set) and succeed.

        Returns:
            True only if this call matched and consumed the code.
        """
        otp = await self._otp_repo.find_latest_outstanding(email, purpose)
        if otp is None:
            self._logger.info("otp_validation_failed", email=email, reason="no_code")
            return False

        if otp.is_expired(self._clock()):
            self._logger.info("otp_validation_failed", email=email, reason="expired")
            return False

        if not hmac.compare_digest(code.encode("utf-8"), otp.code.encode("utf-8")):
            self._logger.info("otp_validation_failed", email=email, reason="mismatch")
            return False

        if not await self._otp_repo.mark_consumed(otp.id):
            self._logger.info("otp_validation_failed", email=email, reason="already_consumed")
            return False

        return True
