"""Brute-force lockout policy.

LockoutGuard decides when repeated password failures suspend credential
checks for an account. It only mutates the User entity; the caller persists
the change in its own transaction.

Policy:
    - Each failed password check increments ``failed_access_count``.
    - When the count reaches ``max_failed_attempts`` the account is locked
      until ``now + lockout_duration`` and the counter restarts at zero.
    - Lockout is a read-time comparison against ``lockout_end``; nothing
      unlocks accounts in the background.
    - Lockout blocks new credential checks only. Access tokens that were
      already issued stay valid until they expire.
"""

from datetime import timedelta
from enum import Enum

from marketplace_auth.application.services.clock import Clock, utc_now
from marketplace_auth.domain.entities import User


class LockoutOutcome(str, Enum):
    """Result of recording a failed password check."""

    CONTINUE = "continue"
    LOCKED_OUT = "locked_out"


class LockoutGuard:
    """Attempt accounting and lockout window for credential checks.

    Args:
        max_failed_attempts: Failures that trigger a lockout.
        lockout_duration: Length of the lockout window (5 to 15 minutes).
        clock: Source of the current time.

    Raises:
        ValueError: If the policy values are out of range.

    Example:
        >>> guard = LockoutGuard(max_failed_attempts=5, lockout_duration=timedelta(minutes=15))
        >>> for _ in range(5):
        ...     outcome = guard.check_and_record_failure(user)
        >>> outcome
        <LockoutOutcome.LOCKED_OUT: 'locked_out'>
        >>> guard.is_locked_out(user)
        True
    """

    def __init__(
        self,
        *,
        max_failed_attempts: int = 5,
        lockout_duration: timedelta = timedelta(minutes=15),
        clock: Clock = utc_now,
    ) -> None:
        if max_failed_attempts < 1:
            raise ValueError("max_failed_attempts must be at least 1")
        if not timedelta(minutes=5) <= lockout_duration <= timedelta(minutes=15):
            raise ValueError("lockout_duration must be between 5 and 15 minutes")

        self._max_failed_attempts = max_failed_attempts
        self._lockout_duration = lockout_duration
        self._clock = clock

    def is_locked_out(self, user: User) -> bool:
        """True while the user's lockout window is still running."""
        return user.is_locked(self._clock())

    def check_and_record_failure(self, user: User) -> LockoutOutcome:
        """Record one failed password check.

        Side Effects:
            - Increments ``failed_access_count``.
            - On reaching the threshold: sets ``lockout_end`` and resets the
              counter to zero.

        Returns:
            LOCKED_OUT if this failure started a lockout, CONTINUE otherwise.
        """
        now = self._clock()
        user.failed_access_count += 1
        user.updated_at = now

        if user.failed_access_count >= self._max_failed_attempts:
            user.lockout_end = now + self._lockout_duration
            user.failed_access_count = 0
            return LockoutOutcome.LOCKED_OUT

        return LockoutOutcome.CONTINUE

    def reset_on_success(self, user: User) -> bool:
        """Zero the failure counter after a successful password check.

        ``lockout_end`` is left alone: an elapsed lockout is already inert.

        Returns:
            True if the entity changed and needs persisting.
        """
        if user.failed_access_count == 0:
            return False
        user.failed_access_count = 0
        user.updated_at = self._clock()
        return True
