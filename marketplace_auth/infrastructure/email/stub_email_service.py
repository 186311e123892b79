"""Stub email service for development and testing.

Nothing is transmitted. Every message is logged and appended to ``outbox`` so
that local users can read codes from the console and tests can read them from
memory.
"""

from dataclasses import dataclass, field
from typing import Any

from marketplace_auth.domain.protocols import LoggerProtocol


@dataclass(frozen=True)
class SentEmail:
    """A message accepted by the stub.

    Attributes:
        kind: verification_code, password_reset or password_changed.
        to_email: Recipient.
        payload: Template variables (code, reset_url, ...).
    """

    kind: str
    to_email: str
    payload: dict[str, Any] = field(default_factory=dict)


class StubEmailService:
    """EmailProtocol implementation that logs instead of sending.

    Args:
        logger: Structured logger.
        log_secrets: Include codes and reset links in log events. Only ever
            enabled in development.
    """

    def __init__(self, logger: LoggerProtocol, *, log_secrets: bool = False) -> None:
        self._logger = logger
        self._log_secrets = log_secrets
        self.outbox: list[SentEmail] = []

    async def send_verification_code(
        self,
        to_email: str,
        code: str,
        expires_in_minutes: int,
    ) -> None:
        self.outbox.append(
            SentEmail(
                kind="verification_code",
                to_email=to_email,
                payload={"code": code, "expires_in_minutes": expires_in_minutes},
            )
        )
        extra = {"code": code} if self._log_secrets else {}
        self._logger.info(
            "stub_email_verification_code",
            to_email=to_email,
            expires_in_minutes=expires_in_minutes,
            **extra,
        )

    async def send_password_reset_email(
        self,
        to_email: str,
        reset_url: str,
    ) -> None:
        self.outbox.append(
            SentEmail(
                kind="password_reset",
                to_email=to_email,
                payload={"reset_url": reset_url},
            )
        )
        extra = {"reset_url": reset_url} if self._log_secrets else {}
        self._logger.info("stub_email_password_reset", to_email=to_email, **extra)

    async def send_password_changed_notification(
        self,
        to_email: str,
    ) -> None:
        self.outbox.append(SentEmail(kind="password_changed", to_email=to_email))
        self._logger.info("stub_email_password_changed", to_email=to_email)

    def last_to(self, to_email: str, kind: str | None = None) -> SentEmail | None:
        """Most recent message to a recipient, optionally filtered by kind."""
        for message in reversed(self.outbox):
            if message.to_email == to_email and (kind is None or message.kind == kind):
                return message
        return None
