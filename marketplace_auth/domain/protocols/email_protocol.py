"""EmailProtocol - port for email transport.

The session core decides *what* to send (a code, a reset link); the
transport decides *how*. Implementations: StubEmailService (development and
testing). Production transports live outside this service.
"""

from typing import Protocol


class EmailProtocol(Protocol):
    """Email service protocol (port).

    Structural typing: implementations do not need to inherit.
    """

    async def send_verification_code(
        self,
        to_email: str,
        code: str,
        expires_in_minutes: int,
    ) -> None:
        """Send an email verification code.

        Args:
            to_email: Recipient address.
            code: Six-digit one-time code.
            expires_in_minutes: Code lifetime, shown to the user.
        """
        ...

    async def send_password_reset_email(
        self,
        to_email: str,
        reset_url: str,
    ) -> None:
        """Send a password reset link."""
        ...

    async def send_password_changed_notification(
        self,
        to_email: str,
    ) -> None:
        """Alert the user that their password was changed."""
        ...
