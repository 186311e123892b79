"""Resend verification OTP handler.

Unknown and already confirmed emails get the same success response as
pending ones, so the endpoint cannot be used to probe for accounts. Pending
accounts go through the same throttle as registration.
"""

from marketplace_auth.application.commands.auth_commands import ResendVerificationOtp
from marketplace_auth.application.services import OtpVault
from marketplace_auth.core.errors import DomainError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.enums import OtpPurpose
from marketplace_auth.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    TransactionProtocol,
    UserRepository,
)


class ResendVerificationOtpHandler:
    """Handler for ResendVerificationOtp command."""

    def __init__(
        self,
        user_repo: UserRepository,
        otp_vault: OtpVault,
        email_service: EmailProtocol,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._otp_vault = otp_vault
        self._email_service = email_service
        self._transaction = transaction
        self._logger = logger

    async def handle(self, cmd: ResendVerificationOtp) -> Result[None, DomainError]:
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None or user.email_confirmed:
            self._logger.info("verification_resend_skipped")
            return Success(value=None)

        throttle = await self._otp_vault.check_throttle(
            user.email, OtpPurpose.EMAIL_VERIFICATION
        )
        if isinstance(throttle, Failure):
            return Failure(error=throttle.error)

        code = await self._otp_vault.generate(user.email, OtpPurpose.EMAIL_VERIFICATION)
        await self._transaction.commit()

        try:
            await self._email_service.send_verification_code(
                to_email=user.email,
                code=code,
                expires_in_minutes=self._otp_vault.ttl_minutes,
            )
        except Exception as e:
            self._logger.error(
                "verification_email_failed", error=e, user_id=str(user.id)
            )

        self._logger.info("verification_code_resent", user_id=str(user.id))
        return Success(value=None)
