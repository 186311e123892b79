"""Verify email OTP handler.

Flow:
1. Find user by email (unknown -> NotFound)
2. Validate the code (most recent outstanding, unexpired, constant-time match)
3. Mark the email confirmed
4. Commit (code consumption and confirmation land together)
"""

from marketplace_auth.application.commands.auth_commands import VerifyEmailOtp
from marketplace_auth.application.services import Clock, OtpVault, utc_now
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import BadRequestError, DomainError, NotFoundError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.enums import OtpPurpose
from marketplace_auth.domain.protocols import (
    LoggerProtocol,
    TransactionProtocol,
    UserRepository,
)


class VerifyEmailOtpHandler:
    """Handler for VerifyEmailOtp command."""

    def __init__(
        self,
        user_repo: UserRepository,
        otp_vault: OtpVault,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._otp_vault = otp_vault
        self._transaction = transaction
        self._logger = logger
        self._clock = clock

    async def handle(self, cmd: VerifyEmailOtp) -> Result[None, DomainError]:
        """Handle VerifyEmailOtp command.

        Returns:
            Success(None) once the email is confirmed.
            Failure(NotFoundError) for an unknown email.
            Failure(BadRequestError) for a wrong, expired or used code.
        """
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                )
            )

        if not await self._otp_vault.validate(
            user.email, cmd.code, OtpPurpose.EMAIL_VERIFICATION
        ):
            await self._transaction.rollback()
            return Failure(
                error=BadRequestError(
                    code=ErrorCode.OTP_INVALID,
                    message="Invalid or expired verification code",
                    field="code",
                )
            )

        user.email_confirmed = True
        user.updated_at = self._clock()
        await self._user_repo.update(user)
        await self._transaction.commit()

        self._logger.info("email_verified", user_id=str(user.id))
        return Success(value=None)
