"""Reset password handler.

Flow:
1. Find the reset token by hash; reject unknown, expired or used tokens
2. Redeem it (compare-and-set on used_at)
3. Store the new password hash
4. Revoke every refresh token of the user
5. Commit, then notify by email

All rejections share one message so that the endpoint reveals nothing about
which check failed.
"""

from marketplace_auth.application.commands.auth_commands import ResetPassword
from marketplace_auth.application.services import (
    Clock,
    RefreshTokenLedger,
    RevocationReason,
    utc_now,
)
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import BadRequestError, DomainError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.core.token_hashing import hash_token
from marketplace_auth.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    PasswordResetTokenRepository,
    TransactionProtocol,
    UserRepository,
)


class ResetPasswordHandler:
    """Handler for ResetPassword command."""

    def __init__(
        self,
        user_repo: UserRepository,
        reset_token_repo: PasswordResetTokenRepository,
        password_service: PasswordHashingProtocol,
        ledger: RefreshTokenLedger,
        email_service: EmailProtocol,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._reset_token_repo = reset_token_repo
        self._password_service = password_service
        self._ledger = ledger
        self._email_service = email_service
        self._transaction = transaction
        self._logger = logger
        self._clock = clock

    async def handle(self, cmd: ResetPassword) -> Result[None, DomainError]:
        """Handle ResetPassword command.

        Returns:
            Success(None) once the password was replaced.
            Failure(BadRequestError) for any invalid token.
        """
        now = self._clock()

        record = await self._reset_token_repo.find_by_token_hash(hash_token(cmd.token))
        if record is None:
            return await self._reject(ErrorCode.RESET_TOKEN_INVALID)
        if record.is_used:
            return await self._reject(ErrorCode.RESET_TOKEN_USED)
        if record.is_expired(now):
            return await self._reject(ErrorCode.RESET_TOKEN_EXPIRED)

        if not await self._reset_token_repo.mark_used(record.id, now):
            return await self._reject(ErrorCode.RESET_TOKEN_USED)

        user = await self._user_repo.find_by_id(record.user_id)
        if user is None:
            return await self._reject(ErrorCode.RESET_TOKEN_INVALID)

        user.password_hash = self._password_service.hash_password(cmd.new_password)
        user.updated_at = now
        await self._user_repo.update(user)

        revoked = await self._ledger.revoke_all_for_user(
            user.id, cmd.ip_address, reason=RevocationReason.PASSWORD_RESET
        )
        await self._transaction.commit()

        self._logger.info("password_reset_completed", user_id=str(user.id), sessions_revoked=revoked)

        try:
            await self._email_service.send_password_changed_notification(to_email=user.email)
        except Exception as e:
            self._logger.error("password_changed_email_failed", error=e, user_id=str(user.id))

        return Success(value=None)

    async def _reject(self, code: ErrorCode) -> Failure[DomainError]:
        await self._transaction.rollback()
        self._logger.info("password_reset_failed", reason=code.value)
        return Failure(
            error=BadRequestError(
                code=code,
                message="Invalid or expired reset token",
                field="token",
            )
        )
