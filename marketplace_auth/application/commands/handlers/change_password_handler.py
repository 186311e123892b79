"""Change password handler.

Flow:
1. Load the caller
2. Verify the current password
3. Store the new hash
4. Revoke every refresh token of the user
5. Commit, then notify by email
"""

from marketplace_auth.application.commands.auth_commands import ChangePassword
from marketplace_auth.application.services import (
    Clock,
    RefreshTokenLedger,
    RevocationReason,
    utc_now,
)
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import BadRequestError, DomainError, NotFoundError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    TransactionProtocol,
    UserRepository,
)


class ChangePasswordHandler:
    """Handler for ChangePassword command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        ledger: RefreshTokenLedger,
        email_service: EmailProtocol,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._ledger = ledger
        self._email_service = email_service
        self._transaction = transaction
        self._logger = logger
        self._clock = clock

    async def handle(self, cmd: ChangePassword) -> Result[None, DomainError]:
        """Handle ChangePassword command.

        Returns:
            Success(None) once the password changed and sessions were revoked.
            Failure(NotFoundError) if the caller no longer exists.
            Failure(BadRequestError) if the current password is wrong.
        """
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                )
            )

        if not self._password_service.verify_password(cmd.current_password, user.password_hash):
            self._logger.info("password_change_failed", user_id=str(user.id))
            return Failure(
                error=BadRequestError(
                    code=ErrorCode.CURRENT_PASSWORD_INCORRECT,
                    message="Current password is incorrect",
                    field="currentPassword",
                )
            )

        user.password_hash = self._password_service.hash_password(cmd.new_password)
        user.updated_at = self._clock()
        await self._user_repo.update(user)

        revoked = await self._ledger.revoke_all_for_user(
            user.id, cmd.ip_address, reason=RevocationReason.PASSWORD_CHANGED
        )
        await self._transaction.commit()

        self._logger.info("password_changed", user_id=str(user.id), sessions_revoked=revoked)

        try:
            await self._email_service.send_password_changed_notification(to_email=user.email)
        except Exception as e:
            self._logger.error("password_changed_email_failed", error=e, user_id=str(user.id))

        return Success(value=None)
