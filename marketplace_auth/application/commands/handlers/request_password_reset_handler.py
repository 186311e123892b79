"""Request password reset handler.

Always succeeds so that the response never reveals whether an account
exists. For a confirmed account, earlier unused reset tokens are invalidated
and a fresh link is emailed.
"""

from uuid_extensions import uuid7

from marketplace_auth.application.commands.auth_commands import RequestPasswordReset
from marketplace_auth.application.services import Clock, utc_now
from marketplace_auth.core.errors import DomainError
from marketplace_auth.core.result import Result, Success
from marketplace_auth.core.token_hashing import hash_token
from marketplace_auth.domain.entities import PasswordResetToken
from marketplace_auth.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordResetTokenRepository,
    PasswordResetTokenServiceProtocol,
    TransactionProtocol,
    UserRepository,
)


class RequestPasswordResetHandler:
    """Handler for RequestPasswordReset command.

    Args:
        reset_url_base: Front-end page receiving ``?token=...``.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        reset_token_repo: PasswordResetTokenRepository,
        reset_token_service: PasswordResetTokenServiceProtocol,
        email_service: EmailProtocol,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
        *,
        reset_url_base: str,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._reset_token_repo = reset_token_repo
        self._reset_token_service = reset_token_service
        self._email_service = email_service
        self._transaction = transaction
        self._logger = logger
        self._reset_url_base = reset_url_base.rstrip("/")
        self._clock = clock

    async def handle(self, cmd: RequestPasswordReset) -> Result[None, DomainError]:
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None or not user.email_confirmed:
            self._logger.info("password_reset_request_ignored")
            return Success(value=None)

        now = self._clock()
        await self._reset_token_repo.invalidate_for_user(user.id, now)

        token = self._reset_token_service.generate_token()
        await self._reset_token_repo.add(
            PasswordResetToken(
                id=uuid7(),
                user_id=user.id,
                token_hash=hash_token(token),
                created_at=now,
                expires_at=self._reset_token_service.calculate_expiration(),
            )
        )
        await self._transaction.commit()

        self._logger.info("password_reset_requested", user_id=str(user.id))

        try:
            await self._email_service.send_password_reset_email(
                to_email=user.email,
                reset_url=f"{self._reset_url_base}?token={token}",
            )
        except Exception as e:
            self._logger.error("password_reset_email_failed", error=e, user_id=str(user.id))

        return Success(value=None)
