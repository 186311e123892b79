"""Authenticate user handler (credential verification flow).

States:
    LookupUser -> CheckLockout -> CheckPassword -> CheckEmailConfirmed
    -> ResetFailureCounter -> Authenticated

Terminal failures:
    - user not found       -> Unauthorized "Invalid credentials"
    - locked out           -> BadRequest   "Account locked. Please try again later."
    - wrong password       -> record failure, Unauthorized "Invalid credentials"
    - email not confirmed  -> Unauthorized "Please verify your email first."

"User not found" and "wrong password" are indistinguishable to the caller.
The lockout and confirmation branches may differ because they are only
reachable for an existing account and reveal nothing about the password.

Does NOT issue tokens (see GenerateAuthTokensHandler).
"""

from marketplace_auth.application.commands.auth_commands import AuthenticateUser
from marketplace_auth.application.dtos import UserSummary, to_user_summary
from marketplace_auth.application.services import LockoutGuard, LockoutOutcome
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import BadRequestError, DomainError, UnauthorizedError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    TransactionProtocol,
    UserRepository,
)


class AuthenticateUserHandler:
    """Handler for AuthenticateUser command.

    Lockout counter updates are committed even when authentication fails.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        lockout_guard: LockoutGuard,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._lockout_guard = lockout_guard
        self._transaction = transaction
        self._logger = logger

    async def handle(self, cmd: AuthenticateUser) -> Result[UserSummary, DomainError]:
        """Handle AuthenticateUser command.

        Returns:
            Success(UserSummary) for valid credentials on a confirmed account.
            Failure(UnauthorizedError | BadRequestError) otherwise.
        """
        invalid_credentials = UnauthorizedError(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid credentials",
        )

        # Step 1: Lookup
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None:
            self._logger.info("login_failed", reason="unknown_email")
            return Failure(error=invalid_credentials)

        # Step 2: Lockout
        if self._lockout_guard.is_locked_out(user):
            self._logger.warning("login_failed", reason="locked_out", user_id=str(user.id))
            return Failure(
                error=BadRequestError(
                    code=ErrorCode.ACCOUNT_LOCKED,
                    message="Account locked. Please try again later.",
                )
            )

        # Step 3: Password
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            outcome = self._lockout_guard.check_and_record_failure(user)
            await self._user_repo.update(user)
            await self._transaction.commit()

            if outcome is LockoutOutcome.LOCKED_OUT:
                self._logger.warning(
                    "account_locked",
                    user_id=str(user.id),
                    lockout_end=user.lockout_end.isoformat() if user.lockout_end else None,
                )
            else:
                self._logger.info(
                    "login_failed",
                    reason="invalid_password",
                    user_id=str(user.id),
                    failed_access_count=user.failed_access_count,
                )
            return Failure(error=invalid_credentials)

        # Step 4: Email confirmation
        if not user.email_confirmed:
            self._logger.info("login_failed", reason="email_not_verified", user_id=str(user.id))
            return Failure(
                error=UnauthorizedError(
                    code=ErrorCode.EMAIL_NOT_VERIFIED,
                    message="Please verify your email first.",
                )
            )

        # Step 5: Reset counter
        if self._lockout_guard.reset_on_success(user):
            await self._user_repo.update(user)
            await self._transaction.commit()

        self._logger.info("user_authenticated", user_id=str(user.id))
        return Success(value=to_user_summary(user))
