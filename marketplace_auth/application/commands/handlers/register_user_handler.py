"""Register user handler.

Flow:
1. Look up the email
2. Confirmed account exists -> Conflict
3. OTP throttle check (before any account mutation)
4. Unconfirmed account exists -> Conflict (the account is left untouched)
5. Create the unconfirmed user
6. Generate a verification code (supersedes older codes)
7. Commit
8. Send the code (after commit; a transport failure does not undo the account)

A repeated registration for a pending email never changes the stored
credentials or names; a fresh code for it comes from the resend flow. The
throttle still runs first, so a second attempt inside the cooldown gets
RateLimited rather than Conflict.
"""

from sqlalchemy.exc import IntegrityError
from uuid_extensions import uuid7

from marketplace_auth.application.commands.auth_commands import RegisterUser
from marketplace_auth.application.dtos import RegisteredUser
from marketplace_auth.application.services import Clock, OtpVault, utc_now
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import ConflictError, DomainError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.entities import User
from marketplace_auth.domain.enums import OtpPurpose
from marketplace_auth.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    TransactionProtocol,
    UserRepository,
)


class RegisterUserHandler:
    """Handler for RegisterUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        otp_vault: OtpVault,
        password_service: PasswordHashingProtocol,
        email_service: EmailProtocol,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._otp_vault = otp_vault
        self._password_service = password_service
        self._email_service = email_service
        self._transaction = transaction
        self._logger = logger
        self._clock = clock

    async def handle(self, cmd: RegisterUser) -> Result[RegisteredUser, DomainError]:
        """Handle RegisterUser command.

        Returns:
            Success(RegisteredUser) when the account is pending verification.
            Failure(ConflictError) if any account owns the email.
            Failure(RateLimitedError) if a code was requested too recently.
        """
        email_taken = ConflictError(
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            message="Email is already registered",
            resource_type="User",
        )

        # Step 1-2: Uniqueness
        existing = await self._user_repo.find_by_email(cmd.email)
        if existing is not None and existing.email_confirmed:
            self._logger.info("registration_rejected", reason="email_exists")
            return Failure(error=email_taken)

        # Step 3: Throttle before touching anything
        throttle = await self._otp_vault.check_throttle(
            cmd.email, OtpPurpose.EMAIL_VERIFICATION
        )
        if isinstance(throttle, Failure):
            return Failure(error=throttle.error)

        # Step 4: Pending account keeps its credentials
        if existing is not None:
            self._logger.info(
                "registration_rejected",
                reason="email_pending_verification",
                user_id=str(existing.id),
            )
            return Failure(error=email_taken)

        # Step 5: Create the pending account
        now = self._clock()
        user = User(
            id=uuid7(),
            email=cmd.email,
            password_hash=self._password_service.hash_password(cmd.password),
            first_name=cmd.first_name,
            last_name=cmd.last_name,
            created_at=now,
            updated_at=now,
        )

        try:
            await self._user_repo.add(user)

            # Step 6: New code
            code = await self._otp_vault.generate(
                user.email, OtpPurpose.EMAIL_VERIFICATION
            )

            # Step 7: Commit
            await self._transaction.commit()
        except IntegrityError:
            # Concurrent registration of the same email won the insert.
            await self._transaction.rollback()
            self._logger.info("registration_rejected", reason="email_exists_race")
            return Failure(error=email_taken)

        self._logger.info("user_registered", user_id=str(user.id))

        # Step 8: Deliver the code
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

        return Success(
            value=RegisteredUser(
                user_id=user.id,
                email=user.email,
                otp_expires_in_minutes=self._otp_vault.ttl_minutes,
            )
        )
