"""Refresh access token handler (rotation transaction).

Flow:
1. Look up the presented token with a row lock
2. Reject if absent, not owned by the caller, or inactive
   (a rotated token presented again is a replay: revoke its descendants)
3. Resolve the owning user
4. Mint a new access token, stage a new refresh token, revoke the presented
   token pointing at its successor
5. Commit
6. Return the new pair

Every failure path rolls back before returning, so the presented token stays
active and no successor row survives unless step 5 succeeded. Two concurrent
rotations of the same token cannot both win: the second either waits on the
row lock and then sees a revoked token, or loses the conditional
``UPDATE ... WHERE revoked_at IS NULL`` and rolls back.
"""

from sqlalchemy.exc import SQLAlchemyError

from marketplace_auth.application.commands.token_commands import RefreshAccessToken
from marketplace_auth.application.dtos import AuthTokens
from marketplace_auth.application.services import (
    Clock,
    RefreshTokenLedger,
    RevocationReason,
    utc_now,
)
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import BadRequestError, DomainError, UnauthorizedError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.protocols import (
    LoggerProtocol,
    TokenGenerationProtocol,
    TransactionProtocol,
    UserRepository,
)


class RefreshAccessTokenHandler:
    """Handler for RefreshAccessToken command.

    Args:
        user_repo: Credential store.
        ledger: Refresh token ledger.
        token_service: Access token issuer.
        transaction: Transaction boundary shared with the repositories.
        logger: Structured logger.
        reuse_detection: Revoke the downstream chain when a rotated token is
            presented again.
        clock: Source of the current time.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        ledger: RefreshTokenLedger,
        token_service: TokenGenerationProtocol,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
        *,
        reuse_detection: bool = True,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._ledger = ledger
        self._token_service = token_service
        self._transaction = transaction
        self._logger = logger
        self._reuse_detection = reuse_detection
        self._clock = clock

    async def handle(self, cmd: RefreshAccessToken) -> Result[AuthTokens, DomainError]:
        """Handle RefreshAccessToken command.

        Returns:
            Success(AuthTokens) with the rotated pair.
            Failure(UnauthorizedError) for an unknown, foreign, inactive or
                replayed token, or a deleted user.
            Failure(BadRequestError "Token refresh failed") if the database
                rejected the transaction (rolled back).
        """
        try:
            return await self._rotate(cmd)
        except SQLAlchemyError as e:
            await self._transaction.rollback()
            self._logger.error(
                "token_refresh_rolled_back",
                error=e,
                caller_id=str(cmd.caller_id),
            )
            return Failure(
                error=BadRequestError(
                    code=ErrorCode.TOKEN_REFRESH_FAILED,
                    message="Token refresh failed",
                )
            )

    async def _rotate(self, cmd: RefreshAccessToken) -> Result[AuthTokens, DomainError]:
        # Step 1: Lookup (locked)
        record = await self._ledger.lookup(cmd.refresh_token, for_update=True)
        if record is None:
            return await self._reject(ErrorCode.TOKEN_INVALID, reason="unknown_token")

        # Step 2: Ownership, replay, activity
        if record.user_id != cmd.caller_id:
            self._logger.warning(
                "refresh_token_owner_mismatch",
                caller_id=str(cmd.caller_id),
                token_id=str(record.id),
            )
            return await self._reject(ErrorCode.TOKEN_NOT_OWNED, reason="foreign_token")

        if record.was_rotated and self._reuse_detection:
            revoked = await self._ledger.revoke_descendants(record, cmd.ip_address)
            await self._transaction.commit()
            self._logger.warning(
                "refresh_token_reuse_detected",
                user_id=str(record.user_id),
                token_id=str(record.id),
                descendants_revoked=revoked,
            )
            return Failure(
                error=UnauthorizedError(code=ErrorCode.TOKEN_REUSED, message="Invalid token")
            )

        if not record.is_active(self._clock()):
            return await self._reject(ErrorCode.TOKEN_INVALID, reason="inactive_token")

        # Step 3: Owner must still exist
        user = await self._user_repo.find_by_id(record.user_id)
        if user is None:
            return await self._reject(ErrorCode.TOKEN_INVALID, reason="user_missing")

        # Step 4: Mint successor pair and revoke the presented token
        access_token = self._token_service.generate_access_token(
            user_id=user.id,
            email=user.email,
            roles=user.roles,
        )
        successor = await self._ledger.generate(user.id, cmd.ip_address)
        revoked = await self._ledger.revoke_record(
            record,
            cmd.ip_address,
            reason=RevocationReason.ROTATED,
            replaced_by=successor.record.id,
        )
        if isinstance(revoked, Failure):
            return await self._reject(ErrorCode.TOKEN_INVALID, reason="lost_rotation_race")

        # Step 5: Commit
        await self._transaction.commit()

        self._logger.info(
            "refresh_token_rotated",
            user_id=str(user.id),
            token_id=str(record.id),
            successor_id=str(successor.record.id),
        )

        # Step 6: Return pair
        return Success(
            value=AuthTokens(
                access_token=access_token,
                refresh_token=successor.token,
                expires_in=self._token_service.expires_in_seconds,
            )
        )

    async def _reject(self, code: ErrorCode, *, reason: str) -> Failure[DomainError]:
        await self._transaction.rollback()
        self._logger.info("token_refresh_failed", reason=reason)
        return Failure(error=UnauthorizedError(code=code, message="Invalid token"))
