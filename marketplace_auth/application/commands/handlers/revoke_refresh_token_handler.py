"""Revoke refresh token handler (logout of one session).

The presented token must belong to the caller; a foreign token is rejected
and left untouched.
"""

from marketplace_auth.application.commands.token_commands import RevokeRefreshToken
from marketplace_auth.application.services import RefreshTokenLedger, RevocationReason
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import DomainError, UnauthorizedError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.protocols import LoggerProtocol, TransactionProtocol


class RevokeRefreshTokenHandler:
    """Handler for RevokeRefreshToken command."""

    def __init__(
        self,
        ledger: RefreshTokenLedger,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._ledger = ledger
        self._transaction = transaction
        self._logger = logger

    async def handle(self, cmd: RevokeRefreshToken) -> Result[None, DomainError]:
        """Handle RevokeRefreshToken command.

        Returns:
            Success(None) once revoked.
            Failure(UnauthorizedError) if the token is unknown or foreign.
            Failure(ConflictError) if it is already revoked or expired.
        """
        record = await self._ledger.lookup(cmd.refresh_token)
        if record is None:
            return Failure(
                error=UnauthorizedError(code=ErrorCode.TOKEN_INVALID, message="Invalid token")
            )

        if record.user_id != cmd.caller_id:
            self._logger.warning(
                "refresh_token_revocation_denied",
                caller_id=str(cmd.caller_id),
                token_id=str(record.id),
            )
            return Failure(
                error=UnauthorizedError(
                    code=ErrorCode.TOKEN_NOT_OWNED,
                    message="Unauthorized token revocation",
                )
            )

        result = await self._ledger.revoke_record(
            record, cmd.ip_address, reason=RevocationReason.LOGOUT
        )
        if isinstance(result, Failure):
            await self._transaction.rollback()
            return Failure(error=result.error)

        await self._transaction.commit()
        self._logger.info(
            "refresh_token_revoked",
            user_id=str(record.user_id),
            token_id=str(record.id),
        )
        return Success(value=None)
