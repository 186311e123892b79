"""Revoke all refresh tokens handler (logout everywhere)."""

from marketplace_auth.application.commands.token_commands import RevokeAllRefreshTokens
from marketplace_auth.application.services import RefreshTokenLedger, RevocationReason
from marketplace_auth.core.errors import DomainError
from marketplace_auth.core.result import Result, Success
from marketplace_auth.domain.protocols import LoggerProtocol, TransactionProtocol


class RevokeAllRefreshTokensHandler:
    """Handler for RevokeAllRefreshTokens command.

    Returns the number of tokens revoked.
    """

    def __init__(
        self,
        ledger: RefreshTokenLedger,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._ledger = ledger
        self._transaction = transaction
        self._logger = logger

    async def handle(self, cmd: RevokeAllRefreshTokens) -> Result[int, DomainError]:
        revoked = await self._ledger.revoke_all_for_user(
            cmd.caller_id, cmd.ip_address, reason=RevocationReason.LOGOUT_ALL
        )
        await self._transaction.commit()

        self._logger.info(
            "refresh_tokens_revoked_all", user_id=str(cmd.caller_id), count=revoked
        )
        return Success(value=revoked)
