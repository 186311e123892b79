"""Generate auth tokens handler.

Mints an access token and stages a new refresh token, then commits. Called
after AuthenticateUserHandler succeeds.
"""

from marketplace_auth.application.commands.token_commands import GenerateAuthTokens
from marketplace_auth.application.dtos import AuthTokens
from marketplace_auth.application.services import RefreshTokenLedger
from marketplace_auth.core.errors import DomainError
from marketplace_auth.core.result import Result, Success
from marketplace_auth.domain.protocols import (
    LoggerProtocol,
    TokenGenerationProtocol,
    TransactionProtocol,
)


class GenerateAuthTokensHandler:
    """Handler for GenerateAuthTokens command."""

    def __init__(
        self,
        token_service: TokenGenerationProtocol,
        ledger: RefreshTokenLedger,
        transaction: TransactionProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._token_service = token_service
        self._ledger = ledger
        self._transaction = transaction
        self._logger = logger

    async def handle(self, cmd: GenerateAuthTokens) -> Result[AuthTokens, DomainError]:
        access_token = self._token_service.generate_access_token(
            user_id=cmd.user_id,
            email=cmd.email,
            roles=cmd.roles,
        )
        issued = await self._ledger.generate(cmd.user_id, cmd.ip_address)
        await self._transaction.commit()

        self._logger.info(
            "auth_tokens_issued",
            user_id=str(cmd.user_id),
            refresh_token_id=str(issued.record.id),
        )
        return Success(
            value=AuthTokens(
                access_token=access_token,
                refresh_token=issued.token,
                expires_in=self._token_service.expires_in_seconds,
            )
        )
