"""Transaction boundary protocol (port).

Command handlers own the transaction: repositories only stage and flush, the
handler commits once its whole flow succeeded or rolls back otherwise.
SQLAlchemy's ``AsyncSession`` satisfies this protocol structurally.
"""

from typing import Protocol


class TransactionProtocol(Protocol):
    """Commit or discard everything staged since the last boundary."""

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
