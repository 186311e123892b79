"""RefreshTokenRepository - SQLAlchemy implementation for the token ledger.

Revocation is a single conditional UPDATE (``... WHERE revoked_at IS NULL``);
the affected row count tells the caller whether it won the race.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.domain.entities import RefreshToken
from marketplace_auth.infrastructure.persistence.models.refresh_token import (
    RefreshToken as RefreshTokenModel,
)


def _to_domain(model: RefreshTokenModel) -> RefreshToken:
    return RefreshToken(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        expires_at=model.expires_at,
        created_at=model.created_at,
        created_by_ip=model.created_by_ip,
        revoked_at=model.revoked_at,
        revoked_by_ip=model.revoked_by_ip,
        revoked_reason=model.revoked_reason,
        replaced_by_token_id=model.replaced_by_token_id,
    )


class RefreshTokenRepository:
    """SQLAlchemy adapter for the RefreshTokenRepository port.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, token: RefreshToken) -> None:
        self.session.add(
            RefreshTokenModel(
                id=token.id,
                user_id=token.user_id,
                token_hash=token.token_hash,
                expires_at=token.expires_at,
                created_at=token.created_at,
                created_by_ip=token.created_by_ip,
            )
        )
        await self.session.flush()

    async def find_by_token_hash(
        self,
        token_hash: str,
        *,
        for_update: bool = False,
    ) -> RefreshToken | None:
        """Find a token by hash, revoked or not.

        Args:
            token_hash: SHA-256 hex digest of the presented token.
            for_update: Take a row lock (ignored by SQLite, which serializes
                writers at the database level).

        Returns:
            RefreshToken if found, None otherwise.
        """
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def find_by_id(self, token_id: UUID) -> RefreshToken | None:
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.id == token_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def revoke(
        self,
        token_id: UUID,
        *,
        revoked_at: datetime,
        revoked_by_ip: str | None,
        reason: str,
        replaced_by_token_id: UUID | None = None,
    ) -> bool:
        """Revoke a token unless it is already revoked.

        Returns:
            True if this statement revoked the token.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.id == token_id)
            .where(RefreshTokenModel.revoked_at.is_(None))
            .values(
                revoked_at=revoked_at,
                revoked_by_ip=revoked_by_ip,
                revoked_reason=reason,
                replaced_by_token_id=replaced_by_token_id,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        *,
        revoked_at: datetime,
        revoked_by_ip: str | None,
        reason: str,
    ) -> int:
        """Revoke every active token of a user.

        Already-expired tokens are left untouched; they are inert and the
        sweep removes them.

        Returns:
            Number of tokens revoked.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.user_id == user_id)
            .where(RefreshTokenModel.revoked_at.is_(None))
            .where(RefreshTokenModel.expires_at > revoked_at)
            .values(
                revoked_at=revoked_at,
                revoked_by_ip=revoked_by_ip,
                revoked_reason=reason,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount)  # type: ignore[attr-defined]

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount)  # type: ignore[attr-defined]
