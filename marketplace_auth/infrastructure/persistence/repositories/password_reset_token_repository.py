"""PasswordResetTokenRepository - SQLAlchemy implementation."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.domain.entities import PasswordResetToken
from marketplace_auth.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken as PasswordResetTokenModel,
)


class PasswordResetTokenRepository:
    """SQLAlchemy adapter for the PasswordResetTokenRepository port."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, token: PasswordResetToken) -> None:
        self.session.add(
            PasswordResetTokenModel(
                id=token.id,
                user_id=token.user_id,
                token_hash=token.token_hash,
                expires_at=token.expires_at,
                created_at=token.created_at,
                used_at=token.used_at,
            )
        )
        await self.session.flush()

    async def find_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        stmt = (
            select(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return PasswordResetToken(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            created_at=model.created_at,
            used_at=model.used_at,
        )

    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        stmt = (
            update(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.id == token_id)
            .where(PasswordResetTokenModel.used_at.is_(None))
            .values(used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def invalidate_for_user(self, user_id: UUID, used_at: datetime) -> int:
        stmt = (
            update(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.user_id == user_id)
            .where(PasswordResetTokenModel.used_at.is_(None))
            .values(used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount)  # type: ignore[attr-defined]

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount)  # type: ignore[attr-defined]
