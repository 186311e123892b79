"""EmailOtpRepository - SQLAlchemy implementation for one-time codes."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.domain.entities import EmailOtp
from marketplace_auth.domain.enums import OtpPurpose
from marketplace_auth.infrastructure.persistence.models.email_otp import (
    EmailOtp as EmailOtpModel,
)


def _to_domain(model: EmailOtpModel) -> EmailOtp:
    return EmailOtp(
        id=model.id,
        email=model.email,
        purpose=OtpPurpose(model.purpose),
        code=model.code,
        expires_at=model.expires_at,
        created_at=model.created_at,
        consumed=model.consumed,
    )


class EmailOtpRepository:
    """SQLAlchemy adapter for the EmailOtpRepository port.

    "Most recent" is decided by ``created_at`` with the time-ordered UUIDv7
    primary key as a tie breaker.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, otp: EmailOtp) -> None:
        self.session.add(
            EmailOtpModel(
                id=otp.id,
                email=otp.email,
                purpose=otp.purpose.value,
                code=otp.code,
                expires_at=otp.expires_at,
                created_at=otp.created_at,
                consumed=otp.consumed,
            )
        )
        await self.session.flush()

    async def consume_outstanding(self, email: str, purpose: OtpPurpose) -> int:
        stmt = (
            update(EmailOtpModel)
            .where(EmailOtpModel.email == email)
            .where(EmailOtpModel.purpose == purpose.value)
            .where(EmailOtpModel.consumed.is_(False))
            .values(consumed=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount)  # type: ignore[attr-defined]

    async def find_latest_outstanding(
        self, email: str, purpose: OtpPurpose
    ) -> EmailOtp | None:
        stmt = (
            select(EmailOtpModel)
            .where(EmailOtpModel.email == email)
            .where(EmailOtpModel.purpose == purpose.value)
            .where(EmailOtpModel.consumed.is_(False))
            .order_by(EmailOtpModel.created_at.desc(), EmailOtpModel.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def find_latest_issued(
        self, email: str, purpose: OtpPurpose
    ) -> EmailOtp | None:
        stmt = (
            select(EmailOtpModel)
            .where(EmailOtpModel.email == email)
            .where(EmailOtpModel.purpose == purpose.value)
            .order_by(EmailOtpModel.created_at.desc(), EmailOtpModel.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def count_issued_since(
        self, email: str, purpose: OtpPurpose, since: datetime
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(EmailOtpModel)
            .where(EmailOtpModel.email == email)
            .where(EmailOtpModel.purpose == purpose.value)
            .where(EmailOtpModel.created_at >= since)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def mark_consumed(self, otp_id: UUID) -> bool:
        """Consume a code only if it is still outstanding.

        Returns:
            True if this statement consumed it.
        """
        stmt = (
            update(EmailOtpModel)
            .where(EmailOtpModel.id == otp_id)
            .where(EmailOtpModel.consumed.is_(False))
            .values(consumed=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(EmailOtpModel)
            .where(EmailOtpModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount)  # type: ignore[attr-defined]
