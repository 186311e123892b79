"""Email one-time code database model."""

from datetime import datetime

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_auth.infrastructure.persistence.base import BaseModel


class EmailOtp(BaseModel):
    """One-time code table.

    Indexes:
        - ix_email_otps_email_purpose: (email, purpose) for outstanding-code lookups
        - ix_email_otps_expires_at: expiry sweep
    """

    __tablename__ = "email_otps"

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    purpose: Mapped[str] = mapped_column(String(50), nullable=False)
    code: Mapped[str] = mapped_column(String(6), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(nullable=False, index=True)
    consumed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_email_otps_email_purpose", "email", "purpose"),)
