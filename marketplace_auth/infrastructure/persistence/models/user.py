"""User database model (credential store)."""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_auth.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """User account table.

    Indexes:
        - ix_users_email: unique lookup by normalized email
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Normalized (lowercase) email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt password hash",
    )
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="customer",
    )
    email_confirmed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    failed_access_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    lockout_end: Mapped[datetime | None] = mapped_column(
        nullable=True,
        default=None,
        comment="End of the current lockout window",
    )
