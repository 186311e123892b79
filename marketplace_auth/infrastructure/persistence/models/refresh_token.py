"""Refresh token database model.

Security:
    - token_hash: SHA-256 of the opaque secret (the secret is never stored)
    - revoked_at: set exactly once; revocation is terminal
    - replaced_by_token_id: successor in the rotation chain
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_auth.infrastructure.persistence.base import BaseModel


class RefreshToken(BaseModel):
    """Refresh token table.

    Indexes:
        - ix_refresh_tokens_token_hash: unique point lookup
        - ix_refresh_tokens_user_active: (user_id, revoked_at, expires_at)
          for a user's active tokens
        - ix_refresh_tokens_expires_at: expiry sweep

    Foreign Keys:
        - user_id -> users(id) ON DELETE CASCADE
        - replaced_by_token_id -> refresh_tokens(id) ON DELETE SET NULL
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User who owns this refresh token",
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="SHA-256 hex digest of the opaque token",
    )
    expires_at: Mapped[datetime] = mapped_column(
        nullable=False,
        index=True,
    )
    created_by_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    revoked_at: Mapped[datetime | None] = mapped_column(nullable=True, default=None)
    revoked_by_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    revoked_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)
    replaced_by_token_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("refresh_tokens.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("ix_refresh_tokens_token_hash", "token_hash", unique=True),
        Index("ix_refresh_tokens_user_active", "user_id", "revoked_at", "expires_at"),
    )
