"""Data transfer objects."""

from marketplace_auth.application.dtos.auth_dtos import (
    AuthTokens,
    RegisteredUser,
    UserSummary,
    to_user_summary,
)

__all__ = ["AuthTokens", "RegisteredUser", "UserSummary", "to_user_summary"]
