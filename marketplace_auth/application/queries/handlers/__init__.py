"""Query handlers."""

from marketplace_auth.application.queries.handlers.get_user_profile_handler import (
    GetUserProfileHandler,
)

__all__ = ["GetUserProfileHandler"]
