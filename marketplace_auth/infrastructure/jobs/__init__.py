"""Background housekeeping jobs."""

from marketplace_auth.infrastructure.jobs.token_cleanup import (
    CleanupReport,
    TokenCleanupJob,
)

__all__ = ["CleanupReport", "TokenCleanupJob"]
