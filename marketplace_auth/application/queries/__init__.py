"""Queries (CQRS read operations)."""

from marketplace_auth.application.queries.user_queries import GetUserProfile

__all__ = ["GetUserProfile"]
