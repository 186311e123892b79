"""Persistence adapters (SQLAlchemy async)."""

from marketplace_auth.infrastructure.persistence.base import BaseModel
from marketplace_auth.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "Database"]
