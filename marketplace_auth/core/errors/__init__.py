"""Core errors package.

Usage:
    from marketplace_auth.core.errors import DomainError, UnauthorizedError
"""

from marketplace_auth.core.errors.common_errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
)
from marketplace_auth.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "UnauthorizedError",
    "ConflictError",
    "NotFoundError",
    "BadRequestError",
    "RateLimitedError",
]
