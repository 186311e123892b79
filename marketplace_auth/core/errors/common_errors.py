"""Error classes for the closed failure taxonomy.

- UnauthorizedError: bad credentials, invalid/foreign/expired token,
  unconfirmed email
- ConflictError: duplicate email, already-revoked token
- NotFoundError: unknown user or resource
- BadRequestError: malformed input, locked account, failed reset
- RateLimitedError: OTP throttle breach
"""

from dataclasses import dataclass
from typing import ClassVar

from marketplace_auth.core.enums import ErrorKind
from marketplace_auth.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class UnauthorizedError(DomainError):
    """Caller could not be authenticated or does not own the resource."""

    KIND: ClassVar[ErrorKind] = ErrorKind.UNAUTHORIZED


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate, terminal state already reached).

    Attributes:
        resource_type: Type of resource in conflict.
    """

    KIND: ClassVar[ErrorKind] = ErrorKind.CONFLICT

    resource_type: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, RefreshToken, ...).
    """

    KIND: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND

    resource_type: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BadRequestError(DomainError):
    """Request cannot be honoured as submitted.

    Attributes:
        field: Field name that failed validation, if any.
    """

    KIND: ClassVar[ErrorKind] = ErrorKind.BAD_REQUEST

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitedError(DomainError):
    """Too many requests for the same subject.

    Attributes:
        retry_after_seconds: Seconds until the caller may try again.
    """

    KIND: ClassVar[ErrorKind] = ErrorKind.RATE_LIMITED

    retry_after_seconds: int = 0
