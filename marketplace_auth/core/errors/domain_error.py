"""Base domain error for railway-oriented programming.

DomainError is the base class for every failure a session operation can
return. It is data, not an exception: it travels inside ``Failure`` and is
translated to an HTTP response by the presentation layer.

Each subclass pins one ``ErrorKind`` tag, so the closed taxonomy
(unauthorized, conflict, not found, bad request, rate limited) is encoded in
the type rather than in an exception hierarchy.

Usage:
    from marketplace_auth.core.errors import UnauthorizedError
    from marketplace_auth.core.enums import ErrorCode

    return Failure(error=UnauthorizedError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message="Invalid credentials",
    ))
"""

from dataclasses import dataclass
from typing import ClassVar

from marketplace_auth.core.enums import ErrorCode, ErrorKind


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message, safe to show to the caller.
        details: Optional context for logging and debugging.
    """

    KIND: ClassVar[ErrorKind] = ErrorKind.BAD_REQUEST

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    @property
    def kind(self) -> ErrorKind:
        """Taxonomy tag used to pick the HTTP status."""
        return type(self).KIND

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
