"""Result types for railway-oriented programming.

Every session operation (register, login, refresh, verify, revoke) returns a
``Result`` instead of raising for business failures. The presentation layer
inspects the tag and maps the carried ``DomainError`` to an HTTP response.

Usage:
    def lookup(token: str) -> Result[RefreshToken, DomainError]:
        if token not in ledger:
            return Failure(error=UnauthorizedError(...))
        return Success(value=ledger[token])

    match lookup(raw):
        case Success(value=token):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
