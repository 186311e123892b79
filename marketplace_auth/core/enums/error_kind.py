"""Closed set of failure kinds surfaced by session operations.

Each kind maps to exactly one HTTP status at the boundary:

- UNAUTHORIZED: bad credentials, invalid/foreign/expired token, unconfirmed email
- CONFLICT: duplicate email, already-revoked token
- NOT_FOUND: unknown user or resource
- BAD_REQUEST: malformed input, locked account, failed reset
- RATE_LIMITED: OTP throttle breach
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure tag carried by every DomainError."""

    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    RATE_LIMITED = "rate_limited"
