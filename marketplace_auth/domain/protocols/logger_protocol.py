"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging. Implementations MUST emit key-value
context and MUST NOT be handed secrets (passwords, refresh tokens, OTP codes,
reset tokens).

Usage:
    from marketplace_auth.core.container import get_logger

    logger = get_logger()
    logger.info("user_registered", user_id=str(user.id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("login_failed", reason="invalid_password")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        ...

    def info(self, message: str, /, **context: Any) -> None:
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...
