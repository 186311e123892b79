"""Structured logging adapters."""

from marketplace_auth.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
