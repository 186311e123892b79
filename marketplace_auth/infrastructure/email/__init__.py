"""Email service implementations.

- StubEmailService: console logging for development/testing
"""

from marketplace_auth.infrastructure.email.stub_email_service import (
    SentEmail,
    StubEmailService,
)

__all__ = ["SentEmail", "StubEmailService"]
