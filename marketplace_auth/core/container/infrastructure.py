"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL, SQLite in tests)
- Password hashing (bcrypt)
- Token generation (JWT)
- Secure random source
- Email (stub)
- Logging (console)

Request-scoped:
- Database session
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.core.config import settings
from marketplace_auth.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from marketplace_auth.domain.protocols import (
        EmailProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        PasswordResetTokenServiceProtocol,
        RandomSourceProtocol,
        TokenGenerationProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from marketplace_auth.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Handlers commit or roll back explicitly; the session context still rolls
    back on an unhandled exception and always closes the session.

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_random_source() -> "RandomSourceProtocol":
    """Get the OS-backed secure random source."""
    from marketplace_auth.infrastructure.security import SystemRandomSource

    return SystemRandomSource()


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Cost factor comes from BCRYPT_ROUNDS (default 12, ~250ms per hash).
    """
    from marketplace_auth.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get JWT token service singleton (app-scoped)."""
    from marketplace_auth.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache()
def get_password_reset_token_service() -> "PasswordResetTokenServiceProtocol":
    """Get password reset token service singleton (app-scoped)."""
    from marketplace_auth.infrastructure.security import PasswordResetTokenService

    return PasswordResetTokenService(
        random_source=get_random_source(),
        expiration_minutes=settings.password_reset_token_expire_minutes,
    )


# ============================================================================
# Email Service (Application-Scoped)
# ============================================================================


@lru_cache()
def get_email_service() -> "EmailProtocol":
    """Get email service singleton (app-scoped).

    Only the stub adapter exists. Codes and links are written to the log in
    development so the flow can be exercised without a mail server.
    """
    from marketplace_auth.infrastructure.email import StubEmailService

    return StubEmailService(logger=get_logger(), log_secrets=settings.is_development)
