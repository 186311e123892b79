"""Container module - Centralized dependency injection.

Re-exports every factory so callers can write:

    from marketplace_auth.core.container import get_logger, get_register_user_handler

Organized by module:
- infrastructure: Core services (db, security, email, logging)
- services: Application services bound to a session
- auth_handlers: Handler factories
"""

from marketplace_auth.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_email_service,
    get_logger,
    get_password_reset_token_service,
    get_password_service,
    get_random_source,
    get_token_service,
)
from marketplace_auth.core.container.services import (
    build_otp_vault,
    build_refresh_token_ledger,
    get_lockout_guard,
)
from marketplace_auth.core.container.auth_handlers import (
    get_authenticate_user_handler,
    get_change_password_handler,
    get_generate_auth_tokens_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
    get_resend_verification_otp_handler,
    get_reset_password_handler,
    get_revoke_all_refresh_tokens_handler,
    get_revoke_refresh_token_handler,
    get_user_profile_handler,
    get_verify_email_otp_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_email_service",
    "get_logger",
    "get_password_reset_token_service",
    "get_password_service",
    "get_random_source",
    "get_token_service",
    # Services
    "build_otp_vault",
    "build_refresh_token_ledger",
    "get_lockout_guard",
    # Handlers
    "get_authenticate_user_handler",
    "get_change_password_handler",
    "get_generate_auth_tokens_handler",
    "get_refresh_access_token_handler",
    "get_register_user_handler",
    "get_request_password_reset_handler",
    "get_resend_verification_otp_handler",
    "get_reset_password_handler",
    "get_revoke_all_refresh_tokens_handler",
    "get_revoke_refresh_token_handler",
    "get_user_profile_handler",
    "get_verify_email_otp_handler",
]
