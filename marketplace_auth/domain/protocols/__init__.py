"""Domain protocols (ports).

Infrastructure adapters implement these structurally.
"""

from marketplace_auth.domain.protocols.email_otp_repository import EmailOtpRepository
from marketplace_auth.domain.protocols.email_protocol import EmailProtocol
from marketplace_auth.domain.protocols.logger_protocol import LoggerProtocol
from marketplace_auth.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from marketplace_auth.domain.protocols.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from marketplace_auth.domain.protocols.password_reset_token_service_protocol import (
    PasswordResetTokenServiceProtocol,
)
from marketplace_auth.domain.protocols.random_source_protocol import (
    RandomSourceProtocol,
)
from marketplace_auth.domain.protocols.refresh_token_repository import (
    RefreshTokenRepository,
)
from marketplace_auth.domain.protocols.token_generation_protocol import (
    TokenGenerationProtocol,
)
from marketplace_auth.domain.protocols.transaction_protocol import TransactionProtocol
from marketplace_auth.domain.protocols.user_repository import UserRepository

__all__ = [
    "UserRepository",
    "RefreshTokenRepository",
    "EmailOtpRepository",
    "PasswordResetTokenRepository",
    "PasswordResetTokenServiceProtocol",
    "PasswordHashingProtocol",
    "RandomSourceProtocol",
    "TokenGenerationProtocol",
    "EmailProtocol",
    "LoggerProtocol",
    "TransactionProtocol",
]
