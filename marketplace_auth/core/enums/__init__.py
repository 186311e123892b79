"""Core enums package.

Usage:
    from marketplace_auth.core.enums import ErrorCode, ErrorKind, Environment
"""

from marketplace_auth.core.enums.environment import Environment
from marketplace_auth.core.enums.error_code import ErrorCode
from marketplace_auth.core.enums.error_kind import ErrorKind

__all__ = ["Environment", "ErrorCode", "ErrorKind"]
