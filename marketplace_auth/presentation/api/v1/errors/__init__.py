"""Error response mapping."""

from marketplace_auth.presentation.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from marketplace_auth.presentation.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = ["ErrorResponseBuilder", "register_exception_handlers"]
