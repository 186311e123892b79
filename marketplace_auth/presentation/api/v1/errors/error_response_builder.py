"""Error response builder.

Converts domain errors into the ``{statusCode, message, errors?}`` envelope.
Each ``ErrorKind`` maps to one fixed HTTP status; nothing beyond the error's
own message reaches the caller.
"""

from fastapi import status
from fastapi.responses import JSONResponse

from marketplace_auth.core.enums import ErrorKind
from marketplace_auth.core.errors import BadRequestError, DomainError, RateLimitedError
from marketplace_auth.schemas.common_schemas import ErrorResponse, FieldError

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}


class ErrorResponseBuilder:
    """Build error envelope responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(error)
    """

    @staticmethod
    def status_for(error: DomainError) -> int:
        """Map an error's taxonomy kind to its HTTP status."""
        return _STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST)

    @staticmethod
    def from_domain_error(error: DomainError) -> JSONResponse:
        """Convert a DomainError to a JSON error response.

        Args:
            error: Failure returned by a handler.

        Returns:
            JSONResponse with the error envelope. Bad requests tied to a
            field carry it in ``errors``; rate limits carry Retry-After.
        """
        status_code = ErrorResponseBuilder.status_for(error)

        errors = None
        if isinstance(error, BadRequestError) and error.field:
            errors = [FieldError(field=error.field, message=error.message)]

        headers: dict[str, str] | None = None
        if isinstance(error, RateLimitedError) and error.retry_after_seconds > 0:
            headers = {"Retry-After": str(error.retry_after_seconds)}
        elif status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return ErrorResponseBuilder.build(
            status_code=status_code,
            message=error.message,
            errors=errors,
            headers=headers,
        )

    @staticmethod
    def build(
        *,
        status_code: int,
        message: str,
        errors: list[FieldError] | None = None,
        headers: dict[str, str] | None = None,
    ) -> JSONResponse:
        body = ErrorResponse(status_code=status_code, message=message, errors=errors)
        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(by_alias=True, exclude_none=True),
            headers=headers,
        )
