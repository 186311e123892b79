"""Global exception handlers for the FastAPI application.

Every error leaves the service in the ``{statusCode, message, errors?}``
envelope:
- Request validation failures → 400 with per-field errors
- HTTPException (e.g. missing bearer token) → its own status
- Anything unhandled → 500 with a generic message

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace_auth.core.container import get_logger
from marketplace_auth.presentation.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from marketplace_auth.schemas.common_schemas import FieldError

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _field_name(loc: tuple[str | int, ...]) -> str:
    parts = [str(p) for p in loc if p not in _LOCATION_PREFIXES]
    if not parts:
        return "body"
    return ".".join(to_camel(p) for p in parts)


def _clean_message(msg: str) -> str:
    # pydantic prefixes AfterValidator failures with "Value error, "
    return msg.removeprefix("Value error, ")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation failures into a 400 with field errors."""
    errors = [
        FieldError(
            field=_field_name(tuple(err.get("loc", ()))),
            message=_clean_message(err.get("msg", "Invalid value")),
        )
        for err in exc.errors()
    ]
    return ErrorResponseBuilder.build(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        errors=errors,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap HTTPException detail in the error envelope."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return ErrorResponseBuilder.build(
        status_code=exc.status_code,
        message=message,
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    The exception is logged with its type; the caller only sees a generic
    500 so that no internal detail leaks.
    """
    get_logger().error(
        "unhandled_exception",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )
    return ErrorResponseBuilder.build(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
