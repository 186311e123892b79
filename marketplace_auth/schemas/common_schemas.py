"""Response envelopes shared by every endpoint.

Success: ``{"success": true, "data": ..., "message": ...}``
Error:   ``{"statusCode": 400, "message": ..., "errors": [{"field", "message"}]}``

JSON field names are camelCase; Python attribute names stay snake_case.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base schema with camelCase aliases.

    Accepts both ``refreshToken`` and ``refresh_token`` on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ApiResponse(CamelModel, Generic[DataT]):
    """Success envelope.

    Attributes:
        success: Always True for 2xx responses.
        data: Endpoint payload, if any.
        message: Human-readable outcome, if any.
    """

    success: bool = True
    data: DataT | None = None
    message: str | None = None


class FieldError(CamelModel):
    """Validation failure for a single field."""

    field: str = Field(..., description="Request field (camelCase)")
    message: str = Field(..., description="What is wrong with it")


class ErrorResponse(CamelModel):
    """Error envelope.

    Attributes:
        status_code: HTTP status repeated in the body.
        message: Taxonomy message, never internal detail.
        errors: Per-field validation failures, if any.
    """

    status_code: int
    message: str
    errors: list[FieldError] | None = None
