"""
Shared Pydantic Schemas

- CamelModel: base class exposing snake_case attributes as camelCase JSON
- PaginationMeta / PaginatedResponse: list endpoint envelope
- ErrorResponse: the uniform error envelope returned for every failure
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base schema for the public API.

    Python code uses snake_case field names; JSON uses camelCase aliases.
    populate_by_name lets responses be built straight from SQLAlchemy
    model attributes (author.first_name -> "firstName").
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    """Pagination metadata returned alongside every list response."""

    total: int = Field(..., ge=0, description="Items matching the filters")
    page: int = Field(..., ge=1, description="Current page (1-indexed)")
    limit: int = Field(..., ge=1, description="Items per page")
    total_pages: int = Field(..., ge=0, description="ceil(total / limit)")
    has_next_page: bool = Field(..., description="page < totalPages")
    has_previous_page: bool = Field(..., description="page > 1")


class PaginatedResponse(CamelModel, Generic[T]):
    """
    Generic list envelope.

    Usage:
        @router.get("", response_model=PaginatedResponse[AuthorResponse])
    """

    data: list[T]
    meta: PaginationMeta


class ErrorResponse(CamelModel):
    """
    Uniform error envelope.

    Every error path (validation, not found, conflict, bad reference,
    business rule, database, unexpected) is rendered with this shape.
    """

    success: bool = Field(default=False)
    status_code: int = Field(..., description="HTTP status code")
    message: str | list[str] = Field(
        ...,
        description="Error message, or one message per field for validation errors",
    )
    error: str = Field(..., description="Error category label, e.g. 'Not Found'")
    timestamp: str = Field(..., description="ISO 8601 UTC time of the error")
    path: str = Field(..., description="Request path that produced the error")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "statusCode": 404,
                "message": "Author with ID 3f0c6f7e-5f43-4c3e-9a53-2b0e4a0d6f11 not found",
                "error": "Not Found",
                "timestamp": "2024-01-15T10:30:00.000Z",
                "path": "/authors/3f0c6f7e-5f43-4c3e-9a53-2b0e4a0d6f11",
            }
        },
    )


# Reusable OpenAPI documentation for error responses
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation or business rule error"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    409: {"model": ErrorResponse, "description": "Uniqueness conflict"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Unexpected error"},
}
