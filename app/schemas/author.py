"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

Pydantic v2 Features Used:
- model_config: Configure models (alias generator, extra fields)
- Field(): Define constraints and metadata
- field_validator: Validate and transform field values
- model_fields_set / exclude_unset: tell "not sent" apart from "sent as null"
"""

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common import CamelModel

if TYPE_CHECKING:
    from app.schemas.book import BookResponse


def _strip_required_name(v: str | None, label: str) -> str:
    """Reject null or blank names and normalize surrounding whitespace."""
    if v is None:
        raise ValueError(f"{label} cannot be null")
    if not v.strip():
        raise ValueError(f"{label} cannot be empty or whitespace")
    return v.strip()


class AuthorBase(CamelModel):
    """
    Base schema with shared author fields.

    Contains fields common to create and response schemas.
    """

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's first name",
        examples=["George", "Jane"],
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's last name",
        examples=["Orwell", "Austen"],
    )

    bio: str | None = Field(
        default=None,
        max_length=5000,
        description="Author biography",
        examples=["English novelist and essayist, journalist and critic..."],
    )

    birth_date: date | None = Field(
        default=None,
        description="Date of birth (ISO 8601)",
        examples=["1903-06-25"],
    )


class AuthorCreate(AuthorBase):
    """
    Schema for creating a new author.

    Unknown fields (including id and timestamps) are rejected:
    identifiers and timestamps are always assigned by the server.

    Example request body:
    {
        "firstName": "John",
        "lastName": "Doe",
        "bio": "A prolific writer",
        "birthDate": "1980-01-01"
    }
    """

    model_config = ConfigDict(extra="forbid")

    @field_validator("first_name")
    @classmethod
    def first_name_must_not_be_empty(cls, v: str) -> str:
        return _strip_required_name(v, "firstName")

    @field_validator("last_name")
    @classmethod
    def last_name_must_not_be_empty(cls, v: str) -> str:
        return _strip_required_name(v, "lastName")


class AuthorUpdate(CamelModel):
    """
    Schema for partially updating an existing author (PATCH).

    Only fields present in the request body are applied; the service reads
    them with model_dump(exclude_unset=True), so an omitted field is never
    touched. Sending null clears the optional fields (bio, birthDate) and
    is rejected for the required names.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="Author's first name",
    )

    last_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="Author's last name",
    )

    bio: str | None = Field(
        default=None,
        max_length=5000,
        description="Author biography (null clears it)",
    )

    birth_date: date | None = Field(
        default=None,
        description="Date of birth (null clears it)",
    )

    # Validators only run for values that were actually sent, so an
    # explicit null reaches them while an omitted field does not.
    @field_validator("first_name")
    @classmethod
    def first_name_not_null(cls, v: str | None) -> str:
        return _strip_required_name(v, "firstName")

    @field_validator("last_name")
    @classmethod
    def last_name_not_null(cls, v: str | None) -> str:
        return _strip_required_name(v, "lastName")


class AuthorResponse(AuthorBase):
    """
    Schema for author responses (what the API returns).

    Includes database fields like id and timestamps, plus the derived
    fullName.
    """

    id: uuid.UUID = Field(..., description="Unique identifier")

    full_name: str = Field(..., description="First and last name")

    created_at: datetime = Field(..., description="When the author was created")

    updated_at: datetime = Field(..., description="When the author was last updated")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f0c6f7e-5f43-4c3e-9a53-2b0e4a0d6f11",
                "firstName": "George",
                "lastName": "Orwell",
                "fullName": "George Orwell",
                "bio": "English novelist and essayist.",
                "birthDate": "1903-06-25",
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )


class AuthorDetailResponse(AuthorResponse):
    """Single-author response, including the author's books (newest first)."""

    books: list["BookResponse"] = Field(default_factory=list)
