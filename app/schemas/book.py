"""
Book Pydantic Schemas

Handles:
- ISBN validation (ISBN-10 / ISBN-13 with check digit)
- The author reference (authorId)
- Nested author in single-book and list responses
"""

import re
import uuid
from datetime import date, datetime

from pydantic import ConfigDict, Field, field_validator

from app.schemas.author import AuthorResponse
from app.schemas.common import CamelModel


def normalize_isbn(v: str) -> str:
    """
    Validate an ISBN and return it without hyphens or spaces.

    Accepts:
    - ISBN-10: 9 digits followed by a digit or 'X', weighted sum divisible by 11
    - ISBN-13: 13 digits, alternating 1/3 weighted sum divisible by 10

    Raises:
        ValueError: If the format or the check digit is wrong
    """
    cleaned = re.sub(r"[-\s]", "", v).upper()

    if len(cleaned) == 10:
        if not re.match(r"^\d{9}[\dX]$", cleaned):
            raise ValueError(
                "Invalid ISBN-10 format. Must be 10 characters: "
                "9 digits followed by a digit or 'X'"
            )
        digits = [10 if c == "X" else int(c) for c in cleaned]
        checksum = sum((10 - i) * d for i, d in enumerate(digits))
        if checksum % 11 != 0:
            raise ValueError("Invalid ISBN-10 check digit")
    elif len(cleaned) == 13:
        if not cleaned.isdigit():
            raise ValueError("Invalid ISBN-13 format. Must be exactly 13 digits")
        checksum = sum(
            int(c) * (3 if i % 2 else 1) for i, c in enumerate(cleaned)
        )
        if checksum % 10 != 0:
            raise ValueError("Invalid ISBN-13 check digit")
    else:
        raise ValueError(
            "ISBN must be either 10 or 13 characters (excluding hyphens)"
        )

    return cleaned


def _strip_title(v: str | None) -> str:
    if v is None:
        raise ValueError("title cannot be null")
    if not v.strip():
        raise ValueError("Title cannot be empty or whitespace")
    return v.strip()


class BookBase(CamelModel):
    """Base schema with shared book fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    isbn: str = Field(
        ...,
        max_length=20,
        description="ISBN-10 or ISBN-13 (hyphens allowed)",
        examples=["978-0451524935", "0-306-40615-2"],
    )

    published_date: date | None = Field(
        default=None,
        description="Date of publication",
        examples=["1949-06-08"],
    )

    genre: str | None = Field(
        default=None,
        max_length=100,
        description="Genre label",
        examples=["Dystopian", "Romance"],
    )

    author_id: uuid.UUID = Field(
        ...,
        description="ID of the book's author",
    )


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "isbn": "978-0451524935",
        "publishedDate": "1949-06-08",
        "genre": "Dystopian",
        "authorId": "3f0c6f7e-5f43-4c3e-9a53-2b0e4a0d6f11"
    }
    """

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        return _strip_title(v)

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        return normalize_isbn(v)


class BookUpdate(CamelModel):
    """
    Schema for partially updating a book (PATCH).

    Omitted fields are left untouched. null clears publishedDate and
    genre; title, isbn and authorId cannot be cleared.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=500)

    isbn: str | None = Field(default=None, max_length=20)

    published_date: date | None = Field(default=None)

    genre: str | None = Field(default=None, max_length=100)

    author_id: uuid.UUID | None = Field(default=None)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: str | None) -> str:
        return _strip_title(v)

    @field_validator("isbn")
    @classmethod
    def isbn_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("isbn cannot be null")
        return normalize_isbn(v)

    @field_validator("author_id")
    @classmethod
    def author_id_not_null(cls, v: uuid.UUID | None) -> uuid.UUID:
        if v is None:
            raise ValueError("authorId cannot be null")
        return v


class BookResponse(BookBase):
    """Book as stored, without the nested author."""

    id: uuid.UUID = Field(..., description="Unique identifier")

    created_at: datetime = Field(..., description="When the book was created")

    updated_at: datetime = Field(..., description="When the book was last updated")


class BookDetailResponse(BookResponse):
    """
    Book response including its author.

    Used for single-book reads, writes, and list items.
    """

    author: AuthorResponse

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "9d1e2f4a-8b7c-4d3e-a1f2-0c9b8a7d6e5f",
                "title": "1984",
                "isbn": "9780451524935",
                "publishedDate": "1949-06-08",
                "genre": "Dystopian",
                "authorId": "3f0c6f7e-5f43-4c3e-9a53-2b0e4a0d6f11",
                "author": {
                    "id": "3f0c6f7e-5f43-4c3e-9a53-2b0e4a0d6f11",
                    "firstName": "George",
                    "lastName": "Orwell",
                    "fullName": "George Orwell",
                    "bio": None,
                    "birthDate": None,
                    "createdAt": "2024-01-15T10:30:00Z",
                    "updatedAt": "2024-01-15T10:30:00Z",
                },
                "createdAt": "2024-01-15T10:31:00Z",
                "updatedAt": "2024-01-15T10:31:00Z",
            }
        },
    )
