"""
Books Router

CRUD endpoints for books:

    POST   /books
    GET    /books
    GET    /books/{book_id}
    PATCH  /books/{book_id}
    DELETE /books/{book_id}

Every book response embeds the book's author.
"""

import uuid

from fastapi import APIRouter, status

from app.dependencies import BookFilters, BookServiceDep, Pagination
from app.schemas import (
    ERROR_RESPONSES,
    BookCreate,
    BookDetailResponse,
    BookUpdate,
    PaginatedResponse,
)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses=ERROR_RESPONSES,
)


@router.post(
    "",
    response_model=BookDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a book for an existing author. ISBNs must be unique.",
)
def create_book(
    book_data: BookCreate,
    service: BookServiceDep,
) -> BookDetailResponse:
    """
    Create a new book.

    Raises (rendered by the error normalizer):
        404 if the author does not exist
        409 if the ISBN is already used
    """
    book = service.create(book_data)
    return BookDetailResponse.model_validate(book)


@router.get(
    "",
    response_model=PaginatedResponse[BookDetailResponse],
    summary="List books",
    description="Paginated list of books, newest first, with optional filters.",
)
def list_books(
    service: BookServiceDep,
    pagination: Pagination,
    filters: BookFilters,
) -> PaginatedResponse:
    """
    List books with pagination and optional filtering.

    Examples:
        GET /books?title=farm
        GET /books?authorId=<uuid>&page=2&limit=5
    """
    return service.list(
        page=pagination.page,
        limit=pagination.limit,
        title=filters.title,
        isbn=filters.isbn,
        author_id=filters.author_id,
    )


@router.get(
    "/{book_id}",
    response_model=BookDetailResponse,
    summary="Get a book by ID",
    description="Retrieve a book together with its author.",
)
def get_book(
    book_id: uuid.UUID,
    service: BookServiceDep,
) -> BookDetailResponse:
    """Get a single book by its ID."""
    book = service.get(book_id)
    return BookDetailResponse.model_validate(book)


@router.patch(
    "/{book_id}",
    response_model=BookDetailResponse,
    summary="Update a book",
    description="Partially update a book. A new authorId must reference an existing author.",
)
def update_book(
    book_id: uuid.UUID,
    book_data: BookUpdate,
    service: BookServiceDep,
) -> BookDetailResponse:
    """Update an existing book."""
    book = service.update(book_id, book_data)
    return BookDetailResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Permanently delete a book.",
)
def delete_book(
    book_id: uuid.UUID,
    service: BookServiceDep,
) -> None:
    """
    Delete a book.

    Returns 204 No Content on success.
    """
    service.delete(book_id)
