"""
Authors Router

CRUD endpoints for authors. Routes only parse input and shape output;
the rules live in AuthorService.

    POST   /authors
    GET    /authors
    GET    /authors/{author_id}
    PATCH  /authors/{author_id}
    DELETE /authors/{author_id}
"""

import uuid

from fastapi import APIRouter, status

from app.dependencies import AuthorFilters, AuthorServiceDep, Pagination
from app.schemas import (
    ERROR_RESPONSES,
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
    PaginatedResponse,
)

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses=ERROR_RESPONSES,
)


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    description="Create a new author. The id and timestamps are assigned by the server.",
)
def create_author(
    author_data: AuthorCreate,
    service: AuthorServiceDep,
) -> AuthorResponse:
    """Create a new author."""
    author = service.create(author_data)
    return AuthorResponse.model_validate(author)


@router.get(
    "",
    response_model=PaginatedResponse[AuthorResponse],
    summary="List authors",
    description="Paginated list of authors, newest first, with optional name filters.",
)
def list_authors(
    service: AuthorServiceDep,
    pagination: Pagination,
    filters: AuthorFilters,
) -> PaginatedResponse:
    """
    List authors with pagination.

    Examples:
        GET /authors?page=2&limit=5
        GET /authors?firstName=jo&lastName=doe
    """
    return service.list(
        page=pagination.page,
        limit=pagination.limit,
        first_name=filters.first_name,
        last_name=filters.last_name,
    )


@router.get(
    "/{author_id}",
    response_model=AuthorDetailResponse,
    summary="Get an author by ID",
    description="Retrieve an author together with their books.",
)
def get_author(
    author_id: uuid.UUID,
    service: AuthorServiceDep,
) -> AuthorDetailResponse:
    """Get a single author by ID."""
    author = service.get(author_id)
    return AuthorDetailResponse.model_validate(author)


@router.patch(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Update an author",
    description="Partially update an author. Only the fields sent are changed.",
)
def update_author(
    author_id: uuid.UUID,
    author_data: AuthorUpdate,
    service: AuthorServiceDep,
) -> AuthorResponse:
    """Update an existing author."""
    author = service.update(author_id, author_data)
    return AuthorResponse.model_validate(author)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    description="Delete an author. Fails with 400 while the author still has books.",
)
def delete_author(
    author_id: uuid.UUID,
    service: AuthorServiceDep,
) -> None:
    """Delete an author."""
    service.delete(author_id)
