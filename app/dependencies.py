"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Easy to override dependencies in tests (get_db)
3. Separation of Concerns: Routes stay thin, services hold the rules
4. Lifecycle Management: FastAPI handles creation/cleanup

Provided here:
- DbSession: per-request SQLAlchemy session
- Pagination: page/limit query parameters
- AuthorFilters / BookFilters: list filter query parameters
- AuthorServiceDep / BookServiceDep: services bound to the request session
"""

import uuid
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.services.authors import AuthorService
from app.services.books import BookService
from app.utils.pagination import DEFAULT_PAGE, max_page_for_limit

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    Out-of-range values are rejected here with a 400 validation error;
    they are never silently clamped.

        GET /books?page=2&limit=20
    """

    def __init__(
        self,
        page: int = Query(
            default=DEFAULT_PAGE,
            ge=1,
            le=max_page_for_limit(settings.pagination_max_limit),
            description="Page number (1-indexed)",
            examples=[1, 2, 3],
        ),
        limit: int = Query(
            default=settings.pagination_default_limit,
            ge=settings.pagination_min_limit,
            le=settings.pagination_max_limit,
            description=(
                f"Number of items per page "
                f"({settings.pagination_min_limit}-{settings.pagination_max_limit})"
            ),
            examples=[10, 25, 50],
        ),
    ) -> None:
        self.page = page
        self.limit = limit


# Type alias for cleaner route signatures
Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# List Filters
# =============================================================================
class AuthorFilterParams:
    """
    Optional author filters, matched case-insensitively as substrings.

        GET /authors?firstName=geo&lastName=orw
    """

    def __init__(
        self,
        first_name: str | None = Query(
            default=None,
            alias="firstName",
            max_length=100,
            description="Filter by first name (partial match, case-insensitive)",
            examples=["geo"],
        ),
        last_name: str | None = Query(
            default=None,
            alias="lastName",
            max_length=100,
            description="Filter by last name (partial match, case-insensitive)",
            examples=["orw"],
        ),
    ) -> None:
        self.first_name = first_name
        self.last_name = last_name


class BookFilterParams:
    """
    Optional book filters.

        GET /books?title=farm&isbn=978&authorId=<uuid>
    """

    def __init__(
        self,
        title: str | None = Query(
            default=None,
            max_length=500,
            description="Filter by title (partial match, case-insensitive)",
            examples=["1984", "pride"],
        ),
        isbn: str | None = Query(
            default=None,
            max_length=20,
            description="Filter by ISBN (partial match)",
            examples=["978045"],
        ),
        author_id: uuid.UUID | None = Query(
            default=None,
            alias="authorId",
            description="Only books by this author",
        ),
    ) -> None:
        self.title = title
        self.isbn = isbn
        self.author_id = author_id


AuthorFilters = Annotated[AuthorFilterParams, Depends()]
BookFilters = Annotated[BookFilterParams, Depends()]


# =============================================================================
# Services
# =============================================================================
def get_author_service(db: DbSession) -> AuthorService:
    """Author service bound to the request's database session."""
    return AuthorService(db)


def get_book_service(db: DbSession) -> BookService:
    """Book service bound to the request's database session."""
    return BookService(db)


AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
