"""
Author Service

Business rules for authors:
- reads include the author's books
- partial updates only touch fields present in the request
- an author with books cannot be deleted (the count is reported)
"""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.exceptions import BusinessRuleError, NotFoundError
from app.models import Author, Book
from app.schemas import AuthorCreate, AuthorResponse, AuthorUpdate, PaginatedResponse
from app.services.base import commit_or_rollback, contains_insensitive, paginate
from app.utils.pagination import calculate_pagination_params, create_paginated_response

logger = logging.getLogger(__name__)


class AuthorService:
    """
    CRUD operations for authors.

    One instance per request, bound to that request's session.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, data: AuthorCreate) -> Author:
        """Create an author; optional fields default to null."""
        author = Author(
            first_name=data.first_name,
            last_name=data.last_name,
            bio=data.bio,
            birth_date=data.birth_date,
        )
        self.db.add(author)
        commit_or_rollback(self.db)
        self.db.refresh(author)

        logger.info(f"Created author {author.id} ({author.full_name})")
        return author

    def list(
        self,
        page: int,
        limit: int,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> PaginatedResponse:
        """
        List authors, newest first.

        Name filters are case-insensitive substring matches and are
        combined with AND. Empty filters are ignored.
        """
        window = calculate_pagination_params(page, limit)

        stmt = select(Author)
        if first_name:
            stmt = stmt.where(contains_insensitive(Author.first_name, first_name))
        if last_name:
            stmt = stmt.where(contains_insensitive(Author.last_name, last_name))

        authors, total = paginate(self.db, stmt, window, Author.created_at.desc())

        return create_paginated_response(
            [AuthorResponse.model_validate(a) for a in authors],
            total,
            window.page,
            window.limit,
        )

    def get(self, author_id: uuid.UUID) -> Author:
        """
        Get an author with their books.

        Raises:
            NotFoundError: If no author has this id
        """
        stmt = (
            select(Author)
            .options(selectinload(Author.books))
            .where(Author.id == author_id)
        )
        author = self.db.execute(stmt).scalar_one_or_none()

        if author is None:
            raise NotFoundError("Author", author_id)
        return author

    def update(self, author_id: uuid.UUID, data: AuthorUpdate) -> Author:
        """
        Apply a partial update.

        exclude_unset=True keeps only the fields the client sent, so an
        explicit null clears a field and an omitted one stays as it is.
        """
        author = self.get(author_id)

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(author, field, value)

        commit_or_rollback(self.db)
        self.db.refresh(author)
        return author

    def delete(self, author_id: uuid.UUID) -> None:
        """
        Delete an author that has no books.

        Raises:
            NotFoundError: If no author has this id
            BusinessRuleError: If books still reference the author
        """
        author = self.get(author_id)

        count_stmt = select(func.count(Book.id)).where(Book.author_id == author_id)
        books_count = self.db.execute(count_stmt).scalar() or 0

        if books_count > 0:
            raise BusinessRuleError(
                f"Cannot delete author with {books_count} associated book(s). "
                "Please delete the books first."
            )

        self.db.delete(author)
        commit_or_rollback(self.db)
        logger.info(f"Deleted author {author_id}")
