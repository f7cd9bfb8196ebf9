"""
Book Service

Business rules for books:
- the referenced author must exist before a book is written
  (checked on create and whenever authorId changes)
- ISBNs are unique; checked up front, with the database unique
  constraint as the backstop for concurrent writers
- reads and list items include the book's author
"""

import logging
import re
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.exceptions import ConflictError, NotFoundError
from app.models import Author, Book
from app.schemas import BookCreate, BookDetailResponse, BookUpdate, PaginatedResponse
from app.services.base import commit_or_rollback, contains_insensitive, paginate
from app.utils.pagination import calculate_pagination_params, create_paginated_response

logger = logging.getLogger(__name__)


class BookService:
    """CRUD operations for books, bound to one request's session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------
    def _ensure_author_exists(self, author_id: uuid.UUID) -> None:
        """
        Raises:
            NotFoundError: If the referenced author does not exist
        """
        exists = self.db.execute(
            select(Author.id).where(Author.id == author_id)
        ).scalar_one_or_none()
        if exists is None:
            raise NotFoundError("Author", author_id)

    def _ensure_isbn_available(
        self,
        isbn: str,
        exclude_book_id: uuid.UUID | None = None,
    ) -> None:
        """
        Raises:
            ConflictError: If another book already uses this ISBN
        """
        stmt = select(Book.id).where(Book.isbn == isbn)
        if exclude_book_id is not None:
            stmt = stmt.where(Book.id != exclude_book_id)
        if self.db.execute(stmt).first() is not None:
            raise ConflictError("isbn")

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------
    def create(self, data: BookCreate) -> Book:
        """
        Create a book for an existing author.

        The author check runs before the insert so a missing author is
        reported as "Author with ID ... not found" rather than as a
        foreign key failure.
        """
        self._ensure_author_exists(data.author_id)
        self._ensure_isbn_available(data.isbn)

        book = Book(
            title=data.title,
            isbn=data.isbn,
            published_date=data.published_date,
            genre=data.genre,
            author_id=data.author_id,
        )
        self.db.add(book)
        commit_or_rollback(self.db)

        logger.info(f"Created book {book.id} ({book.isbn}) for author {book.author_id}")
        return self.get(book.id)

    def list(
        self,
        page: int,
        limit: int,
        title: str | None = None,
        isbn: str | None = None,
        author_id: uuid.UUID | None = None,
    ) -> PaginatedResponse:
        """
        List books with their authors, newest first.

        title and isbn are case-insensitive substring filters (hyphens and
        spaces in the isbn term are ignored); author_id is an exact match.
        All filters are optional and combined with AND.
        """
        window = calculate_pagination_params(page, limit)

        stmt = select(Book).options(selectinload(Book.author))
        if title:
            stmt = stmt.where(contains_insensitive(Book.title, title))
        # Stored ISBNs carry no hyphens or spaces
        isbn_term = re.sub(r"[-\s]", "", isbn or "")
        if isbn_term:
            stmt = stmt.where(contains_insensitive(Book.isbn, isbn_term))
        if author_id is not None:
            stmt = stmt.where(Book.author_id == author_id)

        books, total = paginate(self.db, stmt, window, Book.created_at.desc())

        return create_paginated_response(
            [BookDetailResponse.model_validate(b) for b in books],
            total,
            window.page,
            window.limit,
        )

    def get(self, book_id: uuid.UUID) -> Book:
        """
        Get a book with its author.

        Raises:
            NotFoundError: If no book has this id
        """
        stmt = (
            select(Book)
            .options(selectinload(Book.author))
            .where(Book.id == book_id)
            .execution_options(populate_existing=True)
        )
        book = self.db.execute(stmt).scalar_one_or_none()

        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def update(self, book_id: uuid.UUID, data: BookUpdate) -> Book:
        """
        Apply a partial update.

        Only fields present in the request change. A new authorId must
        point to an existing author; a new ISBN must not belong to
        another book.
        """
        book = self.get(book_id)
        update_data = data.model_dump(exclude_unset=True)

        if "author_id" in update_data and update_data["author_id"] != book.author_id:
            self._ensure_author_exists(update_data["author_id"])

        if "isbn" in update_data and update_data["isbn"] != book.isbn:
            self._ensure_isbn_available(update_data["isbn"], exclude_book_id=book.id)

        for field, value in update_data.items():
            setattr(book, field, value)

        commit_or_rollback(self.db)
        return self.get(book_id)

    def delete(self, book_id: uuid.UUID) -> None:
        """
        Delete a book.

        Raises:
            NotFoundError: If no book has this id
        """
        book = self.get(book_id)
        self.db.delete(book)
        commit_or_rollback(self.db)
        logger.info(f"Deleted book {book_id}")
