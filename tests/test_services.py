"""
Tests for the entity services, called directly against a session.

These cover the business rules without going through HTTP:
partial updates, the delete guard, and reference checks.
"""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from app.exceptions import BusinessRuleError, ConflictError, NotFoundError
from app.models import Author, Book
from app.schemas import AuthorCreate, AuthorUpdate, BookCreate, BookUpdate
from app.services.authors import AuthorService
from app.services.books import BookService


class TestAuthorService:
    """Tests for AuthorService."""

    def test_create_defaults_optional_fields(self, db_session):
        author = AuthorService(db_session).create(
            AuthorCreate(first_name="John", last_name="Doe")
        )

        assert isinstance(author.id, uuid.UUID)
        assert author.bio is None
        assert author.birth_date is None
        assert author.created_at is not None
        assert author.full_name == "John Doe"

    def test_get_missing_raises_not_found(self, db_session):
        missing_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            AuthorService(db_session).get(missing_id)

        assert exc_info.value.message == f"Author with ID {missing_id} not found"

    def test_update_only_touches_sent_fields(self, db_session, sample_author):
        service = AuthorService(db_session)

        author = service.update(sample_author.id, AuthorUpdate(bio="New bio"))

        assert author.bio == "New bio"
        assert author.first_name == "George"
        assert author.last_name == "Orwell"
        assert author.birth_date == date(1903, 6, 25)

    def test_update_explicit_null_clears_field(self, db_session, sample_author):
        author = AuthorService(db_session).update(
            sample_author.id, AuthorUpdate(birth_date=None)
        )

        assert author.birth_date is None
        assert author.bio is not None

    def test_update_null_name_is_rejected(self):
        with pytest.raises(ValidationError):
            AuthorUpdate(last_name=None)

    def test_update_accepts_camel_case_payload(self):
        update = AuthorUpdate.model_validate({"firstName": "Eric"})

        assert update.model_dump(exclude_unset=True) == {"first_name": "Eric"}

    def test_list_orders_newest_first(self, db_session):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        db_session.add_all(
            [
                Author(first_name="Old", last_name="A", created_at=base),
                Author(first_name="New", last_name="B", created_at=base + timedelta(days=2)),
                Author(first_name="Mid", last_name="C", created_at=base + timedelta(days=1)),
            ]
        )
        db_session.commit()

        result = AuthorService(db_session).list(page=1, limit=10)

        assert [a.first_name for a in result.data] == ["New", "Mid", "Old"]
        assert result.meta.total == 3

    def test_list_normalizes_page_and_limit(self, db_session, sample_author):
        result = AuthorService(db_session).list(page=0, limit=0)

        assert result.meta.page == 1
        assert result.meta.limit == 1
        assert len(result.data) == 1

    def test_delete_reports_exact_book_count(self, db_session, sample_author):
        db_session.add_all(
            [
                Book(title="1984", isbn="9780451524935", author_id=sample_author.id),
                Book(title="Animal Farm", isbn="9780451526342", author_id=sample_author.id),
            ]
        )
        db_session.commit()

        with pytest.raises(BusinessRuleError) as exc_info:
            AuthorService(db_session).delete(sample_author.id)

        assert exc_info.value.message == (
            "Cannot delete author with 2 associated book(s). "
            "Please delete the books first."
        )
        assert db_session.get(Author, sample_author.id) is not None

    def test_delete_without_books(self, db_session, sample_author):
        author_id = sample_author.id

        AuthorService(db_session).delete(author_id)

        assert db_session.get(Author, author_id) is None


class TestBookService:
    """Tests for BookService."""

    def test_create_checks_author_first(self, db_session, sample_book):
        """A missing author is reported even when the ISBN is also taken."""
        missing_id = uuid.uuid4()
        data = BookCreate(title="Dup", isbn="9780451524935", author_id=missing_id)

        with pytest.raises(NotFoundError) as exc_info:
            BookService(db_session).create(data)

        assert exc_info.value.entity == "Author"
        assert exc_info.value.entity_id == missing_id

    def test_create_duplicate_isbn(self, db_session, sample_book):
        data = BookCreate(title="Dup", isbn="9780451524935", author_id=sample_book.author_id)

        with pytest.raises(ConflictError) as exc_info:
            BookService(db_session).create(data)

        assert exc_info.value.field == "isbn"

    def test_create_loads_author(self, db_session, sample_author):
        book = BookService(db_session).create(
            BookCreate(title="Animal Farm", isbn="0-306-40615-2", author_id=sample_author.id)
        )

        assert book.isbn == "0306406152"
        assert book.author.full_name == "George Orwell"

    def test_update_revalidates_author(self, db_session, sample_book):
        with pytest.raises(NotFoundError):
            BookService(db_session).update(
                sample_book.id, BookUpdate(author_id=uuid.uuid4())
            )

    def test_update_keeps_unsent_fields(self, db_session, sample_book):
        book = BookService(db_session).update(sample_book.id, BookUpdate(title="Nineteen"))

        assert book.title == "Nineteen"
        assert book.isbn == "9780451524935"
        assert book.genre == "Dystopian"

    def test_update_null_author_is_rejected(self):
        with pytest.raises(ValidationError):
            BookUpdate(author_id=None)

    def test_list_filters_by_author(self, db_session, sample_book, second_author):
        db_session.add(Book(title="Emma", isbn="9780141439587", author_id=second_author.id))
        db_session.commit()

        result = BookService(db_session).list(page=1, limit=10, author_id=second_author.id)

        assert [b.title for b in result.data] == ["Emma"]
        assert result.data[0].author.full_name == "Jane Austen"

    def test_delete_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            BookService(db_session).delete(uuid.uuid4())
