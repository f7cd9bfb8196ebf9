#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books for development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py

    # Keep existing rows
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing data (unless --keep is given)
3. Creates sample authors and their books
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Author, Book

logger = logging.getLogger("seed_data")

AUTHORS = [
    {
        "first_name": "George",
        "last_name": "Orwell",
        "bio": "English novelist and essayist, journalist and critic.",
        "birth_date": date(1903, 6, 25),
    },
    {
        "first_name": "Jane",
        "last_name": "Austen",
        "bio": "English novelist known for six major novels about the landed gentry.",
        "birth_date": date(1775, 12, 16),
    },
    {
        "first_name": "F. Scott",
        "last_name": "Fitzgerald",
        "bio": "American novelist of the Jazz Age.",
        "birth_date": date(1896, 9, 24),
    },
    {
        "first_name": "J.R.R.",
        "last_name": "Tolkien",
        "bio": "English writer, poet, philologist, and academic.",
        "birth_date": date(1892, 1, 3),
    },
]

BOOKS = [
    {
        "title": "1984",
        "isbn": "9780451524935",
        "published_date": date(1949, 6, 8),
        "genre": "Dystopian",
        "author": "Orwell",
    },
    {
        "title": "Animal Farm",
        "isbn": "9780451526342",
        "published_date": date(1945, 8, 17),
        "genre": "Satire",
        "author": "Orwell",
    },
    {
        "title": "Pride and Prejudice",
        "isbn": "9780141439518",
        "published_date": date(1813, 1, 28),
        "genre": "Romance",
        "author": "Austen",
    },
    {
        "title": "The Great Gatsby",
        "isbn": "9780743273565",
        "published_date": date(1925, 4, 10),
        "genre": "Classic",
        "author": "Fitzgerald",
    },
    {
        "title": "The Hobbit",
        "isbn": "9780547928227",
        "published_date": date(1937, 9, 21),
        "genre": "Fantasy",
        "author": "Tolkien",
    },
]


def clear_data(db: Session) -> None:
    """Delete all books, then all authors."""
    logger.info("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors, keyed by last name."""
    authors = {}
    for data in AUTHORS:
        author = Author(**data)
        db.add(author)
        authors[author.last_name] = author
    db.commit()
    logger.info(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books for the seeded authors."""
    books = []
    for data in BOOKS:
        data = dict(data)
        author = authors[data.pop("author")]
        book = Book(**data, author_id=author.id)
        db.add(book)
        books.append(book)
    db.commit()
    logger.info(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    create_tables()

    db = SessionLocal()
    try:
        if clear_existing:
            clear_data(db)
        authors = create_authors(db)
        books = create_books(db, authors)
        logger.info(
            f"Seeding completed: {len(authors)} authors, {len(books)} books"
        )
    except Exception:
        db.rollback()
        logger.exception("Error seeding database")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    parser = argparse.ArgumentParser(description="Seed the Library API database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing rows instead of clearing them first",
    )
    args = parser.parse_args()

    seed_database(clear_existing=not args.keep)
