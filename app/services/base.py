"""
Shared helpers for the entity services.

- contains_insensitive(): case-insensitive substring filter
- paginate(): count + fetch one page of a select statement
- commit_or_rollback(): commit, or roll back and re-raise on failure
"""

from typing import Any, Sequence

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from app.utils.pagination import PageWindow


def contains_insensitive(column: InstrumentedAttribute, term: str) -> ColumnElement[bool]:
    """
    Build a case-insensitive "column contains term" condition.

    Both sides are lower-cased explicitly instead of relying on the
    database collation, and LIKE wildcards (% and _) in the term are
    escaped so they match literally.
    """
    return func.lower(column).contains(term.lower(), autoescape=True)


def paginate(
    db: Session,
    stmt: Select,
    window: PageWindow,
    *order_by: Any,
) -> tuple[Sequence[Any], int]:
    """
    Run a filtered select for one page.

    Args:
        db: Database session
        stmt: Select statement with filters (and loader options) applied
        window: Normalized page/limit/skip
        order_by: Ordering for the page query

    Returns:
        (items on this page, total number of matching rows)
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = db.execute(count_stmt).scalar() or 0

    page_stmt = stmt.order_by(*order_by).offset(window.skip).limit(window.limit)
    items = db.execute(page_stmt).scalars().all()
    return items, total


def commit_or_rollback(db: Session) -> None:
    """
    Commit the session; on any database error roll back and re-raise.

    The original exception propagates so the error normalizer can
    translate constraint violations.
    """
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
