"""
Pagination Utilities

Pure functions that turn page/limit query parameters into an offset for
the database query and build the metadata returned with list responses.

Page numbers are 1-indexed for clients; database OFFSET is 0-indexed:
    page 1 -> skip 0
    page 2 -> skip limit
    page 3 -> skip 2 * limit

Limit bounds are enforced where the query parameters are parsed
(see app.dependencies). These helpers only floor page and limit to 1 so
that a bad value from another caller can never produce a negative offset
or a division by zero.
"""

import math
from dataclasses import dataclass
from typing import Sequence, TypeVar

from app.schemas.common import PaginatedResponse, PaginationMeta

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# OFFSET and LIMIT are bound as signed 64-bit integers
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    """Normalized pagination parameters ready for OFFSET/LIMIT."""

    page: int
    limit: int
    skip: int


def calculate_pagination_params(
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> PageWindow:
    """
    Normalize page/limit and compute the number of rows to skip.

    Args:
        page: Requested page number (1-indexed)
        limit: Requested number of items per page

    Returns:
        PageWindow with page and limit floored to 1 and
        skip = (page - 1) * limit
    """
    normalized_page = max(1, page)
    normalized_limit = max(1, limit)
    return PageWindow(
        page=normalized_page,
        limit=normalized_limit,
        skip=(normalized_page - 1) * normalized_limit,
    )


def max_page_for_limit(limit: int) -> int:
    """
    Largest page number whose offset plus limit still fits in MAX_OFFSET.

    Example:
        max_page_for_limit(100) -> 92233720368547758
    """
    return MAX_OFFSET // max(1, limit)


def create_pagination_meta(total: int, page: int, limit: int) -> PaginationMeta:
    """
    Build pagination metadata for a list response.

    Examples:
        total=25, page=1, limit=10 -> totalPages=3, hasNextPage, no previous
        total=0,  page=1, limit=10 -> totalPages=0, no next, no previous
    """
    total_pages = math.ceil(total / max(1, limit))
    return PaginationMeta(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def create_paginated_response(
    data: Sequence[T],
    total: int,
    page: int,
    limit: int,
) -> PaginatedResponse:
    """Wrap one page of items together with its pagination metadata."""
    return PaginatedResponse(
        data=list(data),
        meta=create_pagination_meta(total, page, limit),
    )
