"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Different rules for create vs update vs response
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxBase: Shared fields
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed in a partial update (all optional)
- XxxResponse / XxxDetailResponse: Fields returned in API responses
"""

from app.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
)
from app.schemas.book import (
    BookBase,
    BookCreate,
    BookDetailResponse,
    BookResponse,
    BookUpdate,
)
from app.schemas.common import (
    ERROR_RESPONSES,
    CamelModel,
    ErrorResponse,
    PaginatedResponse,
    PaginationMeta,
)

# AuthorDetailResponse refers to BookResponse by name to avoid a circular
# import between the author and book schema modules.
AuthorDetailResponse.model_rebuild()

__all__ = [
    # Shared schemas
    "CamelModel",
    "ErrorResponse",
    "ERROR_RESPONSES",
    "PaginationMeta",
    "PaginatedResponse",
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    "AuthorDetailResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookDetailResponse",
]
