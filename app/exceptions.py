"""
Application Exceptions

Typed failures raised by the services. Each one carries the HTTP status
code and the category label that the error normalizer (app.errors)
renders into the uniform error envelope.

Hierarchy:
    AppError
    ├── NotFoundError        404  "<Entity> with ID <id> not found"
    ├── ConflictError        409  "A record with this <field> already exists"
    ├── BadReferenceError    400  "Invalid reference: <field> does not exist"
    └── BusinessRuleError    400  rule-specific message
"""

from http import HTTPStatus
from typing import Any


class AppError(Exception):
    """Base class for errors that map to a known HTTP response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def error(self) -> str:
        """Category label shown in the envelope's 'error' field."""
        return HTTPStatus(self.status_code).phrase


class NotFoundError(AppError):
    """An entity lookup by id found nothing."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} with ID {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(AppError):
    """A uniqueness constraint would be violated."""

    status_code = HTTPStatus.CONFLICT

    def __init__(self, field: str) -> None:
        super().__init__(f"A record with this {field} already exists")
        self.field = field


class BadReferenceError(AppError):
    """A referenced entity does not exist."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid reference: {field} does not exist")
        self.field = field


class BusinessRuleError(AppError):
    """A referential guard or other business rule blocked the operation."""

    status_code = HTTPStatus.BAD_REQUEST
