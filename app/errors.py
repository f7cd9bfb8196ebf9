"""
Error Normalization

Every error that escapes a route ends up here and is rendered as the same
envelope:

    {
        "success": false,
        "statusCode": 404,
        "message": "Author with ID ... not found",
        "error": "Not Found",
        "timestamp": "2024-01-15T10:30:00.000Z",
        "path": "/authors/..."
    }

Classification:
- AppError subclasses (services)       -> their own status and message
- RequestValidationError (FastAPI)     -> 400, one message per invalid field
- HTTPException (Starlette/FastAPI)    -> its status code and detail
- IntegrityError (storage constraints) -> 409 Conflict / 400 Bad Request
- Other SQLAlchemyError                -> 500 "Database Error"
- Anything else                        -> 500, generic message

The storage translation only matters when a concurrent write slips past
the services' pre-checks; the database constraint is what catches it.
"""

import logging
import re
from collections.abc import Sequence
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.exceptions import (
    AppError,
    BadReferenceError,
    BusinessRuleError,
    ConflictError,
)
from app.schemas.common import ErrorResponse
from app.utils.time import utc_now_iso

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An internal error occurred."
DATABASE_ERROR_MESSAGE = "A database error occurred. Please try again later."
DATABASE_ERROR_LABEL = "Database Error"
RELATION_VIOLATION_MESSAGE = "The change would violate a required relation"
DELETE_BLOCKED_MESSAGE = "Cannot delete this record while other records still reference it"

# SQLSTATE codes reported by PostgreSQL drivers
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}

# 'Key (isbn)=(9780451524935) already exists.'
_PG_KEY_PATTERN = re.compile(r"Key \((?P<columns>[^)]+)\)=")
# 'UNIQUE constraint failed: books.isbn'
_SQLITE_UNIQUE_PATTERN = re.compile(r"UNIQUE constraint failed: \w+\.(?P<column>\w+)")


# =============================================================================
# Envelope
# =============================================================================
def build_error_body(
    status_code: int,
    message: str | list[str],
    path: str,
    error: str | None = None,
) -> dict[str, Any]:
    """
    Build the JSON body of an error response.

    Args:
        status_code: HTTP status code
        message: Human readable message, or a list for validation errors
        path: Request path that failed
        error: Category label; defaults to the status code's reason phrase

    Returns:
        Envelope dict with camelCase keys
    """
    envelope = ErrorResponse(
        status_code=status_code,
        message=message,
        error=error or HTTPStatus(status_code).phrase,
        timestamp=utc_now_iso(),
        path=path,
    )
    return envelope.model_dump(by_alias=True)


def error_response(
    request: Request,
    status_code: int,
    message: str | list[str],
    error: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Render an error envelope for the given request."""
    body = build_error_body(status_code, message, request.url.path, error)
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{body['error']} [{request.method}] {request.url.path} - {message}")
    return JSONResponse(status_code=status_code, content=body, headers=headers)


# =============================================================================
# Classification helpers
# =============================================================================
def format_validation_errors(errors: Sequence[Mapping[str, Any]]) -> list[str]:
    """
    Turn pydantic/FastAPI validation errors into "<field>: <reason>" strings.

    The request location prefix ("body", "query", ...) is dropped, and
    pydantic's "Value error, " prefix is removed from custom validator
    messages.

    Example:
        [{"loc": ("body", "firstName"), "msg": "Field required"}]
        -> ["firstName: Field required"]
    """
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]

        if err.get("type") == "json_invalid":
            field = ""
        elif len(loc) > 1 and loc[0] in _REQUEST_LOCATIONS:
            field = ".".join(loc[1:])
        else:
            field = ".".join(loc)

        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def _api_field_name(column: str) -> str:
    """Map a database column name to the field name clients send."""
    return to_camel(column.strip().strip('"'))


def classify_integrity_error(exc: IntegrityError) -> AppError:
    """
    Translate a database constraint violation into an application error.

    Recognizes PostgreSQL SQLSTATE codes and SQLite's constraint messages.

    Returns:
        ConflictError for unique violations, BadReferenceError for foreign
        key violations on insert/update, BusinessRuleError for deletes blocked
        by a reference and any other integrity failure
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    text = str(orig)

    if code == UNIQUE_VIOLATION or "UNIQUE constraint failed" in text:
        match = _PG_KEY_PATTERN.search(text) or _SQLITE_UNIQUE_PATTERN.search(text)
        if match is None:
            return ConflictError("field")
        column = match.groupdict().get("columns") or match.group("column")
        return ConflictError(_api_field_name(column.split(",")[0]))

    if code == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in text:
        # PostgreSQL reports a blocked delete with the same SQLSTATE
        if "is still referenced" in text:
            return BusinessRuleError(DELETE_BLOCKED_MESSAGE)
        # SQLite does not report which column failed
        match = _PG_KEY_PATTERN.search(text)
        if match is None:
            return BadReferenceError("related record")
        return BadReferenceError(_api_field_name(match.group("columns").split(",")[0]))

    return BusinessRuleError(RELATION_VIOLATION_MESSAGE)


# =============================================================================
# Exception handlers
# =============================================================================
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Typed service errors carry their own status and message."""
    return error_response(request, exc.status_code, exc.message, exc.error)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Request body, query and path validation failures -> 400."""
    return error_response(
        request,
        HTTPStatus.BAD_REQUEST,
        format_validation_errors(exc.errors()),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Framework HTTP errors (unknown route, method not allowed, ...)."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(
        request,
        exc.status_code,
        message,
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(
    request: Request,
    exc: IntegrityError,
) -> JSONResponse:
    """Constraint violations that were not caught by a service pre-check."""
    app_error = classify_integrity_error(exc)
    logger.warning(f"Integrity error translated to {type(app_error).__name__}: {exc.orig}")
    return error_response(
        request,
        app_error.status_code,
        app_error.message,
        app_error.error,
    )


async def sqlalchemy_error_handler(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    """
    Handle other SQLAlchemy database errors.

    Logs the actual error for debugging while hiding details from users.
    """
    logger.error(f"Database error: {exc}", exc_info=exc)
    return error_response(
        request,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        DATABASE_ERROR_MESSAGE,
        DATABASE_ERROR_LABEL,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler.

    In production, hide internal errors from users.
    In debug mode, show the underlying message.
    """
    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    message = GENERIC_ERROR_MESSAGE
    if get_settings().debug and str(exc):
        message = str(exc)
    return error_response(request, HTTPStatus.INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the error normalizer on the application.

    Starlette picks the handler registered for the closest class in the
    exception's MRO, so IntegrityError wins over SQLAlchemyError and
    AppError subclasses all go through app_error_handler.
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
