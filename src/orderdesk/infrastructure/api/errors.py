"""Centralized exception handlers.

Domain exceptions are expected outcomes and are answered without logging
noise.  Storage-layer and unexpected errors are logged with a traceback and
answered with a generic message; internal details never reach the client.
"""

from __future__ import annotations

import logging

from bson.errors import InvalidId
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderdesk.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from orderdesk.infrastructure.api.responses import error

logger = logging.getLogger(__name__)

# Most specific class first
_DOMAIN_ERRORS: list[tuple[type[DomainException], int, str]] = [
    (InsufficientStockError, 400, "INSUFFICIENT_STOCK"),
    (ValidationError, 400, "VALIDATION_ERROR"),
    (EntityNotFoundError, 404, "NOT_FOUND"),
    (ConflictError, 409, "DUPLICATE_PRODUCT"),
]


async def handle_domain_error(request: Request, exc: DomainException) -> JSONResponse:
    for exc_type, status_code, code in _DOMAIN_ERRORS:
        if isinstance(exc, exc_type):
            return error(exc.message, status_code, exc.errors or None, code)
    return error(exc.message, 400, exc.errors or None, "DOMAIN_ERROR")


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err.get('msg')}")
    return error("Validation failed", 400, messages, "VALIDATION_ERROR")


async def handle_duplicate_key(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    key_value = (exc.details or {}).get("keyValue") or {}
    field = next(iter(key_value), "value")
    message = f"{field} already exists"
    return error(message, 409, [message], "DUPLICATE_KEY_ERROR")


async def handle_invalid_id(request: Request, exc: InvalidId) -> JSONResponse:
    return error("Invalid ID format", 400, ["The provided ID is not valid"], "CAST_ERROR")


async def handle_storage_error(request: Request, exc: PyMongoError) -> JSONResponse:
    if exc.has_error_label("TransientTransactionError"):
        logger.warning("Transaction conflict on %s %s: %s", request.method, request.url.path, exc)
        return error(
            "The request conflicted with a concurrent update",
            409,
            ["Please retry the request"],
            "TRANSACTION_CONFLICT",
        )
    logger.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error("Database error occurred", 500, ["Please try again later"], "DATABASE_ERROR")


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error(f"Route {request.url.path} not found", 404, code="NOT_FOUND")
    return error(str(exc.detail), exc.status_code, code="HTTP_ERROR")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error(
        "Internal server error", 500, ["Something went wrong on our end"], "INTERNAL_ERROR"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(DuplicateKeyError, handle_duplicate_key)
    app.add_exception_handler(InvalidId, handle_invalid_id)
    app.add_exception_handler(PyMongoError, handle_storage_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)
