"""
FastAPI exception handlers mapping application errors to HTTP responses.

Status codes and bodies come from the exceptions themselves (`http_status()`,
`to_payload()`), so these handlers only log and serialize. Starlette resolves
handlers through the exception MRO: the most specific registered class wins and
`RepositoryError` is the fallback.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from raas.exceptions.base import (
    DuplicateError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)


def _respond(exc: RepositoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def duplicate_error_handler(request: Request, exc: DuplicateError) -> JSONResponse:
    """409 Conflict."""
    logger.info(
        "http.error.duplicate",
        extra={"method": request.method, "path": request.url.path, "fields": exc.fields},
    )
    return _respond(exc)


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    """422 for missing/too-long/badly formatted fields and dangling references, 409 for invariants."""
    logger.info(
        "http.error.validation",
        extra={"method": request.method, "path": request.url.path, "code": exc.error_code, "fields": exc.fields},
    )
    return _respond(exc)


async def invalid_field_handler(request: Request, exc: InvalidFieldError) -> JSONResponse:
    logger.info(
        "http.error.invalid_field",
        extra={"method": request.method, "path": request.url.path, "fields": exc.fields},
    )
    return _respond(exc)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("http.error.not_found", extra={"method": request.method, "path": request.url.path})
    return _respond(exc)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Fallback; the message is client-safe, the constraint name stays in the log."""
    logger.warning(
        "http.error.repository",
        extra={"method": request.method, "path": request.url.path, "error": str(exc)},
    )
    return _respond(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DuplicateError, duplicate_error_handler)
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(InvalidFieldError, invalid_field_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
