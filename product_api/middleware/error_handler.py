"""Global error hierarchy and FastAPI exception handlers.

All service errors extend ProductApiError. The taxonomy is closed:
DatabaseError (500), NotFoundError (404), BadRequestError (400) and
InternalError (500). ``error_status_and_body`` is the one place that turns an
error into an HTTP status and a ``{ success: false, message }`` body; the
FastAPI exception handlers (including the ones for framework errors and
unhandled exceptions) all go through it.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_api.models.responses import ErrorResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ProductApiError(Exception):
    """Base error for all product service errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.__class__.message
        super().__init__(self.message)


class DatabaseError(ProductApiError):
    """Failure reported by the storage engine; the cause text is kept."""

    status_code = 500
    message = "Database error"

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"Database error: {cause}")


class NotFoundError(ProductApiError):
    """No product row matches the requested id."""

    status_code = 404
    message = "Product not found"


class BadRequestError(ProductApiError):
    """Input rejected by validation."""

    status_code = 400
    message = "Invalid input"


class InternalError(ProductApiError):
    """Catch-all for failures outside the other kinds."""

    status_code = 500
    message = "Internal server error"


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def error_status_and_body(exc: ProductApiError) -> tuple[int, dict]:
    """Map an error to its HTTP status code and JSON error body."""
    return exc.status_code, ErrorResponse(message=exc.message).model_dump()


def _error_response(exc: ProductApiError) -> JSONResponse:
    status_code, body = error_status_and_body(exc)
    return JSONResponse(status_code=status_code, content=body)


def _log_error(request: Request, exc: ProductApiError) -> None:
    extra = {
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
        "status_code": exc.status_code,
        "error_kind": type(exc).__name__,
    }
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message, extra=extra)
    else:
        logger.warning("Request rejected: %s", exc.message, extra=extra)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


async def _product_api_error_handler(
    request: Request, exc: ProductApiError
) -> JSONResponse:
    """Handle ProductApiError subclasses."""
    _log_error(request, exc)
    return _error_response(exc)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first body/path decoding problem as a 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = " -> ".join(str(loc) for loc in first["loc"])
        error = BadRequestError(f"Invalid input: {location}: {first['msg']}")
    else:
        error = BadRequestError()
    _log_error(request, error)
    return _error_response(error)


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap routing errors (unknown path, unsupported method) in the envelope."""
    error = ProductApiError(str(exc.detail))
    error.status_code = exc.status_code
    response = _error_response(error)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions - log traceback, return generic 500."""
    logger.exception(
        "Unhandled exception: %s",
        type(exc).__name__,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return _error_response(InternalError())


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(ProductApiError, _product_api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
