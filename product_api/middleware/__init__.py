"""Middleware package - error hierarchy and request ID."""

from product_api.middleware.error_handler import (
    BadRequestError,
    DatabaseError,
    InternalError,
    NotFoundError,
    ProductApiError,
    error_status_and_body,
    register_error_handlers,
)
from product_api.middleware.request_id import RequestIdMiddleware

__all__ = [
    "BadRequestError",
    "DatabaseError",
    "InternalError",
    "NotFoundError",
    "ProductApiError",
    "RequestIdMiddleware",
    "error_status_and_body",
    "register_error_handlers",
]
