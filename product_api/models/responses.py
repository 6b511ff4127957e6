"""Response envelope models.

Successful responses are wrapped as ``{ success: true, data: T }``; failures
use ``{ success: false, message: str }``.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for successful API responses."""

    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    """JSON envelope for every non-2xx response."""

    success: bool = False
    message: str
