"""Public models for the product service."""

from product_api.models.product import Product
from product_api.models.responses import ApiResponse, ErrorResponse

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "Product",
]
