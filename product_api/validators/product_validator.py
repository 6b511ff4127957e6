"""Business rules that gate product persistence.

Rules are checked in a fixed order and only the first violation is reported.
Validation runs before every create and update; stored rows are trusted on
read.
"""

from __future__ import annotations

from product_api.middleware.error_handler import BadRequestError
from product_api.models.product import Product


def validate_product(product: Product) -> None:
    """Raise BadRequestError for the first rule the product breaks."""
    if not product.name.strip():
        raise BadRequestError("name cannot be empty")
    if product.price < 0:
        raise BadRequestError("price cannot be negative")
    if product.stock < 0:
        raise BadRequestError("stock cannot be negative")
