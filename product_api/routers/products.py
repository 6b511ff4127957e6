"""Product CRUD endpoints.

- POST   /products       - validate and insert, returns the new id
- GET    /products       - list every product
- GET    /products/{id}  - fetch one product
- PUT    /products/{id}  - validate and overwrite all fields
- DELETE /products/{id}  - hard delete

Handlers are plain functions so FastAPI runs them in its worker threadpool;
the store serializes the actual database access.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Request

from product_api.middleware.error_handler import NotFoundError
from product_api.models.product import Product
from product_api.models.responses import ApiResponse
from product_api.services.product_store import ProductStore
from product_api.validators.product_validator import validate_product

logger = logging.getLogger(__name__)

# Row ids are signed 64-bit integers in SQLite.
ProductId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


def create_products_router(*, store: ProductStore) -> APIRouter:
    """Factory that creates the products router bound to a store."""

    products_router = APIRouter(prefix="/products", tags=["products"])

    def _log_extra(request: Request, product_id: int) -> dict:
        return {
            "request_id": getattr(request.state, "request_id", None),
            "product_id": product_id,
        }

    @products_router.post("")
    def create_product(body: Product, request: Request) -> dict:
        """Validate and insert a product. The id in the body, if any, is ignored."""
        validate_product(body)
        product_id = store.insert(body)
        logger.info("Product created", extra=_log_extra(request, product_id))
        return ApiResponse[int](data=product_id).model_dump()

    @products_router.get("")
    def get_products() -> dict:
        """List all products. An empty table is a successful, empty list."""
        products = store.list_all()
        return ApiResponse[list[Product]](data=products).model_dump()

    @products_router.get("/{product_id}")
    def get_product_by_id(product_id: ProductId) -> dict:
        product = store.get_by_id(product_id)
        if product is None:
            raise NotFoundError()
        return ApiResponse[Product](data=product).model_dump()

    @products_router.put("/{product_id}")
    def update_product(product_id: ProductId, body: Product, request: Request) -> dict:
        """Overwrite every mutable field of an existing product."""
        validate_product(body)
        if store.update(product_id, body) == 0:
            raise NotFoundError()
        logger.info("Product updated", extra=_log_extra(request, product_id))
        return ApiResponse[str](data="Product updated successfully").model_dump()

    @products_router.delete("/{product_id}")
    def delete_product(product_id: ProductId, request: Request) -> dict:
        if store.delete(product_id) == 0:
            raise NotFoundError()
        logger.info("Product deleted", extra=_log_extra(request, product_id))
        return ApiResponse[str](data="Product deleted successfully").model_dump()

    return products_router
