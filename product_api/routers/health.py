"""Health and readiness endpoints.

- GET /health - liveness plus the database file in use
- GET /readiness - 200 only while the product store is open
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from product_api.models.responses import ApiResponse, ErrorResponse
from product_api.services.product_store import ProductStore


def create_health_router(*, store: ProductStore) -> APIRouter:
    """Factory that creates the health router with injected dependencies."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Service health check."""
        return ApiResponse[dict](
            data={"status": "healthy", "database": store.database_path},
        ).model_dump()

    @health_router.get("/readiness")
    async def readiness() -> JSONResponse:
        """Readiness probe - 200 iff the store holds an open connection."""
        if not store.is_open:
            return JSONResponse(
                status_code=503,
                content=ErrorResponse(message="Service not ready").model_dump(),
            )
        return JSONResponse(
            status_code=200,
            content=ApiResponse[dict](data={"ready": True}).model_dump(),
        )

    return health_router
