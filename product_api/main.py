"""FastAPI application entry point with lifespan management.

Startup: open the product store (creating the database file and table if
absent) before any request is served. A store that cannot be opened aborts
startup.
Shutdown: close the store connection.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_api import __version__
from product_api.config.settings import ProductApiSettings
from product_api.logging_config import configure_logging
from product_api.middleware.error_handler import register_error_handlers
from product_api.middleware.request_id import RequestIdMiddleware
from product_api.routers.health import create_health_router
from product_api.routers.products import create_products_router
from product_api.services.product_store import ProductStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open the store, then close it on shutdown."""
    store: ProductStore = app.state.store

    # No-op when run() already opened it
    store.open()
    logger.info("Product service started")

    yield

    logger.info("Shutting down product service…")
    store.close()
    logger.info("Product service shut down")


def create_app(
    settings: ProductApiSettings | None = None,
    store: ProductStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The store is only constructed here; its connection is opened by the
    lifespan, or earlier by the caller.
    """
    settings = settings or ProductApiSettings()
    store = store or ProductStore(settings.database_path)

    app = FastAPI(
        title="Product Inventory Service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    register_error_handlers(app)

    # Starlette applies middleware in reverse order of add_middleware calls,
    # so CORS sees preflight requests first.
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=settings.cors_max_age_seconds,
    )

    app.include_router(create_health_router(store=store))
    app.include_router(create_products_router(store=store))

    return app


def run() -> None:
    """Serve the application with uvicorn.

    The store is opened before the server binds, so a database that cannot be
    opened or initialized stops the process instead of failing per request.
    """
    settings = ProductApiSettings()
    configure_logging(settings.log_level)

    store = ProductStore(settings.database_path)
    store.open()

    logger.info("Starting product service on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings, store),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


app = create_app()
