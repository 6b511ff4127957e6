"""Shared test fixtures and hypothesis strategies for the product test suite."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from product_api.config.settings import ProductApiSettings
from product_api.main import create_app
from product_api.services.product_store import ProductStore


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path: Path) -> ProductApiSettings:
    """Test settings pointing at a throwaway database file."""
    return ProductApiSettings(database_path=str(tmp_path / "products.db"))


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store(settings: ProductApiSettings) -> Iterator[ProductStore]:
    product_store = ProductStore(settings.database_path)
    product_store.open()
    yield product_store
    product_store.close()


@pytest.fixture
def app(settings: ProductApiSettings, store: ProductStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def widget() -> dict:
    return {"name": "Widget", "price": 9.99, "description": "d", "stock": 5}
