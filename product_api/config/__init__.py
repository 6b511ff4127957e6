"""Configuration module."""

from product_api.config.settings import ProductApiSettings

__all__ = [
    "ProductApiSettings",
]
