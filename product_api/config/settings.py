"""Pydantic Settings for the product inventory service.

All environment variables use the PRODUCT_API_ prefix.
Example: PRODUCT_API_PORT=9000, PRODUCT_API_DATABASE_PATH=/data/products.db
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ProductApiSettings(BaseSettings):
    """Service configuration validated from environment variables."""

    # Service
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"

    # Storage
    database_path: str = "products.db"  # Created on first run if absent

    # CORS
    cors_allow_origins: list[str] = ["*"]
    cors_max_age_seconds: int = Field(default=3600, ge=0)  # Preflight cache

    model_config = {"env_prefix": "PRODUCT_API_"}
