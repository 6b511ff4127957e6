"""Validators for product inputs."""

from product_api.validators.product_validator import validate_product

__all__ = ["validate_product"]
