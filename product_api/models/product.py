"""Product record model.

The same shape is used for request bodies and for rows read back from the
store. ``id`` is assigned by the store: it is ignored on input and always
present on output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Stock is a 32-bit quantity; larger values are rejected when decoding.
MAX_STOCK = 2**31 - 1


class Product(BaseModel):
    """A single inventory record."""

    id: int | None = None
    name: str
    price: float = Field(allow_inf_nan=False)
    description: str
    stock: int = Field(le=MAX_STOCK)
