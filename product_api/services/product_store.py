"""SQLite-backed product store.

Owns the single database connection used by the service. The connection is
opened explicitly at startup (``open()``), which also creates the
``products`` table when absent, and is shared by every request behind one
``threading.Lock``: at most one statement executes at a time, and the lock is
held only for that statement plus row materialization. Each statement runs in
its own transaction, so no lock is held across statements.

Key behaviors:
- ids come from an AUTOINCREMENT primary key and are never reused
- get_by_id() returns None for a missing row instead of raising
- update() and delete() report rows affected (0 or 1)
- every engine failure surfaces as DatabaseError with the cause text
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TypeVar

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import (
    REAL,
    Column,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from product_api.middleware.error_handler import DatabaseError, InternalError
from product_api.models.product import Product

logger = logging.getLogger(__name__)

T = TypeVar("T")

metadata = MetaData()

products_table = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("price", REAL, nullable=False),
    Column("description", Text, nullable=False),
    Column("stock", Integer, nullable=False),
    sqlite_autoincrement=True,
)


def _mutable_fields(product: Product) -> dict:
    return {
        "name": product.name,
        "price": product.price,
        "description": product.description,
        "stock": product.stock,
    }


class ProductStore:
    """Single point of access to the products table.

    Args:
        database_path: Path of the SQLite file; created on ``open()`` if absent.
    """

    def __init__(self, database_path: str) -> None:
        self._database_path = database_path
        self._engine: Engine | None = None
        self._conn: Connection | None = None
        self._lock = threading.Lock()

    @property
    def database_path(self) -> str:
        return self._database_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open (or create) the database file and ensure the schema exists.

        Idempotent. Raises ``DatabaseError`` if the file cannot be opened or
        the table cannot be created.
        """
        with self._lock:
            if self._conn is not None:
                return

            engine = create_engine(
                f"sqlite:///{self._database_path}",
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
            try:
                conn = engine.connect()
                with conn.begin():
                    metadata.create_all(conn)
            except SQLAlchemyError as exc:
                engine.dispose()
                logger.error(
                    "Failed to initialize product store at %s",
                    self._database_path,
                )
                raise DatabaseError(getattr(exc, "orig", None) or exc) from exc

            self._engine = engine
            self._conn = conn
            logger.info("Product store ready at %s", self._database_path)

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert(self, product: Product) -> int:
        """Insert a product and return the id assigned by the database."""
        stmt = insert(products_table).values(**_mutable_fields(product))

        def _op(conn: Connection) -> int:
            result = conn.execute(stmt)
            return int(result.inserted_primary_key[0])

        return self._run(_op)

    def list_all(self) -> list[Product]:
        """Return every row in the engine's natural order."""
        stmt = select(products_table)

        def _op(conn: Connection) -> list[Product]:
            rows = conn.execute(stmt).mappings().all()
            return [Product.model_validate(dict(row)) for row in rows]

        return self._run(_op)

    def get_by_id(self, product_id: int) -> Product | None:
        """Return the matching product, or None when no row has this id."""
        stmt = select(products_table).where(products_table.c.id == product_id)

        def _op(conn: Connection) -> Product | None:
            row = conn.execute(stmt).mappings().first()
            return Product.model_validate(dict(row)) if row is not None else None

        return self._run(_op)

    def update(self, product_id: int, product: Product) -> int:
        """Overwrite all mutable fields of a row; returns rows affected."""
        stmt = (
            update(products_table)
            .where(products_table.c.id == product_id)
            .values(**_mutable_fields(product))
        )
        return self._run(lambda conn: conn.execute(stmt).rowcount)

    def delete(self, product_id: int) -> int:
        """Remove a row; returns rows removed."""
        stmt = delete(products_table).where(products_table.c.id == product_id)
        return self._run(lambda conn: conn.execute(stmt).rowcount)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, operation: Callable[[Connection], T]) -> T:
        """Execute one statement under the lock, in its own transaction."""
        with self._lock:
            if self._conn is None:
                raise InternalError()
            try:
                with self._conn.begin():
                    return operation(self._conn)
            except (SQLAlchemyError, PydanticValidationError) as exc:
                logger.error("Database operation failed: %s", exc)
                raise DatabaseError(getattr(exc, "orig", None) or exc) from exc
