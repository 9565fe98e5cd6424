"""Async Data Access Layer for the PRODUCT table."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from models.product_record import ProductRecord
from utils.database_init import AsyncDatabaseInitializer


class ProductDAL:
    """Data access layer for generated product descriptions."""

    _COLUMNS = (
        "id",
        "name",
        "category",
        "materials",
        "price",
        "generated_description",
        "created_at",
    )
    _COLUMN_LIST, _INSERT_COLUMNS = ", ".join(_COLUMNS), ", ".join(_COLUMNS[1:])

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def create_product(self, record: ProductRecord) -> int:
        """Insert a new PRODUCT row and return the new id.

        Args:
            record: ProductRecord with `id=None` and fields to insert. When
                `created_at` is empty the current UTC time is stored.

        Returns:
            The integer primary key of the created row.
        """
        created_at = record.created_at or datetime.now(timezone.utc).isoformat()

        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"INSERT INTO PRODUCT ({self._INSERT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    record.name,
                    record.category,
                    record.materials,
                    record.price,
                    record.generated_description,
                    created_at,
                ),
            )
            await conn.commit()
            record.created_at = created_at
            return cur.lastrowid

    async def get_product_by_id(self, product_id: int) -> Optional[ProductRecord]:
        """Return ProductRecord for `product_id`, or None if not found."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM PRODUCT WHERE id = ?",
                (product_id,),
            )
            row = await cur.fetchone()
            return self._row_to_record(row) if row else None

    async def list_products(self, limit: int = 100, offset: int = 0) -> List[ProductRecord]:
        """List PRODUCT rows, newest first.

        Args:
            limit: Maximum number of rows to return.
            offset: Rows to skip.
        """
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM PRODUCT ORDER BY id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cur.fetchall()
            return [self._row_to_record(r) for r in rows]

    @staticmethod
    def _row_to_record(row: Sequence[object]) -> ProductRecord:
        """Convert a DB row tuple into a ProductRecord."""
        return ProductRecord(
            id=row[0],
            name=row[1],
            category=row[2],
            materials=row[3] or "",
            price=row[4],
            generated_description=row[5],
            created_at=row[6],
        )
