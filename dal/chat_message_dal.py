"""Async Data Access Layer for the CHAT_MESSAGE table.

Rows are append-only: the DAL exposes create and read operations but no
update or delete.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from models.chat_turn import TurnRecord
from utils.database_init import AsyncDatabaseInitializer


class ChatMessageDAL:
    """Data access layer for persisted conversation turns.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`).
    """

    _COLUMNS = ("id", "message", "is_ai", "timestamp")
    _COLUMN_LIST, _INSERT_COLUMNS = ", ".join(_COLUMNS), ", ".join(_COLUMNS[1:])

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def create_message(self, record: TurnRecord) -> int:
        """Insert a new CHAT_MESSAGE row and return the new id."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"INSERT INTO CHAT_MESSAGE ({self._INSERT_COLUMNS}) VALUES (?, ?, ?)",
                (record.message, int(record.is_ai), record.timestamp),
            )
            await conn.commit()
            return cur.lastrowid

    async def get_message_by_id(self, message_id: int) -> Optional[TurnRecord]:
        """Return the TurnRecord for `message_id`, or None if not found."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM CHAT_MESSAGE WHERE id = ?",
                (message_id,),
            )
            row = await cur.fetchone()
            return self._row_to_record(row) if row else None

    async def list_messages(self, limit: int = 100, offset: int = 0) -> List[TurnRecord]:
        """List CHAT_MESSAGE rows in insertion order with optional paging."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM CHAT_MESSAGE ORDER BY id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cur.fetchall()
            return [self._row_to_record(r) for r in rows]

    @staticmethod
    def _row_to_record(row: Sequence[object]) -> TurnRecord:
        return TurnRecord(id=row[0], message=row[1], is_ai=bool(row[2]), timestamp=row[3])
