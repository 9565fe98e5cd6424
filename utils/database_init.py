import os
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS CHAT_MESSAGE (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        message TEXT NOT NULL,
        is_ai INTEGER NOT NULL,
        timestamp TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS PRODUCT (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        category TEXT NOT NULL,
        materials TEXT,
        price REAL,
        generated_description TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
)


class AsyncDatabaseInitializer:
    """
    Manage an async SQLite database using the DATABASE_DIR environment variable.

    - The database file is located at: <DATABASE_DIR>/app.db
    - DATABASE_DIR is required unless `db_dir` is passed explicitly. A
      RuntimeError is raised if it is missing or invalid (not a directory and
      cannot be created).
    - On the first call to `ensure_database()` for a given instance:
        * Any existing database file at that path is deleted.
        * A new database file is created.
        * The CHAT_MESSAGE and PRODUCT tables are created.
    - Subsequent calls to `ensure_database()` on the same instance are no-ops,
      so it is safe for `connection()` to call it.
    """

    def __init__(self, db_dir: Optional[Path | str] = None) -> None:
        env_dir = str(db_dir) if db_dir is not None else os.getenv("DATABASE_DIR")

        if env_dir is None or not env_dir.strip():
            raise RuntimeError(
                "DATABASE_DIR environment variable must be set to a writable "
                "directory path where the SQLite database file will be stored."
            )

        path = Path(env_dir).expanduser()

        if path.exists() and not path.is_dir():
            raise RuntimeError(
                f"DATABASE_DIR={env_dir!r} points to a file, not a directory "
                f"({path}). Please set DATABASE_DIR to a directory path."
            )

        try:
            path.mkdir(parents=True, exist_ok=True)
        except Exception as exc:
            raise RuntimeError(
                f"Failed to create or access database directory at {path}"
            ) from exc

        self.db_dir = path
        self.db_path = self.db_dir / "app.db"

        # Wipe-and-recreate happens once per instance.
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def ensure_database(self) -> None:
        """
        Ensure a fresh SQLite database exists at `self.db_path`.

        On first call this will:
            - Delete any existing database file at `self.db_path`.
            - Create a new database file with the CHAT_MESSAGE and PRODUCT tables.

        Subsequent calls on the same instance are no-ops.
        """
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:
                return

            if self.db_path.exists():
                try:
                    self.db_path.unlink()
                except Exception as exc:
                    raise RuntimeError(
                        f"Failed to delete existing database at {self.db_path}"
                    ) from exc

            max_attempts = 3
            for attempt in range(1, max_attempts + 1):
                try:
                    async with aiosqlite.connect(self.db_path) as db:
                        for statement in SCHEMA:
                            await db.execute(statement)
                        await db.commit()
                    break
                except FileNotFoundError:
                    # Transient missing-file errors happen on some platforms.
                    if attempt >= max_attempts:
                        raise
                    await asyncio.sleep(0.1 * attempt)

            self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Async context manager yielding an `aiosqlite.Connection`.

        The database is created/reset on the first use via `ensure_database()`.
        """
        await self.ensure_database()
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()
