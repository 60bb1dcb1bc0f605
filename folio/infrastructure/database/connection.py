"""Async database connection management.

Provides the persistence gateway over aiosqlite. One ``Database`` is opened at
process start and shared by every repository until shutdown.
"""
import sqlite3
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from ...errors import ConflictError, StorageError
from ...logger import logger

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT NOT NULL UNIQUE,
        password TEXT NOT NULL,
        favorite_book TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sessions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        token TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        author_id INTEGER NOT NULL,
        title TEXT NOT NULL,
        content TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY (author_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts(created_at)",
)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a write statement."""

    last_insert_id: int | None
    rows_affected: int


class Database:
    """Persistence gateway: raw statements and queries, no business logic.

    Every sqlite failure is re-raised as ``StorageError`` (``ConflictError``
    for constraint violations). "Not found" is never decided here; an empty
    result list is returned and the repository interprets it.

    Examples:
        >>> db = Database(":memory:")
        >>> await db.connect()
        >>> await db.init_schema()
        >>> result = await db.execute("DELETE FROM posts WHERE id = ?", (1,))
        >>> rows = await db.query("SELECT * FROM posts")
    """

    def __init__(self, path: str | Path):
        self.path = str(path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        """Open the shared connection. Calling twice is a no-op."""
        if self._conn is not None:
            return
        try:
            self._conn = await aiosqlite.connect(self.path)
            self._conn.row_factory = aiosqlite.Row
            await self._conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.path}: {e}") from e
        logger.info("Database connected: {}", self.path)

    async def close(self) -> None:
        """Close the shared connection."""
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Database closed: {}", self.path)

    async def init_schema(self) -> None:
        """Create tables and indexes if they don't exist."""
        conn = self._require_connection()
        try:
            for statement in SCHEMA:
                await conn.execute(statement)
            await conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Schema initialization failed: {e}") from e

    async def execute(self, sql: str, parameters: tuple = ()) -> MutationResult:
        """Run a write statement and commit.

        Args:
            sql: SQL statement
            parameters: Statement parameters

        Returns:
            MutationResult with last insert id and affected row count
        """
        conn = self._require_connection()
        try:
            cursor = await conn.execute(sql, parameters)
            await conn.commit()
        except sqlite3.IntegrityError as e:
            await conn.rollback()
            raise ConflictError(f"Constraint violation: {e}") from e
        except sqlite3.Error as e:
            raise StorageError(f"Statement failed: {e}") from e
        return MutationResult(last_insert_id=cursor.lastrowid, rows_affected=cursor.rowcount)

    async def query(self, sql: str, parameters: tuple = ()) -> list[dict]:
        """Run a read query.

        Args:
            sql: SQL query
            parameters: Query parameters

        Returns:
            Rows as dicts, in the order the query produced them
        """
        conn = self._require_connection()
        try:
            cursor = await conn.execute(sql, parameters)
            rows = await cursor.fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Query failed: {e}") from e
        return [dict(row) for row in rows]

    def _require_connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageError("Database is not connected")
        return self._conn
