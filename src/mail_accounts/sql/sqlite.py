# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SQLite async adapter using aiosqlite."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import aiosqlite

from .base import DbAdapter

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

MEMORY_DB = ":memory:"
BUSY_TIMEOUT_MS = 5000


class SqliteAdapter(DbAdapter):
    """SQLite async adapter. Opens a connection per operation.

    Every statement is committed before its connection closes, so the next
    operation (or another process sharing the file, like a second CLI
    invocation) observes it. Because nothing outlives an operation, an
    in-memory database would be empty every time and is refused.
    """

    def __init__(self, db_path: str):
        """Initialize SQLite adapter.

        Args:
            db_path: Path to the SQLite file.

        Raises:
            ValueError: db_path is empty or ":memory:".
        """
        if not db_path or db_path == MEMORY_DB:
            raise ValueError("SQLite adapter needs a database file path, not an in-memory database")
        self.db_path = db_path

    @asynccontextmanager
    async def _open(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
            yield db

    async def connect(self) -> None:
        """Connections are opened per operation, nothing to do."""

    async def close(self) -> None:
        """Connections are closed per operation, nothing to do."""

    async def execute(self, query: str, params: dict[str, Any] | None = None) -> int:
        """Execute and commit one statement, return affected row count."""
        async with self._open() as db:
            cursor = await db.execute(query, params or {})
            await db.commit()
            return cursor.rowcount

    async def fetch_one(
        self, query: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        async with self._open() as db, db.execute(query, params or {}) as cursor:
            row = await cursor.fetchone()
            return dict(row) if row is not None else None

    async def fetch_all(
        self, query: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        async with self._open() as db, db.execute(query, params or {}) as cursor:
            return [dict(row) for row in await cursor.fetchall()]

    async def upsert(
        self,
        table: str,
        data: dict[str, Any],
        conflict_columns: Sequence[str],
        update_extras: Sequence[str] | None = None,
    ) -> int:
        """Insert, or update the non-key columns when the key already exists.

        With nothing to update (every column is part of the key) the
        conflicting insert is ignored.
        """
        assignments = [
            f"{self._sql_name(c)} = excluded.{self._sql_name(c)}"
            for c in data
            if c not in conflict_columns
        ]
        assignments.extend(update_extras or ())
        on_conflict = f"DO UPDATE SET {', '.join(assignments)}" if assignments else "DO NOTHING"

        query = (
            f"INSERT INTO {table} ({', '.join(self._sql_name(c) for c in data)}) "
            f"VALUES ({', '.join(self._placeholder(c) for c in data)}) "
            f"ON CONFLICT ({', '.join(self._sql_name(c) for c in conflict_columns)}) {on_conflict}"
        )
        return await self.execute(query, data)

    async def commit(self) -> None:
        """Statements commit as they run."""


__all__ = ["SqliteAdapter"]
