# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Base adapter class for async database backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence


class DbAdapter(ABC):
    """Abstract base class for async database adapters.

    Backends implement the raw primitives (execute, fetch_one, fetch_all,
    upsert). The keyed helpers below build their SQL on top of them, with
    :name placeholders and quoted identifiers.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish database connection."""

    @abstractmethod
    async def close(self) -> None:
        """Close database connection."""

    @abstractmethod
    async def commit(self) -> None:
        """Make pending writes visible to other connections."""

    @abstractmethod
    async def execute(self, query: str, params: dict[str, Any] | None = None) -> int:
        """Execute query, return affected row count."""

    @abstractmethod
    async def fetch_one(
        self, query: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Execute query, return first row as dict or None."""

    @abstractmethod
    async def fetch_all(
        self, query: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Execute query, return all rows as dicts."""

    @abstractmethod
    async def upsert(
        self,
        table: str,
        data: dict[str, Any],
        conflict_columns: Sequence[str],
        update_extras: Sequence[str] | None = None,
    ) -> int:
        """Insert a row, or update it when conflict_columns already match.

        Args:
            table: Table name.
            data: Column-value pairs to insert/update.
            conflict_columns: Columns that define uniqueness (typically PK).
            update_extras: Extra SQL assignments for the UPDATE branch
                (e.g. "updated_at = CURRENT_TIMESTAMP").
        """

    # -------------------------------------------------------------------------
    # Keyed helpers
    # -------------------------------------------------------------------------

    def _sql_name(self, name: str) -> str:
        return f'"{name}"'

    def _placeholder(self, name: str) -> str:
        return f":{name}"

    def _where_clause(self, where: dict[str, Any] | None) -> str:
        if not where:
            return ""
        return " WHERE " + " AND ".join(
            f"{self._sql_name(k)} = {self._placeholder(k)}" for k in where
        )

    def _select_sql(
        self, table: str, columns: Sequence[str] | None, where: dict[str, Any] | None
    ) -> str:
        selected = ", ".join(self._sql_name(c) for c in columns) if columns else "*"
        return f"SELECT {selected} FROM {table}{self._where_clause(where)}"

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Rows matching every where item, optionally ordered and limited."""
        query = self._select_sql(table, columns, where)
        if order_by:
            query += f" ORDER BY {order_by}"
        if limit is not None:
            query += f" LIMIT {int(limit)}"
        return await self.fetch_all(query, where)

    async def select_one(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        where: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        return await self.fetch_one(f"{self._select_sql(table, columns, where)} LIMIT 1", where)

    async def delete(self, table: str, where: dict[str, Any]) -> int:
        """Delete rows matching where, return affected row count."""
        if not where:
            raise ValueError(f"Refusing to delete every row of '{table}'")
        return await self.execute(f"DELETE FROM {table}{self._where_clause(where)}", where)


__all__ = ["DbAdapter"]
