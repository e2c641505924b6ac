# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Table base class with Columns-based schema (async version)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .column import Columns

if TYPE_CHECKING:
    from .sqldb import SqlDb


class Table:
    """Base class for async table managers.

    Subclasses set ``name``, declare their columns in ``configure()`` and
    build their domain operations on the keyed helpers below.

    Attributes:
        name: Table name in database.
        db: Owning SqlDb.
        columns: Column definitions.
    """

    name: str

    def __init__(self, db: SqlDb) -> None:
        if not getattr(self, "name", None):
            raise ValueError(f"{type(self).__name__} must define 'name'")
        self.db = db
        self.columns = Columns()
        self.configure()

    def configure(self) -> None:
        """Override to define columns. Called during __init__."""

    @property
    def adapter(self):
        return self.db.adapter

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    def create_table_sql(self) -> str:
        """CREATE TABLE IF NOT EXISTS statement for the declared columns.

        A single primary key column is declared inline; a composite key
        becomes a table-level PRIMARY KEY constraint.
        """
        pkeys = self.columns.primary_keys()
        composite = len(pkeys) > 1
        definitions = [col.to_sql(inline_pk=not composite) for col in self.columns.values()]
        if composite:
            definitions.append("PRIMARY KEY (" + ", ".join(f'"{k}"' for k in pkeys) + ")")
        body = ",\n    ".join(definitions)
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    {body}\n)"

    async def create_schema(self) -> None:
        await self.adapter.execute(self.create_table_sql())

    async def sync_schema(self) -> None:
        """Add declared columns missing from an existing table.

        Primary key columns cannot be added after creation and are skipped.
        """
        rows = await self.adapter.fetch_all(f"PRAGMA table_info({self.name})")
        present = {row["name"] for row in rows}
        for col in self.columns.values():
            if col.primary_key or col.name in present:
                continue
            await self.adapter.execute(
                f"ALTER TABLE {self.name} ADD COLUMN {col.to_sql(constant_default=True)}"
            )

    # -------------------------------------------------------------------------
    # Keyed access
    # -------------------------------------------------------------------------

    async def select(
        self,
        columns: list[str] | None = None,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        return await self.adapter.select(self.name, columns, where, order_by, limit)

    async def select_one(
        self,
        columns: list[str] | None = None,
        where: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        return await self.adapter.select_one(self.name, columns, where)

    async def upsert(
        self,
        data: dict[str, Any],
        conflict_columns: list[str],
        update_extras: list[str] | None = None,
    ) -> int:
        return await self.adapter.upsert(self.name, data, conflict_columns, update_extras)

    async def delete(self, where: dict[str, Any]) -> int:
        return await self.adapter.delete(self.name, where)

    async def execute(self, query: str, params: dict[str, Any] | None = None) -> int:
        """Run a table-specific statement, return affected row count."""
        return await self.adapter.execute(query, params)


__all__ = ["Table"]
