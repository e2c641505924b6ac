# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Database object holding an adapter and the registered tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .connection import create_adapter

if TYPE_CHECKING:
    from .base import DbAdapter
    from .table import Table


class SqlDb:
    """Registry of Table managers sharing one DbAdapter.

    Example:
        db = SqlDb("/data/accounts.db")
        db.add_table(ScenariosTable)
        await db.connect()
        await db.check_structure()
        await db.table("scenarios").assign("default", ref)
    """

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self.adapter: DbAdapter = create_adapter(connection_string)
        self.tables: dict[str, Table] = {}

    def add_table(self, table_class: type[Table]) -> Table:
        """Instantiate and register a table manager."""
        table = table_class(self)
        self.tables[table.name] = table
        return table

    def table(self, name: str) -> Table:
        """Get a registered table by name."""
        if name not in self.tables:
            raise ValueError(f"Table '{name}' not registered")
        return self.tables[name]

    async def connect(self) -> None:
        await self.adapter.connect()

    async def close(self) -> None:
        await self.adapter.close()

    async def commit(self) -> None:
        await self.adapter.commit()

    async def check_structure(self) -> None:
        """Create missing tables and add missing columns."""
        for table in self.tables.values():
            await table.create_schema()
            await table.sync_schema()


__all__ = ["SqlDb"]
