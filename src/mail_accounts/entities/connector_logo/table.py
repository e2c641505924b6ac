# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Connector logos table: cached logo image per connector."""

from __future__ import annotations

from ...sql import Blob, String, Table, Timestamp


class ConnectorLogosTable(Table):
    """Logo cache keyed by connector id.

    Written on first access and reused afterwards. Concurrent first writes
    store identical content, so the upsert simply keeps the last one.
    """

    name = "connector_logos"

    def configure(self) -> None:
        c = self.columns
        c.column("connector", String, primary_key=True)
        c.column("logo", Blob, nullable=False)
        c.column("updated_at", Timestamp, default="CURRENT_TIMESTAMP")

    async def get(self, connector: str) -> bytes | None:
        row = await self.select_one(columns=["logo"], where={"connector": connector})
        return bytes(row["logo"]) if row else None

    async def store(self, connector: str, logo: bytes) -> None:
        await self.upsert(
            {"connector": connector, "logo": logo},
            conflict_columns=["connector"],
            update_extras=["updated_at = CURRENT_TIMESTAMP"],
        )

    async def remove(self, connector: str) -> bool:
        rowcount = await self.delete(where={"connector": connector})
        return rowcount > 0


__all__ = ["ConnectorLogosTable"]
