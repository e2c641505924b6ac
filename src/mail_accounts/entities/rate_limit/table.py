# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Rate limits table: per-account send limits."""

from __future__ import annotations

from typing import Any

from ...models import AccountRef
from ...sql import Integer, String, Table, Timestamp


def _limit(value: int | None) -> int | None:
    """Positive integer limit or None (zero and negatives mean unlimited)."""
    if value is None:
        return None
    value = int(value)
    return value if value > 0 else None


class RateLimitsTable(Table):
    """Send limits keyed by (account_id, connector).

    Records are owned by their account and are removed together with it.
    """

    name = "rate_limits"

    def configure(self) -> None:
        c = self.columns
        c.column("account_id", String, primary_key=True)
        c.column("connector", String, primary_key=True)
        c.column("limit_per_minute", Integer)
        c.column("limit_per_hour", Integer)
        c.column("limit_per_day", Integer)
        c.column("updated_at", Timestamp, default="CURRENT_TIMESTAMP")

    async def set_limits(
        self,
        ref: AccountRef,
        *,
        per_minute: int | None = None,
        per_hour: int | None = None,
        per_day: int | None = None,
    ) -> None:
        """Insert or replace the limits of an account."""
        await self.upsert(
            {
                "account_id": ref.account_id,
                "connector": ref.connector,
                "limit_per_minute": _limit(per_minute),
                "limit_per_hour": _limit(per_hour),
                "limit_per_day": _limit(per_day),
            },
            conflict_columns=["account_id", "connector"],
            update_extras=["updated_at = CURRENT_TIMESTAMP"],
        )

    async def get(self, ref: AccountRef) -> dict[str, Any] | None:
        """Fetch the limits of an account, or None if it has none."""
        return await self.select_one(
            where={"account_id": ref.account_id, "connector": ref.connector}
        )

    async def remove(self, ref: AccountRef) -> bool:
        """Delete the limits of an account. Returns True if a record existed."""
        rowcount = await self.delete(
            where={"account_id": ref.account_id, "connector": ref.connector}
        )
        return rowcount > 0

    async def list_all(self) -> list[dict[str, Any]]:
        return await self.select(order_by="connector, account_id")


__all__ = ["RateLimitsTable"]
