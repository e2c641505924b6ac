# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Scenarios table: which account serves each usage scenario."""

from __future__ import annotations

from typing import Any

from ...models import DEFAULT_SCENARIO, AccountRef
from ...sql import String, Table, Timestamp


class ScenariosTable(Table):
    """Scenario to account mapping.

    Each scenario maps to zero or one account. The "default" scenario is
    maintained by the DefaultAccountCoordinator; other scenarios are
    assigned by callers and released when their account is deleted.

    Schema: scenario (PK), account_id, connector, updated_at.
    """

    name = "scenarios"

    def configure(self) -> None:
        c = self.columns
        c.column("scenario", String, primary_key=True)
        c.column("account_id", String, nullable=False)
        c.column("connector", String, nullable=False)
        c.column("updated_at", Timestamp, default="CURRENT_TIMESTAMP")

    async def get_account(self, scenario: str = DEFAULT_SCENARIO) -> AccountRef | None:
        """Return the account bound to a scenario, or None."""
        row = await self.select_one(
            columns=["account_id", "connector"], where={"scenario": scenario}
        )
        if not row:
            return None
        return AccountRef(row["account_id"], row["connector"])

    async def assign(self, scenario: str, ref: AccountRef) -> None:
        """Bind a scenario to an account, replacing any previous binding."""
        await self.upsert(
            {
                "scenario": scenario,
                "account_id": ref.account_id,
                "connector": ref.connector,
            },
            conflict_columns=["scenario"],
            update_extras=["updated_at = CURRENT_TIMESTAMP"],
        )

    async def unassign(self, scenario: str) -> bool:
        """Remove a scenario binding. Returns True if one existed."""
        rowcount = await self.delete(where={"scenario": scenario})
        return rowcount > 0

    async def unassign_account(
        self, ref: AccountRef, keep: tuple[str, ...] = (DEFAULT_SCENARIO,)
    ) -> int:
        """Remove every binding to an account except the scenarios in ``keep``.

        Returns:
            Number of bindings removed.
        """
        params: dict[str, Any] = {"account_id": ref.account_id, "connector": ref.connector}
        query = 'DELETE FROM scenarios WHERE "account_id" = :account_id AND "connector" = :connector'
        if keep:
            names = []
            for i, scenario in enumerate(keep):
                params[f"keep_{i}"] = scenario
                names.append(f":keep_{i}")
            query += f' AND "scenario" NOT IN ({", ".join(names)})'
        return await self.execute(query, params)

    async def list_all(self) -> list[dict[str, Any]]:
        """Return all bindings ordered by scenario."""
        return await self.select(
            columns=["scenario", "account_id", "connector", "updated_at"],
            order_by="scenario",
        )


__all__ = ["ScenariosTable"]
