# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SMTP accounts table owned by the built-in SMTP connector."""

from __future__ import annotations

from typing import Any

from ...sql import Integer, String, Table, Timestamp


class SmtpAccountsTable(Table):
    """SMTP accounts: server configuration per sending mailbox.

    Fields:
    - id: Account identifier
    - name: Display name
    - email_address: Sender address
    - host, port: SMTP server
    - user, password: Authentication
    - use_tls: TLS mode (NULL=auto, 0=off, 1=on)
    """

    name = "smtp_accounts"

    def configure(self) -> None:
        c = self.columns
        c.column("id", String, primary_key=True)
        c.column("name", String)
        c.column("email_address", String, nullable=False)
        c.column("host", String, nullable=False)
        c.column("port", Integer, nullable=False, default=587)
        c.column("user", String)
        c.column("password", String)
        c.column("use_tls", Integer)
        c.column("created_at", Timestamp, default="CURRENT_TIMESTAMP")
        c.column("updated_at", Timestamp, default="CURRENT_TIMESTAMP")

    async def add(self, acc: dict[str, Any]) -> None:
        """Insert or update an SMTP account."""
        use_tls = acc.get("use_tls")
        use_tls_val = None if use_tls is None else (1 if use_tls else 0)

        await self.upsert(
            {
                "id": acc["id"],
                "name": acc.get("name") or acc["email_address"],
                "email_address": acc["email_address"],
                "host": acc["host"],
                "port": int(acc.get("port") or 587),
                "user": acc.get("user"),
                "password": acc.get("password"),
                "use_tls": use_tls_val,
            },
            conflict_columns=["id"],
            update_extras=["updated_at = CURRENT_TIMESTAMP"],
        )

    async def get(self, account_id: str) -> dict[str, Any]:
        """Fetch a single SMTP account or raise if not found."""
        account = await self.select_one(where={"id": account_id})
        if not account:
            raise ValueError(f"SMTP account '{account_id}' not found")
        return self._decode_use_tls(account)

    async def list_all(self) -> list[dict[str, Any]]:
        """Return SMTP accounts without credentials."""
        columns = [
            "id", "name", "email_address", "host", "port", "user", "use_tls",
            "created_at", "updated_at",
        ]
        rows = await self.select(columns=columns, order_by="id")
        return [self._decode_use_tls(acc) for acc in rows]

    async def remove(self, account_id: str) -> bool:
        """Remove an SMTP account. Returns True if it existed."""
        rowcount = await self.delete(where={"id": account_id})
        return rowcount > 0

    def _decode_use_tls(self, account: dict[str, Any]) -> dict[str, Any]:
        """Convert use_tls INTEGER to bool/None."""
        if "use_tls" in account:
            val = account["use_tls"]
            account["use_tls"] = bool(val) if val is not None else None
        return account


__all__ = ["SmtpAccountsTable"]
