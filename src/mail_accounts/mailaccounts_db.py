# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Mail accounts database manager with pre-registered tables.

Extends SqlDb with the stores the account registry relies on. No business
logic here - all operations go through the table classes.

Example:
    db = MailAccountsDb("/data/accounts.db")
    await db.init_db()

    await db.scenarios.assign("default", AccountRef("main", "smtp"))
    await db.rate_limits.set_limits(AccountRef("main", "smtp"), per_minute=30)
    logo = await db.connector_logos.get("smtp")

Connectors that keep their own records (the built-in SMTP connector does)
register extra tables with ``add_table`` before ``init_db`` runs.
"""

from __future__ import annotations

from .entities import ConnectorLogosTable, RateLimitsTable, ScenariosTable
from .logger import get_logger
from .sql import SqlDb

logger = get_logger("db")


class MailAccountsDb(SqlDb):
    """Database with the scenario, rate limit and logo tables registered.

    Access tables via table('name') or the typed properties:
        db.scenarios.get_account("default")
        db.rate_limits.remove(ref)
        db.connector_logos.get("smtp")
    """

    def __init__(self, connection_string: str = "accounts.db"):
        """Initialize the database.

        Args:
            connection_string: Database connection string. Formats:
                - "/path/to/db.sqlite" - SQLite file
                - "sqlite:/path/to/db" - SQLite explicit
        """
        super().__init__(connection_string)

        self.add_table(ScenariosTable)
        self.add_table(RateLimitsTable)
        self.add_table(ConnectorLogosTable)

    async def init_db(self) -> None:
        """Connect and create or upgrade every registered table."""
        await self.connect()
        await self.check_structure()
        logger.debug(
            "Database %s ready (%s)", self.connection_string, ", ".join(self.tables)
        )

    @property
    def scenarios(self) -> ScenariosTable:
        """Direct access to scenarios table."""
        return self.table("scenarios")  # type: ignore[return-value]

    @property
    def rate_limits(self) -> RateLimitsTable:
        """Direct access to rate_limits table."""
        return self.table("rate_limits")  # type: ignore[return-value]

    @property
    def connector_logos(self) -> ConnectorLogosTable:
        """Direct access to connector_logos table."""
        return self.table("connector_logos")  # type: ignore[return-value]


__all__ = ["MailAccountsDb"]
