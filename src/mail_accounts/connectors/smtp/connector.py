# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Built-in connector for accounts that send through an SMTP server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...address import validate_address
from ...logger import get_logger
from ...models import EmailAccount
from ..base import EmailConnector
from .table import SmtpAccountsTable

if TYPE_CHECKING:
    from ...mailaccounts_db import MailAccountsDb

# 16x16 PNG icon
SMTP_LOGO_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAABAAAAAQCAYAAAAf8/9hAAAAQ0lEQVR42mNgGAWjYBSMglEw"
    "CkbBKBgFo2AUjIJRMApGwSgYBaNgFIyCUTAKRsEoGAWjYBSMglEwCkbBKBgFo2AUDDcAAJ+m"
    "AAH0pN6aAAAAAElFTkSuQmCC"
)

logger = get_logger("connectors.smtp")


class SmtpConnector(EmailConnector):
    """Accounts stored locally with their SMTP server settings.

    The connector registers its ``smtp_accounts`` table on the shared
    database; call ``db.init_db()`` after constructing it.
    """

    name = "smtp"

    def __init__(self, db: MailAccountsDb):
        self.db = db
        if SmtpAccountsTable.name not in db.tables:
            db.add_table(SmtpAccountsTable)

    @property
    def table(self) -> SmtpAccountsTable:
        return self.db.table(SmtpAccountsTable.name)  # type: ignore[return-value]

    async def add_account(
        self,
        account_id: str,
        *,
        email_address: str,
        host: str,
        name: str | None = None,
        port: int = 587,
        user: str | None = None,
        password: str | None = None,
        use_tls: bool | None = None,
    ) -> EmailAccount:
        """Create or update an SMTP account.

        Raises:
            EmptyAddress, InvalidAddress: The sender address is not valid.
        """
        address = validate_address(email_address)
        record: dict[str, Any] = {
            "id": account_id,
            "name": name,
            "email_address": address,
            "host": host,
            "port": port,
            "user": user,
            "password": password,
            "use_tls": use_tls,
        }
        await self.table.add(record)
        logger.info("SMTP account '%s' saved (%s via %s:%s)", account_id, address, host, port)
        return EmailAccount(
            account_id=account_id,
            connector=self.name,
            name=name or address,
            email_address=address,
        )

    async def get_accounts(self) -> list[EmailAccount]:
        rows = await self.table.list_all()
        return [
            EmailAccount(
                account_id=row["id"],
                connector=self.name,
                name=row["name"] or row["email_address"],
                email_address=row["email_address"],
            )
            for row in rows
        ]

    async def delete_account(self, account_id: str) -> bool:
        return await self.table.remove(account_id)

    def get_description(self) -> str:
        return "SMTP: send email through any SMTP server"

    def get_logo_as_base64(self) -> str:
        return SMTP_LOGO_BASE64


__all__ = ["SMTP_LOGO_BASE64", "SmtpConnector"]
