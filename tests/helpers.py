# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Test doubles shared across the test suite."""

from __future__ import annotations

import base64

from mail_accounts.connectors.base import EmailConnector
from mail_accounts.models import EmailAccount

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")


def make_account(account_id: str, name: str, email_address: str | None = None) -> EmailAccount:
    return EmailAccount(
        account_id=account_id,
        name=name,
        email_address=email_address or f"{account_id}@example.com",
    )


class FakeConnector(EmailConnector):
    """Connector keeping its accounts in a dict.

    Records deletions and logo fetches so tests can assert on them.
    """

    def __init__(self, name, accounts=(), *, description=None, logo="", fail=None):
        self.name = name
        self.accounts = {account.account_id: account for account in accounts}
        self.description = description if description is not None else f"{name} connector"
        self.logo = logo
        self.fail = fail
        self.deleted: list[str] = []
        self.logo_calls = 0

    async def get_accounts(self):
        if self.fail is not None:
            raise self.fail
        return list(self.accounts.values())

    async def delete_account(self, account_id):
        self.deleted.append(account_id)
        return self.accounts.pop(account_id, None) is not None

    def get_description(self):
        return self.description

    def get_logo_as_base64(self):
        self.logo_calls += 1
        return self.logo
