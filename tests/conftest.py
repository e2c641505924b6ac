# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: a throwaway database and in-memory connectors."""

import pytest

from mail_accounts.accounts import EmailAccounts
from mail_accounts.mailaccounts_db import MailAccountsDb
from mail_accounts.registry import ConnectorRegistry
from mail_accounts.security import AccessContext

from tests.helpers import PNG_BASE64, FakeConnector, make_account


@pytest.fixture
async def db(tmp_path):
    """Database with all tables initialized."""
    database = MailAccountsDb(str(tmp_path / "accounts.db"))
    await database.init_db()
    yield database
    await database.close()


@pytest.fixture
def alpha():
    return FakeConnector(
        "alpha",
        [make_account("a1", "Alice"), make_account("a2", "Bob")],
        logo=PNG_BASE64,
    )


@pytest.fixture
def beta():
    return FakeConnector("beta", [make_account("b1", "Carol")])


@pytest.fixture
def registry(alpha, beta):
    return ConnectorRegistry([alpha, beta])


@pytest.fixture
def accounts(db, registry):
    service = EmailAccounts(db, registry)
    yield service
    service.close()


@pytest.fixture
def admin():
    return AccessContext.admin("alice")


@pytest.fixture
def guest():
    return AccessContext(user="guest")
