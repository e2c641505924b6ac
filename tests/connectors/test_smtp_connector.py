# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the built-in SMTP connector and its table."""

import base64

import pytest

from mail_accounts.accounts import EmailAccounts
from mail_accounts.connectors import SmtpConnector
from mail_accounts.errors import EmptyAddress, InvalidAddress
from mail_accounts.mailaccounts_db import MailAccountsDb
from mail_accounts.models import AccountRef
from mail_accounts.registry import ConnectorRegistry


@pytest.fixture
async def smtp(tmp_path):
    db = MailAccountsDb(str(tmp_path / "smtp.db"))
    connector = SmtpConnector(db)
    await db.init_db()
    yield connector
    await db.close()


class TestSmtpConnector:
    def test_registers_its_table(self, tmp_path):
        db = MailAccountsDb(str(tmp_path / "smtp.db"))
        SmtpConnector(db)
        SmtpConnector(db)
        assert "smtp_accounts" in db.tables

    async def test_add_account(self, smtp):
        account = await smtp.add_account(
            "sales",
            name="Sales",
            email_address=" Sales@Example.COM ",
            host="smtp.example.com",
        )
        assert account.ref == AccountRef("sales", "smtp")
        assert account.email_address == "sales@example.com"

        accounts = await smtp.get_accounts()
        assert [(a.account_id, a.name, a.email_address) for a in accounts] == [
            ("sales", "Sales", "sales@example.com"),
        ]

    async def test_name_defaults_to_address(self, smtp):
        await smtp.add_account("info", email_address="info@example.com", host="smtp.example.com")
        accounts = await smtp.get_accounts()
        assert accounts[0].name == "info@example.com"

    async def test_add_rejects_bad_address(self, smtp):
        with pytest.raises(InvalidAddress):
            await smtp.add_account("x", email_address="not-an-address", host="smtp.example.com")
        with pytest.raises(EmptyAddress):
            await smtp.add_account("x", email_address="", host="smtp.example.com")
        assert await smtp.get_accounts() == []

    async def test_server_settings_stored(self, smtp):
        await smtp.add_account(
            "ops",
            email_address="ops@example.com",
            host="mail.example.com",
            port=465,
            user="ops",
            password="secret",
            use_tls=True,
        )
        record = await smtp.table.get("ops")
        assert record["host"] == "mail.example.com"
        assert record["port"] == 465
        assert record["password"] == "secret"
        assert record["use_tls"] is True

    async def test_list_all_hides_password(self, smtp):
        await smtp.add_account("ops", email_address="ops@example.com", host="h", password="secret")
        rows = await smtp.table.list_all()
        assert "password" not in rows[0]
        assert rows[0]["use_tls"] is None

    async def test_add_updates_existing(self, smtp):
        await smtp.add_account("ops", email_address="ops@example.com", host="old.example.com")
        await smtp.add_account("ops", email_address="ops@example.com", host="new.example.com", use_tls=False)
        record = await smtp.table.get("ops")
        assert record["host"] == "new.example.com"
        assert record["use_tls"] is False
        assert len(await smtp.get_accounts()) == 1

    async def test_get_missing_raises(self, smtp):
        with pytest.raises(ValueError):
            await smtp.table.get("nope")

    async def test_delete_account(self, smtp):
        await smtp.add_account("ops", email_address="ops@example.com", host="h")
        assert await smtp.delete_account("ops") is True
        assert await smtp.delete_account("ops") is False
        assert await smtp.get_accounts() == []

    def test_description_and_logo(self, tmp_path):
        connector = SmtpConnector(MailAccountsDb(str(tmp_path / "smtp.db")))
        assert connector.get_description()
        logo = base64.b64decode(connector.get_logo_as_base64(), validate=True)
        assert logo.startswith(b"\x89PNG")


class TestSmtpThroughRegistry:
    async def test_listing_and_deletion(self, smtp, admin):
        accounts = EmailAccounts(smtp.db, ConnectorRegistry([smtp]))
        await smtp.add_account("b", name="Bravo", email_address="b@example.com", host="h")
        await smtp.add_account("a", name="Alpha", email_address="a@example.com", host="h")
        await smtp.db.rate_limits.set_limits(AccountRef("a", "smtp"), per_hour=5)

        listed = await accounts.list_all_accounts(load_logos=True)
        assert [a.name for a in listed] == ["Alpha", "Bravo"]
        assert listed[0].logo.startswith(b"\x89PNG")

        await accounts.delete_accounts(listed[:1], admin, prompt=False)

        assert [a.account_id for a in await smtp.get_accounts()] == ["b"]
        assert await smtp.db.rate_limits.get(AccountRef("a", "smtp")) is None
        assert await accounts.defaults.get_default() == AccountRef("b", "smtp")
