# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for EmailAccounts listing, connectors and logo cache."""

from mail_accounts.accounts import EmailAccounts
from mail_accounts.models import AccountRef, ConnectorInfo
from mail_accounts.registry import ConnectorRegistry

from tests.helpers import PNG_BYTES, FakeConnector, make_account


class TestListAllAccounts:
    async def test_accounts_are_tagged_and_sorted(self, accounts):
        result = await accounts.list_all_accounts()
        assert [(a.name, a.connector) for a in result] == [
            ("Alice", "alpha"),
            ("Bob", "alpha"),
            ("Carol", "beta"),
        ]

    async def test_sort_is_case_insensitive_then_stable(self, db):
        one = FakeConnector("one", [make_account("x", "zed"), make_account("y", "Same")])
        two = FakeConnector("two", [make_account("x", "same"), make_account("z", "Anna")])
        accounts = EmailAccounts(db, ConnectorRegistry([two, one]))

        result = await accounts.list_all_accounts()

        assert [str(a.ref) for a in result] == ["two:z", "one:y", "two:x", "one:x"]

    async def test_no_logos_by_default(self, accounts, alpha):
        result = await accounts.list_all_accounts()
        assert all(a.logo is None for a in result)
        assert alpha.logo_calls == 0

    async def test_logos_attached_on_request(self, accounts):
        result = await accounts.list_all_accounts(load_logos=True)
        by_connector = {a.connector: a.logo for a in result}
        assert by_connector["alpha"] == PNG_BYTES
        assert by_connector["beta"] is None

    async def test_same_account_id_in_two_connectors(self, db):
        one = FakeConnector("one", [make_account("main", "One")])
        two = FakeConnector("two", [make_account("main", "Two")])
        accounts = EmailAccounts(db, ConnectorRegistry([one, two]))

        refs = {a.ref for a in await accounts.list_all_accounts()}

        assert refs == {AccountRef("main", "one"), AccountRef("main", "two")}

    async def test_uninstalled_connector_is_not_listed(self, accounts, registry):
        registry.unregister("beta")
        result = await accounts.list_all_accounts()
        assert {a.connector for a in result} == {"alpha"}

    async def test_empty_registry(self, db):
        accounts = EmailAccounts(db, ConnectorRegistry())
        assert await accounts.list_all_accounts() == []
        assert await accounts.is_any_account_registered() is False


class TestCollectAccounts:
    async def test_failing_connector_is_isolated(self, db, alpha):
        broken = FakeConnector("broken", fail=RuntimeError("server unreachable"))
        accounts = EmailAccounts(db, ConnectorRegistry([broken, alpha]))

        listing = await accounts.collect_accounts()

        assert not listing.complete
        assert listing.failures == {"broken": "server unreachable"}
        assert [a.account_id for a in listing.accounts] == ["a1", "a2"]

    async def test_failure_without_message_reports_type(self, db):
        broken = FakeConnector("broken", fail=ConnectionError())
        accounts = EmailAccounts(db, ConnectorRegistry([broken]))

        listing = await accounts.collect_accounts()

        assert listing.failures == {"broken": "ConnectionError"}

    async def test_find(self, accounts):
        listing = await accounts.collect_accounts()
        assert listing.complete
        assert listing.find(AccountRef("b1", "beta")).name == "Carol"
        assert listing.find(AccountRef("b1", "alpha")) is None


class TestRegistrationChecks:
    async def test_is_any_account_registered(self, accounts):
        assert await accounts.is_any_account_registered() is True

    async def test_is_account_registered(self, accounts):
        assert await accounts.is_account_registered("a1", "alpha") is True
        assert await accounts.is_account_registered("a1", "beta") is False

    async def test_empty_id_short_circuits(self, accounts, alpha):
        alpha.fail = AssertionError("listing must not run")
        assert await accounts.is_account_registered("", "alpha") is False
        assert await accounts.is_account_registered(None, "alpha") is False

    async def test_uninstalled_connector_short_circuits(self, accounts):
        assert await accounts.is_account_registered("a1", "gamma") is False

    async def test_get_account(self, accounts):
        account = await accounts.get_account(AccountRef("a2", "alpha"))
        assert account.name == "Bob"
        assert await accounts.get_account(AccountRef("a2", "gamma")) is None


class TestListAllConnectors:
    async def test_one_entry_per_connector(self, accounts):
        infos = await accounts.list_all_connectors()
        assert infos == [
            ConnectorInfo(connector="alpha", description="alpha connector", logo=PNG_BYTES),
            ConnectorInfo(connector="beta", description="beta connector", logo=None),
        ]
        assert all(info.description for info in infos)

    async def test_connectors_bypass_logo_cache(self, accounts, alpha, db):
        await db.connector_logos.store("alpha", b"stale")
        infos = await accounts.list_all_connectors()
        assert infos[0].logo == PNG_BYTES
        assert alpha.logo_calls == 1

    async def test_follows_installed_set(self, accounts, registry):
        registry.unregister("alpha")
        assert [i.connector for i in await accounts.list_all_connectors()] == ["beta"]
        registry.register(FakeConnector("gamma"))
        assert [i.connector for i in await accounts.list_all_connectors()] == ["beta", "gamma"]


class TestImportLogo:
    async def test_logo_fetched_once_and_cached(self, accounts, alpha, db):
        assert await accounts.import_logo("alpha") == PNG_BYTES
        assert await accounts.import_logo("alpha") == PNG_BYTES
        await accounts.list_all_accounts(load_logos=True)

        assert alpha.logo_calls == 1
        assert await db.connector_logos.get("alpha") == PNG_BYTES

    async def test_cached_logo_wins(self, accounts, alpha, db):
        await db.connector_logos.store("alpha", b"cached")
        assert await accounts.import_logo("alpha") == b"cached"
        assert alpha.logo_calls == 0

    async def test_empty_logo_not_cached(self, accounts, beta, db):
        assert await accounts.import_logo("beta") is None
        assert await accounts.import_logo("beta") is None
        assert beta.logo_calls == 2
        assert await db.connector_logos.get("beta") is None

    async def test_invalid_base64_not_cached(self, accounts, beta, db):
        beta.logo = "not base64!"
        assert await accounts.import_logo("beta") is None
        assert await db.connector_logos.get("beta") is None

    async def test_wrapped_base64_is_accepted(self, accounts, beta):
        beta.logo = "iVBORw0K\nGgo=\n"
        assert await accounts.import_logo("beta") == b"\x89PNG\r\n\x1a\n"

    async def test_unknown_connector(self, accounts):
        assert await accounts.import_logo("gamma") is None
