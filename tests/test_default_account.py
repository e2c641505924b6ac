# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for DefaultAccountCoordinator."""

from unittest.mock import MagicMock

import pytest

from mail_accounts.accounts import EmailAccounts
from mail_accounts.errors import PermissionDenied
from mail_accounts.models import DEFAULT_SCENARIO, AccountRef, EmailAccount
from mail_accounts.registry import ConnectorRegistry

from tests.helpers import FakeConnector, make_account

ALICE = AccountRef("a1", "alpha")
BOB = AccountRef("a2", "alpha")
CAROL = AccountRef("b1", "beta")


class TestMakeDefault:
    async def test_make_default(self, accounts, admin, db):
        account = await accounts.get_account(BOB)
        await accounts.make_default(account, admin)
        assert await db.scenarios.get_account(DEFAULT_SCENARIO) == BOB
        assert await accounts.defaults.get_default() == BOB

    async def test_make_default_overwrites(self, accounts, admin):
        await accounts.make_default(await accounts.get_account(BOB), admin)
        await accounts.make_default(await accounts.get_account(CAROL), admin)
        assert await accounts.defaults.get_default() == CAROL

    async def test_empty_account_id_is_noop(self, accounts, admin):
        await accounts.make_default(await accounts.get_account(BOB), admin)
        await accounts.make_default(EmailAccount(account_id="", connector="alpha"), admin)
        assert await accounts.defaults.get_default() == BOB

    async def test_requires_admin(self, accounts, admin, guest):
        await accounts.make_default(await accounts.get_account(BOB), admin)
        with pytest.raises(PermissionDenied) as exc_info:
            await accounts.make_default(await accounts.get_account(CAROL), guest)
        assert "guest" in str(exc_info.value)
        assert await accounts.defaults.get_default() == BOB


class TestGetDefaultAccount:
    async def test_no_default(self, accounts):
        assert await accounts.defaults.get_default() is None
        assert await accounts.defaults.get_default_account() is None

    async def test_resolves_live_account(self, accounts, admin):
        await accounts.make_default(await accounts.get_account(CAROL), admin)
        account = await accounts.defaults.get_default_account()
        assert account.name == "Carol"
        assert account.connector == "beta"

    async def test_stale_binding_resolves_to_none(self, accounts, db):
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "alpha"))
        assert await accounts.defaults.get_default() == AccountRef("gone", "alpha")
        assert await accounts.defaults.get_default_account() is None


class TestRepairDefault:
    async def test_surviving_default_is_kept(self, accounts, db):
        await db.scenarios.assign(DEFAULT_SCENARIO, CAROL)
        await accounts.defaults.repair_default(CAROL)
        assert await accounts.defaults.get_default() == CAROL

    async def test_single_survivor_becomes_default(self, db):
        connector = FakeConnector("solo", [make_account("s1", "Solo")])
        accounts = EmailAccounts(db, ConnectorRegistry([connector]))
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "solo"))

        await accounts.defaults.repair_default(AccountRef("gone", "solo"))

        assert await accounts.defaults.get_default() == AccountRef("s1", "solo")

    async def test_several_survivors_without_chooser_unassign(self, accounts, db):
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "alpha"))
        await accounts.defaults.repair_default(AccountRef("gone", "alpha"))
        assert await accounts.defaults.get_default() is None

    async def test_chooser_picks_new_default(self, accounts, db):
        chooser = MagicMock(side_effect=lambda candidates: candidates[-1])
        accounts.defaults.chooser = chooser
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "alpha"))

        await accounts.defaults.repair_default(AccountRef("gone", "alpha"))

        candidates = chooser.call_args.args[0]
        assert [a.ref for a in candidates] == [ALICE, BOB, CAROL]
        assert await accounts.defaults.get_default() == CAROL

    async def test_chooser_declines(self, accounts, db):
        accounts.defaults.chooser = MagicMock(return_value=None)
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "alpha"))

        await accounts.defaults.repair_default(AccountRef("gone", "alpha"))

        assert await accounts.defaults.get_default() is None

    async def test_chooser_not_consulted_without_prompt(self, accounts, db):
        chooser = MagicMock(side_effect=lambda candidates: candidates[0])
        accounts.defaults.chooser = chooser
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "alpha"))

        await accounts.defaults.repair_default(AccountRef("gone", "alpha"), prompt=False)

        chooser.assert_not_called()
        assert await accounts.defaults.get_default() is None

    async def test_chooser_returning_unknown_account_is_ignored(self, accounts, db):
        accounts.defaults.chooser = MagicMock(
            return_value=EmailAccount(account_id="ghost", connector="alpha")
        )
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "alpha"))

        await accounts.defaults.repair_default(AccountRef("gone", "alpha"))

        assert await accounts.defaults.get_default() is None

    async def test_no_accounts_left_clears_stale_default(self, db):
        accounts = EmailAccounts(db, ConnectorRegistry([FakeConnector("empty")]))
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "empty"))

        await accounts.defaults.repair_default(AccountRef("gone", "empty"))

        assert await accounts.defaults.get_default() is None

    async def test_failed_connector_leaves_default_untouched(self, db, alpha):
        broken = FakeConnector("broken", fail=RuntimeError("offline"))
        accounts = EmailAccounts(db, ConnectorRegistry([alpha, broken]))
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("x1", "broken"))

        await accounts.defaults.repair_default(AccountRef("x1", "broken"))

        assert await accounts.defaults.get_default() == AccountRef("x1", "broken")

    async def test_lone_survivor_not_promoted_while_a_connector_fails(self, db):
        solo = FakeConnector("solo", [make_account("s1", "Solo")])
        broken = FakeConnector("broken", fail=RuntimeError("offline"))
        accounts = EmailAccounts(db, ConnectorRegistry([solo, broken]))
        await db.scenarios.assign(DEFAULT_SCENARIO, AccountRef("gone", "solo"))

        await accounts.defaults.repair_default(AccountRef("gone", "solo"), prompt=False)

        assert await accounts.defaults.get_default() is None

    async def test_lone_survivor_offered_to_chooser_while_a_connector_fails(self, db):
        solo = FakeConnector("solo", [make_account("s1", "Solo")])
        broken = FakeConnector("broken", fail=RuntimeError("offline"))
        chooser = MagicMock(side_effect=lambda candidates: candidates[0])
        accounts = EmailAccounts(db, ConnectorRegistry([solo, broken]), chooser=chooser)

        await accounts.defaults.repair_default(AccountRef("gone", "solo"))

        chooser.assert_called_once()
        assert await accounts.defaults.get_default() == AccountRef("s1", "solo")
