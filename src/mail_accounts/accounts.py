# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Aggregated view of the email accounts of every installed connector.

EmailAccounts is the entry point used by the CLI and by applications:

- listing: one pass over all installed connectors, each account tagged
  with its connector id and optionally the connector logo;
- connectors: description and logo of every installed connector;
- deletion: admin check, confirmation, per-account deletion with cleanup
  of the records owned by the account, then default account repair.

Example:
    db = MailAccountsDb("/data/accounts.db")
    await db.init_db()
    registry = ConnectorRegistry([SmtpConnector(db)])
    accounts = EmailAccounts(db, registry)

    for account in await accounts.list_all_accounts():
        print(account.describe())
"""

from __future__ import annotations

import base64
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .default_account import DefaultAccountCoordinator
from .events import AccountEvents
from .logger import get_logger
from .models import AccountListing, AccountRef, ConnectorInfo, EmailAccount

if TYPE_CHECKING:
    from .connectors.base import EmailConnector
    from .mailaccounts_db import MailAccountsDb
    from .prompts import AccountChooser, ConfirmDeletion
    from .registry import ConnectorRegistry
    from .security import AccessContext

logger = get_logger("accounts")


def _sort_key(account: EmailAccount) -> tuple[str, str, str]:
    return (account.name.casefold(), account.connector, account.account_id)


def _decode_logo(connector: EmailConnector) -> bytes | None:
    """Fetch and decode a connector logo. None when empty or not base64."""
    try:
        payload = connector.get_logo_as_base64()
    except Exception:
        logger.exception("Connector '%s' failed to provide its logo", connector.name)
        return None
    if not payload:
        return None
    try:
        logo = base64.b64decode("".join(payload.split()), validate=True)
    except ValueError:
        logger.warning("Connector '%s' returned a logo that is not valid base64", connector.name)
        return None
    return logo or None


class EmailAccounts:
    """Listing and deletion of accounts across installed connectors.

    Attributes:
        db: Database holding scenarios, rate limits and the logo cache.
        registry: Installed connectors.
        events: Account lifecycle notifications.
        confirm: Optional callable asked before deleting accounts.
        defaults: Coordinator of the default account.
    """

    def __init__(
        self,
        db: MailAccountsDb,
        registry: ConnectorRegistry,
        *,
        events: AccountEvents | None = None,
        confirm: ConfirmDeletion | None = None,
        chooser: AccountChooser | None = None,
    ):
        self.db = db
        self.registry = registry
        self.events = events or AccountEvents()
        self.confirm = confirm
        self.defaults = DefaultAccountCoordinator(self, db.scenarios, chooser=chooser)
        self.events.subscribe(self._release_scenarios)

    def close(self) -> None:
        """Detach from ``events``, which may outlive this instance."""
        self.events.unsubscribe(self._release_scenarios)

    async def _release_scenarios(self, account: EmailAccount) -> None:
        released = await self.db.scenarios.unassign_account(account.ref)
        if released:
            logger.info("Released %d scenarios bound to %s", released, account.ref)

    # ----------------------------------------------------------------- listing

    async def collect_accounts(self, load_logos: bool = False) -> AccountListing:
        """List the accounts of every installed connector.

        A connector whose listing raises is logged and reported in
        ``AccountListing.failures``; the other connectors are still listed.

        Args:
            load_logos: Attach the cached connector logo to each account.

        Returns:
            AccountListing with accounts ordered by display name, then
            connector and account id.
        """
        listing = AccountListing()
        for connector_id in self.registry.installed():
            connector = self.registry.get(connector_id)
            if connector is None:
                continue
            try:
                accounts = await connector.get_accounts()
            except Exception as exc:
                logger.exception("Failed to list accounts of connector '%s'", connector_id)
                listing.failures[connector_id] = str(exc) or type(exc).__name__
                continue

            update: dict[str, object] = {"connector": connector_id}
            if load_logos:
                update["logo"] = await self.import_logo(connector_id)
            listing.accounts.extend(account.model_copy(update=update) for account in accounts)

        listing.accounts.sort(key=_sort_key)
        return listing

    async def list_all_accounts(self, load_logos: bool = False) -> list[EmailAccount]:
        """Accounts of every installed connector, ordered by display name."""
        listing = await self.collect_accounts(load_logos=load_logos)
        return listing.accounts

    async def get_account(self, ref: AccountRef) -> EmailAccount | None:
        """Find one account in the live listing."""
        if not self.registry.is_valid_connector(ref.connector):
            return None
        listing = await self.collect_accounts()
        return listing.find(ref)

    async def is_any_account_registered(self) -> bool:
        return bool(await self.list_all_accounts())

    async def is_account_registered(self, account_id: str | None, connector: str | None) -> bool:
        """True if the account exists under an installed connector."""
        if not account_id or not self.registry.is_valid_connector(connector):
            return False
        ref = AccountRef(account_id, connector)
        return any(account.ref == ref for account in await self.list_all_accounts())

    # -------------------------------------------------------------- connectors

    async def list_all_connectors(self) -> list[ConnectorInfo]:
        """Describe every installed connector.

        Description and logo come straight from the implementation, the
        logo cache is not consulted.
        """
        infos = []
        for connector_id in self.registry.installed():
            connector = self.registry.get(connector_id)
            if connector is None:
                continue
            infos.append(
                ConnectorInfo(
                    connector=connector_id,
                    description=connector.get_description(),
                    logo=_decode_logo(connector),
                )
            )
        return infos

    async def import_logo(self, connector_id: str) -> bytes | None:
        """Return the cached logo of a connector, importing it on first use.

        Empty or undecodable logos are not cached, so they are fetched again
        on the next call.
        """
        cached = await self.db.connector_logos.get(connector_id)
        if cached is not None:
            return cached

        connector = self.registry.get(connector_id)
        if connector is None:
            return None
        logo = _decode_logo(connector)
        if logo is None:
            return None
        await self.db.connector_logos.store(connector_id, logo)
        logger.debug("Cached logo of connector '%s' (%d bytes)", connector_id, len(logo))
        return logo

    # ---------------------------------------------------------------- deletion

    async def delete_accounts(
        self,
        accounts: Sequence[EmailAccount],
        context: AccessContext,
        prompt: bool = True,
    ) -> list[AccountRef]:
        """Delete accounts and repair the default account afterwards.

        Accounts whose connector is no longer installed are skipped. For every
        other account the connector deletes it, its rate limit record is
        removed and "account deleted" is emitted.

        Args:
            accounts: Accounts to delete.
            context: Acting user; must hold the admin capability.
            prompt: Ask for confirmation and, if needed, for a new default.

        Returns:
            References of the accounts handed to their connector for deletion.
            Empty when the user declined.

        Raises:
            PermissionDenied: The context lacks the admin capability.
        """
        context.require_admin("delete email accounts")

        if prompt and self.confirm is not None and accounts:
            if not self.confirm(accounts):
                logger.info("Deletion of %d email accounts declined by %s", len(accounts), context.user)
                return []

        prior_default = await self.defaults.get_default()

        deleted: list[AccountRef] = []
        for account in accounts:
            connector = self.registry.get(account.connector)
            if connector is None:
                logger.info("Skipping %s: connector '%s' is not installed", account.ref, account.connector)
                continue
            existed = await connector.delete_account(account.account_id)
            if not existed:
                logger.debug("Account %s was already gone", account.ref)
            await self.db.rate_limits.remove(account.ref)
            await self.events.account_deleted(account)
            deleted.append(account.ref)

        await self.defaults.repair_default(prior_default, prompt=prompt)
        return deleted

    async def make_default(self, account: EmailAccount, context: AccessContext) -> None:
        """Make an account the default one. Requires the admin capability."""
        await self.defaults.make_default(account, context)


__all__ = ["EmailAccounts"]
