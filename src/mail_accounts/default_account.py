# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Default account coordination.

Keeps the "default" scenario pointing at an account that exists, or at
nothing. After accounts are deleted, ``repair_default`` restores that
state with the least surprising outcome:

- the previous default survived: nothing changes;
- one account is left: it becomes the default;
- several are left: the user picks one, or the default is cleared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .logger import get_logger
from .models import DEFAULT_SCENARIO

if TYPE_CHECKING:
    from .accounts import EmailAccounts
    from .entities import ScenariosTable
    from .models import AccountRef, EmailAccount
    from .prompts import AccountChooser
    from .security import AccessContext

logger = get_logger("default_account")


class DefaultAccountCoordinator:
    """Reads, sets and repairs the default email account.

    Attributes:
        accounts: Service used to list the accounts that currently exist.
        scenarios: Scenario store holding the default binding.
        chooser: Optional interactive chooser used by repair_default.
    """

    def __init__(
        self,
        accounts: EmailAccounts,
        scenarios: ScenariosTable,
        chooser: AccountChooser | None = None,
    ):
        self.accounts = accounts
        self.scenarios = scenarios
        self.chooser = chooser

    async def get_default(self) -> AccountRef | None:
        """The account bound to the default scenario, as stored."""
        return await self.scenarios.get_account(DEFAULT_SCENARIO)

    async def get_default_account(self) -> EmailAccount | None:
        """The default account resolved against the live listing.

        Returns None when no default is bound or the bound account no
        longer exists.
        """
        ref = await self.get_default()
        if ref is None:
            return None
        listing = await self.accounts.collect_accounts()
        return listing.find(ref)

    async def make_default(self, account: EmailAccount, context: AccessContext) -> None:
        """Bind the default scenario to an account, replacing any previous one.

        Raises:
            PermissionDenied: The context lacks the admin capability.
        """
        context.require_admin("change the default email account")
        if not account.account_id:
            return
        await self._assign(account.ref)

    async def repair_default(
        self, prior_default: AccountRef | None, prompt: bool = True
    ) -> None:
        """Restore a valid default after accounts were deleted.

        Args:
            prior_default: The default binding captured before the deletions.
            prompt: Allow asking the user to choose among several survivors.
        """
        listing = await self.accounts.collect_accounts()
        remaining = listing.accounts

        if prior_default is not None and prior_default.connector in listing.failures:
            # Cannot tell whether the default survived.
            logger.warning(
                "Default account %s left unchanged: connector '%s' could not be listed",
                prior_default, prior_default.connector,
            )
            return

        if not remaining:
            if prior_default is not None and listing.complete:
                await self.scenarios.unassign(DEFAULT_SCENARIO)
                logger.info("No email accounts left, default cleared")
            return

        if prior_default is not None and listing.find(prior_default) is not None:
            return

        if len(remaining) == 1 and listing.complete:
            await self._assign(remaining[0].ref)
            return

        if prompt and self.chooser is not None:
            # The chooser must see the post-deletion state.
            await self.accounts.db.commit()
            chosen = self.chooser(remaining)
            if chosen is not None and listing.find(chosen.ref) is not None:
                await self._assign(chosen.ref)
                return

        if await self.scenarios.unassign(DEFAULT_SCENARIO):
            logger.info("Default email account cleared, %d accounts left to choose from", len(remaining))

    async def _assign(self, ref: AccountRef) -> None:
        await self.scenarios.assign(DEFAULT_SCENARIO, ref)
        logger.info("Default email account set to %s", ref)


__all__ = ["DefaultAccountCoordinator"]
