# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Account lifecycle notifications."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from .logger import get_logger

if TYPE_CHECKING:
    from .models import EmailAccount

AccountListener = Callable[["EmailAccount"], Awaitable[None]]

logger = get_logger("events")


class AccountEvents:
    """Fan-out of "account deleted" notifications to async subscribers.

    Subscribers run in subscription order. A subscriber that raises is
    logged and skipped; the remaining subscribers and the deletion that
    triggered the event carry on.
    """

    def __init__(self) -> None:
        self._deleted: list[AccountListener] = []

    def subscribe(self, callback: AccountListener) -> None:
        self._deleted.append(callback)

    def unsubscribe(self, callback: AccountListener) -> None:
        if callback in self._deleted:
            self._deleted.remove(callback)

    async def account_deleted(self, account: EmailAccount) -> None:
        logger.info("Email account %s deleted", account.ref)
        for callback in list(self._deleted):
            try:
                await callback(account)
            except Exception:
                logger.exception(
                    "Subscriber %r failed handling deletion of %s", callback, account.ref
                )


__all__ = ["AccountEvents", "AccountListener"]
