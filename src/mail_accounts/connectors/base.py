# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Abstract base class for email connectors.

A connector integrates one email provider or protocol. It owns the storage
of its accounts; the registry only reads snapshots and asks the connector
to delete. Implementations must provide four capabilities:

- ``get_accounts``: list the accounts the connector currently holds
- ``delete_account``: delete one account by id
- ``get_description``: short human description of the connector
- ``get_logo_as_base64``: logo image encoded as base64, may be empty

Example:
    Minimal connector::

        class ExchangeConnector(EmailConnector):
            name = "exchange"

            async def get_accounts(self):
                return [EmailAccount(account_id="1", name="Sales",
                                     email_address="sales@example.com")]

            async def delete_account(self, account_id):
                return False

            def get_description(self):
                return "Microsoft Exchange Online mailboxes"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import EmailAccount


class EmailConnector(ABC):
    """Capability interface every installed connector implements.

    Attributes:
        name: Connector id. Stable, short, unique among installed connectors.
    """

    name: str = ""

    @abstractmethod
    async def get_accounts(self) -> list[EmailAccount]:
        """Return the connector's accounts.

        The ``connector`` field of the returned accounts may be left empty;
        the registry tags every account with ``name``.
        """
        ...

    @abstractmethod
    async def delete_account(self, account_id: str) -> bool:
        """Delete an account.

        Returns:
            True if an account was deleted, False if none had that id.
            Deleting an absent account is not an error.
        """
        ...

    @abstractmethod
    def get_description(self) -> str:
        """Short human description of the connector."""
        ...

    def get_logo_as_base64(self) -> str:
        """Logo image encoded as base64. Empty when the connector has none."""
        return ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


__all__ = ["EmailConnector"]
