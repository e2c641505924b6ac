# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pydantic models shared by connectors, the registry and the CLI.

Models:
    - AccountRef: (account_id, connector) pair identifying one account
    - EmailAccount: snapshot of an account owned by a connector
    - ConnectorInfo: description and logo of an installed connector
    - AccountListing: result of one listing pass over all connectors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SCENARIO = "default"
"""Scenario tag whose account is used when nothing more specific is bound."""


class AccountRef(NamedTuple):
    """Identity of an account.

    Account ids are minted by connectors and may collide across connectors,
    so the connector is always part of the key.
    """

    account_id: str
    connector: str

    def __str__(self) -> str:
        return f"{self.connector}:{self.account_id}"

    @classmethod
    def parse(cls, value: str) -> AccountRef:
        """Parse the ``connector:account_id`` form used on the command line."""
        connector, sep, account_id = value.partition(":")
        if not sep or not connector or not account_id:
            raise ValueError(
                f"Invalid account reference '{value}', expected CONNECTOR:ACCOUNT_ID"
            )
        return cls(account_id=account_id, connector=connector)


class EmailAccount(BaseModel):
    """Email account as reported by its connector.

    Attributes:
        account_id: Identifier minted by the owning connector.
        connector: Id of the owning connector. Connectors may leave this
            empty; the registry tags every listed account.
        name: Display name.
        email_address: Mailbox address of the account.
        logo: Connector logo, attached only when logos are requested.
    """

    model_config = ConfigDict(frozen=True)

    account_id: Annotated[str, Field(description="Connector-scoped account identifier")]
    connector: Annotated[str, Field(default="", description="Owning connector id")]
    name: Annotated[str, Field(default="", description="Display name")]
    email_address: Annotated[str, Field(default="", description="Mailbox address")]
    logo: Annotated[bytes | None, Field(default=None, repr=False)]

    @property
    def ref(self) -> AccountRef:
        return AccountRef(self.account_id, self.connector)

    def describe(self) -> str:
        """Human-readable one-liner used in prompts and logs."""
        if self.name and self.email_address and self.name != self.email_address:
            return f"{self.name} <{self.email_address}> ({self.connector})"
        return f"{self.email_address or self.name or self.account_id} ({self.connector})"


class ConnectorInfo(BaseModel):
    """Installed connector as described by its implementation."""

    model_config = ConfigDict(frozen=True)

    connector: str
    description: str
    logo: Annotated[bytes | None, Field(default=None, repr=False)]


@dataclass
class AccountListing:
    """Accounts gathered from every installed connector.

    Attributes:
        accounts: Accounts ordered by display name.
        failures: Connector id to error message, for connectors whose
            listing raised. Their accounts are missing from ``accounts``.
    """

    accounts: list[EmailAccount] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failures

    def find(self, ref: AccountRef) -> EmailAccount | None:
        for account in self.accounts:
            if account.ref == ref:
                return account
        return None


__all__ = [
    "DEFAULT_SCENARIO",
    "AccountListing",
    "AccountRef",
    "ConnectorInfo",
    "EmailAccount",
]
