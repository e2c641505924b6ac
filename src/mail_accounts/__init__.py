# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email account registry over pluggable connectors.

Features:
    - Pluggable connectors, installed explicitly or via entry points
    - Aggregated account listing with per-connector failure isolation
    - Connector logo cache
    - Default account bookkeeping across deletions
    - Per-account rate limits and scenario bindings
    - Email address validation
    - SQLite persistence

Example::

    from mail_accounts import ConnectorRegistry, EmailAccounts, MailAccountsDb
    from mail_accounts.connectors import SmtpConnector

    db = MailAccountsDb("/data/accounts.db")
    registry = ConnectorRegistry([SmtpConnector(db)])
    await db.init_db()

    accounts = EmailAccounts(db, registry)
    listing = await accounts.list_all_accounts()
"""

from .accounts import EmailAccounts
from .address import validate_address, validate_addresses
from .connectors import EmailConnector
from .default_account import DefaultAccountCoordinator
from .errors import (
    AddressError,
    ConnectorUnavailable,
    EmptyAddress,
    InvalidAddress,
    MailAccountsError,
    PermissionDenied,
)
from .events import AccountEvents
from .mailaccounts_db import MailAccountsDb
from .models import DEFAULT_SCENARIO, AccountListing, AccountRef, ConnectorInfo, EmailAccount
from .registry import ConnectorRegistry
from .security import AccessContext

__all__ = [
    "DEFAULT_SCENARIO",
    "AccessContext",
    "AccountEvents",
    "AccountListing",
    "AccountRef",
    "AddressError",
    "ConnectorInfo",
    "ConnectorRegistry",
    "ConnectorUnavailable",
    "DefaultAccountCoordinator",
    "EmailAccount",
    "EmailAccounts",
    "EmailConnector",
    "EmptyAddress",
    "InvalidAddress",
    "MailAccountsDb",
    "MailAccountsError",
    "PermissionDenied",
    "validate_address",
    "validate_addresses",
]
