# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by the mail accounts package.

PermissionDenied and the address errors are meant to be shown to the user
as-is. ConnectorUnavailable is raised only where a caller explicitly asks
for a connector; bulk deletion treats a missing connector as a skip.
"""

from __future__ import annotations


class MailAccountsError(Exception):
    """Base class for all mail accounts errors."""


class PermissionDenied(MailAccountsError):
    """The current user lacks the capability to change email setup."""


class AddressError(MailAccountsError, ValueError):
    """An email address string failed validation."""


class EmptyAddress(AddressError):
    """An empty address was given where one is required."""

    def __init__(self, message: str = "An email address must be specified.") -> None:
        super().__init__(message)


class InvalidAddress(AddressError):
    """An address does not follow the mailbox grammar."""

    def __init__(self, address: str, reason: str | None = None) -> None:
        self.address = address
        self.reason = reason
        message = f"The email address \"{address}\" is not valid."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class ConnectorUnavailable(MailAccountsError):
    """The requested connector is not installed."""

    def __init__(self, connector: str) -> None:
        self.connector = connector
        super().__init__(f"Email connector '{connector}' is not installed")


__all__ = [
    "AddressError",
    "ConnectorUnavailable",
    "EmptyAddress",
    "InvalidAddress",
    "MailAccountsError",
    "PermissionDenied",
]
