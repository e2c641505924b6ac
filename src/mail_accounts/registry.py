# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Registry of installed email connectors.

The installed set is mutable at runtime: connectors can be registered and
unregistered while the process runs, so callers about to act on a
connector re-check it with ``get`` or ``is_valid_connector`` instead of
keeping an earlier answer.

Third-party connectors are advertised through the ``mail_accounts.connectors``
entry-point group. Each entry point names a factory (usually the connector
class) that is called with the shared MailAccountsDb::

    [project.entry-points."mail_accounts.connectors"]
    exchange = "mail_exchange.connector:ExchangeConnector"
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from .connectors.base import EmailConnector
from .errors import ConnectorUnavailable
from .logger import get_logger

if TYPE_CHECKING:
    from .mailaccounts_db import MailAccountsDb

ENTRY_POINT_GROUP = "mail_accounts.connectors"

logger = get_logger("registry")


class ConnectorRegistry:
    """Mapping of connector id to connector implementation."""

    def __init__(self, connectors: list[EmailConnector] | None = None):
        self._connectors: dict[str, EmailConnector] = {}
        for connector in connectors or []:
            self.register(connector)

    def register(self, connector: EmailConnector) -> None:
        """Install a connector, replacing any connector with the same id."""
        if not isinstance(connector, EmailConnector):
            raise TypeError(f"{connector!r} does not implement EmailConnector")
        if not connector.name:
            raise ValueError(f"{type(connector).__name__} must define 'name'")
        if connector.name in self._connectors:
            logger.warning("Replacing installed connector '%s'", connector.name)
        self._connectors[connector.name] = connector
        logger.debug("Connector '%s' installed", connector.name)

    def unregister(self, connector_id: str) -> bool:
        """Uninstall a connector. Returns True if it was installed."""
        removed = self._connectors.pop(connector_id, None)
        if removed is not None:
            logger.debug("Connector '%s' uninstalled", connector_id)
        return removed is not None

    def discover(self, db: MailAccountsDb) -> list[str]:
        """Install connectors advertised by installed distributions.

        Entry points that fail to load or do not produce an EmailConnector
        are logged and skipped.

        Returns:
            Ids of the connectors installed by this call.
        """
        installed: list[str] = []
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                factory = ep.load()
                connector = factory(db)
            except Exception:
                logger.exception("Failed to load connector entry point '%s'", ep.name)
                continue
            if not isinstance(connector, EmailConnector):
                logger.warning(
                    "Entry point '%s' produced %r, not an EmailConnector", ep.name, connector
                )
                continue
            self.register(connector)
            installed.append(connector.name)
        return installed

    def get(self, connector_id: str | None) -> EmailConnector | None:
        """Return the installed connector, or None."""
        if not connector_id:
            return None
        return self._connectors.get(connector_id)

    def require(self, connector_id: str) -> EmailConnector:
        """Return the installed connector or raise ConnectorUnavailable."""
        connector = self.get(connector_id)
        if connector is None:
            raise ConnectorUnavailable(connector_id)
        return connector

    def installed(self) -> list[str]:
        """Ids of the installed connectors, in registration order."""
        return list(self._connectors)

    def is_valid_connector(self, connector_id: str | None) -> bool:
        """True iff the connector is installed right now."""
        return self.get(connector_id) is not None

    def __contains__(self, connector_id: object) -> bool:
        return connector_id in self._connectors

    def __len__(self) -> int:
        return len(self._connectors)


__all__ = ["ENTRY_POINT_GROUP", "ConnectorRegistry"]
