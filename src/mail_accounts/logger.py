"""Logging utilities for the mail accounts package.

This module provides a centralized logging configuration helper. The actual
logging setup (level, handlers, format) should be configured via
``logging.basicConfig()`` in the main entry point to avoid duplicate handlers.

Example:
    Typical usage in a module::

        from mail_accounts.logger import get_logger

        logger = get_logger("registry")
        logger.info("Connector installed")
"""

import logging


def get_logger(name: str = "mail_accounts") -> logging.Logger:
    """Retrieve a logger namespaced under ``mail_accounts``.

    This function returns a standard library logger. It does not configure
    handlers or formatters; that responsibility lies with the application
    entry point.

    Args:
        name: Logger name. Names not already under ``mail_accounts`` are
            nested below it, so the CLI can configure one logger tree.

    Returns:
        A ``logging.Logger`` instance bound to the resolved name.

    Example:
        >>> logger = get_logger("accounts")
        >>> logger.name
        'mail_accounts.accounts'
    """
    if name != "mail_accounts" and not name.startswith("mail_accounts."):
        name = f"mail_accounts.{name}"
    return logging.getLogger(name)
