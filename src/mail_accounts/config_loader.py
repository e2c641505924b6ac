# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration loader for the mail accounts CLI.

Settings come from an INI-style configuration file or environment
variables.

Example:
    Configuration file format (config.ini)::

        [accounts]
        db_path = /var/lib/mail-accounts/accounts.db
        user = alice
        admin = true
        log_level = INFO
        prompt = true

    Loading the configuration::

        config = load_config("/etc/mail-accounts/config.ini")
        # Returns AccountsConfig dataclass
"""

from __future__ import annotations

import configparser
import getpass
import os
from dataclasses import dataclass, field
from pathlib import Path

from .logger import get_logger

SECTION = "accounts"


def _default_db_path() -> str:
    return str(Path.home() / ".mail-accounts" / "accounts.db")


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def _to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass
class AccountsConfig:
    """Runtime settings of the mail accounts CLI.

    Attributes:
        db_path: SQLite database file holding scenarios, rate limits, logos
            and SMTP accounts.
        user: Name of the acting user.
        admin: Whether the acting user may change email setup.
        log_level: Logging level name for the CLI.
        prompt: Ask for confirmation and default account choices.
    """

    db_path: str = field(default_factory=_default_db_path)
    user: str = field(default_factory=_default_user)
    admin: bool = False
    log_level: str = "WARNING"
    prompt: bool = True


logger = get_logger("config_loader")


def load_config(config_path: str | None = None) -> AccountsConfig:
    """Load configuration from config file or environment.

    Priority: config file > environment variables > defaults.

    Environment variables:
        GMA_DB_PATH: SQLite database file
        GMA_USER: Acting user name
        GMA_ADMIN: Grant the admin capability (true/false)
        GMA_LOG_LEVEL: Logging level name
        GMA_PROMPT: Enable interactive prompts (true/false)

    Args:
        config_path: Optional path to config.ini file

    Returns:
        AccountsConfig with parsed settings, using defaults for missing values.
    """
    defaults = AccountsConfig()
    config_values: dict = {}

    env_mapping = {
        "db_path": ("GMA_DB_PATH", str, defaults.db_path),
        "user": ("GMA_USER", str, defaults.user),
        "admin": ("GMA_ADMIN", _to_bool, defaults.admin),
        "log_level": ("GMA_LOG_LEVEL", str.upper, defaults.log_level),
        "prompt": ("GMA_PROMPT", _to_bool, defaults.prompt),
    }

    for key, (env_var, type_fn, default) in env_mapping.items():
        env_value = os.environ.get(env_var)
        if env_value is not None:
            try:
                config_values[key] = type_fn(env_value)
            except (ValueError, TypeError):
                logger.warning(f"Invalid value for {env_var}, using default")
                config_values[key] = default
        else:
            config_values[key] = default

    if config_path and Path(config_path).exists():
        config = configparser.ConfigParser()
        config.read(config_path)

        if config.has_section(SECTION):
            def get_bool(key: str, default: bool) -> bool:
                try:
                    return config.getboolean(SECTION, key, fallback=default)
                except ValueError:
                    logger.warning(f"Invalid value for [{SECTION}] {key}, using {default}")
                    return default

            def get_str(key: str, default: str) -> str:
                value = config.get(SECTION, key, fallback=default)
                return value.strip() if value else default

            config_values["db_path"] = str(Path(get_str("db_path", config_values["db_path"])).expanduser())
            config_values["user"] = get_str("user", config_values["user"])
            config_values["admin"] = get_bool("admin", config_values["admin"])
            config_values["log_level"] = get_str("log_level", config_values["log_level"]).upper()
            config_values["prompt"] = get_bool("prompt", config_values["prompt"])
    elif config_path:
        logger.warning(f"Config file {config_path} not found, using environment and defaults")

    return AccountsConfig(**config_values)


__all__ = ["AccountsConfig", "load_config"]
