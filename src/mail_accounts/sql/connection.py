# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Adapter factory from connection strings."""

from __future__ import annotations

from .base import DbAdapter
from .sqlite import SqliteAdapter


def create_adapter(connection_string: str) -> DbAdapter:
    """Create database adapter from connection string.

    Connection string formats:
        - "sqlite:/path/to/db.sqlite" or just "/path/to/db.sqlite"
        - a relative path, resolved by SQLite against the working directory

    Raises:
        ValueError: If an unsupported database type is requested.
    """
    if ":" not in connection_string or connection_string == ":memory:":
        return SqliteAdapter(connection_string)

    db_type, connection_info = connection_string.split(":", 1)
    if db_type.lower() == "sqlite":
        return SqliteAdapter(connection_info)

    # Windows drive letters ("C:\\data\\accounts.db")
    if len(db_type) == 1 and db_type.isalpha():
        return SqliteAdapter(connection_string)

    raise ValueError(
        f"Unknown database type: '{db_type}'. Supported: sqlite"
    )


__all__ = ["create_adapter"]
