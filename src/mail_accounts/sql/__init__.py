# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Minimal async SQL layer with adapter pattern.

Usage:
    adapter = create_adapter("/data/accounts.db")

    rows = await adapter.fetch_all(
        "SELECT * FROM scenarios WHERE scenario = :scenario",
        {"scenario": "default"}
    )
"""

from .base import DbAdapter
from .column import Blob, Column, Columns, Integer, String, Timestamp
from .connection import create_adapter
from .sqldb import SqlDb
from .sqlite import SqliteAdapter
from .table import Table

__all__ = [
    "Blob",
    "Column",
    "Columns",
    "DbAdapter",
    "Integer",
    "SqlDb",
    "SqliteAdapter",
    "String",
    "Table",
    "Timestamp",
    "create_adapter",
]
