# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Column definitions used by Table.configure()."""

from __future__ import annotations

from typing import Any

String = "TEXT"
Integer = "INTEGER"
Timestamp = "TIMESTAMP"
Blob = "BLOB"


class Column:
    """A single column definition.

    Attributes:
        name: Column name.
        type_: SQL type (one of String, Integer, Timestamp, Blob).
        nullable: False adds NOT NULL.
        default: SQL default expression or literal.
        primary_key: Part of the primary key.
    """

    def __init__(
        self,
        name: str,
        type_: str,
        *,
        nullable: bool = True,
        default: Any = None,
        primary_key: bool = False,
    ):
        self.name = name
        self.type_ = type_
        self.nullable = nullable
        self.default = default
        self.primary_key = primary_key

    def to_sql(self, inline_pk: bool = True, constant_default: bool = False) -> str:
        """Render the column definition for CREATE/ALTER TABLE.

        Args:
            inline_pk: Declare PRIMARY KEY on the column itself.
            constant_default: Omit CURRENT_TIMESTAMP defaults, which SQLite
                rejects in ALTER TABLE ADD COLUMN.
        """
        parts = [f'"{self.name}"', self.type_]
        if self.primary_key and inline_pk:
            parts.append("PRIMARY KEY")
        if not self.nullable:
            parts.append("NOT NULL")
        if self.default is not None and not (constant_default and self.is_expression_default):
            parts.append(f"DEFAULT {self._default_sql()}")
        return " ".join(parts)

    @property
    def is_expression_default(self) -> bool:
        return isinstance(self.default, str) and self.default.upper() == "CURRENT_TIMESTAMP"

    def _default_sql(self) -> str:
        if isinstance(self.default, str) and not self.is_expression_default:
            escaped = self.default.replace("'", "''")
            return f"'{escaped}'"
        return str(self.default)

    def __repr__(self) -> str:
        return f"Column({self.name!r}, {self.type_!r})"


class Columns(dict[str, Column]):
    """Ordered column registry for a table."""

    def column(self, name: str, type_: str, **kwargs: Any) -> Column:
        """Define a column and return it."""
        col = Column(name, type_, **kwargs)
        self[name] = col
        return col

    def primary_keys(self) -> list[str]:
        return [c.name for c in self.values() if c.primary_key]


__all__ = ["Blob", "Column", "Columns", "Integer", "String", "Timestamp"]
