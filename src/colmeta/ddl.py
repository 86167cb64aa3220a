"""Column-definition fragments for CREATE TABLE statements.

The renderer combines a `Column` with a `Dialect` to produce the text of one
column definition. Fragments end with a trailing space so that a schema mapper
can concatenate them inside a larger statement:

    `id` INT PRIMARY KEY AUTO_INCREMENT NOT NULL

`render_without_primary_key` never emits the primary-key clause, for tables
whose primary key is declared as a separate table-level constraint.

The `default` of a column is emitted verbatim. Callers are trusted to provide
a sanitized SQL expression.

Example:
    >>> from colmeta import SQLGlotDialect, SQLType, new_column
    >>> from colmeta.ddl import DDLRenderer
    >>>
    >>> column = new_column("id", "ID", SQLType("INT"), 0, 0, nullable=False,
    ...                     is_primary_key=True, is_auto_increment=True)
    >>> DDLRenderer(SQLGlotDialect("mysql")).render(column)
    '`id` INT PRIMARY KEY AUTO_INCREMENT NOT NULL '
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .column import Column
    from .dialects.base import Dialect


__all__ = ["DDLRenderer", "render_with_primary_key", "render_without_primary_key"]


def _render(column: Column, dialect: Dialect, include_primary_key: bool) -> str:
    sql = dialect.quote(column.name) + " "
    sql += dialect.render_sql_type(column) + " "

    if include_primary_key and column.is_primary_key:
        sql += "PRIMARY KEY "
        if column.is_auto_increment:
            sql += dialect.auto_increment_keyword() + " "

    if dialect.shows_explicit_nullability():
        sql += "NULL " if column.nullable else "NOT NULL "

    if column.default != "":
        sql += "DEFAULT " + column.default + " "

    return sql


def render_with_primary_key(column: Column, dialect: Dialect) -> str:
    """Render a column definition including its primary-key clause.

    Args:
        column: The column to render.
        dialect: Dialect supplying quoting, type names and keywords.

    Returns:
        A trailing-space-terminated column definition.
    """
    return _render(column, dialect, include_primary_key=True)


def render_without_primary_key(column: Column, dialect: Dialect) -> str:
    """Render a column definition, omitting PRIMARY KEY and auto-increment."""
    return _render(column, dialect, include_primary_key=False)


class DDLRenderer:
    """Renders column definitions for a fixed dialect.

    Args:
        dialect: Dialect supplying quoting, type names and keywords.
        logger: Optional logger instance.
    """

    def __init__(self, dialect: Dialect, logger: logging.Logger | None = None):
        self.dialect = dialect
        self.logger = logger or logging.getLogger("colmeta.ddl")

    def render(self, column: Column, *, include_primary_key: bool = True) -> str:
        sql = _render(column, self.dialect, include_primary_key)
        self.logger.debug(f"Rendered column '{column.name}': {sql!r}")
        return sql

    def render_with_primary_key(self, column: Column) -> str:
        return self.render(column, include_primary_key=True)

    def render_without_primary_key(self, column: Column) -> str:
        return self.render(column, include_primary_key=False)

    def render_columns(
        self, columns: Iterable[Column], *, include_primary_key: bool = True
    ) -> list[str]:
        """Render several columns in order.

        Args:
            columns: Columns of one table.
            include_primary_key: False when the primary key is declared as a
                table-level constraint.

        Returns:
            One fragment per column.
        """
        return [
            self.render(column, include_primary_key=include_primary_key)
            for column in columns
        ]
