"""Dialect capability consumed by the DDL renderer.

The column core never inspects a dialect's internals; it only asks for the
identifier quote characters, the rendering of a column's SQL type, the
auto-increment keyword and whether nullability is spelled out explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..column import Column


class Dialect(ABC):
    """Vendor-specific SQL rendering rules for column definitions.

    Subclasses implement the four capability queries. Dialects whose opening
    and closing identifier quotes differ (e.g. ``[name]``) also override
    `closing_quote_char`.
    """

    @abstractmethod
    def quote_char(self) -> str:
        """Character opening a quoted identifier."""
        ...

    @abstractmethod
    def render_sql_type(self, column: Column) -> str:
        """Render the SQL type of `column`, including size parameters."""
        ...

    @abstractmethod
    def auto_increment_keyword(self) -> str:
        """Keyword marking an auto-increment primary key. May be empty."""
        ...

    @abstractmethod
    def shows_explicit_nullability(self) -> bool:
        """True if column definitions spell out NULL / NOT NULL."""
        ...

    def closing_quote_char(self) -> str:
        return self.quote_char()

    def quote(self, identifier: str) -> str:
        return f"{self.quote_char()}{identifier}{self.closing_quote_char()}"
