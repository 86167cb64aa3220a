"""Dialect adapter backed by sqlglot's dialect registry.

`SQLGlotDialect` answers the capability queries of `Dialect` for any dialect
sqlglot knows about: identifier quoting is read from sqlglot's tokenizer
settings and SQL types are rendered by building a `DataType` expression and
serializing it for the target dialect. Auto-increment keywords and the
nullability display policy are not part of sqlglot's dialect model, so they
come from a small built-in table that callers can override.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect as SqlglotDialect
from sqlglot.errors import ParseError

from ..exceptions import (
    ConfigError,
    DialectError,
    UnsupportedFeatureError,
    validation_warning,
)
from .base import Dialect

if TYPE_CHECKING:
    from ..column import Column


# dialect name -> (auto-increment keyword, shows explicit nullability)
DIALECT_DEFAULTS: dict[str, tuple[str, bool]] = {
    "mysql": ("AUTO_INCREMENT", True),
    "sqlite": ("AUTOINCREMENT", False),
    "postgres": ("", True),
    "tsql": ("IDENTITY", True),
    "oracle": ("AUTO_INCREMENT", False),
}
_FALLBACK_DEFAULTS: tuple[str, bool] = ("", True)


class SQLGlotDialect(Dialect):
    """Column rendering rules for a sqlglot dialect.

    Args:
        name: sqlglot dialect name, e.g. "mysql", "postgres" or "sqlite".
        mode: "raise" raises `UnsupportedFeatureError` when a SQL type cannot be
            parsed by sqlglot. "coerce" warns and renders the raw type text in
            upper case instead. Defaults to "coerce".
        auto_increment: Overrides the built-in auto-increment keyword.
        show_create_null: Overrides the built-in nullability display policy.

    Raises:
        ConfigError: If `mode` is not "raise" or "coerce".
        DialectError: If sqlglot does not know the dialect.

    Example:
        >>> dialect = SQLGlotDialect("mysql")
        >>> dialect.quote("id")
        '`id`'
        >>> dialect.auto_increment_keyword()
        'AUTO_INCREMENT'
    """

    def __init__(
        self,
        name: str,
        *,
        mode: Literal["raise", "coerce"] = "coerce",
        auto_increment: str | None = None,
        show_create_null: bool | None = None,
    ):
        if mode not in {"raise", "coerce"}:
            raise ConfigError("mode must be one of 'raise' or 'coerce'.")
        try:
            self._dialect = SqlglotDialect.get_or_raise(name.lower())
        except ValueError as e:
            raise DialectError(
                f"Unknown SQL dialect '{name}': {e}",
                suggestions=["Use a dialect name supported by sqlglot"],
            ) from e

        self.name = name.lower()
        self.mode = mode
        default_auto_increment, default_show_null = DIALECT_DEFAULTS.get(
            self.name, _FALLBACK_DEFAULTS
        )
        self._auto_increment = (
            default_auto_increment if auto_increment is None else auto_increment
        )
        self._show_create_null = (
            default_show_null if show_create_null is None else show_create_null
        )

    def quote_char(self) -> str:
        return self._dialect.IDENTIFIER_START

    def closing_quote_char(self) -> str:
        return self._dialect.IDENTIFIER_END

    def auto_increment_keyword(self) -> str:
        return self._auto_increment

    def shows_explicit_nullability(self) -> bool:
        return self._show_create_null

    def render_sql_type(self, column: Column) -> str:
        type_text = self._type_text(column)
        try:
            data_type = exp.DataType.build(type_text, dialect=self.name)
        except (ParseError, ValueError) as e:
            msg = (
                f"SQLGlotDialect '{self.name}' cannot parse type '{type_text}'"
                f" for column '{column.name}'"
            )
            if self.mode == "raise":
                raise UnsupportedFeatureError(f"{msg}.") from e
            validation_warning(
                message=f"{msg}. The type will be rendered verbatim.",
                filename="colmeta.dialects.sqlglot_dialect",
                module=__name__,
            )
            return type_text.upper()
        return data_type.sql(dialect=self.name)

    @staticmethod
    def _type_text(column: Column) -> str:
        name = column.sql_type.name.strip()
        length = column.effective_length
        length2 = column.effective_length2
        if length and length2:
            return f"{name}({length}, {length2})"
        if length:
            return f"{name}({length})"
        return name

    def __repr__(self) -> str:
        return f"SQLGlotDialect(name={self.name!r}, mode={self.mode!r})"
