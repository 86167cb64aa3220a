"""SQL type descriptors for colmeta columns.

A `SQLType` is the logical type of a column: a type name plus the default
size parameters used when the column itself does not carry any. The core never
interprets a type beyond handing it to a `Dialect`, but the category helpers
below let schema mappers decide how to encode values for a column.

Example:
    >>> from colmeta.types import SQLType
    >>>
    >>> varchar = SQLType("VARCHAR", default_length=255)
    >>> varchar.is_text
    True
    >>> SQLType("BigInt").is_numeric
    True
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ColmetaValidationError


__all__ = [
    "SQLType",
    "TEXT_TYPES",
    "BLOB_TYPES",
    "TIME_TYPES",
    "NUMERIC_TYPES",
    "BOOL_TYPES",
    "JSON_TYPES",
    "ARRAY_TYPES",
]


TEXT_TYPES = frozenset(
    {
        "CHAR",
        "NCHAR",
        "VARCHAR",
        "NVARCHAR",
        "VARCHAR2",
        "NVARCHAR2",
        "TINYTEXT",
        "TEXT",
        "NTEXT",
        "CLOB",
        "MEDIUMTEXT",
        "LONGTEXT",
        "UUID",
        "UNIQUEIDENTIFIER",
        "SYSNAME",
        "ENUM",
        "SET",
    }
)

BLOB_TYPES = frozenset(
    {
        "BINARY",
        "VARBINARY",
        "TINYBLOB",
        "BLOB",
        "MEDIUMBLOB",
        "LONGBLOB",
        "BYTEA",
        "IMAGE",
        "BYTES",
    }
)

TIME_TYPES = frozenset(
    {
        "DATE",
        "DATETIME",
        "DATETIME2",
        "SMALLDATETIME",
        "DATETIMEOFFSET",
        "TIME",
        "TIMESTAMP",
        "TIMESTAMPZ",
        "TIMESTAMPTZ",
        "YEAR",
    }
)

NUMERIC_TYPES = frozenset(
    {
        "BIT",
        "TINYINT",
        "SMALLINT",
        "MEDIUMINT",
        "INT",
        "INTEGER",
        "BIGINT",
        "SERIAL",
        "BIGSERIAL",
        "FLOAT",
        "REAL",
        "DOUBLE",
        "DECIMAL",
        "NUMERIC",
        "NUMBER",
        "MONEY",
        "SMALLMONEY",
    }
)

BOOL_TYPES = frozenset({"BOOL", "BOOLEAN"})

JSON_TYPES = frozenset({"JSON", "JSONB"})

ARRAY_TYPES = frozenset({"ARRAY"})


@dataclass(frozen=True)
class SQLType:
    """Logical SQL type of a column.

    Args:
        name: The SQL type name, e.g. "VARCHAR" or "BIGINT". Matching against
            the category sets is case-insensitive.
        default_length: Size used when the column's own `length` is 0.
        default_length2: Secondary size (scale) used when the column's own
            `length2` is 0.

    Raises:
        ColmetaValidationError: If the name is empty or a default length is negative.
    """

    name: str
    default_length: int = 0
    default_length2: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ColmetaValidationError("SQLType 'name' must be a non-empty string.")
        if self.default_length < 0 or self.default_length2 < 0:
            raise ColmetaValidationError(
                f"SQLType '{self.name}' default lengths must be non-negative."
            )

    @property
    def normalized_name(self) -> str:
        return self.name.strip().upper()

    @property
    def is_text(self) -> bool:
        return self.normalized_name in TEXT_TYPES

    @property
    def is_blob(self) -> bool:
        return self.normalized_name in BLOB_TYPES

    @property
    def is_time(self) -> bool:
        return self.normalized_name in TIME_TYPES

    @property
    def is_numeric(self) -> bool:
        return self.normalized_name in NUMERIC_TYPES

    @property
    def is_bool(self) -> bool:
        return self.normalized_name in BOOL_TYPES

    @property
    def is_json(self) -> bool:
        return self.normalized_name in JSON_TYPES

    @property
    def is_array(self) -> bool:
        return self.normalized_name in ARRAY_TYPES

    def __str__(self) -> str:
        params = [p for p in (self.default_length, self.default_length2) if p]
        if not params:
            return self.normalized_name
        return f"{self.normalized_name}({', '.join(map(str, params))})"
