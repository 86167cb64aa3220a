"""Column metadata for object-relational mapping.

A `Column` describes one persisted table column and the record field it maps
onto. The field is addressed by a dotted path (e.g. ``"addr.city"``) that the
`FieldResolver` walks at query-result time, while the rest of the metadata feeds
DDL generation through a `Dialect`.

Example:
    >>> from colmeta.column import new_column
    >>> from colmeta.types import SQLType
    >>>
    >>> column = new_column(
    ...     "city", "addr.city", SQLType("VARCHAR"), 64, 0, nullable=True
    ... )
    >>> column.field_path
    ('addr', 'city')
    >>> column.map_type.to_storage
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from enum import Enum
from typing import TYPE_CHECKING, Any

from .types import SQLType

if TYPE_CHECKING:
    from .dialects.base import Dialect
    from .resolver import FieldHandle


__all__ = ["Column", "MapType", "new_column"]


class MapType(Enum):
    """Direction in which a column takes part in reads and writes."""

    TWO_SIDES = 1
    ONLY_TO_STORAGE = 2
    ONLY_FROM_STORAGE = 3

    @property
    def to_storage(self) -> bool:
        """True if the column's field value is written to storage."""
        return self is not MapType.ONLY_FROM_STORAGE

    @property
    def from_storage(self) -> bool:
        """True if the column's stored value is read back into the record."""
        return self is not MapType.ONLY_TO_STORAGE


@dataclass(frozen=True, eq=False)
class Column:
    """Persisted-schema metadata for one table column.

    Columns are built once by a schema mapper and are read-only afterwards.
    Equality and hashing are by identity, so columns can key dictionaries
    and be collected in sets even though they carry mutable option fields.
    The only state filled in later is the split `field_path`, computed on
    first access and reused for the lifetime of the instance. Concurrent first
    accesses from several threads may split the name more than once; the
    results are equal, so the race is benign.

    Args:
        name: Storage-side column identifier.
        field_name: Dotted path of the mapped field in the record.
        sql_type: Logical SQL type handed to the dialect.
        length: Size parameter; 0 falls back to the type's default.
        length2: Secondary size parameter (e.g. decimal scale).
        nullable: Whether the column accepts NULL.
        default: SQL default expression. Empty means no DEFAULT clause. The
            value is emitted verbatim and must be sanitized by the caller.
        default_is_empty: True when the default was declared but left empty.
        indexes: Names of the indexes the column belongs to.
        is_primary_key: Part of the table's primary key.
        is_auto_increment: Value generated by the database on insert.
        map_type: Read/write direction of the mapping.
        is_created: Creation timestamp column.
        is_updated: Last-update timestamp column.
        is_deleted: Soft-delete timestamp column.
        is_cascade: Related record loaded in cascade.
        is_version: Optimistic-locking version column.
        enum_options: Enum member name to stored code.
        set_options: Flag name to stored bit.
        time_zone: Time zone applied to this column's time values.
        disable_time_zone: Ignore time zones for this column.
    """

    name: str
    field_name: str
    sql_type: SQLType
    length: int = 0
    length2: int = 0
    nullable: bool = True
    default: str = ""
    default_is_empty: bool = False
    indexes: set[str] = field(default_factory=set)
    is_primary_key: bool = False
    is_auto_increment: bool = False
    map_type: MapType = MapType.TWO_SIDES
    is_created: bool = False
    is_updated: bool = False
    is_deleted: bool = False
    is_cascade: bool = False
    is_version: bool = False
    enum_options: dict[str, int] = field(default_factory=dict)
    set_options: dict[str, int] = field(default_factory=dict)
    time_zone: tzinfo | None = None
    disable_time_zone: bool = False
    _field_path: tuple[str, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def field_path(self) -> tuple[str, ...]:
        """Segments of `field_name`, split on "." once and cached."""
        if self._field_path is None:
            object.__setattr__(self, "_field_path", tuple(self.field_name.split(".")))
        return self._field_path  # type: ignore[return-value]

    @property
    def has_default(self) -> bool:
        return self.default != ""

    @property
    def effective_length(self) -> int:
        """Column length, or the SQL type's default when unset."""
        return self.length or self.sql_type.default_length

    @property
    def effective_length2(self) -> int:
        return self.length2 or self.sql_type.default_length2

    # %% ---- DDL ---------------------------------------------------------------------
    def string(self, dialect: Dialect) -> str:
        """Render the column definition, including the primary-key clause."""
        from .ddl import render_with_primary_key

        return render_with_primary_key(self, dialect)

    def string_no_pk(self, dialect: Dialect) -> str:
        """Render the column definition without the primary-key clause."""
        from .ddl import render_without_primary_key

        return render_without_primary_key(self, dialect)

    # %% ---- Field resolution --------------------------------------------------------
    def value_of(self, record: Any) -> FieldHandle:
        """Return a settable handle to this column's field on `record`.

        Empty optional structures along the path are created in place, so
        `record` may be mutated by this call.
        """
        from .resolver import resolve

        return resolve(record, self)

    def value_of_v(self, value: Any) -> FieldHandle:
        """Same as `value_of` for a value that is already unwrapped."""
        from .resolver import resolve_value

        return resolve_value(value, self)


def new_column(
    name: str,
    field_name: str,
    sql_type: SQLType,
    length: int,
    length2: int,
    nullable: bool,
    **flags: Any,
) -> Column:
    """Create a column with every flag cleared and a two-sided mapping.

    No validation is performed here; a malformed `field_name` only surfaces
    when the column is resolved against a record.

    Args:
        name: Storage-side column identifier.
        field_name: Dotted path of the mapped field in the record.
        sql_type: Logical SQL type.
        length: Size parameter.
        length2: Secondary size parameter.
        nullable: Whether the column accepts NULL.
        **flags: Any other `Column` field, e.g. ``is_primary_key=True``.

    Returns:
        A new `Column`.
    """
    return Column(
        name=name,
        field_name=field_name,
        sql_type=sql_type,
        length=length,
        length2=length2,
        nullable=nullable,
        **flags,
    )
