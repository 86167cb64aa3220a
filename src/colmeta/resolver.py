"""Resolution of a column's dotted field path on an in-memory record.

Given a destination record and a `Column`, the resolver walks the column's
`field_path` and returns a `FieldHandle`, a settable reference to the target
field. Schema mappers use it at query-result time to write decoded column
values into records whose structure is only known at runtime.

Records come in three shapes (`RecordShape`):

- ``MAPPING``: any `collections.abc.Mapping`. Only the last path segment is
  used, as a key. Nested lookups are not performed on mappings, and a missing
  key yields an invalid handle instead of an error.
- ``BOXED``: a `Box` wrapping another value. One level is unwrapped and the
  inner value is walked as a structured record.
- ``STRUCT``: any other value, walked field by field.

While walking a structured record, an intermediate field that holds None but
is declared with a structured type (``Address | None``) is filled in place
with a zero-valued instance. **The record passed in is mutated** so that the
new sub-structure persists. Callers must not share a destination record across
threads without their own synchronization.

Example:
    >>> from dataclasses import dataclass
    >>> from colmeta import SQLType, new_column
    >>> from colmeta.resolver import resolve
    >>>
    >>> @dataclass
    ... class Address:
    ...     city: str = ""
    >>>
    >>> @dataclass
    ... class User:
    ...     addr: Address | None = None
    >>>
    >>> user = User()
    >>> column = new_column("city", "addr.city", SQLType("VARCHAR"), 64, 0, True)
    >>> resolve(user, column).set("Lisbon")
    >>> user.addr.city
    'Lisbon'
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from . import records
from .exceptions import ConfigError, FieldResolutionError

if TYPE_CHECKING:
    from .column import Column


__all__ = [
    "RecordShape",
    "Box",
    "FieldHandle",
    "AttributeField",
    "MappingEntry",
    "ResolverConfig",
    "FieldResolver",
    "record_shape",
    "resolve",
    "resolve_value",
]


# %% ---- Record shapes ---------------------------------------------------------------
class RecordShape(Enum):
    STRUCT = "struct"
    MAPPING = "mapping"
    BOXED = "boxed"


@dataclass
class Box:
    """Polymorphic wrapper around a record.

    Lets a caller pass a record whose concrete type is decided at runtime;
    the resolver unwraps exactly one level.
    """

    value: Any


def record_shape(record: Any) -> RecordShape:
    if isinstance(record, Mapping):
        return RecordShape.MAPPING
    if isinstance(record, Box):
        return RecordShape.BOXED
    return RecordShape.STRUCT


# %% ---- Field handles ---------------------------------------------------------------
class FieldHandle(ABC):
    """Settable reference to a located field.

    Two handles are equal when they refer to the same field of the same
    owner object.
    """

    def __init__(self, owner: Any, name: str):
        self._owner = owner
        self._name = name

    @property
    def owner(self) -> Any:
        """The object holding the field."""
        return self._owner

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        """True if the field currently exists on its owner."""
        ...

    @property
    def field_type(self) -> Any:
        """Declared type of the field, or None when unknown."""
        return None

    @abstractmethod
    def get(self) -> Any:
        """Read the field's current value."""
        ...

    @abstractmethod
    def set(self, value: Any) -> None:
        """Overwrite the field's value on its owner."""
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldHandle):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._owner is other._owner
            and self._name == other._name
        )

    def __hash__(self) -> int:
        return hash((type(self), id(self._owner), self._name))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(owner={type(self._owner).__name__},"
            f" name={self._name!r})"
        )


class AttributeField(FieldHandle):
    """Handle to a named field of a structured value."""

    def __init__(self, owner: Any, name: str, field_name: str | None = None):
        super().__init__(owner, name)
        # Dotted name of the column, reported by errors raised on assignment.
        self._field_name = field_name or name

    @property
    def is_valid(self) -> bool:
        return records.has_field(self._owner, self._name)

    @property
    def field_type(self) -> Any:
        return records.declared_type(self._owner, self._name)

    def get(self) -> Any:
        return getattr(self._owner, self._name, None)

    def set(self, value: Any) -> None:
        try:
            setattr(self._owner, self._name, value)
        # Frozen pydantic models raise ValidationError, a ValueError.
        except (AttributeError, TypeError, ValueError) as e:
            raise FieldResolutionError(
                self._field_name,
                f"field {self._field_name} is not settable: {e}",
            ) from e


class MappingEntry(FieldHandle):
    """Handle to a key of a mapping-shaped record.

    The entry may be absent; check `is_valid` before reading. Setting the
    entry stores the key when the mapping is mutable.
    """

    @property
    def is_valid(self) -> bool:
        return self._name in self._owner

    def get(self) -> Any:
        return self._owner.get(self._name)

    def set(self, value: Any) -> None:
        if not isinstance(self._owner, MutableMapping):
            raise FieldResolutionError(
                self._name, f"field {self._name} is not settable: mapping is read-only"
            )
        self._owner[self._name] = value


# %% ---- Resolver --------------------------------------------------------------------
@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for `FieldResolver`.

    Args:
        materialize: Fill empty optional sub-structures found along a field
            path with zero-valued instances. When False, such a field fails
            resolution instead. Defaults to True.
    """

    materialize: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.materialize, bool):
            raise ConfigError("materialize must be a boolean.")


class FieldResolver:
    """Locates the field a column maps onto inside a record.

    Args:
        config: Configuration object. If None, uses default `ResolverConfig`.
        logger: Optional logger instance.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config or ResolverConfig()
        self.logger = logger or logging.getLogger("colmeta.resolver")

    def resolve(self, record: Any, column: Column) -> FieldHandle:
        """Return a settable handle to `column`'s field on `record`.

        Args:
            record: A structured record, a mapping, a `Box`, or a
                `FieldHandle` whose current value is the record.
            column: Column whose `field_path` is walked.

        Returns:
            A `FieldHandle`. Handles on mapping records may be invalid.

        Raises:
            FieldResolutionError: If the path cannot be walked or the final
                field does not exist.
        """
        if isinstance(record, FieldHandle):
            record = record.get()
        return self.resolve_value(record, column)

    def resolve_value(self, value: Any, column: Column) -> FieldHandle:
        """Same as `resolve`, for a value that is not wrapped in a handle."""
        path = column.field_path

        shape = record_shape(value)
        if shape is RecordShape.MAPPING:
            return MappingEntry(value, path[-1])
        if shape is RecordShape.BOXED:
            value = value.value

        current = self._lookup(value, path[0], column)
        for segment in path[1:]:
            if current is None:
                break
            current = self._lookup(self._descend(current, column), segment, column)

        if current is None:
            raise FieldResolutionError(column.field_name)
        return current

    def _lookup(
        self, owner: Any, name: str, column: Column
    ) -> AttributeField | None:
        if not records.is_struct(owner) or not records.has_field(owner, name):
            return None
        return AttributeField(owner, name, column.field_name)

    def _descend(self, handle: AttributeField, column: Column) -> Any:
        value = handle.get()
        if value is not None:
            if records.is_struct(value):
                return value
            raise FieldResolutionError(column.field_name)

        struct_type = records.struct_type_of(handle.field_type)
        if struct_type is None or not self.config.materialize:
            raise FieldResolutionError(column.field_name)

        try:
            value = records.zero_struct(struct_type)
        except TypeError as e:
            raise FieldResolutionError(
                column.field_name,
                f"field {column.field_name} is not valid: cannot create"
                f" {struct_type.__name__} for '{handle.name}': {e}",
            ) from e
        handle.set(value)
        self.logger.debug(
            f"Materialized {struct_type.__name__} at '{handle.name}'"
            f" while resolving '{column.field_name}'"
        )
        return value


_default_resolver = FieldResolver()


def resolve(record: Any, column: Column) -> FieldHandle:
    """Resolve `column` on `record` with the default resolver."""
    return _default_resolver.resolve(record, column)


def resolve_value(value: Any, column: Column) -> FieldHandle:
    """Resolve `column` on an unwrapped value with the default resolver."""
    return _default_resolver.resolve_value(value, column)
