"""Runtime introspection of in-memory records.

The resolver has no static schema for the records it writes into. This module
inspects values at runtime to classify them and to find the declared type of a
field, so that empty optional sub-structures can be created on demand.

A *structured* value is an object whose named fields can be read and assigned:
dataclass instances, pydantic models and plain objects carrying instance
attributes. Scalars, strings, bytes, containers and mappings are not.

Declared types are read with `typing.get_type_hints`. A class defined inside a
function whose string annotations name other local classes cannot have those
annotations resolved; such fields are treated as having an unknown type, so
they are walked when already populated but never materialized.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import types
import typing
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel


__all__ = [
    "is_struct",
    "is_struct_type",
    "field_names",
    "has_field",
    "declared_type",
    "struct_type_of",
    "zero_value",
]


_SCALAR_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    memoryview,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    Enum,
)
_CONTAINER_TYPES: tuple[type, ...] = (list, tuple, set, frozenset, Mapping)
_OPAQUE_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)

_ZERO_FACTORIES: dict[Any, Any] = {
    bool: lambda: False,
    int: int,
    float: float,
    complex: complex,
    str: str,
    bytes: bytes,
    bytearray: bytearray,
    decimal.Decimal: lambda: decimal.Decimal(0),
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
}


def is_struct_type(tp: Any) -> bool:
    """True if instances of `tp` are structured values."""
    if not isinstance(tp, type) or typing.get_origin(tp) is not None:
        return False
    if dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel):
        return True
    if issubclass(tp, _SCALAR_TYPES + _CONTAINER_TYPES + _OPAQUE_TYPES):
        return False
    return bool(_annotations(tp))


def is_struct(value: Any) -> bool:
    """True if `value` exposes named, assignable fields."""
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
        return True
    if isinstance(value, _SCALAR_TYPES + _CONTAINER_TYPES + _OPAQUE_TYPES):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def _slot_names(tp: type) -> set[str]:
    names: set[str] = set()
    for klass in tp.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.update(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def _annotations(tp: type) -> dict[str, Any]:
    """Resolved type hints of `tp`, falling back to raw annotations.

    Forward references that cannot be resolved leave the raw annotation in
    place; `struct_type_of` treats such strings as unknown types.
    """
    try:
        return typing.get_type_hints(tp)
    except (NameError, TypeError):
        hints: dict[str, Any] = {}
        for klass in reversed(tp.__mro__):
            hints.update(klass.__dict__.get("__annotations__", {}))
        return hints


def field_names(value: Any) -> set[str]:
    """Names of the fields declared on, or carried by, a structured value."""
    tp = type(value)
    if isinstance(value, BaseModel):
        return set(tp.model_fields)
    if dataclasses.is_dataclass(value):
        names = {f.name for f in dataclasses.fields(value)}
    else:
        names = {
            name
            for name, hint in _annotations(tp).items()
            if typing.get_origin(hint) is not typing.ClassVar
        }
    names.update(_slot_names(tp))
    names.update(getattr(value, "__dict__", {}))
    return names


def has_field(value: Any, name: str) -> bool:
    return name in field_names(value)


def declared_type(value: Any, name: str) -> Any:
    """Declared type of field `name` on a structured value, or None if unknown."""
    tp = type(value)
    if isinstance(value, BaseModel):
        model_field = tp.model_fields.get(name)
        return model_field.annotation if model_field is not None else None
    return _annotations(tp).get(name)


def _unwrap_optional(tp: Any) -> Any:
    if typing.get_origin(tp) in (Union, types.UnionType):
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def struct_type_of(tp: Any) -> type | None:
    """Structured type a field of declared type `tp` points to.

    ``Optional[Address]``, ``Address | None`` and ``Address`` all yield
    ``Address``. Any other declared type yields None.
    """
    inner = _unwrap_optional(tp)
    return inner if is_struct_type(inner) else None


def zero_value(tp: Any, _building: frozenset = frozenset()) -> Any:
    """Zero value of a declared type.

    Optional and unknown types are None. Structured types are instantiated
    with every required field set to its own zero value.

    Raises:
        TypeError: If the type cannot be instantiated without arguments, or
            requires an instance of itself through its required fields.
    """
    if tp is None or tp is Any or isinstance(tp, str):
        return None
    if _unwrap_optional(tp) is not tp:
        return None
    origin = typing.get_origin(tp) or tp
    if origin in _ZERO_FACTORIES:
        return _ZERO_FACTORIES[origin]()
    if is_struct_type(tp):
        return zero_struct(tp, _building)
    return None


def zero_struct(tp: type, _building: frozenset = frozenset()) -> Any:
    """Instantiate a structured type with zero values for required fields."""
    if tp in _building:
        raise TypeError(f"cannot build recursive type {tp.__name__}")
    _building = _building | {tp}
    if issubclass(tp, BaseModel):
        required = {
            name: zero_value(model_field.annotation, _building)
            for name, model_field in tp.model_fields.items()
            if model_field.is_required()
        }
        return tp.model_construct(**required)
    if dataclasses.is_dataclass(tp):
        hints = _annotations(tp)
        kwargs = {
            f.name: zero_value(hints.get(f.name), _building)
            for f in dataclasses.fields(tp)
            if f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        }
        return tp(**kwargs)
    return tp()
