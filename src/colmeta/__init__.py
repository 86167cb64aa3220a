from .column import Column, MapType, new_column
from .ddl import DDLRenderer, render_with_primary_key, render_without_primary_key
from .dialects import Dialect, SQLGlotDialect
from .exceptions import FieldResolutionError
from .loader import from_dict, from_string, from_yaml
from .resolver import (
    Box,
    FieldHandle,
    FieldResolver,
    RecordShape,
    ResolverConfig,
    resolve,
    resolve_value,
)
from .types import SQLType

__all__ = [
    "Box",
    "Column",
    "DDLRenderer",
    "Dialect",
    "FieldHandle",
    "FieldResolutionError",
    "FieldResolver",
    "MapType",
    "RecordShape",
    "ResolverConfig",
    "SQLGlotDialect",
    "SQLType",
    "from_dict",
    "from_string",
    "from_yaml",
    "new_column",
    "render_with_primary_key",
    "render_without_primary_key",
    "resolve",
    "resolve_value",
]
