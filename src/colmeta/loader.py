"""Column definition loading.

Schema mappers usually build columns from struct inspection, but column sets
can also be declared in YAML or plain dictionaries. All entry points return a
list of `Column` objects in declaration order.

Example:
    >>> import colmeta
    >>>
    >>> columns = colmeta.from_string('''
    ... columns:
    ...   - name: id
    ...     field: ID
    ...     type: BIGINT
    ...     nullable: false
    ...     primary_key: true
    ...     autoincrement: true
    ...   - name: city
    ...     field: addr.city
    ...     type: VARCHAR
    ...     length: 64
    ... ''')
    >>> [c.name for c in columns]
    ['id', 'city']
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .column import Column
from .exceptions import ColumnParsingError
from .serializers import ColumnDeserializer


__all__ = ["from_dict", "from_string", "from_yaml"]


def from_dict(data: Mapping[str, Any]) -> list[Column]:
    """Build columns from a dictionary with a ``columns`` list.

    Args:
        data: Mapping whose ``columns`` key holds the column definitions.

    Returns:
        The columns in declaration order.

    Raises:
        ColumnParsingError: If the data is malformed.
    """
    if not isinstance(data, Mapping):
        raise ColumnParsingError("Column set data must be a mapping.")
    unknown = set(data) - {"columns"}
    if unknown:
        unknown_sorted = ", ".join(sorted(str(key) for key in unknown))
        raise ColumnParsingError(f"Unknown key(s) in column set: {unknown_sorted}.")
    if "columns" not in data:
        raise ColumnParsingError("Missing required key(s) in column set: columns.")
    return ColumnDeserializer().deserialize_many(data["columns"])


def from_string(content: str) -> list[Column]:
    """Build columns from YAML text.

    Raises:
        ColumnParsingError: If the YAML is invalid or does not parse to a
            dictionary.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ColumnParsingError(f"Invalid YAML content: {e}") from e
    if not isinstance(data, dict):
        raise ColumnParsingError("Loaded YAML content did not parse to a dictionary.")
    return from_dict(data)


def from_yaml(path: str | Path) -> list[Column]:
    """Build columns from a YAML file."""
    return from_string(Path(path).read_text(encoding="utf-8"))
