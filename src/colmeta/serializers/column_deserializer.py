"""Deserialize dictionaries into `Column` instances."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..column import Column, MapType
from ..exceptions import ColmetaValidationError, ColumnParsingError
from ..types import SQLType


_COLUMN_KEYS = {
    "name",
    "field",
    "type",
    "length",
    "length2",
    "nullable",
    "default",
    "default_is_empty",
    "primary_key",
    "autoincrement",
    "cascade",
    "version",
    "created",
    "updated",
    "deleted",
    "map_type",
    "indexes",
    "enum_options",
    "set_options",
    "time_zone",
    "disable_time_zone",
}

# definition key -> Column attribute
_FLAG_KEYS = {
    "nullable": "nullable",
    "default_is_empty": "default_is_empty",
    "primary_key": "is_primary_key",
    "autoincrement": "is_auto_increment",
    "cascade": "is_cascade",
    "version": "is_version",
    "created": "is_created",
    "updated": "is_updated",
    "deleted": "is_deleted",
    "disable_time_zone": "disable_time_zone",
}

_MAP_TYPES = {
    "two_sides": MapType.TWO_SIDES,
    "only_to_storage": MapType.ONLY_TO_STORAGE,
    "only_from_storage": MapType.ONLY_FROM_STORAGE,
}


class ColumnDeserializer:
    """Builds and validates `Column` objects from dictionaries.

    A column definition looks like::

        name: city
        field: addr.city
        type: VARCHAR
        length: 64
        nullable: false
        indexes: [idx_city]

    `field` defaults to `name`. `type` is either a type name or a mapping with
    `name`, `default_length` and `default_length2`.
    """

    def deserialize(self, data: Mapping[str, Any]) -> Column:
        """Build a `Column` from one column definition."""
        if not isinstance(data, Mapping):
            raise ColumnParsingError("A column definition must be a mapping.")
        self._validate_keys(data, context="column definition")

        name = data["name"]
        if not isinstance(name, str) or not name:
            raise ColumnParsingError("The 'name' of a column must be a non-empty string.")
        context = f"column '{name}'"

        field_name = data.get("field", name)
        if not isinstance(field_name, str) or not field_name:
            raise ColumnParsingError(f"'field' of {context} must be a non-empty string.")

        kwargs: dict[str, Any] = {
            "name": name,
            "field_name": field_name,
            "sql_type": self._parse_sql_type(data["type"], context),
            "length": self._parse_length(data.get("length", 0), "length", context),
            "length2": self._parse_length(data.get("length2", 0), "length2", context),
        }
        for key, attribute in _FLAG_KEYS.items():
            if key in data:
                kwargs[attribute] = self._parse_bool(data[key], key, context)

        if "default" in data:
            kwargs["default"] = self._parse_default(data["default"], context)
        if "map_type" in data:
            kwargs["map_type"] = self._parse_map_type(data["map_type"], context)
        if "indexes" in data:
            kwargs["indexes"] = self._parse_indexes(data["indexes"], context)
        if "enum_options" in data:
            kwargs["enum_options"] = self._parse_options(
                data["enum_options"], "enum_options", context
            )
        if "set_options" in data:
            kwargs["set_options"] = self._parse_options(
                data["set_options"], "set_options", context
            )
        if data.get("time_zone") is not None:
            kwargs["time_zone"] = self._parse_time_zone(data["time_zone"], context)

        return Column(**kwargs)

    def deserialize_many(self, raw_columns: Any) -> list[Column]:
        """Build columns from a sequence of definitions.

        Raises:
            ColumnParsingError: If the definitions are not a list of mappings
                or two columns share a name.
        """
        if isinstance(raw_columns, (str, bytes)) or not isinstance(
            raw_columns, Sequence
        ):
            raise ColumnParsingError("'columns' must be a list of column definitions.")

        columns = [self.deserialize(col_def) for col_def in raw_columns]
        seen: set[str] = set()
        for column in columns:
            if column.name in seen:
                raise ColumnParsingError(f"Duplicate column name: '{column.name}'.")
            seen.add(column.name)
        return columns

    # %% ---- Validation --------------------------------------------------------------
    def _validate_keys(self, obj: Mapping[str, Any], *, context: str) -> None:
        unknown = set(obj.keys()) - _COLUMN_KEYS
        if unknown:
            unknown_sorted = ", ".join(sorted(str(key) for key in unknown))
            raise ColumnParsingError(f"Unknown key(s) in {context}: {unknown_sorted}.")
        missing = {"name", "type"} - set(obj.keys())
        if missing:
            missing_sorted = ", ".join(sorted(missing))
            raise ColumnParsingError(
                f"Missing required key(s) in {context}: {missing_sorted}."
            )

    # %% ---- Value parsing -----------------------------------------------------------
    def _parse_sql_type(self, type_def: Any, context: str) -> SQLType:
        if isinstance(type_def, str):
            type_def = {"name": type_def}
        if not isinstance(type_def, Mapping):
            raise ColumnParsingError(
                f"'type' of {context} must be a type name or a mapping."
            )
        unknown = set(type_def) - {"name", "default_length", "default_length2"}
        if unknown:
            unknown_sorted = ", ".join(sorted(str(key) for key in unknown))
            raise ColumnParsingError(
                f"Unknown key(s) in type of {context}: {unknown_sorted}."
            )
        default_length = self._parse_length(
            type_def.get("default_length", 0), "default_length", context
        )
        default_length2 = self._parse_length(
            type_def.get("default_length2", 0), "default_length2", context
        )
        try:
            return SQLType(
                name=type_def.get("name", ""),
                default_length=default_length,
                default_length2=default_length2,
            )
        except ColmetaValidationError as e:
            raise ColumnParsingError(f"Invalid type for {context}: {e}") from e

    def _parse_length(self, value: Any, key: str, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ColumnParsingError(
                f"'{key}' of {context} must be a non-negative integer."
            )
        return value

    def _parse_bool(self, value: Any, key: str, context: str) -> bool:
        if not isinstance(value, bool):
            raise ColumnParsingError(f"'{key}' of {context} must be a boolean.")
        return value

    def _parse_default(self, value: Any, context: str) -> str:
        # YAML turns `default: 0` into an int; the SQL text is its string form.
        if value is None:
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (str, int, float)):
            return str(value)
        raise ColumnParsingError(f"'default' of {context} must be a scalar value.")

    def _parse_map_type(self, value: Any, context: str) -> MapType:
        if not isinstance(value, str) or value.lower() not in _MAP_TYPES:
            allowed = ", ".join(sorted(_MAP_TYPES))
            raise ColumnParsingError(
                f"'map_type' of {context} must be one of: {allowed}."
            )
        return _MAP_TYPES[value.lower()]

    def _parse_indexes(self, value: Any, context: str) -> set[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, Sequence) or not all(
            isinstance(index, str) and index for index in value
        ):
            raise ColumnParsingError(
                f"'indexes' of {context} must be a list of index names."
            )
        return set(value)

    def _parse_options(self, value: Any, key: str, context: str) -> dict[str, int]:
        invalid = ColumnParsingError(
            f"'{key}' of {context} must be a list of names or a mapping of"
            " names to integer codes."
        )
        # A list assigns positional codes in declaration order.
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if not all(isinstance(option, str) for option in value):
                raise invalid
            value = {option: code for code, option in enumerate(value)}
        if not isinstance(value, Mapping) or not all(
            isinstance(option, str)
            and isinstance(code, int)
            and not isinstance(code, bool)
            for option, code in value.items()
        ):
            raise invalid
        return dict(value)

    def _parse_time_zone(self, value: Any, context: str) -> ZoneInfo:
        if not isinstance(value, str):
            raise ColumnParsingError(f"'time_zone' of {context} must be a string.")
        try:
            return ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ColumnParsingError(
                f"Unknown time zone '{value}' for {context}."
            ) from e
