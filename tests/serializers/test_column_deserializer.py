import pytest

from colmeta.column import MapType
from colmeta.exceptions import ColumnParsingError
from colmeta.serializers import ColumnDeserializer
from colmeta.types import SQLType


@pytest.fixture
def deserializer():
    return ColumnDeserializer()


# %% Valid definitions
class TestColumnDeserializer:
    def test_minimal(self, deserializer):
        column = deserializer.deserialize({"name": "id", "type": "INT"})
        assert column.name == "id"
        assert column.field_name == "id"
        assert column.sql_type == SQLType("INT")
        assert column.nullable is True
        assert column.map_type is MapType.TWO_SIDES

    def test_all_flags(self, deserializer):
        column = deserializer.deserialize(
            {
                "name": "deleted_at",
                "field": "Meta.DeletedAt",
                "type": {"name": "DATETIME"},
                "length": 6,
                "length2": 0,
                "nullable": False,
                "default_is_empty": True,
                "primary_key": False,
                "autoincrement": False,
                "cascade": True,
                "version": False,
                "created": False,
                "updated": True,
                "deleted": True,
                "map_type": "ONLY_FROM_STORAGE",
                "indexes": "idx_deleted",
                "set_options": {"a": 1, "b": 2},
                "disable_time_zone": True,
            }
        )
        assert column.field_path == ("Meta", "DeletedAt")
        assert column.length == 6
        assert column.nullable is False
        assert column.default_is_empty
        assert column.is_cascade
        assert column.is_updated
        assert column.is_deleted
        assert column.map_type is MapType.ONLY_FROM_STORAGE
        assert column.indexes == {"idx_deleted"}
        assert column.set_options == {"a": 1, "b": 2}
        assert column.disable_time_zone

    @pytest.mark.parametrize(
        "value, expected", [(None, ""), (True, "TRUE"), (0, "0"), (1.5, "1.5")]
    )
    def test_default_values(self, deserializer, value, expected):
        column = deserializer.deserialize({"name": "a", "type": "INT", "default": value})
        assert column.default == expected

    def test_null_time_zone_is_ignored(self, deserializer):
        column = deserializer.deserialize({"name": "a", "type": "DATE", "time_zone": None})
        assert column.time_zone is None


# %% Invalid definitions
class TestColumnDeserializerErrors:
    @pytest.mark.parametrize(
        "definition, message",
        [
            ({"type": "INT"}, "Missing required key\\(s\\) in column definition: name"),
            ({"name": "a"}, "Missing required key\\(s\\) in column definition: type"),
            ({"name": "a", "type": "INT", "colour": 1}, "Unknown key\\(s\\).*colour"),
            ({"name": "", "type": "INT"}, "must be a non-empty string"),
            ({"name": "a", "field": "", "type": "INT"}, "'field' of column 'a'"),
            ({"name": "a", "type": 3}, "must be a type name or a mapping"),
            ({"name": "a", "type": {"name": "INT", "size": 1}}, "Unknown key\\(s\\) in type"),
            ({"name": "a", "type": ""}, "Invalid type for column 'a'"),
            ({"name": "a", "type": "INT", "length": -1}, "'length' of column 'a'"),
            ({"name": "a", "type": "INT", "length2": True}, "'length2' of column 'a'"),
            ({"name": "a", "type": "INT", "nullable": "no"}, "'nullable' of column 'a'"),
            ({"name": "a", "type": "INT", "default": [1]}, "'default' of column 'a'"),
            ({"name": "a", "type": "INT", "map_type": "both"}, "'map_type' of column 'a'"),
            ({"name": "a", "type": "INT", "indexes": [1]}, "'indexes' of column 'a'"),
            (
                {"name": "a", "type": "INT", "enum_options": {"x": "1"}},
                "'enum_options' of column 'a'",
            ),
            (
                {"name": "a", "type": "INT", "enum_options": [{"x": 1}]},
                "'enum_options' of column 'a'",
            ),
            (
                {"name": "a", "type": "INT", "set_options": ["read", ["write"]]},
                "'set_options' of column 'a'",
            ),
            ({"name": "a", "type": "INT", "time_zone": 5}, "'time_zone' of column 'a'"),
            (
                {"name": "a", "type": "INT", "time_zone": "Mars/Olympus"},
                "Unknown time zone 'Mars/Olympus'",
            ),
        ],
    )
    def test_invalid_definition(self, deserializer, definition, message):
        with pytest.raises(ColumnParsingError, match=message):
            deserializer.deserialize(definition)

    def test_definition_not_a_mapping(self, deserializer):
        with pytest.raises(ColumnParsingError, match="must be a mapping"):
            deserializer.deserialize(["name", "a"])

    def test_columns_not_a_list(self, deserializer):
        with pytest.raises(ColumnParsingError, match="must be a list"):
            deserializer.deserialize_many("id")

    def test_duplicate_names(self, deserializer):
        with pytest.raises(ColumnParsingError, match="Duplicate column name: 'id'"):
            deserializer.deserialize_many(
                [{"name": "id", "type": "INT"}, {"name": "id", "type": "BIGINT"}]
            )
