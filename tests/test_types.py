import pytest
from dataclasses import FrozenInstanceError

from colmeta.exceptions import ColmetaValidationError
from colmeta.types import SQLType


# %% Construction
class TestSQLType:
    def test_defaults(self):
        sql_type = SQLType("INT")
        assert sql_type.default_length == 0
        assert sql_type.default_length2 == 0

    def test_is_frozen(self):
        sql_type = SQLType("INT")
        with pytest.raises(FrozenInstanceError):
            sql_type.name = "BIGINT"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_raises(self, name):
        with pytest.raises(ColmetaValidationError, match="must be a non-empty string"):
            SQLType(name)

    def test_negative_length_raises(self):
        with pytest.raises(ColmetaValidationError, match="must be non-negative"):
            SQLType("VARCHAR", default_length=-1)

    def test_str(self):
        assert str(SQLType("varchar")) == "VARCHAR"
        assert str(SQLType("varchar", 255)) == "VARCHAR(255)"
        assert str(SQLType("decimal", 10, 2)) == "DECIMAL(10, 2)"


# %% Categories
class TestSQLTypeCategories:
    @pytest.mark.parametrize(
        "name, category",
        [
            ("varchar", "is_text"),
            ("TEXT", "is_text"),
            ("Blob", "is_blob"),
            ("BYTEA", "is_blob"),
            ("datetime", "is_time"),
            ("TIMESTAMP", "is_time"),
            ("BigInt", "is_numeric"),
            ("DECIMAL", "is_numeric"),
            ("BOOL", "is_bool"),
            ("jsonb", "is_json"),
            ("ARRAY", "is_array"),
        ],
    )
    def test_category(self, name, category):
        assert getattr(SQLType(name), category) is True

    def test_categories_are_exclusive_for_common_types(self):
        sql_type = SQLType("INT")
        assert sql_type.is_numeric
        assert not sql_type.is_text
        assert not sql_type.is_time
        assert not sql_type.is_blob
        assert not sql_type.is_json
