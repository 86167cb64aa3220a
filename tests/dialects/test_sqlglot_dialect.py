import pytest

from colmeta import SQLGlotDialect, SQLType, new_column
from colmeta.ddl import render_with_primary_key, render_without_primary_key
from colmeta.dialects import DIALECT_DEFAULTS
from colmeta.exceptions import (
    ConfigError,
    DialectError,
    UnsupportedFeatureError,
    ValidationWarning,
)


# ==========================================================
# SQLGlotDialect tests
# Scope: capability answers backed by sqlglot
# ==========================================================


# %% Construction
class TestSQLGlotDialectConfig:
    def test_invalid_mode(self):
        with pytest.raises(ConfigError, match="mode must be one of 'raise' or 'coerce'."):
            SQLGlotDialect("mysql", mode="strict")

    def test_unknown_dialect(self):
        with pytest.raises(DialectError, match="Unknown SQL dialect 'nosuchdb'"):
            SQLGlotDialect("nosuchdb")

    def test_overrides(self):
        dialect = SQLGlotDialect("mysql", auto_increment="", show_create_null=False)
        assert dialect.auto_increment_keyword() == ""
        assert dialect.shows_explicit_nullability() is False

    def test_repr(self):
        assert repr(SQLGlotDialect("MySQL")) == "SQLGlotDialect(name='mysql', mode='coerce')"


# %% Capabilities
class TestSQLGlotDialectCapabilities:
    @pytest.mark.parametrize("name", sorted(DIALECT_DEFAULTS))
    def test_built_in_defaults(self, name):
        dialect = SQLGlotDialect(name)
        auto_increment, show_null = DIALECT_DEFAULTS[name]
        assert dialect.auto_increment_keyword() == auto_increment
        assert dialect.shows_explicit_nullability() is show_null

    def test_unlisted_dialect_defaults(self):
        dialect = SQLGlotDialect("duckdb")
        assert dialect.auto_increment_keyword() == ""
        assert dialect.shows_explicit_nullability() is True

    def test_quote_chars(self):
        assert SQLGlotDialect("mysql").quote("id") == "`id`"
        assert SQLGlotDialect("postgres").quote("id") == '"id"'

    def test_render_sql_type(self):
        dialect = SQLGlotDialect("mysql")
        assert dialect.render_sql_type(new_column("a", "A", SQLType("INT"), 0, 0, True)) == "INT"
        assert (
            dialect.render_sql_type(new_column("a", "A", SQLType("VARCHAR"), 64, 0, True))
            == "VARCHAR(64)"
        )

    def test_type_default_lengths(self):
        dialect = SQLGlotDialect("mysql")
        column = new_column("price", "Price", SQLType("DECIMAL", 10, 2), 0, 0, True)
        assert dialect.render_sql_type(column) == "DECIMAL(10, 2)"


# %% Unparseable types
class TestSQLGlotDialectUnsupportedTypes:
    @pytest.fixture
    def broken_column(self):
        return new_column("odd", "Odd", SQLType("(("), 0, 0, True)

    def test_raise_mode(self, broken_column):
        dialect = SQLGlotDialect("mysql", mode="raise")
        with pytest.raises(UnsupportedFeatureError, match="cannot parse type"):
            dialect.render_sql_type(broken_column)

    def test_coerce_mode(self, broken_column):
        dialect = SQLGlotDialect("mysql")
        with pytest.warns(ValidationWarning, match="rendered verbatim"):
            assert dialect.render_sql_type(broken_column) == "(("


# %% End-to-end with the renderer
class TestSQLGlotDialectDDL:
    def test_mysql_primary_key(self):
        column = new_column(
            "id",
            "ID",
            SQLType("INT"),
            0,
            0,
            False,
            is_primary_key=True,
            is_auto_increment=True,
        )
        dialect = SQLGlotDialect("mysql")
        assert (
            render_with_primary_key(column, dialect)
            == "`id` INT PRIMARY KEY AUTO_INCREMENT NOT NULL "
        )
        assert render_without_primary_key(column, dialect) == "`id` INT NOT NULL "

    def test_sqlite_hides_nullability(self):
        column = new_column("name", "Name", SQLType("VARCHAR"), 32, 0, False, default="''")
        sql = render_with_primary_key(column, SQLGlotDialect("sqlite"))
        assert sql.startswith('"name" ')
        assert "NULL" not in sql
        assert sql.endswith("DEFAULT '' ")
