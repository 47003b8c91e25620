"""
tests/test_type_tables.py
Unit tests for schemagen.type_tables.

Tests cover:
- Prefix classification (first match wins, case-insensitive, total)
- Column-type normalisation with argument suffixes
- Dialect conversion and cross-dialect translation
- Table construction: no shadowed patterns, duplicate reporting
"""

from __future__ import annotations

from typing import List

import pytest

from schemagen.models import CanonicalType, DialectTarget
from schemagen.type_tables import (
    ALL_TABLES,
    CANONICAL_TYPE_TABLE,
    COLUMN_MAP_TABLE,
    MYSQL_TABLE,
    POSTGRESQL_TABLE,
    SQLITE_TABLE,
    TypeMapEntry,
    classify,
    column_type,
    conversion_table,
    convert,
    find_duplicate_patterns,
    find_shadowed_patterns,
    lookup,
    match_entry,
    translate_type,
)

SAMPLE_TYPES: List[str] = [
    "int(11)", "INT", "bigint(20) unsigned", "tinyint(1)", "tinyint(4)", "smallint",
    "decimal(10,2)", "double", "float", "real", "money",
    "varchar(255)", "character varying(64)", "char(36)", "text", "longtext",
    "boolean", "bool", "bit", "date", "datetime", "datetime(3)", "timestamp",
    "timestamp with time zone", "time", "year(4)", "interval",
    "json", "jsonb", "blob", "bytea", "uuid", "inet", "geometry", "", "   ",
]

DIALECT_TABLES = [COLUMN_MAP_TABLE, MYSQL_TABLE, POSTGRESQL_TABLE, SQLITE_TABLE]


# ===========================================================================
# Classification
# ===========================================================================


class TestClassify:
    """Canonical classification through the ordered type table."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("int(11)", "int"),
            ("BIGINT(20)", "int"),
            ("tinyint(1)", "bool"),
            ("TINYINT(1)", "bool"),
            ("tinyint(4)", "int"),
            ("decimal(10,2)", "float"),
            ("Double", "float"),
            ("money", "float"),
            ("varchar(255)", "string"),
            ("character varying", "string"),
            ("boolean", "bool"),
            ("bit", "bool"),
            ("datetime", "string"),
            ("year(4)", "int"),
            ("interval", "string"),
            ("jsonb", "array"),
            ("json", "array"),
            ("blob", "resource"),
            ("bytea", "resource"),
            ("geometry", "string"),
        ],
    )
    def test_known_types(self, raw: str, expected: str) -> None:
        assert classify(raw) == expected

    def test_unknown_type_falls_back_to_string(self) -> None:
        assert classify("hstore") == CanonicalType.STRING.value
        assert classify("") == CanonicalType.STRING.value

    def test_total_and_deterministic(self) -> None:
        canonical_values = {c.value for c in CanonicalType}
        for raw in SAMPLE_TYPES:
            first = classify(raw)
            assert first in canonical_values, raw
            assert classify(raw) == first

    def test_total_for_every_table(self) -> None:
        for name, table in ALL_TABLES.items():
            targets = {e.target for e in table} | {"fallback"}
            for raw in SAMPLE_TYPES:
                assert lookup(raw, table, "fallback") in targets, (name, raw)

    def test_first_match_wins(self) -> None:
        table = (TypeMapEntry("var", "first"), TypeMapEntry("varchar", "second"))
        assert classify("varchar(10)", table) == "first"

    def test_match_entry_returns_entry(self) -> None:
        entry = match_entry("  TinyInt(1) ", CANONICAL_TYPE_TABLE)
        assert entry == TypeMapEntry("tinyint(1)", "bool")
        assert match_entry("geometry", COLUMN_MAP_TABLE) is None


# ===========================================================================
# Column type normalisation
# ===========================================================================


class TestColumnType:
    """column_type keeps the argument suffix of the raw type."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("int(11)", "int(11)"),
            ("int(10) unsigned", "int(10) unsigned"),
            ("character varying(64)", "varchar(64)"),
            ("varchar(255)", "varchar(255)"),
            ("tinyint(1)", "tinyint(1)"),
            ("boolean", "tinyint(1)"),
            ("uuid", "char(36)"),
            ("timestamp with time zone", "timestamp"),
            ("datetime(3)", "datetime(3)"),
            ("decimal(10,2)", "decimal(10,2)"),
            ("jsonb", "json"),
        ],
    )
    def test_column_map(self, raw: str, expected: str) -> None:
        assert column_type(raw) == expected

    def test_unknown_type_falls_back_to_text(self) -> None:
        assert column_type("geometry") == "text"

    def test_tinyint_one_is_bool_through_every_dialect_table(self) -> None:
        for table in DIALECT_TABLES:
            assert classify(column_type("tinyint(1)", table)) == "bool", table[0]

    @pytest.mark.parametrize("target", list(DialectTarget))
    def test_tinyint_one_converts_to_bool_for_every_target(self, target: DialectTarget) -> None:
        assert classify(convert("tinyint(1)", target)) == "bool"

    def test_column_map_keeps_tinyint_one(self) -> None:
        assert convert("tinyint(1)", DialectTarget.COLUMN_MAP) == "tinyint(1)"
        assert convert("tinyint(4)", DialectTarget.COLUMN_MAP) == "tinyint"

    def test_tinyint_one_is_bool_in_every_table_declaring_it(self) -> None:
        for name, table in ALL_TABLES.items():
            patterns = [e.pattern.lower() for e in table]
            if "tinyint(1)" in patterns and "tinyint" in patterns:
                assert classify(column_type("tinyint(1)", table)) == "bool", name


# ===========================================================================
# Dialect conversion
# ===========================================================================


class TestConvert:
    """Token conversion to one dialect's syntax."""

    @pytest.mark.parametrize(
        "token, target, expected",
        [
            ("bigserial", "mysql", "bigint"),
            ("bigserial", "sqlite", "integer"),
            ("bigserial", "postgresql", "bigserial"),
            ("tinyint(1)", "postgresql", "boolean"),
            ("tinyint(1)", "mysql", "bool"),
            ("boolean", "mysql", "tinyint(1)"),
            ("json", "postgresql", "jsonb"),
            ("json", "sqlite", "text"),
            ("uuid", DialectTarget.POSTGRESQL, "uuid"),
            ("geometry", "mysql", "text"),
        ],
    )
    def test_convert(self, token: str, target: str, expected: str) -> None:
        assert convert(token, target) == expected

    def test_unsupported_target_yields_empty(self) -> None:
        assert convert("int", "oracle") == ""
        assert conversion_table("oracle") == ()

    def test_conversion_table_aliases(self) -> None:
        assert conversion_table("postgres") is POSTGRESQL_TABLE
        assert conversion_table("MariaDB") is MYSQL_TABLE


class TestTranslateType:
    """Cross-dialect translation through the MySQL vocabulary."""

    @pytest.mark.parametrize(
        "raw, source, target, expected",
        [
            ("character varying(64)", "postgresql", "mysql", "varchar(64)"),
            ("tinyint(1)", "mysql", "postgresql", "boolean"),
            ("tinyint(1)", "mysql", "sqlite", "boolean"),
            ("int(11)", "mysql", "postgresql", "integer"),
            ("varchar(100)", "mysql", "postgresql", "varchar(100)"),
            ("varchar(255)", "mysql", "postgresql", "varchar(255)"),
            ("varchar(255)", "mysql", "mysql", "varchar(255)"),
            ("character varying(255)", "postgresql", "mysql", "varchar(255)"),
            ("varchar(254)", "mysql", "postgresql", "varchar(254)"),
            ("varchar(100)", "mysql", "sqlite", "text"),
            ("datetime(3)", "mysql", "postgresql", "timestamp(3)"),
            ("decimal(10,2)", "sqlserver", "postgresql", "numeric(10,2)"),
            ("nvarchar(200)", "mssql", "postgresql", "varchar(200)"),
            ("bit", "sqlserver", "sqlite", "boolean"),
            ("serial", "pgsql", "mysql", "int"),
            ("jsonb", "postgresql", "mysql", "json"),
            ("uuid", "postgresql", "mysql", "char(36)"),
            ("boolean", "postgresql", "sqlite", "boolean"),
            ("geometry", "mysql", "postgresql", "text"),
        ],
    )
    def test_translate(self, raw: str, source: str, target: str, expected: str) -> None:
        assert translate_type(raw, source, target) == expected

    def test_same_dialect_is_identity(self) -> None:
        assert translate_type("int(11)", "mysql", "mysql") == "int(11)"
        assert translate_type("int(11)", "mariadb", "mysql") == "int(11)"

    def test_unsupported_dialects_leave_type_unchanged(self) -> None:
        assert translate_type("number(10)", "oracle", "mysql") == "number(10)"
        assert translate_type("int", "mysql", "oracle") == "int"
        assert translate_type("int", "mysql", "column_map") == "int"

    def test_accepts_enum_members(self) -> None:
        assert translate_type("tinyint(1)", DialectTarget.MYSQL, DialectTarget.SQLITE) == "boolean"


# ===========================================================================
# Table construction
# ===========================================================================


class TestTableConstruction:
    """Ordering and duplicate diagnostics over every shipped table."""

    @pytest.mark.parametrize("name", sorted(ALL_TABLES))
    def test_no_shadowed_patterns(self, name: str) -> None:
        assert find_shadowed_patterns(ALL_TABLES[name]) == []

    def test_shadowing_is_detected(self) -> None:
        table = (TypeMapEntry("tinyint", "int"), TypeMapEntry("tinyint(1)", "bool"))
        assert find_shadowed_patterns(table) == [("tinyint", "tinyint(1)")]

    def test_canonical_duplicates_are_reported(self) -> None:
        assert set(find_duplicate_patterns(CANONICAL_TYPE_TABLE)) == {
            "text", "date", "time", "boolean", "json", "jsonb",
        }

    def test_dialect_tables_have_no_duplicates(self) -> None:
        for table in DIALECT_TABLES:
            assert find_duplicate_patterns(table) == []

    def test_tables_are_tuples(self) -> None:
        for table in ALL_TABLES.values():
            assert isinstance(table, tuple)
            assert all(isinstance(e, TypeMapEntry) for e in table)
