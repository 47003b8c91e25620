"""
tests/test_metadata.py
Unit tests for adapter row normalisation (schemagen.metadata) and the
ColumnMetadata model.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from pydantic import ValidationError as PydanticValidationError

from schemagen.metadata import is_supported_database, normalize_rows
from schemagen.models import ColumnMetadata, MalformedMetadataError


# ===========================================================================
# MySQL / MariaDB / SQLite rows
# ===========================================================================


class TestMySQLRows:
    """SHOW COLUMNS shape."""

    def test_primary_key_and_auto_increment(self, mysql_rows: List[Dict[str, Any]]) -> None:
        columns = normalize_rows("mysql", mysql_rows)
        user_id = columns[0]
        assert user_id.name == "user_id"
        assert user_id.raw_type == "int(11)"
        assert user_id.is_primary_key
        assert not user_id.is_nullable
        assert user_id.is_auto_increment
        assert user_id.default_value is None

    def test_order_is_preserved(self, mysql_rows: List[Dict[str, Any]]) -> None:
        columns = normalize_rows("mysql", mysql_rows)
        assert [c.name for c in columns] == [r["Field"] for r in mysql_rows]

    def test_nullable_and_defaults(self, mysql_rows: List[Dict[str, Any]]) -> None:
        by_name = {c.name: c for c in normalize_rows("mysql", mysql_rows)}
        assert by_name["email"].is_nullable
        assert by_name["is_active"].default_value == "1"
        assert by_name["balance"].default_value == "0"
        assert not by_name["username"].is_primary_key

    @pytest.mark.parametrize("database_type", ["mariadb", "sqlite", "MySQL"])
    def test_same_shape_dialects(self, database_type: str, mysql_rows: List[Dict[str, Any]]) -> None:
        columns = normalize_rows(database_type, mysql_rows)
        assert len(columns) == len(mysql_rows)
        assert columns[0].is_primary_key

    def test_missing_key_raises(self) -> None:
        row = {"Field": "id", "Type": "int", "Key": "PRI", "Null": "NO"}
        with pytest.raises(MalformedMetadataError) as exc_info:
            normalize_rows("mysql", [row])
        assert exc_info.value.missing == ["Default", "Extra"]
        assert isinstance(exc_info.value, ValueError)

    def test_from_row_stringifies_defaults(self) -> None:
        column = ColumnMetadata.from_row(
            {"Field": "qty", "Type": "int", "Key": "", "Null": "NO", "Default": 0, "Extra": None}
        )
        assert column.default_value == "0"
        assert column.extra == ""

    def test_auto_increment_is_case_insensitive(self) -> None:
        column = ColumnMetadata(name="id", raw_type="int", extra="AUTO_INCREMENT")
        assert column.is_auto_increment

    def test_column_metadata_is_frozen(self, user_id_column: ColumnMetadata) -> None:
        with pytest.raises(PydanticValidationError):
            user_id_column.name = "other"  # type: ignore[misc]


# ===========================================================================
# PostgreSQL rows
# ===========================================================================


class TestPostgreSQLRows:
    """information_schema.columns shape."""

    def test_sequence_default_becomes_auto_increment(self, postgresql_rows: List[Dict[str, Any]]) -> None:
        album_id = normalize_rows("postgresql", postgresql_rows)[0]
        assert album_id.is_auto_increment
        assert album_id.default_value is None
        assert album_id.extra == "auto_increment"
        assert album_id.is_primary_key
        assert not album_id.is_nullable

    def test_plain_columns(self, postgresql_rows: List[Dict[str, Any]]) -> None:
        columns = normalize_rows("pgsql", postgresql_rows)
        title, is_public = columns[1], columns[2]
        assert title.raw_type == "character varying(120)"
        assert not title.is_primary_key
        assert is_public.is_nullable
        assert is_public.default_value == "true"

    def test_key_column_marks_primary_key(self) -> None:
        row = {"column_name": "id", "data_type": "uuid", "is_nullable": "NO", "column_default": None, "key": "PRI"}
        assert normalize_rows("postgresql", [row])[0].is_primary_key

    def test_missing_key_raises(self) -> None:
        with pytest.raises(MalformedMetadataError):
            normalize_rows("postgresql", [{"column_name": "id", "data_type": "int"}])


# ===========================================================================
# SQL Server rows
# ===========================================================================


class TestSQLServerRows:

    def test_parenthesised_defaults_are_unwrapped(self, sqlserver_rows: List[Dict[str, Any]]) -> None:
        song_id, play_count = normalize_rows("sqlserver", sqlserver_rows)
        assert song_id.default_value == "newid()"
        assert play_count.default_value == "0"
        assert song_id.is_primary_key
        assert not play_count.is_nullable


# ===========================================================================
# Unsupported database types
# ===========================================================================


class TestUnsupportedDatabase:

    def test_returns_empty_list(self, mysql_rows: List[Dict[str, Any]]) -> None:
        assert normalize_rows("oracle", mysql_rows) == []

    def test_is_supported(self) -> None:
        assert is_supported_database("MariaDB")
        assert is_supported_database("sqlserver")
        assert not is_supported_database("oracle")
        assert not is_supported_database(None)
        assert not is_supported_database("")
