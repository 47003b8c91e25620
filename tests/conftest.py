"""
tests/conftest.py
Shared fixtures for the schemagen test suite.

All fixtures are session-scoped or function-scoped as appropriate.
No external mocking libraries are used; real file I/O is performed
inside temporary directories managed by pytest's tmp_path fixtures.
"""

from __future__ import annotations

import copy
import logging
import pathlib
from typing import Any, Dict, Iterator, List

import pytest
import yaml

from schemagen.models import ColumnMetadata, FieldValidation
from schemagen.type_tables import TypeTables


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
REQUEST_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "request_example.yaml"


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """The CLI configures the ``schemagen`` logger; undo it after every test."""
    yield
    package_logger = logging.getLogger("schemagen")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


# ---------------------------------------------------------------------------
# Adapter row fixtures
# ---------------------------------------------------------------------------


def _mysql_row(
    field: str,
    type_: str,
    key: str = "",
    null: str = "YES",
    default: Any = None,
    extra: str = "",
) -> Dict[str, Any]:
    return {"Field": field, "Type": type_, "Key": key, "Null": null, "Default": default, "Extra": extra}


@pytest.fixture()
def mysql_rows() -> List[Dict[str, Any]]:
    """SHOW COLUMNS rows for a small ``user`` table."""
    return [
        _mysql_row("user_id", "int(11)", key="PRI", null="NO", extra="auto_increment"),
        _mysql_row("username", "varchar(50)", key="UNI", null="NO"),
        _mysql_row("email", "varchar(100)"),
        _mysql_row("is_active", "tinyint(1)", null="NO", default="1"),
        _mysql_row("balance", "decimal(10,2)", null="NO", default="0"),
        _mysql_row("created_at", "datetime", null="NO", default="CURRENT_TIMESTAMP", extra="DEFAULT_GENERATED"),
    ]


@pytest.fixture()
def postgresql_rows() -> List[Dict[str, Any]]:
    """information_schema.columns rows for an ``album`` table."""
    return [
        {
            "column_name": "album_id",
            "data_type": "integer",
            "is_nullable": "NO",
            "column_default": "nextval('album_album_id_seq'::regclass)",
            "is_primary_key": True,
        },
        {
            "column_name": "title",
            "data_type": "character varying(120)",
            "is_nullable": "NO",
            "column_default": None,
        },
        {
            "column_name": "is_public",
            "data_type": "boolean",
            "is_nullable": "YES",
            "column_default": "true",
        },
    ]


@pytest.fixture()
def sqlserver_rows() -> List[Dict[str, Any]]:
    """sys.columns-style rows for a ``song`` table."""
    return [
        {
            "ColumnName": "song_id",
            "DataType": "uniqueidentifier",
            "IsNullable": "NO",
            "Default": "(newid())",
            "Key": "PRI",
            "Extra": "",
        },
        {
            "ColumnName": "play_count",
            "DataType": "int",
            "IsNullable": "NO",
            "Default": "((0))",
            "Key": "",
            "Extra": "",
        },
    ]


@pytest.fixture()
def user_id_column() -> ColumnMetadata:
    return ColumnMetadata(
        name="user_id",
        raw_type="int(11)",
        is_primary_key=True,
        is_nullable=False,
        extra="auto_increment",
    )


@pytest.fixture()
def is_active_column() -> ColumnMetadata:
    return ColumnMetadata(name="is_active", raw_type="tinyint(1)", is_nullable=False, default_value="1")


@pytest.fixture(scope="session")
def tables() -> TypeTables:
    return TypeTables()


# ---------------------------------------------------------------------------
# Validation definition fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def field_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "fieldName": "username",
            "fieldType": "varchar(50)",
            "validation": [
                {"type": "Required", "message": "Username is required", "applyInsert": True, "applyUpdate": True},
                {"type": "Length", "min": 3, "max": 50, "applyInsert": True},
            ],
        },
        {
            "fieldName": "is_active",
            "fieldType": "tinyint(1)",
            "validation": [{"type": "NotNull", "applyInsert": True}],
        },
        {
            "fieldName": "user_id",
            "fieldType": "int(11)",
            "validation": [{"type": "Required", "applyUpdate": True}],
        },
    ]


@pytest.fixture()
def field_validations(field_definitions: List[Dict[str, Any]]) -> List[FieldValidation]:
    return [FieldValidation.model_validate(d) for d in field_definitions]


# ---------------------------------------------------------------------------
# Request fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_request_example() -> Dict[str, Any]:
    """Load the reference request_example.yaml once per session."""
    assert REQUEST_EXAMPLE_PATH.exists(), f"Reference request not found at {REQUEST_EXAMPLE_PATH}."
    with open(REQUEST_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def minimal_request_dict(
    mysql_rows: List[Dict[str, Any]],
    field_definitions: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """One MySQL table and one insert validator."""
    return {
        "config": {
            "database_type": "mysql",
            "entity_namespace": "App\\Entity",
            "dto_namespace": "App\\Dto",
            "validator_namespace": "App\\Validator",
            "non_updatable": ["created_at"],
        },
        "tables": [{"name": "user", "columns": copy.deepcopy(mysql_rows)}],
        "validators": [
            {
                "module": "user",
                "class_name": "UserInsertValidator",
                "apply": "insert",
                "fields": copy.deepcopy(field_definitions),
            }
        ],
    }


@pytest.fixture()
def request_yaml_path(minimal_request_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the minimal request to a temporary YAML file and return its path."""
    path = tmp_path / "request.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(minimal_request_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


@pytest.fixture()
def output_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    return tmp_path / "generated"
