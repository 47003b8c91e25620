# File: schemagen/metadata.py
"""
schemagen - Adapter Row Normalisation
======================================
Convert the rows each dialect adapter returns into ``ColumnMetadata``.

Accepted shapes:

    mysql / mariadb / sqlite   Field, Type, Key, Null, Default, Extra
    postgresql / pgsql         column_name, data_type, is_nullable, column_default
                               (+ optional is_primary_key / key, extra)
    sqlserver                  ColumnName, DataType, IsNullable, Default, Key, Extra

An unsupported database type yields an empty list and a warning; a row that
lacks a required key raises ``MalformedMetadataError``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from schemagen.models import (
    ColumnMetadata,
    DatabaseType,
    MalformedMetadataError,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.metadata")

POSTGRESQL_ROW_KEYS: Tuple[str, ...] = ("column_name", "data_type", "is_nullable", "column_default")
SQLSERVER_ROW_KEYS: Tuple[str, ...] = ("ColumnName", "DataType", "IsNullable", "Default", "Key", "Extra")

AUTO_INCREMENT: str = "auto_increment"
_SEQUENCE_PREFIX: str = "nextval("
_TRUE_TOKENS: Tuple[str, ...] = ("YES", "Y", "TRUE", "T", "1")


def _flag(value: Any) -> bool:
    """Interpret YES/NO, 1/0, t/f and real booleans."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return False
    return str(value).strip().upper() in _TRUE_TOKENS


def _require(row: Mapping[str, Any], keys: Tuple[str, ...]) -> None:
    missing: List[str] = [k for k in keys if k not in row]
    if missing:
        raise MalformedMetadataError(missing, row)


# ---------------------------------------------------------------------------
# Per-dialect row readers
# ---------------------------------------------------------------------------


def _from_mysql_row(row: Mapping[str, Any]) -> ColumnMetadata:
    return ColumnMetadata.from_row(row)


def _from_postgresql_row(row: Mapping[str, Any]) -> ColumnMetadata:
    _require(row, POSTGRESQL_ROW_KEYS)

    default: Any = row["column_default"]
    extra: str = str(row.get("extra") or "")
    if isinstance(default, str) and default.strip().lower().startswith(_SEQUENCE_PREFIX):
        # serial columns: the sequence call is the auto increment, not a default
        default = None
        if AUTO_INCREMENT not in extra.lower():
            extra = f"{extra} {AUTO_INCREMENT}".strip()

    if "is_primary_key" in row:
        primary: bool = _flag(row["is_primary_key"])
    else:
        primary = str(row.get("key") or "").upper().startswith("PRI")

    return ColumnMetadata(
        name=str(row["column_name"]),
        raw_type=str(row["data_type"] or ""),
        is_primary_key=primary,
        is_nullable=_flag(row["is_nullable"]),
        default_value=default,
        extra=extra,
    )


def _unwrap_parentheses(value: str) -> str:
    """``((0))`` → ``0``; ``('abc')`` → ``'abc'``."""
    text: str = value.strip()
    while len(text) >= 2 and text[0] == "(" and text[-1] == ")":
        text = text[1:-1].strip()
    return text


def _from_sqlserver_row(row: Mapping[str, Any]) -> ColumnMetadata:
    _require(row, SQLSERVER_ROW_KEYS)

    default: Any = row["Default"]
    if isinstance(default, str):
        default = _unwrap_parentheses(default)

    return ColumnMetadata(
        name=str(row["ColumnName"]),
        raw_type=str(row["DataType"] or ""),
        is_primary_key=str(row["Key"] or "").upper().startswith("PRI"),
        is_nullable=_flag(row["IsNullable"]),
        default_value=default,
        extra=row["Extra"],
    )


_READERS: Dict[str, Callable[[Mapping[str, Any]], ColumnMetadata]] = {
    DatabaseType.MYSQL.value: _from_mysql_row,
    DatabaseType.MARIADB.value: _from_mysql_row,
    DatabaseType.SQLITE.value: _from_mysql_row,
    DatabaseType.POSTGRESQL.value: _from_postgresql_row,
    DatabaseType.PGSQL.value: _from_postgresql_row,
    DatabaseType.SQLSERVER.value: _from_sqlserver_row,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_supported_database(database_type: Optional[str]) -> bool:
    """True when rows of *database_type* can be normalised."""
    return bool(database_type) and str(database_type).strip().lower() in _READERS


def normalize_rows(
    database_type: str,
    rows: Iterable[Mapping[str, Any]],
) -> List[ColumnMetadata]:
    """
    Normalise adapter *rows* of the given *database_type*, preserving order.

    Args:
        database_type: ``mysql``, ``mariadb``, ``postgresql``/``pgsql``,
            ``sqlite`` or ``sqlserver`` (case-insensitive).
        rows: Rows as returned by the adapter.

    Returns:
        One ``ColumnMetadata`` per row, or an empty list when the database
        type is not supported.

    Raises:
        MalformedMetadataError: if a row lacks a key its shape requires.
    """
    key: str = str(database_type or "").strip().lower()
    reader: Optional[Callable[[Mapping[str, Any]], ColumnMetadata]] = _READERS.get(key)
    if reader is None:
        logger.warning("Unsupported database type '%s'; no columns read.", database_type)
        return []

    columns: List[ColumnMetadata] = [reader(row) for row in rows]
    logger.debug("Normalised %d %s row(s).", len(columns), key)
    return columns


__all__: List[str] = [
    "POSTGRESQL_ROW_KEYS",
    "SQLSERVER_ROW_KEYS",
    "AUTO_INCREMENT",
    "is_supported_database",
    "normalize_rows",
]

logger.debug("schemagen.metadata loaded — %d public symbols.", len(__all__))
