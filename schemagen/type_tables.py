# File: schemagen/type_tables.py
"""
schemagen - Type Mapping & Dialect Conversion Tables
=====================================================
Ordered ``(pattern, target)`` tables and the prefix-match lookups over them.

Every table is a tuple of ``TypeMapEntry``; lookups are case-insensitive
``startswith`` tests walked in declared order and the **first** match wins.
Because ``tinyint`` is a prefix of ``tinyint(1)`` (and ``int`` of
``interval``, ``json`` of ``jsonb``, ``timestamp`` of ``timestamptz``...),
each table lists the specific pattern before the general one.
``find_shadowed_patterns`` reports any entry that can never match.

Tables:
    CANONICAL_TYPE_TABLE    raw type   → int/float/bool/string/array/resource
    COLUMN_MAP_TABLE        raw type   → generic (MySQL-vocabulary) column type
    MYSQL_TABLE             raw type   → MySQL column type
    POSTGRESQL_TABLE        raw type   → PostgreSQL column type
    SQLITE_TABLE            raw type   → SQLite column type
    POSTGRESQL_TO_MYSQL     PostgreSQL → MySQL (lowering for translate_type)
    SQLITE_TO_MYSQL         SQLite     → MySQL
    SQLSERVER_TO_MYSQL      SQL Server → MySQL

The tables are module constants and are never mutated; components receive
them through a ``TypeTables`` bundle so alternatives can be injected.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Tuple, Union

from schemagen.models import CanonicalType, DialectTarget
from schemagen.utils import type_arguments

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.type_tables")


# ---------------------------------------------------------------------------
# Entry type
# ---------------------------------------------------------------------------


class TypeMapEntry(NamedTuple):
    """One ``(pattern, target)`` pair of an ordered table."""

    pattern: str
    target: str


TypeTable = Tuple[TypeMapEntry, ...]


def _table(*pairs: Tuple[str, str]) -> TypeTable:
    return tuple(TypeMapEntry(p, t) for p, t in pairs)


DEFAULT_CANONICAL_TYPE: str = CanonicalType.STRING.value
DEFAULT_COLUMN_TYPE: str = "text"

_INT: str = CanonicalType.INT.value
_FLOAT: str = CanonicalType.FLOAT.value
_BOOL: str = CanonicalType.BOOL.value
_STRING: str = CanonicalType.STRING.value
_ARRAY: str = CanonicalType.ARRAY.value
_RESOURCE: str = CanonicalType.RESOURCE.value

# ---------------------------------------------------------------------------
# Canonical classification table
# ---------------------------------------------------------------------------

# Duplicate patterns ("text", "date", "time", "json", "jsonb", "BOOLEAN")
# are carried over from the historical map; only the first occurrence
# can ever match.
CANONICAL_TYPE_TABLE: TypeTable = _table(
    ("double", _FLOAT),
    ("float", _FLOAT),
    ("decimal", _FLOAT),
    ("numeric", _FLOAT),
    ("money", _FLOAT),
    ("bigint", _INT),
    ("bigserial", _INT),
    ("smallint", _INT),
    ("smallserial", _INT),
    ("tinyint(1)", _BOOL),
    ("tinyint", _INT),
    ("interval", _STRING),
    ("integer", _INT),
    ("int", _INT),
    ("serial", _INT),
    ("mediumint", _INT),
    ("unsigned", _INT),
    ("nvarchar", _STRING),
    ("nchar", _STRING),
    ("ntext", _STRING),
    ("varchar(255)", _STRING),
    ("varchar", _STRING),
    ("character varying", _STRING),
    ("char", _STRING),
    ("text", _STRING),
    ("citext", _STRING),
    ("tinytext", _STRING),
    ("mediumtext", _STRING),
    ("longtext", _STRING),
    ("text", _STRING),
    ("boolean", _BOOL),
    ("bool", _BOOL),
    ("bit", _BOOL),
    ("timestamp with time zone", _STRING),
    ("timestamp without time zone", _STRING),
    ("timestamp", _STRING),
    ("datetimeoffset", _STRING),
    ("datetime2", _STRING),
    ("datetime", _STRING),
    ("smalldatetime", _STRING),
    ("date", _STRING),
    ("time", _STRING),
    ("date", _STRING),
    ("time", _STRING),
    ("year", _INT),
    ("real", _FLOAT),
    ("text", _STRING),
    ("blob", _RESOURCE),
    ("bytea", _RESOURCE),
    ("varbinary", _RESOURCE),
    ("binary", _RESOURCE),
    ("image", _RESOURCE),
    ("BOOLEAN", _BOOL),
    ("jsonb", _ARRAY),
    ("json", _ARRAY),
    ("uniqueidentifier", _STRING),
    ("uuid", _STRING),
    ("xml", _STRING),
    ("cidr", _STRING),
    ("inet", _STRING),
    ("macaddr", _STRING),
    ("point", _STRING),
    ("polygon", _STRING),
    ("line", _STRING),
    ("lseg", _STRING),
    ("path", _STRING),
    ("circle", _STRING),
    ("jsonb", _ARRAY),
    ("json", _ARRAY),
)

# ---------------------------------------------------------------------------
# Column map: normalises any dialect's type to the generic vocabulary
# ---------------------------------------------------------------------------

COLUMN_MAP_TABLE: TypeTable = _table(
    ("double", "float"),
    ("float", "float"),
    ("decimal", "decimal"),
    ("numeric", "decimal"),
    ("money", "decimal"),
    ("real", "float"),
    ("bigint", "bigint"),
    ("bigserial", "bigint"),
    ("smallint", "smallint"),
    ("smallserial", "smallint"),
    ("tinyint(1)", "tinyint(1)"),
    ("tinyint", "tinyint"),
    ("interval", "text"),
    ("integer", "int"),
    ("int", "int"),
    ("serial", "int"),
    ("mediumint", "mediumint"),
    ("unsigned", "unsigned"),
    ("nvarchar", "varchar"),
    ("nchar", "char"),
    ("ntext", "text"),
    ("varchar(255)", "varchar"),
    ("varchar", "varchar"),
    ("character varying", "varchar"),
    ("character", "char"),
    ("char", "char"),
    ("citext", "text"),
    ("tinytext", "tinytext"),
    ("mediumtext", "mediumtext"),
    ("longtext", "longtext"),
    ("text", "text"),
    ("boolean", "tinyint(1)"),
    ("bool", "tinyint(1)"),
    ("bit", "tinyint(1)"),
    ("timestamp with time zone", "timestamp"),
    ("timestamp without time zone", "timestamp"),
    ("timestamptz", "timestamp"),
    ("timestamp", "timestamp"),
    ("datetimeoffset", "timestamp"),
    ("datetime2", "datetime"),
    ("smalldatetime", "datetime"),
    ("datetime", "datetime"),
    ("date", "date"),
    ("time", "time"),
    ("year", "year"),
    ("jsonb", "json"),
    ("json", "json"),
    ("uniqueidentifier", "char(36)"),
    ("uuid", "char(36)"),
    ("xml", "text"),
    ("inet", "varchar(45)"),
    ("cidr", "varchar(45)"),
    ("macaddr", "varchar(17)"),
    ("point", "point"),
    ("polygon", "polygon"),
    ("line", "line"),
    ("bytea", "blob"),
    ("varbinary", "varbinary"),
    ("binary", "binary"),
    ("image", "blob"),
    ("blob", "blob"),
)

# ---------------------------------------------------------------------------
# Dialect tables
# ---------------------------------------------------------------------------

MYSQL_TABLE: TypeTable = _table(
    ("double", "float"),
    ("float", "float"),
    ("decimal", "decimal"),
    ("numeric", "decimal"),
    ("money", "decimal"),
    ("real", "float"),
    ("bigint", "bigint"),
    ("bigserial", "bigint"),
    ("smallint", "smallint"),
    ("smallserial", "smallint"),
    ("tinyint(1)", "bool"),
    ("tinyint", "tinyint"),
    ("interval", "time"),
    ("integer", "int"),
    ("int", "int"),
    ("serial", "int"),
    ("mediumint", "mediumint"),
    ("unsigned", "unsigned"),
    ("nvarchar", "varchar"),
    ("nchar", "char"),
    ("ntext", "text"),
    ("varchar(255)", "varchar"),
    ("varchar", "varchar"),
    ("character varying", "varchar"),
    ("character", "char"),
    ("char", "char"),
    ("citext", "text"),
    ("tinytext", "tinytext"),
    ("mediumtext", "mediumtext"),
    ("longtext", "longtext"),
    ("text", "text"),
    ("boolean", "tinyint(1)"),
    ("bool", "tinyint(1)"),
    ("bit", "tinyint(1)"),
    ("timestamp with time zone", "timestamp"),
    ("timestamp without time zone", "timestamp"),
    ("timestamptz", "timestamp"),
    ("timestamp", "timestamp"),
    ("datetimeoffset", "timestamp"),
    ("datetime2", "datetime"),
    ("smalldatetime", "datetime"),
    ("datetime", "datetime"),
    ("date", "date"),
    ("time", "time"),
    ("year", "year"),
    ("jsonb", "json"),
    ("json", "json"),
    ("uniqueidentifier", "char(36)"),
    ("uuid", "char(36)"),
    ("xml", "text"),
    ("inet", "varchar(45)"),
    ("cidr", "varchar(45)"),
    ("macaddr", "varchar(17)"),
    ("point", "point"),
    ("polygon", "polygon"),
    ("line", "line"),
    ("bytea", "blob"),
    ("varbinary", "varbinary"),
    ("binary", "binary"),
    ("image", "blob"),
    ("blob", "blob"),
)

POSTGRESQL_TABLE: TypeTable = _table(
    ("double", "double precision"),
    ("float", "real"),
    ("decimal", "numeric"),
    ("numeric", "numeric"),
    ("money", "money"),
    ("real", "real"),
    ("bigint", "bigint"),
    ("bigserial", "bigserial"),
    ("smallint", "smallint"),
    ("smallserial", "smallint"),
    ("tinyint(1)", "boolean"),
    ("tinyint", "smallint"),
    ("interval", "interval"),
    ("integer", "integer"),
    ("int", "integer"),
    ("serial", "serial"),
    ("mediumint", "integer"),
    ("unsigned", "integer"),
    ("nvarchar", "varchar"),
    ("nchar", "char"),
    ("ntext", "text"),
    ("varchar(255)", "varchar"),
    ("varchar", "varchar"),
    ("character varying", "varchar"),
    ("character", "char"),
    ("char", "char"),
    ("citext", "citext"),
    ("tinytext", "text"),
    ("mediumtext", "text"),
    ("longtext", "text"),
    ("text", "text"),
    ("boolean", "boolean"),
    ("bool", "boolean"),
    ("bit", "boolean"),
    ("timestamp with time zone", "timestamptz"),
    ("timestamp without time zone", "timestamp"),
    ("timestamptz", "timestamptz"),
    ("timestamp", "timestamp"),
    ("datetimeoffset", "timestamptz"),
    ("datetime2", "timestamp"),
    ("smalldatetime", "timestamp"),
    ("datetime", "timestamp"),
    ("date", "date"),
    ("time", "time"),
    ("year", "date"),
    ("jsonb", "jsonb"),
    ("json", "jsonb"),
    ("uniqueidentifier", "uuid"),
    ("uuid", "uuid"),
    ("xml", "xml"),
    ("inet", "inet"),
    ("cidr", "cidr"),
    ("macaddr", "macaddr"),
    ("point", "point"),
    ("polygon", "polygon"),
    ("line", "line"),
    ("bytea", "bytea"),
    ("varbinary", "bytea"),
    ("binary", "bytea"),
    ("image", "bytea"),
    ("blob", "bytea"),
)

# SQLite has no native boolean; "boolean" is accepted with NUMERIC affinity.
SQLITE_TABLE: TypeTable = _table(
    ("double", "real"),
    ("float", "real"),
    ("decimal", "numeric"),
    ("numeric", "numeric"),
    ("money", "numeric"),
    ("real", "real"),
    ("bigint", "integer"),
    ("bigserial", "integer"),
    ("smallint", "integer"),
    ("smallserial", "integer"),
    ("tinyint(1)", "boolean"),
    ("tinyint", "integer"),
    ("interval", "text"),
    ("integer", "integer"),
    ("int", "integer"),
    ("serial", "integer"),
    ("mediumint", "integer"),
    ("unsigned", "integer"),
    ("nvarchar", "text"),
    ("nchar", "text"),
    ("ntext", "text"),
    ("varchar(255)", "text"),
    ("varchar", "text"),
    ("character varying", "text"),
    ("character", "text"),
    ("char", "text"),
    ("citext", "text"),
    ("tinytext", "text"),
    ("mediumtext", "text"),
    ("longtext", "text"),
    ("text", "text"),
    ("boolean", "boolean"),
    ("bool", "boolean"),
    ("bit", "boolean"),
    ("timestamp with time zone", "datetime"),
    ("timestamp without time zone", "datetime"),
    ("timestamptz", "datetime"),
    ("timestamp", "datetime"),
    ("datetimeoffset", "datetime"),
    ("datetime2", "datetime"),
    ("smalldatetime", "datetime"),
    ("datetime", "datetime"),
    ("date", "date"),
    ("time", "time"),
    ("year", "integer"),
    ("jsonb", "text"),
    ("json", "text"),
    ("uniqueidentifier", "text"),
    ("uuid", "text"),
    ("xml", "text"),
    ("inet", "text"),
    ("cidr", "text"),
    ("macaddr", "text"),
    ("point", "text"),
    ("polygon", "text"),
    ("line", "text"),
    ("bytea", "blob"),
    ("varbinary", "blob"),
    ("binary", "blob"),
    ("image", "blob"),
    ("blob", "blob"),
)

# ---------------------------------------------------------------------------
# Lowering tables (source dialect → MySQL vocabulary)
# ---------------------------------------------------------------------------

POSTGRESQL_TO_MYSQL: TypeTable = _table(
    ("boolean", "tinyint(1)"),
    ("bool", "tinyint(1)"),
    ("smallserial", "smallint"),
    ("smallint", "smallint"),
    ("int2", "smallint"),
    ("integer", "int"),
    ("int4", "int"),
    ("int8", "bigint"),
    ("interval", "time"),
    ("bigserial", "bigint"),
    ("bigint", "bigint"),
    ("serial", "int"),
    ("real", "float"),
    ("float4", "float"),
    ("float8", "double"),
    ("double precision", "double"),
    ("numeric", "decimal"),
    ("decimal", "decimal"),
    ("money", "decimal"),
    ("character varying", "varchar"),
    ("varchar", "varchar"),
    ("character", "char"),
    ("char", "char"),
    ("citext", "text"),
    ("text", "text"),
    ("timestamp with time zone", "timestamp"),
    ("timestamp without time zone", "datetime"),
    ("timestamptz", "timestamp"),
    ("timestamp", "datetime"),
    ("date", "date"),
    ("time", "time"),
    ("jsonb", "json"),
    ("json", "json"),
    ("uuid", "char(36)"),
    ("bytea", "blob"),
    ("inet", "varchar(45)"),
    ("cidr", "varchar(45)"),
    ("macaddr", "varchar(17)"),
    ("xml", "text"),
    ("point", "point"),
    ("polygon", "polygon"),
    ("line", "line"),
)

SQLITE_TO_MYSQL: TypeTable = _table(
    ("integer", "int"),
    ("int", "int"),
    ("real", "float"),
    ("double", "double"),
    ("float", "float"),
    ("numeric", "decimal"),
    ("decimal", "decimal"),
    ("boolean", "tinyint(1)"),
    ("bool", "tinyint(1)"),
    ("varchar", "varchar"),
    ("character", "char"),
    ("char", "char"),
    ("clob", "text"),
    ("text", "text"),
    ("blob", "blob"),
    ("datetime", "datetime"),
    ("date", "date"),
    ("timestamp", "timestamp"),
    ("time", "time"),
    ("json", "json"),
)

SQLSERVER_TO_MYSQL: TypeTable = _table(
    ("bigint", "bigint"),
    ("smallint", "smallint"),
    ("tinyint", "tinyint"),
    ("int", "int"),
    ("bit", "tinyint(1)"),
    ("decimal", "decimal"),
    ("numeric", "decimal"),
    ("smallmoney", "decimal"),
    ("money", "decimal"),
    ("float", "double"),
    ("real", "float"),
    ("nvarchar", "varchar"),
    ("varchar", "varchar"),
    ("nchar", "char"),
    ("char", "char"),
    ("ntext", "text"),
    ("text", "text"),
    ("datetimeoffset", "timestamp"),
    ("datetime2", "datetime"),
    ("smalldatetime", "datetime"),
    ("datetime", "datetime"),
    ("date", "date"),
    ("time", "time"),
    ("uniqueidentifier", "char(36)"),
    ("varbinary", "varbinary"),
    ("binary", "binary"),
    ("image", "blob"),
    ("xml", "text"),
)

_DIALECT_TABLES: Dict[str, TypeTable] = {
    DialectTarget.MYSQL.value: MYSQL_TABLE,
    DialectTarget.POSTGRESQL.value: POSTGRESQL_TABLE,
    DialectTarget.SQLITE.value: SQLITE_TABLE,
    DialectTarget.COLUMN_MAP.value: COLUMN_MAP_TABLE,
}

# mysql lowers to itself (None); anything absent is unsupported.
_LOWERING_TABLES: Dict[str, Optional[TypeTable]] = {
    "mysql": None,
    "postgresql": POSTGRESQL_TO_MYSQL,
    "sqlite": SQLITE_TO_MYSQL,
    "sqlserver": SQLSERVER_TO_MYSQL,
}

_DIALECT_ALIASES: Dict[str, str] = {
    "mariadb": "mysql",
    "pgsql": "postgresql",
    "postgres": "postgresql",
    "mssql": "sqlserver",
}

# Type families whose argument list survives translate_type.
_SIZED_TYPES: FrozenSet[str] = frozenset({
    "varchar", "char", "decimal", "numeric", "varbinary", "binary",
    "datetime", "timestamp", "timestamptz", "time",
})

_PAREN_GROUP_RE: re.Pattern[str] = re.compile(r"\([^)]*\)")


# ---------------------------------------------------------------------------
# Injected table bundle
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TypeTables:
    """
    The two tables every synthesis step needs.

    ``type_map`` classifies into canonical types; ``column_map`` normalises
    raw dialect types before classification.
    """

    type_map: TypeTable = CANONICAL_TYPE_TABLE
    column_map: TypeTable = COLUMN_MAP_TABLE


DEFAULT_TABLES: TypeTables = TypeTables()


# ---------------------------------------------------------------------------
# Lookup primitives
# ---------------------------------------------------------------------------


def match_entry(raw_type: str, table: TypeTable) -> Optional[TypeMapEntry]:
    """First entry whose pattern is a case-insensitive prefix of *raw_type*."""
    lowered: str = raw_type.strip().lower()
    for entry in table:
        if lowered.startswith(entry.pattern.lower()):
            return entry
    return None


def lookup(raw_type: str, table: TypeTable, default: str) -> str:
    """Target of the first matching entry, or *default*."""
    entry: Optional[TypeMapEntry] = match_entry(raw_type, table)
    return entry.target if entry is not None else default


def classify(raw_type: str, table: TypeTable = CANONICAL_TYPE_TABLE) -> str:
    """
    Classify a raw type string into a canonical type.

    Total and deterministic: unmatched input yields ``string``.

        >>> classify("tinyint(1)")
        'bool'
        >>> classify("TINYINT(4)")
        'int'
        >>> classify("geometry")
        'string'
    """
    return lookup(raw_type, table, DEFAULT_CANONICAL_TYPE)


def column_type(raw_type: str, table: TypeTable = COLUMN_MAP_TABLE) -> str:
    """
    Normalise *raw_type* through *table*, keeping its argument suffix.

    The suffix (everything from the first ``(``) is re-attached to the
    mapped type unless the mapped type already carries its own arguments.
    Unmatched input yields ``text``.

        >>> column_type("int(11)")
        'int(11)'
        >>> column_type("character varying(64)")
        'varchar(64)'
        >>> column_type("uuid")
        'char(36)'
    """
    entry: Optional[TypeMapEntry] = match_entry(raw_type, table)
    if entry is None:
        return DEFAULT_COLUMN_TYPE
    if "(" in entry.target:
        return entry.target
    return entry.target + type_arguments(raw_type.strip())


def conversion_table(target: Union[str, DialectTarget]) -> TypeTable:
    """Dialect table for *target*; an empty table when unsupported."""
    key: str = _dialect_key(target)
    table: Optional[TypeTable] = _DIALECT_TABLES.get(key)
    if table is None:
        logger.warning("No conversion table for dialect '%s'.", target)
        return ()
    return table


def convert(source_token: str, target: Union[str, DialectTarget]) -> str:
    """
    Convert a type token to *target*'s literal type syntax.

    Unknown tokens fall back to ``text``; an unsupported target yields an
    empty string.

        >>> convert("bigserial", "mysql"), convert("bigserial", "sqlite")
        ('bigint', 'integer')
    """
    table: TypeTable = conversion_table(target)
    if not table:
        return ""
    return lookup(source_token, table, DEFAULT_COLUMN_TYPE)


def translate_type(
    raw_type: str,
    source: Union[str, DialectTarget],
    target: Union[str, DialectTarget],
) -> str:
    """
    Translate a column type from one database dialect to another.

    PostgreSQL, SQLite and SQL Server types are lowered to MySQL first;
    the MySQL form is then converted through the target's table. Length
    and precision arguments are kept for sized families only, so
    ``varchar(100)`` keeps its size and ``int(11)`` drops its display width.

    Returns *raw_type* unchanged when the dialects are equal or either one
    is unsupported.
    """
    src: str = _dialect_key(source)
    dst: str = _dialect_key(target)
    if src == dst:
        return raw_type

    if src not in _LOWERING_TABLES:
        logger.warning("Unsupported source dialect '%s'; type left as-is.", source)
        return raw_type
    if dst not in _DIALECT_TABLES or dst == DialectTarget.COLUMN_MAP.value:
        logger.warning("Unsupported target dialect '%s'; type left as-is.", target)
        return raw_type

    lowering: Optional[TypeTable] = _LOWERING_TABLES[src]
    mysql_type: str = raw_type.strip() if lowering is None else column_type(raw_type, lowering)

    entry: Optional[TypeMapEntry] = match_entry(mysql_type, _DIALECT_TABLES[dst])
    if entry is None:
        return DEFAULT_COLUMN_TYPE
    if "(" in entry.target:
        return entry.target
    sized: bool = entry.target.lower() in _SIZED_TYPES
    # tinyint(1) -> boolean changes kind; varchar(255) -> varchar keeps its size
    if "(" in entry.pattern and not sized:
        return entry.target
    if sized:
        group: Optional[re.Match[str]] = _PAREN_GROUP_RE.search(mysql_type)
        if group is not None:
            return entry.target + group.group(0)
    return entry.target


def _dialect_key(value: Union[str, DialectTarget]) -> str:
    key: str = value.value if isinstance(value, DialectTarget) else str(value).strip().lower()
    return _DIALECT_ALIASES.get(key, key)


# ---------------------------------------------------------------------------
# Table diagnostics
# ---------------------------------------------------------------------------


def find_duplicate_patterns(table: TypeTable) -> List[str]:
    """Patterns (case-insensitive) that occur more than once, in order."""
    seen: Dict[str, int] = {}
    duplicates: List[str] = []
    for entry in table:
        key: str = entry.pattern.lower()
        seen[key] = seen.get(key, 0) + 1
        if seen[key] == 2:
            duplicates.append(key)
    return duplicates


def find_shadowed_patterns(table: TypeTable) -> List[Tuple[str, str]]:
    """
    ``(general, specific)`` pairs where an earlier, shorter pattern is a
    prefix of a later one, making the later entry unreachable.
    """
    shadowed: List[Tuple[str, str]] = []
    for i, later in enumerate(table):
        later_key: str = later.pattern.lower()
        earlier_keys: List[str] = [e.pattern.lower() for e in table[:i]]
        if later_key in earlier_keys:
            # plain duplicate, reported by find_duplicate_patterns
            continue
        for earlier_key in earlier_keys:
            if later_key.startswith(earlier_key):
                shadowed.append((earlier_key, later.pattern))
                break
    return shadowed


ALL_TABLES: Dict[str, TypeTable] = {
    "canonical": CANONICAL_TYPE_TABLE,
    "column_map": COLUMN_MAP_TABLE,
    "mysql": MYSQL_TABLE,
    "postgresql": POSTGRESQL_TABLE,
    "sqlite": SQLITE_TABLE,
    "postgresql_to_mysql": POSTGRESQL_TO_MYSQL,
    "sqlite_to_mysql": SQLITE_TO_MYSQL,
    "sqlserver_to_mysql": SQLSERVER_TO_MYSQL,
}

for _name, _tbl in ALL_TABLES.items():
    _dupes: List[str] = find_duplicate_patterns(_tbl)
    if _dupes:
        logger.debug("Table '%s' repeats pattern(s) %s; first occurrence wins.", _name, _dupes)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "TypeMapEntry",
    "TypeTable",
    "TypeTables",
    "DEFAULT_TABLES",
    "DEFAULT_CANONICAL_TYPE",
    "DEFAULT_COLUMN_TYPE",
    "CANONICAL_TYPE_TABLE",
    "COLUMN_MAP_TABLE",
    "MYSQL_TABLE",
    "POSTGRESQL_TABLE",
    "SQLITE_TABLE",
    "POSTGRESQL_TO_MYSQL",
    "SQLITE_TO_MYSQL",
    "SQLSERVER_TO_MYSQL",
    "ALL_TABLES",
    "match_entry",
    "lookup",
    "classify",
    "column_type",
    "conversion_table",
    "convert",
    "translate_type",
    "find_duplicate_patterns",
    "find_shadowed_patterns",
]

logger.debug("schemagen.type_tables loaded — %d public symbols.", len(__all__))
