# File: schemagen/models.py
"""
schemagen - Core Data Models
=============================
Pydantic V2 models for column metadata, generation requests and the
structured output of the synthesis pipeline:

    Adapter rows → ColumnMetadata → GeneratedProperty → GeneratedClassSpec

Value objects produced by the pipeline are frozen; once a property or class
spec is built it is consumed by the assembler and never mutated.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from schemagen.utils import count_lines

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.models")

# ---------------------------------------------------------------------------
# Enums — fixed sets used across the entire project
# ---------------------------------------------------------------------------


class CanonicalType(str, Enum):
    """Dialect-neutral property types emitted as ``@var``."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    ARRAY = "array"
    RESOURCE = "resource"


class DialectTarget(str, Enum):
    """Targets of the dialect conversion tables."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"
    COLUMN_MAP = "column_map"


class DatabaseType(str, Enum):
    """Database types whose adapter rows can be normalised."""

    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    PGSQL = "pgsql"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"


class ClassKind(str, Enum):
    """Generated class flavours."""

    ENTITY = "entity"
    DTO = "dto"
    VALIDATOR = "validator"


class ApplyKey(str, Enum):
    """Rule routing flags used by validator definitions."""

    INSERT = "applyInsert"
    UPDATE = "applyUpdate"

    @classmethod
    def parse(cls, value: Union[str, "ApplyKey"]) -> "ApplyKey":
        """Accept ``insert``/``update`` as well as the flag names."""
        if isinstance(value, ApplyKey):
            return value
        lowered: str = str(value).strip().lower()
        for member in cls:
            if lowered in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(
            f"Unknown apply key '{value}'. Expected 'insert' or 'update'."
        )

    @property
    def operation(self) -> str:
        return "insert" if self is ApplyKey.INSERT else "update"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class MalformedMetadataError(ValueError):
    """An adapter row is missing keys the engine depends on."""

    def __init__(self, missing: List[str], row: Mapping[str, Any]) -> None:
        self.missing: List[str] = list(missing)
        self.row: Dict[str, Any] = dict(row)
        super().__init__(
            f"Metadata row is missing required key(s) {self.missing}; "
            f"got keys {sorted(self.row)}."
        )


# ---------------------------------------------------------------------------
# Mixin: shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    use_enum_values=True,
    frozen=False,
    extra="forbid",
)

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    use_enum_values=True,
    frozen=True,
    extra="forbid",
)

_NAMESPACE_RE: re.Pattern[str] = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*(\\[A-Za-z_][A-Za-z0-9_]*)*$"
)

# MySQL "SHOW COLUMNS" row keys; SQLite adapters emit the same shape.
MYSQL_ROW_KEYS: Tuple[str, ...] = ("Field", "Type", "Key", "Null", "Default", "Extra")


# ---------------------------------------------------------------------------
# Column metadata
# ---------------------------------------------------------------------------


class ColumnMetadata(BaseModel):
    """
    Normalised description of one database column.

    Every row returned by a dialect adapter becomes exactly one
    ``ColumnMetadata`` before anything else looks at it.
    """

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Column name.")
    raw_type: str = Field(..., description="Vendor type string, e.g. 'int(11)'.")
    is_primary_key: bool = Field(default=False, description="Part of the primary key?")
    is_nullable: bool = Field(default=True, description="Whether the column allows NULL.")
    default_value: Optional[str] = Field(
        default=None, description="Default value as reported by the adapter."
    )
    extra: str = Field(default="", description="Adapter 'Extra' text (auto_increment...).")

    @field_validator("default_value", mode="before")
    @classmethod
    def _stringify_default(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, bool):
            return "1" if v else "0"
        text: str = str(v)
        return text if text != "" else None

    @field_validator("extra", mode="before")
    @classmethod
    def _none_extra(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @computed_field  # type: ignore[misc]
    @property
    def is_auto_increment(self) -> bool:
        return "auto_increment" in self.extra.lower()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ColumnMetadata":
        """
        Build from a MySQL/MariaDB/SQLite style row.

        Raises:
            MalformedMetadataError: if any of ``Field, Type, Key, Null,
                Default, Extra`` is absent.
        """
        missing: List[str] = [k for k in MYSQL_ROW_KEYS if k not in row]
        if missing:
            raise MalformedMetadataError(missing, row)
        key: str = str(row["Key"] or "")
        null: str = str(row["Null"] or "")
        return cls(
            name=str(row["Field"]),
            raw_type=str(row["Type"] or ""),
            is_primary_key=key.upper().startswith("PRI"),
            is_nullable=null.upper().startswith("YES"),
            default_value=row["Default"],
            extra=row["Extra"],
        )

    def __repr__(self) -> str:
        pk_flag: str = " PK" if self.is_primary_key else ""
        null_flag: str = " NULL" if self.is_nullable else " NOT NULL"
        return f"<Column {self.name} {self.raw_type}{pk_flag}{null_flag}>"


# ---------------------------------------------------------------------------
# Annotation blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BareLiteral:
    """An attribute value rendered without quotes (``GenerationType.UUID``)."""

    token: str

    def __str__(self) -> str:
        return self.token


AttributeValue = Union[str, bool, int, float, BareLiteral]


@dataclass(frozen=True, slots=True)
class AnnotationBlock:
    """
    One documentation-comment annotation line, kept structured until render.

    ``attributes`` is an ordered tuple of ``(key, value)`` pairs. ``text``
    holds free text for tags like ``@var`` and ``@package``.
    ``parenthesized`` keeps the parentheses when there are no attributes
    (validator rules render as ``@Required()``).
    """

    tag: str
    attributes: Tuple[Tuple[str, AttributeValue], ...] = ()
    text: Optional[str] = None
    parenthesized: bool = False

    def get(self, key: str, default: Any = None) -> Any:
        for k, v in self.attributes:
            if k == key:
                return v
        return default

    def has(self, key: str) -> bool:
        return any(k == key for k, _ in self.attributes)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(k for k, _ in self.attributes)

    def render(self) -> str:
        """Render as ``@Tag(k="v", n=1)`` / ``@Tag`` / ``@Tag()`` / ``@var int``."""
        if self.text is not None:
            return f"@{self.tag} {self.text}"
        if not self.attributes:
            return f"@{self.tag}()" if self.parenthesized else f"@{self.tag}"
        parts: List[str] = [f"{k}={render_attribute_value(v)}" for k, v in self.attributes]
        return f"@{self.tag}({', '.join(parts)})"


def render_attribute_value(value: AttributeValue) -> str:
    """Quote strings; render booleans as ``true``/``false``; numbers bare."""
    if isinstance(value, BareLiteral):
        return value.token
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    escaped: str = str(value).replace('"', '\\"')
    return f'"{escaped}"'


# ---------------------------------------------------------------------------
# Synthesis output
# ---------------------------------------------------------------------------


class GeneratedProperty(BaseModel):
    """A synthesised property: identity, resolved types and annotations."""

    model_config = _FROZEN_CONFIG

    property_name: str = Field(..., min_length=1, description="camelCase property name.")
    column_name: str = Field(..., min_length=1, description="Source column / field name.")
    label: str = Field(default="", description="Human-readable label.")
    canonical_type: str = Field(..., description="Canonical type emitted as @var.")
    column_type: str = Field(default="", description="Normalised column type with arguments.")
    length: int = Field(default=0, ge=0, description="Length or precision (0 = none).")
    annotations: Tuple[AnnotationBlock, ...] = Field(
        default=(), description="Ordered annotation blocks."
    )
    is_primary_key: bool = False
    is_auto_increment: bool = False
    is_nullable: bool = True
    default_value: Optional[str] = None

    def annotation(self, tag: str) -> Optional[AnnotationBlock]:
        """First annotation with *tag*, or None."""
        for block in self.annotations:
            if block.tag == tag:
                return block
        return None

    @property
    def tags(self) -> Tuple[str, ...]:
        return tuple(b.tag for b in self.annotations)

    def __repr__(self) -> str:
        return f"<Property ${self.property_name}: {self.canonical_type}>"


class GeneratedClassSpec(BaseModel):
    """
    Everything the class assembler needs to emit one class.

    Built once per generation request and discarded after assembly.
    """

    model_config = _FROZEN_CONFIG

    namespace: str = Field(default="", description="Target namespace.")
    class_name: str = Field(..., min_length=1, description="Generated class name.")
    table_or_module_name: str = Field(..., min_length=1, description="Table or module code.")
    properties: Tuple[GeneratedProperty, ...] = Field(default=())
    naming_strategy: str = Field(default="SNAKE_CASE", description="@JSON naming strategy.")
    prettify: bool = Field(default=False, description="@JSON prettify flag.")
    kind: ClassKind = Field(default=ClassKind.ENTITY)
    entity_namespace: Optional[str] = Field(
        default=None, description="Namespace of the entity a DTO copies from."
    )
    entity_name: Optional[str] = Field(
        default=None, description="Entity class a DTO copies from."
    )
    apply_key: Optional[ApplyKey] = Field(
        default=None, description="Validator routing flag."
    )

    @model_validator(mode="after")
    def _validate_kind_requirements(self) -> "GeneratedClassSpec":
        if self.kind == ClassKind.DTO.value and not self.entity_name:
            raise ValueError(
                f"DTO class '{self.class_name}' requires 'entity_name'."
            )
        if self.kind == ClassKind.VALIDATOR.value and self.apply_key is None:
            raise ValueError(
                f"Validator class '{self.class_name}' requires 'apply_key'."
            )
        return self

    @computed_field  # type: ignore[misc]
    @property
    def property_names(self) -> List[str]:
        return [p.property_name for p in self.properties]

    def __repr__(self) -> str:
        return (
            f"<ClassSpec {self.kind} {self.namespace}\\{self.class_name} "
            f"({len(self.properties)} props)>"
        )


# ---------------------------------------------------------------------------
# Validation definitions
# ---------------------------------------------------------------------------

ROUTING_KEYS: Tuple[str, ...] = ("type", "applyInsert", "applyUpdate")


class ValidationRule(BaseModel):
    """
    One externally supplied rule, e.g.
    ``{"type": "Length", "min": 3, "max": 50, "applyInsert": true}``.

    Keys other than the routing keys are kept, in declared order, as the
    annotation attributes.
    """

    model_config = _FROZEN_CONFIG

    rule_type: str = Field(..., min_length=1, alias="type")
    apply_insert: bool = Field(default=False, alias="applyInsert")
    apply_update: bool = Field(default=False, alias="applyUpdate")
    attributes: Tuple[Tuple[str, Any], ...] = Field(default=())

    @model_validator(mode="before")
    @classmethod
    def _split_attributes(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "attributes" in data:
            return data
        reserved: Tuple[str, ...] = ROUTING_KEYS + ("rule_type", "apply_insert", "apply_update")
        routed: Dict[str, Any] = {k: data[k] for k in reserved if k in data}
        routed["attributes"] = tuple(
            (str(k), v) for k, v in data.items() if k not in reserved
        )
        return routed

    def applies_to(self, key: ApplyKey) -> bool:
        return self.apply_insert if key is ApplyKey.INSERT else self.apply_update


class FieldValidation(BaseModel):
    """Rules declared for one input field."""

    model_config = _FROZEN_CONFIG

    field_name: str = Field(..., min_length=1, alias="fieldName")
    field_type: str = Field(default="", alias="fieldType")
    validation: Tuple[ValidationRule, ...] = Field(default=())


# ---------------------------------------------------------------------------
# Generation configuration & requests
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """Settings that control one generation run."""

    model_config = _SHARED_CONFIG

    database_type: str = Field(
        default=DatabaseType.MYSQL.value,
        description="Adapter row shape / source database type.",
    )
    entity_namespace: str = Field(default="App\\Entity")
    dto_namespace: str = Field(default="App\\Dto")
    validator_namespace: str = Field(default="App\\Validator")
    prettify: bool = Field(default=False, description="@JSON prettify flag.")
    prettify_labels: bool = Field(default=True, description="Render 'id'/'ip' as 'ID'/'IP'.")
    non_updatable: List[str] = Field(
        default_factory=list, description="Columns annotated updatable=false."
    )
    naming_strategy: str = Field(default="SNAKE_CASE")
    line_ending: str = Field(default="lf", description="'lf' or 'crlf'.")
    generate_entity: bool = Field(default=True)
    generate_dto: bool = Field(default=True)

    @field_validator("database_type")
    @classmethod
    def _lower_database_type(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("entity_namespace", "dto_namespace", "validator_namespace")
    @classmethod
    def _valid_namespace(cls, v: str) -> str:
        v = v.strip().strip("\\")
        if v and not _NAMESPACE_RE.match(v):
            raise ValueError(f"Invalid namespace '{v}'.")
        return v

    @field_validator("line_ending")
    @classmethod
    def _valid_line_ending(cls, v: str) -> str:
        lowered: str = v.strip().lower()
        if lowered not in ("lf", "crlf"):
            raise ValueError(f"line_ending must be 'lf' or 'crlf', got '{v}'.")
        return lowered


class TableRequest(BaseModel):
    """One table to generate an entity (and optionally a DTO) for."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1, description="Table name.")
    entity_name: Optional[str] = Field(default=None)
    dto_name: Optional[str] = Field(default=None)
    database_type: Optional[str] = Field(
        default=None, description="Overrides the config database type."
    )
    columns: List[Dict[str, Any]] = Field(
        default_factory=list, description="Raw adapter rows."
    )


class ValidatorRequest(BaseModel):
    """One validator class to compile."""

    model_config = _SHARED_CONFIG

    module: str = Field(..., min_length=1, description="Module code.")
    class_name: str = Field(..., min_length=1)
    apply: str = Field(default="insert", description="'insert' or 'update'.")
    namespace: Optional[str] = Field(default=None)
    fields: List[FieldValidation] = Field(default_factory=list)


class GenerationRequest(BaseModel):
    """Root of a generation request file."""

    model_config = _SHARED_CONFIG

    config: GenerationConfig = Field(default_factory=GenerationConfig)
    tables: List[TableRequest] = Field(default_factory=list)
    validators: List[ValidatorRequest] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]


# ---------------------------------------------------------------------------
# Generation output
# ---------------------------------------------------------------------------


class GeneratedFile(BaseModel):
    """A single source file produced by the generator."""

    model_config = _SHARED_CONFIG

    path: str = Field(..., min_length=1, description="Relative file path.")
    content: str = Field(..., description="Full file content.")
    kind: ClassKind = Field(default=ClassKind.ENTITY)
    line_count: int = Field(default=0, ge=0)
    size_bytes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _compute_metrics(self) -> "GeneratedFile":
        object.__setattr__(self, "line_count", count_lines(self.content))
        object.__setattr__(self, "size_bytes", len(self.content.encode("utf-8")))
        return self


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CanonicalType",
    "DialectTarget",
    "DatabaseType",
    "ClassKind",
    "ApplyKey",
    "MalformedMetadataError",
    "MYSQL_ROW_KEYS",
    "ColumnMetadata",
    "BareLiteral",
    "AttributeValue",
    "AnnotationBlock",
    "render_attribute_value",
    "GeneratedProperty",
    "GeneratedClassSpec",
    "ROUTING_KEYS",
    "ValidationRule",
    "FieldValidation",
    "GenerationConfig",
    "TableRequest",
    "ValidatorRequest",
    "GenerationRequest",
    "GeneratedFile",
]

logger.debug("schemagen.models loaded — %d public symbols.", len(__all__))
