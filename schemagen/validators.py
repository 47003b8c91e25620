# File: schemagen/validators.py
"""
schemagen - Generation Request Validators
==========================================
A pure-function validation pipeline over ``GenerationRequest``.

Pydantic handles per-field structure; the checks here are cross-entity:
duplicate tables and class names, unusable identifiers, malformed adapter
rows, unknown apply keys and validator fields that carry no rules.

Usage:
    from schemagen.validators import validate_request
    result = validate_request(request)
    if not result.is_valid:
        print(result.format_report())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set

from schemagen.metadata import is_supported_database, normalize_rows
from schemagen.models import (
    ApplyKey,
    ColumnMetadata,
    GenerationConfig,
    GenerationRequest,
    MalformedMetadataError,
    TableRequest,
)
from schemagen.utils import is_identifier, upper_camelize

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.validators")

# ---------------------------------------------------------------------------
# Request issues
# ---------------------------------------------------------------------------

_LEVEL_MARKERS: Dict[str, str] = {
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
}


@dataclass(frozen=True, slots=True)
class RequestIssue:
    """
    One finding about a generation request.

    ``context`` names what the finding is about: ``table`` for table
    checks, ``module``/``class`` (and ``field``) for validator checks.
    """

    level: str  # "error" | "warning" | "info"
    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def table(self) -> Optional[str]:
        return self.context.get("table")

    def __str__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"


class ValidationResult:
    """Issues collected over one request, in check order."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[RequestIssue] = []

    def _add(self, level: str, code: str, message: str, context: Optional[Dict[str, Any]]) -> None:
        self._items.append(RequestIssue(level, code, message, dict(context or {})))

    def add_error(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._add("error", code, message, context)

    def add_warning(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._add("warning", code, message, context)

    def add_info(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._add("info", code, message, context)

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    @property
    def errors(self) -> List[RequestIssue]:
        return [i for i in self._items if i.level == "error"]

    @property
    def warnings(self) -> List[RequestIssue]:
        return [i for i in self._items if i.level == "warning"]

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self._items]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    def tables_with_errors(self) -> FrozenSet[str]:
        """Names of the tables at least one error refers to."""
        return frozenset(i.table for i in self.errors if i.table is not None)

    def summary(self) -> str:
        return (
            f"Validation: {self.error_count} error(s), "
            f"{self.warning_count} warning(s), "
            f"{len(self._items)} total item(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are NO errors."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self, include_info: bool = False) -> str:
        """Summary line, then one line per issue with its context below."""
        lines: List[str] = [self.summary(), ""]
        for item in self._items:
            if item.level == "info" and not include_info:
                continue
            lines.append(f"  {_LEVEL_MARKERS.get(item.level, '•')} [{item.code}] {item.message}")
            lines.extend(f"       {k}: {v}" for k, v in item.context.items())
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Reserved words
# ---------------------------------------------------------------------------

# PHP keywords that cannot name a class
_PHP_RESERVED_WORDS: FrozenSet[str] = frozenset(
    {
        "abstract", "and", "array", "as", "break", "callable", "case", "catch",
        "class", "clone", "const", "continue", "declare", "default", "do",
        "echo", "else", "elseif", "empty", "enddeclare", "endfor",
        "endforeach", "endif", "endswitch", "endwhile", "enum", "eval", "exit",
        "extends", "final", "finally", "fn", "for", "foreach", "function",
        "global", "goto", "if", "implements", "include", "instanceof",
        "insteadof", "interface", "isset", "list", "match", "namespace", "new",
        "or", "print", "private", "protected", "public", "readonly", "require",
        "return", "static", "switch", "throw", "trait", "try", "unset", "use",
        "var", "while", "xor", "yield", "int", "float", "bool", "string",
        "true", "false", "null", "void", "iterable", "object", "mixed", "never",
    }
)

KNOWN_NAMING_STRATEGIES: FrozenSet[str] = frozenset({"SNAKE_CASE", "CAMEL_CASE", "UPPER_CAMEL_CASE"})


def _check_class_name(
    result: ValidationResult,
    name: str,
    code_prefix: str,
    ctx: Dict[str, Any],
) -> None:
    if not is_identifier(name):
        result.add_error(
            f"INVALID_{code_prefix}_NAME",
            f"Class name '{name}' is not a valid identifier.",
            ctx,
        )
    elif name.lower() in _PHP_RESERVED_WORDS:
        result.add_error(
            f"{code_prefix}_NAME_RESERVED",
            f"Class name '{name}' is a reserved word.",
            ctx,
        )


# ---------------------------------------------------------------------------
# Individual validation functions
# ---------------------------------------------------------------------------


def validate_config(config: GenerationConfig) -> ValidationResult:
    """Configuration sanity checks."""
    result: ValidationResult = ValidationResult()

    if not is_supported_database(config.database_type):
        result.add_warning(
            "UNSUPPORTED_DATABASE_TYPE",
            f"Database type '{config.database_type}' is not supported; "
            "tables using it will produce no properties.",
            {"database_type": config.database_type},
        )

    if config.naming_strategy not in KNOWN_NAMING_STRATEGIES:
        result.add_warning(
            "UNKNOWN_NAMING_STRATEGY",
            f"Naming strategy '{config.naming_strategy}' is not one of "
            f"{sorted(KNOWN_NAMING_STRATEGIES)}.",
            {"naming_strategy": config.naming_strategy},
        )

    if not config.generate_entity and not config.generate_dto:
        result.add_info(
            "NO_TABLE_OUTPUT",
            "Both entity and DTO generation are disabled; tables are skipped.",
        )

    logger.debug("validate_config: %d issue(s).", len(result))
    return result


def _table_columns(
    table: TableRequest,
    database_type: str,
    result: ValidationResult,
) -> List[ColumnMetadata]:
    ctx: Dict[str, Any] = {"table": table.name}
    try:
        return normalize_rows(database_type, table.columns)
    except MalformedMetadataError as exc:
        result.add_error(
            "MALFORMED_METADATA",
            f"Table '{table.name}': {exc}",
            {**ctx, "missing": exc.missing},
        )
    except ValueError as exc:
        result.add_error("INVALID_COLUMN", f"Table '{table.name}': {exc}", ctx)
    return []


def validate_tables(request: GenerationRequest) -> ValidationResult:
    """
    Table-level checks:

    - duplicate table names and generated class names
    - entity/DTO class names that are not identifiers or are reserved
    - empty column lists, malformed rows, duplicate columns
    - tables without a primary key
    """
    result: ValidationResult = ValidationResult()
    seen_tables: Set[str] = set()
    seen_classes: Set[str] = set()
    config: GenerationConfig = request.config

    for table in request.tables:
        ctx: Dict[str, Any] = {"table": table.name}

        if table.name in seen_tables:
            result.add_error(
                "DUPLICATE_TABLE_NAME",
                f"Table '{table.name}' is defined more than once.",
                ctx,
            )
        seen_tables.add(table.name)

        entity_name: str = table.entity_name or upper_camelize(table.name)
        dto_name: str = table.dto_name or f"{entity_name}Dto"
        class_names: List[str] = [entity_name]
        _check_class_name(result, entity_name, "ENTITY", ctx)
        if config.generate_dto:
            _check_class_name(result, dto_name, "DTO", ctx)
            class_names.append(dto_name)

        for class_name in class_names:
            if class_name in seen_classes:
                result.add_error(
                    "DUPLICATE_CLASS_NAME",
                    f"Class '{class_name}' would be generated more than once.",
                    {**ctx, "class": class_name},
                )
            seen_classes.add(class_name)

        if not table.columns:
            result.add_warning(
                "EMPTY_COLUMN_LIST",
                f"Table '{table.name}' has no columns; its classes will be empty.",
                ctx,
            )
            continue

        database_type: str = table.database_type or config.database_type
        columns: List[ColumnMetadata] = _table_columns(table, database_type, result)
        if not columns:
            continue

        seen_columns: Set[str] = set()
        for column in columns:
            if column.name in seen_columns:
                result.add_error(
                    "DUPLICATE_COLUMN_NAME",
                    f"Column '{column.name}' appears twice in table '{table.name}'.",
                    {**ctx, "column": column.name},
                )
            seen_columns.add(column.name)

        if not any(c.is_primary_key for c in columns):
            result.add_warning(
                "NO_PRIMARY_KEY",
                f"Table '{table.name}' has no primary key column.",
                ctx,
            )

    logger.debug(
        "validate_tables: checked %d table(s), %d issue(s).",
        len(request.tables),
        len(result),
    )
    return result


def validate_validator_requests(request: GenerationRequest) -> ValidationResult:
    """
    Validator-definition checks:

    - apply key must be insert/update
    - class names must be identifiers and unique
    - fields without any rule, and fields with no rule for the operation
    """
    result: ValidationResult = ValidationResult()
    seen_classes: Set[str] = set()

    for validator in request.validators:
        ctx: Dict[str, Any] = {"module": validator.module, "class": validator.class_name}

        apply_key: Optional[ApplyKey] = None
        try:
            apply_key = ApplyKey.parse(validator.apply)
        except ValueError as exc:
            result.add_error("UNKNOWN_APPLY_KEY", str(exc), ctx)

        _check_class_name(result, validator.class_name, "VALIDATOR", ctx)
        if validator.class_name in seen_classes:
            result.add_error(
                "DUPLICATE_VALIDATOR_CLASS",
                f"Validator class '{validator.class_name}' is defined more than once.",
                ctx,
            )
        seen_classes.add(validator.class_name)

        if not validator.fields:
            result.add_warning(
                "EMPTY_VALIDATOR",
                f"Validator '{validator.class_name}' declares no fields.",
                ctx,
            )

        for definition in validator.fields:
            field_ctx: Dict[str, Any] = {**ctx, "field": definition.field_name}
            if not definition.validation:
                result.add_warning(
                    "FIELD_WITHOUT_RULES",
                    f"Field '{definition.field_name}' declares no validation rules.",
                    field_ctx,
                )
            elif apply_key is not None and not any(r.applies_to(apply_key) for r in definition.validation):
                result.add_info(
                    "FIELD_NOT_APPLIED",
                    f"Field '{definition.field_name}' has no rule for {apply_key.operation}; "
                    "it is left out of the class.",
                    field_ctx,
                )

    logger.debug("validate_validator_requests: %d issue(s).", len(result))
    return result


# ---------------------------------------------------------------------------
# Composite validation
# ---------------------------------------------------------------------------


def validate_request(request: GenerationRequest) -> ValidationResult:
    """
    **Master validation entry point**, called by the generator and the CLI
    before anything is synthesized.
    """
    logger.info(
        "Starting request validation — %d table(s), %d validator(s).",
        len(request.tables),
        len(request.validators),
    )

    result: ValidationResult = ValidationResult()
    result.merge(validate_config(request.config))

    checks: List[Callable[[GenerationRequest], ValidationResult]] = [
        validate_tables,
        validate_validator_requests,
    ]
    for check in checks:
        logger.debug("Running validator: %s", check.__name__)
        result.merge(check(request))

    if not request.tables and not request.validators:
        result.add_warning("EMPTY_REQUEST", "The request defines no tables and no validators.")

    if not result.is_valid:
        logger.error("Validation FAILED with %d error(s). %s", result.error_count, result.summary())
    else:
        logger.info("Validation PASSED. %s", result.summary())
    return result


__all__: List[str] = [
    "RequestIssue",
    "ValidationResult",
    "KNOWN_NAMING_STRATEGIES",
    "validate_config",
    "validate_tables",
    "validate_validator_requests",
    "validate_request",
]

logger.debug("schemagen.validators loaded — %d public symbols.", len(__all__))
