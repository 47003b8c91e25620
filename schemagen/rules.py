# File: schemagen/rules.py
"""
schemagen - Validator Rule Compiler
====================================
Compile externally supplied ``FieldValidation`` definitions into the class
spec of a validator for one operation (insert or update).

A rule survives when its ``applyInsert``/``applyUpdate`` flag matches the
requested operation. Every surviving rule becomes one annotation block whose
attributes are the rule's remaining keys in declared order.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from schemagen.length import derive_length
from schemagen.models import (
    AnnotationBlock,
    ApplyKey,
    AttributeValue,
    BareLiteral,
    ClassKind,
    FieldValidation,
    GeneratedClassSpec,
    GeneratedProperty,
    ValidationRule,
)
from schemagen.properties import build_label, var_block
from schemagen.type_tables import DEFAULT_TABLES, TypeTables, classify, column_type
from schemagen.utils import camelize

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.rules")

_NUMERIC_RE: re.Pattern[str] = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

Definition = Union[FieldValidation, Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Type resolution
# ---------------------------------------------------------------------------


def resolve_field_type(field_type: str, tables: TypeTables = DEFAULT_TABLES) -> str:
    """
    Canonical type of a validator field.

    A field type that is itself a column-map key is normalised through the
    column map first; anything else is classified as given.

        >>> resolve_field_type("bool"), resolve_field_type("varchar(50)")
        ('bool', 'string')
    """
    resolved: str = field_type
    if any(entry.pattern == field_type for entry in tables.column_map):
        resolved = column_type(field_type, tables.column_map)
    return classify(resolved, tables.type_map)


# ---------------------------------------------------------------------------
# Rule blocks & signatures
# ---------------------------------------------------------------------------


def _attribute_value(value: Any) -> AttributeValue:
    if value is None:
        return ""
    if isinstance(value, (str, bool, int, float, BareLiteral)):
        return value
    return str(value)


def rule_block(rule: ValidationRule) -> AnnotationBlock:
    """
    ``{"type": "Length", "min": 3}`` → ``@Length(min=3)``.

    A rule without attributes keeps its parentheses: ``@Required()``.
    """
    attributes: Tuple[Tuple[str, AttributeValue], ...] = tuple(
        (key, _attribute_value(value)) for key, value in rule.attributes
    )
    return AnnotationBlock(rule.rule_type, attributes, parenthesized=True)


def _signature_value(value: AttributeValue) -> Optional[str]:
    if isinstance(value, BareLiteral):
        return value.token
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text: str = str(value)
    if text == "":
        return None
    if _NUMERIC_RE.match(text):
        return text
    return f'"{text}"'


def rule_signature(block: AnnotationBlock) -> str:
    """
    Compact form of a rule for the class docblock.

    Numbers stay bare, strings are quoted and empty values are dropped:

        >>> rule_signature(AnnotationBlock("Length", (("min", "3"), ("message", ""))))
        'Length(min=3)'
    """
    parts: List[str] = []
    for key, value in block.attributes:
        rendered: Optional[str] = _signature_value(value)
        if rendered is not None:
            parts.append(f"{key}={rendered}")
    return f"{block.tag}({', '.join(parts)})" if parts else block.tag


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------


def _as_field(definition: Definition) -> FieldValidation:
    if isinstance(definition, FieldValidation):
        return definition
    return FieldValidation.model_validate(definition)


def compile_validators(
    definitions: Iterable[Definition],
    apply_key: Union[str, ApplyKey],
    tables: TypeTables = DEFAULT_TABLES,
    namespace: str = "",
    class_name: str = "Validator",
    module_code: str = "module",
) -> GeneratedClassSpec:
    """
    Build the validator class spec for one operation.

    Args:
        definitions: ``FieldValidation`` objects or their mapping form.
        apply_key: ``insert``/``update`` or ``applyInsert``/``applyUpdate``.
        tables: Type tables used to resolve ``fieldType``.
        namespace: Namespace of the generated class.
        class_name: Generated class name.
        module_code: Module the validator belongs to (docblock only).

    Returns:
        A validator ``GeneratedClassSpec``. Fields without a rule for the
        operation produce no property; fields whose names camelize to the
        same property share one.

    Raises:
        ValueError: if *apply_key* is not recognised.
    """
    key: ApplyKey = ApplyKey.parse(apply_key)

    blocks_by_property: Dict[str, List[AnnotationBlock]] = {}
    types_by_property: Dict[str, str] = {}
    source_by_property: Dict[str, FieldValidation] = {}

    for definition in definitions:
        field: FieldValidation = _as_field(definition)
        property_name: str = camelize(field.field_name)
        # the last declaration of a shared property decides its type
        types_by_property[property_name] = resolve_field_type(field.field_type, tables)

        for rule in field.validation:
            if not rule.applies_to(key):
                continue
            blocks_by_property.setdefault(property_name, []).append(rule_block(rule))
            source_by_property.setdefault(property_name, field)

    properties: List[GeneratedProperty] = []
    for property_name, blocks in blocks_by_property.items():
        source: FieldValidation = source_by_property[property_name]
        canonical: str = types_by_property[property_name]
        properties.append(
            GeneratedProperty(
                property_name=property_name,
                column_name=source.field_name,
                label=build_label(source.field_name),
                canonical_type=canonical,
                column_type=source.field_type,
                length=derive_length(source.field_type),
                annotations=tuple(blocks) + (var_block(canonical),),
            )
        )

    logger.info(
        "Compiled %s validator %s: %d propert%s.",
        key.operation,
        class_name,
        len(properties),
        "y" if len(properties) == 1 else "ies",
    )

    return GeneratedClassSpec(
        namespace=namespace,
        class_name=class_name,
        table_or_module_name=module_code,
        properties=tuple(properties),
        kind=ClassKind.VALIDATOR,
        apply_key=key,
    )


__all__: List[str] = [
    "resolve_field_type",
    "rule_block",
    "rule_signature",
    "compile_validators",
]

logger.debug("schemagen.rules loaded — %d public symbols.", len(__all__))
