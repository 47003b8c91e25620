# File: schemagen/properties.py
"""
schemagen - Property Synthesizer
=================================
Turn one ``ColumnMetadata`` into a ``GeneratedProperty``: camelCase name,
human label, resolved column/canonical types, derived length and the
ordered annotation blocks the entity docblock is rendered from.

Annotation order for entity properties is fixed:

    @Id → @GeneratedValue → @NotNull → @Column → @DefaultColumn → @Label → @var
"""

from __future__ import annotations

import logging
import re
from typing import AbstractSet, Iterable, List, Optional, Tuple

from schemagen.length import derive_length
from schemagen.models import (
    AnnotationBlock,
    AttributeValue,
    BareLiteral,
    ColumnMetadata,
    GeneratedProperty,
)
from schemagen.type_tables import DEFAULT_TABLES, TypeTables, classify, column_type
from schemagen.utils import camelize, strip_type_arguments

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.properties")

TAG_ID: str = "Id"
TAG_GENERATED_VALUE: str = "GeneratedValue"
TAG_NOT_NULL: str = "NotNull"
TAG_COLUMN: str = "Column"
TAG_DEFAULT_COLUMN: str = "DefaultColumn"
TAG_LABEL: str = "Label"
TAG_VAR: str = "var"

STRATEGY_IDENTITY: BareLiteral = BareLiteral("GenerationType.IDENTITY")
STRATEGY_UUID: BareLiteral = BareLiteral("GenerationType.UUID")

_PRETTY_SEGMENTS = {"id": "ID", "ip": "IP"}
_WORD_START_RE: re.Pattern[str] = re.compile(r"(^|\s)(\S)")
_AUTO_INCREMENT_RE: re.Pattern[str] = re.compile(r"auto_increment", re.IGNORECASE)
_MULTI_SPACE_RE: re.Pattern[str] = re.compile(r"\s{2,}")


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def _ucwords(text: str) -> str:
    return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text)


def build_label(column_name: str, prettify: bool = True) -> str:
    """
    Build a display label from a column name.

        >>> build_label("user_id")
        'User ID'
        >>> build_label("user_id", prettify=False)
        'User Id'
        >>> build_label("last_login_ip")
        'Last Login IP'
    """
    parts: List[str] = []
    for segment in column_name.split("_"):
        pretty: Optional[str] = _PRETTY_SEGMENTS.get(segment.lower()) if prettify else None
        parts.append(pretty if pretty is not None else _ucwords(segment))
    return " ".join(parts)


def strip_auto_increment(extra: str) -> str:
    """Adapter Extra text without the ``auto_increment`` token."""
    remainder: str = _AUTO_INCREMENT_RE.sub("", extra or "")
    return _MULTI_SPACE_RE.sub(" ", remainder).strip()


# ---------------------------------------------------------------------------
# Annotation builders
# ---------------------------------------------------------------------------


def label_block(label: str) -> AnnotationBlock:
    return AnnotationBlock(TAG_LABEL, (("content", label),))


def var_block(canonical_type: str) -> AnnotationBlock:
    return AnnotationBlock(TAG_VAR, text=canonical_type)


def column_block(
    column: ColumnMetadata,
    resolved_type: str,
    length: int,
    updatable: bool = True,
) -> AnnotationBlock:
    """
    Build ``@Column(...)``.

    ``type`` is the base token of *resolved_type*; the size travels in
    ``length``. ``updatable=false`` and ``extra`` appear only when relevant.
    """
    attributes: List[Tuple[str, AttributeValue]] = [
        ("name", column.name),
        ("type", strip_type_arguments(resolved_type)),
    ]
    if length > 0:
        attributes.append(("length", length))
    if column.default_value is not None:
        attributes.append(("defaultValue", column.default_value))
    attributes.append(("nullable", column.is_nullable))
    if not updatable:
        attributes.append(("updatable", False))
    extra: str = strip_auto_increment(column.extra)
    if extra:
        attributes.append(("extra", extra))
    return AnnotationBlock(TAG_COLUMN, tuple(attributes))


def entity_annotations(
    column: ColumnMetadata,
    resolved_type: str,
    canonical_type: str,
    length: int,
    label: str,
    updatable: bool = True,
) -> Tuple[AnnotationBlock, ...]:
    """Ordered annotation blocks for an entity property."""
    blocks: List[AnnotationBlock] = []

    if column.is_primary_key:
        blocks.append(AnnotationBlock(TAG_ID))
    if column.is_auto_increment:
        blocks.append(AnnotationBlock(TAG_GENERATED_VALUE, (("strategy", STRATEGY_IDENTITY),)))
    elif column.is_primary_key:
        blocks.append(AnnotationBlock(TAG_GENERATED_VALUE, (("strategy", STRATEGY_UUID),)))

    if not column.is_nullable:
        blocks.append(AnnotationBlock(TAG_NOT_NULL))

    blocks.append(column_block(column, resolved_type, length, updatable))

    if column.default_value is not None:
        blocks.append(AnnotationBlock(TAG_DEFAULT_COLUMN, (("value", column.default_value),)))

    blocks.append(label_block(label))
    blocks.append(var_block(canonical_type))
    return tuple(blocks)


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------


def synthesize(
    column: ColumnMetadata,
    tables: TypeTables = DEFAULT_TABLES,
    non_updatable: Iterable[str] = (),
    prettify_labels: bool = True,
) -> GeneratedProperty:
    """
    Synthesize the entity property for *column*.

    Args:
        column: Normalised column metadata.
        tables: Type map and column map to resolve types through.
        non_updatable: Column names annotated ``updatable=false``.
        prettify_labels: Render ``id``/``ip`` label segments upper-case.

    Returns:
        A frozen ``GeneratedProperty`` carrying the full annotation list.
    """
    frozen_names: AbstractSet[str] = (
        non_updatable if isinstance(non_updatable, (set, frozenset)) else frozenset(non_updatable)
    )
    resolved: str = column_type(column.raw_type, tables.column_map)
    canonical: str = classify(resolved, tables.type_map)
    length: int = derive_length(resolved)
    label: str = build_label(column.name, prettify_labels)

    annotations: Tuple[AnnotationBlock, ...] = entity_annotations(
        column,
        resolved,
        canonical,
        length,
        label,
        updatable=column.name not in frozen_names,
    )
    logger.debug("Column %s (%s) → %s / %s", column.name, column.raw_type, resolved, canonical)

    return GeneratedProperty(
        property_name=camelize(column.name),
        column_name=column.name,
        label=label,
        canonical_type=canonical,
        column_type=resolved,
        length=length,
        annotations=annotations,
        is_primary_key=column.is_primary_key,
        is_auto_increment=column.is_auto_increment,
        is_nullable=column.is_nullable,
        default_value=column.default_value,
    )


def synthesize_dto_property(
    column: ColumnMetadata,
    tables: TypeTables = DEFAULT_TABLES,
    prettify_labels: bool = True,
) -> GeneratedProperty:
    """DTO flavour: same type resolution, only ``@Label`` and ``@var``."""
    resolved: str = column_type(column.raw_type, tables.column_map)
    canonical: str = classify(resolved, tables.type_map)
    label: str = build_label(column.name, prettify_labels)
    return GeneratedProperty(
        property_name=camelize(column.name),
        column_name=column.name,
        label=label,
        canonical_type=canonical,
        column_type=resolved,
        length=derive_length(resolved),
        annotations=(label_block(label), var_block(canonical)),
        is_primary_key=column.is_primary_key,
        is_auto_increment=column.is_auto_increment,
        is_nullable=column.is_nullable,
        default_value=column.default_value,
    )


__all__: List[str] = [
    "TAG_ID",
    "TAG_GENERATED_VALUE",
    "TAG_NOT_NULL",
    "TAG_COLUMN",
    "TAG_DEFAULT_COLUMN",
    "TAG_LABEL",
    "TAG_VAR",
    "STRATEGY_IDENTITY",
    "STRATEGY_UUID",
    "build_label",
    "strip_auto_increment",
    "label_block",
    "var_block",
    "column_block",
    "entity_annotations",
    "synthesize",
    "synthesize_dto_property",
]

logger.debug("schemagen.properties loaded — %d public symbols.", len(__all__))
