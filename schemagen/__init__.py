# File: schemagen/__init__.py
"""
schemagen — Schema Type Mapping & MagicObject Class Generator
==============================================================

Turns database column metadata into MagicObject-style PHP source: entity
classes, DTO classes and validator classes. Includes the cross-dialect
column type tables (MySQL, PostgreSQL, SQLite, SQL Server) the classes are
built from.

Architecture overview::

    ┌──────────────┐     ┌─────────────────┐     ┌────────────────┐
    │  CLI / Entry │────▶│ SchemaGenerator │────▶│ ClassAssembler │
    │   (cli.py)   │     │ (generator.py)  │     │ (templates.py) │
    └──────────────┘     └────────┬────────┘     └────────────────┘
                                  │
          ┌──────────┬────────────┼────────────┬───────────┐
          ▼          ▼            ▼            ▼           ▼
    ┌──────────┐ ┌────────┐ ┌───────────┐ ┌─────────┐ ┌───────────┐
    │ metadata │ │ rules  │ │properties │ │  type_  │ │ exporters │
    │  (.py)   │ │ (.py)  │ │  (.py)    │ │ tables  │ │   (.py)   │
    └──────────┘ └────────┘ └───────────┘ └─────────┘ └───────────┘

Usage::

    # As a library
    from schemagen import SchemaGenerator, GenerationConfig
    gen = SchemaGenerator(GenerationConfig(entity_namespace="Shop\\\\Entity"))
    entity = gen.generate_entity("user", gen.read_columns(rows))

    # From the command line
    python -m schemagen --request request.yaml --output ./out --verbose

Public API:
    - SchemaGenerator    — Master orchestrator
    - GenerationConfig   — Generation settings model
    - GenerationRequest  — Tables and validator definitions to generate
    - ClassAssembler     — PHP class text assembly
    - SourceExporter     — File-system writer
    - translate_type     — Cross-dialect column type translation
    - validate_request   — Request validation entry point
"""

from __future__ import annotations

__version__: str = "1.0.0"
__author__: str = "schemagen contributors"
__license__: str = "MIT"

from schemagen.models import (
    AnnotationBlock,
    ApplyKey,
    BareLiteral,
    CanonicalType,
    ClassKind,
    ColumnMetadata,
    DatabaseType,
    DialectTarget,
    FieldValidation,
    GeneratedClassSpec,
    GeneratedFile,
    GeneratedProperty,
    GenerationConfig,
    GenerationRequest,
    MalformedMetadataError,
    TableRequest,
    ValidationRule,
    ValidatorRequest,
)
from schemagen.type_tables import (
    DEFAULT_TABLES,
    TypeMapEntry,
    TypeTables,
    classify,
    column_type,
    convert,
    translate_type,
)
from schemagen.length import derive_length
from schemagen.metadata import normalize_rows
from schemagen.properties import build_label, synthesize, synthesize_dto_property
from schemagen.rules import compile_validators, rule_signature
from schemagen.validators import ValidationResult, validate_request
from schemagen.utils import Timer, camelize, upper_camelize
from schemagen.templates import ClassAssembler
from schemagen.exporters import ExportManifest, ExportResult, SourceExporter
from schemagen.generator import GenerationReport, SchemaGenerator

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Core orchestrator
    "SchemaGenerator",
    "GenerationReport",
    # Models
    "AnnotationBlock",
    "ApplyKey",
    "BareLiteral",
    "CanonicalType",
    "ClassKind",
    "ColumnMetadata",
    "DatabaseType",
    "DialectTarget",
    "FieldValidation",
    "GeneratedClassSpec",
    "GeneratedFile",
    "GeneratedProperty",
    "GenerationConfig",
    "GenerationRequest",
    "MalformedMetadataError",
    "TableRequest",
    "ValidationRule",
    "ValidatorRequest",
    # Type mapping
    "DEFAULT_TABLES",
    "TypeMapEntry",
    "TypeTables",
    "classify",
    "column_type",
    "convert",
    "translate_type",
    "derive_length",
    # Synthesis
    "normalize_rows",
    "build_label",
    "synthesize",
    "synthesize_dto_property",
    "compile_validators",
    "rule_signature",
    # Validation
    "validate_request",
    "ValidationResult",
    # Templates
    "ClassAssembler",
    # Exporters
    "SourceExporter",
    "ExportManifest",
    "ExportResult",
    # Utilities
    "Timer",
    "camelize",
    "upper_camelize",
]
