# File: schemagen/generator.py
"""
schemagen - Generation Pipeline (Orchestrator)
===============================================

Connects every phase:

    Request file → Validation → Synthesis → Class assembly → File export

``SchemaGenerator`` offers both the programmatic API (one entity, DTO or
validator at a time) and the batch pipeline behind the CLI.

Workflow::

    1. Load the request from JSON/YAML (or accept an in-memory request).
    2. Parse into ``GenerationRequest`` (models.py).
    3. Run the request validators (validators.py).
    4. Per table: normalise rows, synthesize properties, assemble entity
       and DTO; per validator definition: compile and assemble.
    5. Hand the files to ``SourceExporter`` (exporters.py) when an output
       directory is given.
    6. Return a ``GenerationReport`` with metrics and status.

Error handling strategy:
    - Validation errors are collected and surfaced, not swallowed.
    - A table or validator that fails to generate is recorded and skipped;
      the rest are still generated.
    - Export errors come back through the export result.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from schemagen.exporters import ExportManifest, ExportResult, SourceExporter
from schemagen.metadata import normalize_rows
from schemagen.models import (
    ApplyKey,
    ClassKind,
    ColumnMetadata,
    FieldValidation,
    GeneratedClassSpec,
    GeneratedFile,
    GenerationConfig,
    GenerationRequest,
    TableRequest,
    ValidatorRequest,
)
from schemagen.properties import synthesize, synthesize_dto_property
from schemagen.rules import compile_validators
from schemagen.templates import ClassAssembler
from schemagen.type_tables import DEFAULT_TABLES, TypeTables
from schemagen.utils import Timer, namespace_to_path, upper_camelize
from schemagen.validators import ValidationResult, validate_request

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.generator")

RawRows = Iterable[Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Report produced by ``SchemaGenerator.generate()``.

    Carries the generated files themselves, timing per step and every
    error or warning encountered.
    """

    success: bool = False
    output_directory: str = ""

    # Metrics
    total_files: int = 0
    total_bytes: int = 0
    total_lines: int = 0
    total_tables_processed: int = 0
    total_validators_processed: int = 0
    total_elapsed_seconds: float = 0.0

    # Sub-reports
    step_metrics: List[GenerationStepMetric] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    input_errors: List[str] = field(default_factory=list)
    generation_errors: List[str] = field(default_factory=list)
    export_errors: List[str] = field(default_factory=list)
    skipped_tables: List[str] = field(default_factory=list)

    files: List[GeneratedFile] = field(default_factory=list)
    manifest: Optional[ExportManifest] = None

    def file(self, path: str) -> Optional[GeneratedFile]:
        """Generated file with the given relative path, if any."""
        for generated in self.files:
            if generated.path == path:
                return generated
        return None

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "✅ SUCCESS" if self.success else "❌ FAILED"
        lines.append(f"{'='*60}")
        lines.append("  schemagen — Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:               {status}")
        if self.output_directory:
            lines.append(f"  Output:               {self.output_directory}")
        lines.append(f"  Tables processed:     {self.total_tables_processed}")
        lines.append(f"  Validators processed: {self.total_validators_processed}")
        lines.append(f"  Files generated:      {self.total_files}")
        lines.append(f"  Total lines:          {self.total_lines:,}")
        lines.append(f"  Total bytes:          {self.total_bytes:,}")
        lines.append(f"  Total time:           {self.total_elapsed_seconds:.3f}s")
        lines.append(f"{'─'*60}")

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<28s} "
                    f"{step.elapsed_seconds:>7.3f}s  "
                    f"{step.detail}"
                )

        sections = (
            ("Input Errors", self.input_errors, "✗"),
            ("Validation Errors", self.validation_errors, "✗"),
            ("Validation Warnings", self.validation_warnings, "⚠"),
            ("Generation Errors", self.generation_errors, "✗"),
            ("Export Errors", self.export_errors, "✗"),
            ("Skipped Tables", self.skipped_tables, "⊘"),
        )
        for title, items, icon in sections:
            if items:
                lines.append(f"{'─'*60}")
                lines.append(f"  {title} ({len(items)}):")
                for item in items:
                    lines.append(f"    {icon} {item}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Request loader helpers
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at top level, got {type(data).__name__}.")
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. Raises ValueError on parse errors."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping at top level, got {type(data).__name__}.")
    return data


def load_request_file(path: Path) -> Dict[str, Any]:
    """
    Load a generation request file (JSON or YAML), dispatching on the
    extension. An unknown extension is tried as JSON, then YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Request path is not a file: {path}")

    suffix: str = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    if suffix == ".json":
        return _load_json_file(path)

    logger.info("Unknown extension '%s' — trying JSON then YAML.", suffix)
    try:
        return _load_json_file(path)
    except ValueError:
        return _load_yaml_file(path)


def parse_raw_request(
    raw: Mapping[str, Any],
    config_overrides: Optional[Mapping[str, Any]] = None,
) -> GenerationRequest:
    """
    Parse a raw mapping (from JSON/YAML) into a validated request.

    ``config_overrides`` are merged over the ``config`` section first.

    Raises:
        ValueError: If the data does not describe a valid request.
    """
    data: Dict[str, Any] = dict(raw)
    if config_overrides:
        config_data: Dict[str, Any] = dict(data.get("config") or {})
        config_data.update({k: v for k, v in config_overrides.items() if v is not None})
        data["config"] = config_data
    elif "config" not in data:
        logger.info("No config section found in input — using defaults.")

    try:
        return GenerationRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise ValueError(f"Request validation failed: {exc}") from exc


# ---------------------------------------------------------------------------
# SchemaGenerator — orchestrator
# ---------------------------------------------------------------------------


class SchemaGenerator:
    """
    Entity, DTO and validator generation over one configuration.

    Usage::

        generator = SchemaGenerator(GenerationConfig(entity_namespace="App\\\\Entity"))
        columns = generator.read_columns(rows)
        entity = generator.generate_entity("user", columns)
        print(entity.content)

        report = generator.generate_from_file(Path("request.yaml"), Path("./out"))
        print(report.summary())

    The generator is reusable; it holds no per-run state.
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        *,
        tables: TypeTables = DEFAULT_TABLES,
        strict_validation: bool = True,
        fail_on_warnings: bool = False,
        clean_output: bool = False,
    ) -> None:
        self._config: GenerationConfig = config or GenerationConfig()
        self._tables: TypeTables = tables
        self._strict_validation: bool = strict_validation
        self._fail_on_warnings: bool = fail_on_warnings
        self._clean_output: bool = clean_output
        self._assembler: ClassAssembler = ClassAssembler(self._config.line_ending)

        logger.debug(
            "SchemaGenerator initialised: db=%s, strict=%s, fail_on_warnings=%s, clean=%s.",
            self._config.database_type,
            strict_validation,
            fail_on_warnings,
            clean_output,
        )

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def tables(self) -> TypeTables:
        return self._tables

    def with_config(self, config: GenerationConfig) -> "SchemaGenerator":
        """A generator with the same options over another configuration."""
        return SchemaGenerator(
            config,
            tables=self._tables,
            strict_validation=self._strict_validation,
            fail_on_warnings=self._fail_on_warnings,
            clean_output=self._clean_output,
        )

    # -----------------------------------------------------------------
    # Building blocks
    # -----------------------------------------------------------------

    def read_columns(self, rows: RawRows, database_type: Optional[str] = None) -> List[ColumnMetadata]:
        """Normalise adapter rows; the config's database type by default."""
        return normalize_rows(database_type or self._config.database_type, rows)

    def _file(self, spec: GeneratedClassSpec) -> GeneratedFile:
        path: Path = namespace_to_path(spec.namespace) / f"{spec.class_name}.php"
        return GeneratedFile(path=path.as_posix(), content=self._assembler.assemble(spec), kind=spec.kind)

    def build_entity_spec(
        self,
        table_name: str,
        columns: Sequence[ColumnMetadata],
        entity_name: Optional[str] = None,
    ) -> GeneratedClassSpec:
        """Synthesize every column of *table_name* into an entity spec."""
        non_updatable: frozenset = frozenset(self._config.non_updatable)
        properties = tuple(
            synthesize(column, self._tables, non_updatable, self._config.prettify_labels)
            for column in columns
        )
        return GeneratedClassSpec(
            namespace=self._config.entity_namespace,
            class_name=entity_name or upper_camelize(table_name),
            table_or_module_name=table_name,
            properties=properties,
            naming_strategy=self._config.naming_strategy,
            prettify=self._config.prettify,
            kind=ClassKind.ENTITY,
        )

    def build_dto_spec(
        self,
        table_name: str,
        columns: Sequence[ColumnMetadata],
        dto_name: Optional[str] = None,
        entity_name: Optional[str] = None,
    ) -> GeneratedClassSpec:
        """DTO spec copying from the entity of *table_name*."""
        entity: str = entity_name or upper_camelize(table_name)
        properties = tuple(
            synthesize_dto_property(column, self._tables, self._config.prettify_labels)
            for column in columns
        )
        return GeneratedClassSpec(
            namespace=self._config.dto_namespace,
            class_name=dto_name or f"{entity}Dto",
            table_or_module_name=table_name,
            properties=properties,
            naming_strategy=self._config.naming_strategy,
            prettify=self._config.prettify,
            kind=ClassKind.DTO,
            entity_namespace=self._config.entity_namespace,
            entity_name=entity,
        )

    def generate_entity(
        self,
        table_name: str,
        columns: Sequence[ColumnMetadata],
        entity_name: Optional[str] = None,
    ) -> GeneratedFile:
        return self._file(self.build_entity_spec(table_name, columns, entity_name))

    def generate_dto(
        self,
        table_name: str,
        columns: Sequence[ColumnMetadata],
        dto_name: Optional[str] = None,
        entity_name: Optional[str] = None,
    ) -> GeneratedFile:
        return self._file(self.build_dto_spec(table_name, columns, dto_name, entity_name))

    def generate_validator(
        self,
        definitions: Iterable[Union[FieldValidation, Mapping[str, Any]]],
        apply_key: Union[str, ApplyKey],
        class_name: str,
        module_code: str,
        namespace: Optional[str] = None,
    ) -> GeneratedFile:
        """Compile validation definitions into one validator class file."""
        spec: GeneratedClassSpec = compile_validators(
            definitions,
            apply_key,
            tables=self._tables,
            namespace=self._config.validator_namespace if namespace is None else namespace,
            class_name=class_name,
            module_code=module_code,
        )
        return self._file(spec)

    def generate_table(self, table: TableRequest) -> List[GeneratedFile]:
        """Entity and (when enabled) DTO for one requested table."""
        columns: List[ColumnMetadata] = self.read_columns(table.columns, table.database_type)
        files: List[GeneratedFile] = []
        if self._config.generate_entity:
            files.append(self.generate_entity(table.name, columns, table.entity_name))
        if self._config.generate_dto:
            files.append(self.generate_dto(table.name, columns, table.dto_name, table.entity_name))
        logger.info("Table '%s': %d column(s), %d file(s).", table.name, len(columns), len(files))
        return files

    def generate_validator_request(self, validator: ValidatorRequest) -> GeneratedFile:
        return self.generate_validator(
            validator.fields,
            validator.apply,
            validator.class_name,
            validator.module,
            validator.namespace,
        )

    # -----------------------------------------------------------------
    # Public: pipeline
    # -----------------------------------------------------------------

    def generate_from_file(
        self,
        request_path: Path,
        output_dir: Optional[Path] = None,
        *,
        config_overrides: Optional[Mapping[str, Any]] = None,
    ) -> GenerationReport:
        """Full pipeline: load file → validate → generate → export."""
        report: GenerationReport = GenerationReport()
        if output_dir is not None:
            report.output_directory = str(Path(output_dir).resolve())

        with Timer("load_request") as t_load:
            try:
                raw_data: Dict[str, Any] = load_request_file(Path(request_path))
                request: GenerationRequest = parse_raw_request(raw_data, config_overrides)
            except (FileNotFoundError, ValueError) as exc:
                report.input_errors.append(str(exc))
                failed: Optional[Exception] = exc
            else:
                failed = None

        report.step_metrics.append(GenerationStepMetric(
            step_name="Load Request",
            success=failed is None,
            elapsed_seconds=t_load.elapsed,
            detail=str(failed) if failed is not None else f"from {Path(request_path).name}",
        ))
        if failed is not None:
            logger.error("Could not load request %s: %s", request_path, failed)
            return self._finalise_report(report, t_load.elapsed)

        logger.info(
            "Loaded request %s: %d table(s), %d validator(s).",
            request_path,
            len(request.tables),
            len(request.validators),
        )
        return self._run_pipeline(request, output_dir, report, t_load.elapsed)

    def generate(
        self,
        request: GenerationRequest,
        output_dir: Optional[Path] = None,
    ) -> GenerationReport:
        """
        Full pipeline from an in-memory request.

        Without *output_dir* nothing is written; the files are returned in
        ``report.files``.
        """
        report: GenerationReport = GenerationReport()
        if output_dir is not None:
            report.output_directory = str(Path(output_dir).resolve())
        return self._run_pipeline(request, output_dir, report, 0.0)

    def _run_pipeline(
        self,
        request: GenerationRequest,
        output_dir: Optional[Path],
        report: GenerationReport,
        elapsed_before: float,
    ) -> GenerationReport:
        pipeline_start: float = time.perf_counter()
        worker: SchemaGenerator = self.with_config(request.config)

        passed, invalid_tables = self._step_validate(request, report)
        if not passed and self._strict_validation:
            return self._finalise_report(report, elapsed_before + time.perf_counter() - pipeline_start)

        worker._step_generate(request, report, skip_tables=invalid_tables)

        if output_dir is not None and report.files:
            self._step_export(report.files, Path(output_dir), report)

        return self._finalise_report(report, elapsed_before + time.perf_counter() - pipeline_start)

    # -----------------------------------------------------------------
    # Pipeline steps
    # -----------------------------------------------------------------

    def _step_validate(
        self, request: GenerationRequest, report: GenerationReport
    ) -> Tuple[bool, FrozenSet[str]]:
        """
        Whether validation passed (warnings allowed unless fail_on_warnings),
        and the tables that validation errors refer to.
        """
        with Timer("validation") as t:
            result: ValidationResult = validate_request(request)

        report.validation_errors.extend(str(e) for e in result.errors)
        report.validation_warnings.extend(str(w) for w in result.warnings)

        if result.errors:
            detail: str = f"{len(result.errors)} error(s)"
        elif result.warnings:
            detail = f"{len(result.warnings)} warning(s)"
        else:
            detail = "all checks passed"

        passed: bool = result.is_valid and not (self._fail_on_warnings and result.warnings)
        if result.is_valid and not passed:
            report.validation_errors.append(
                f"{len(result.warnings)} warning(s) treated as errors (fail_on_warnings)."
            )
        report.step_metrics.append(GenerationStepMetric(
            step_name="Validate Request",
            success=passed,
            elapsed_seconds=t.elapsed,
            detail=detail,
        ))

        for err in result.errors:
            logger.error("  ✗ %s", err)
        for warn in result.warnings:
            logger.warning("  ⚠ %s", warn)
        return passed, result.tables_with_errors()

    def _step_generate(
        self,
        request: GenerationRequest,
        report: GenerationReport,
        skip_tables: FrozenSet[str] = frozenset(),
    ) -> None:
        """Generate every table and validator, isolating failures."""
        with Timer("code_generation") as t:
            for table in request.tables:
                if table.name in skip_tables:
                    report.generation_errors.append(f"Table '{table.name}': skipped after validation errors.")
                    report.skipped_tables.append(table.name)
                    logger.warning("Skipping table '%s': it failed validation.", table.name)
                    continue
                try:
                    report.files.extend(self.generate_table(table))
                except ValueError as exc:
                    report.generation_errors.append(f"Table '{table.name}': {exc}")
                    report.skipped_tables.append(table.name)
                    logger.error("Generation failed for table '%s': %s", table.name, exc)
                else:
                    report.total_tables_processed += 1

            for validator in request.validators:
                try:
                    report.files.append(self.generate_validator_request(validator))
                except ValueError as exc:
                    report.generation_errors.append(f"Validator '{validator.class_name}': {exc}")
                    logger.error("Generation failed for validator '%s': %s", validator.class_name, exc)
                else:
                    report.total_validators_processed += 1

        report.total_files = len(report.files)
        report.total_bytes = sum(f.size_bytes for f in report.files)
        report.total_lines = sum(f.line_count for f in report.files)

        detail: str = (
            f"{report.total_files} files, ~{report.total_lines:,} lines, "
            f"{report.total_tables_processed} tables, "
            f"{report.total_validators_processed} validators"
        )
        report.step_metrics.append(GenerationStepMetric(
            step_name="Class Generation",
            success=not report.generation_errors,
            elapsed_seconds=t.elapsed,
            detail=detail,
        ))
        logger.info("Class generation complete: %s in %.3fs.", detail, t.elapsed)

    def _step_export(self, files: List[GeneratedFile], output_dir: Path, report: GenerationReport) -> None:
        """Write all generated files to the filesystem."""
        with Timer("export") as t:
            exporter: SourceExporter = SourceExporter(
                output_dir,
                clean_before_export=self._clean_output,
                atomic_writes=True,
                generate_manifest=True,
            )
            export_result: ExportResult = exporter.export(files)

        report.export_errors.extend(export_result.errors)
        report.manifest = export_result.manifest
        report.step_metrics.append(GenerationStepMetric(
            step_name="Export to Filesystem",
            success=export_result.success,
            elapsed_seconds=t.elapsed,
            detail=(
                f"{export_result.manifest.total_files} files, "
                f"{export_result.manifest.total_bytes:,} bytes"
            ),
        ))

    @staticmethod
    def _finalise_report(report: GenerationReport, total_elapsed: float) -> GenerationReport:
        """Set final status and timing on the report."""
        report.total_elapsed_seconds = total_elapsed
        report.success = not (
            report.input_errors
            or report.validation_errors
            or report.generation_errors
            or report.export_errors
        )
        return report


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "SchemaGenerator",
    "GenerationReport",
    "GenerationStepMetric",
    "load_request_file",
    "parse_raw_request",
]

logger.debug("schemagen.generator loaded — %d public symbols.", len(__all__))
