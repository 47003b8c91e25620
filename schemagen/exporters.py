# File: schemagen/exporters.py
"""
schemagen - Source Exporter (File-System Manager)
==================================================

Responsible for:
    1. Writing generated class files under ``<output>/<namespace path>/``.
    2. Atomic writes (write-to-temp then rename) through ``utils.write_file``.
    3. A ``manifest.json`` with byte count, line count and SHA-256 per file.

A failed write is recorded in the result, never raised; files written
before the failure stay on disk. Re-running on the same directory simply
replaces the files.
"""

from __future__ import annotations

import json
import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from schemagen.models import GeneratedFile
from schemagen.utils import Timer, count_lines, ensure_directory, sha256_hex, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.exporters")

MANIFEST_FILE_NAME: str = "manifest.json"


# ---------------------------------------------------------------------------
# Export records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One class file as written to disk."""

    relative_path: str
    absolute_path: str
    kind: str
    size_bytes: int
    line_count: int
    sha256: str


@dataclass(frozen=False, slots=True)
class ExportManifest:
    """Manifest of all exported files, serialisable to JSON."""

    generator_version: str = ""
    export_timestamp: str = ""
    output_directory: str = ""
    total_files: int = 0
    total_bytes: int = 0
    total_lines: int = 0
    files: List[FileRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generator_version": self.generator_version,
            "export_timestamp": self.export_timestamp,
            "output_directory": self.output_directory,
            "total_files": self.total_files,
            "total_bytes": self.total_bytes,
            "total_lines": self.total_lines,
            "files": [
                {
                    "path": f.relative_path,
                    "kind": f.kind,
                    "bytes": f.size_bytes,
                    "lines": f.line_count,
                    "sha256": f.sha256,
                }
                for f in self.files
            ],
        }

    def to_json(self, indent_size: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent_size, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Final result returned by ``SourceExporter.export()``."""

    success: bool
    manifest: ExportManifest
    errors: Tuple[str, ...]
    warnings: Tuple[str, ...]
    elapsed_seconds: float


# ---------------------------------------------------------------------------
# SourceExporter class
# ---------------------------------------------------------------------------


class SourceExporter:
    """
    Writes generated class files to the filesystem.

    Usage::

        exporter = SourceExporter(output_dir=Path("./out"))
        result = exporter.export(files)
        print(result.manifest.to_json())

    Not thread-safe. Use one exporter per output directory.
    """

    def __init__(
        self,
        output_dir: Path,
        *,
        clean_before_export: bool = False,
        atomic_writes: bool = True,
        generate_manifest: bool = True,
    ) -> None:
        self._output_dir: Path = Path(output_dir).resolve()
        self._clean_before_export: bool = clean_before_export
        self._atomic_writes: bool = atomic_writes
        self._generate_manifest: bool = generate_manifest

        self._errors: List[str] = []
        self._warnings: List[str] = []
        self._file_records: List[FileRecord] = []

        logger.debug(
            "SourceExporter initialised: output_dir=%s, atomic=%s.",
            self._output_dir,
            self._atomic_writes,
        )

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def export(self, files: Sequence[GeneratedFile]) -> ExportResult:
        """
        Write every file in *files* below the output directory.

        Returns:
            ExportResult with success flag, manifest and error details.
        """
        self._errors = []
        self._warnings = []
        self._file_records = []

        with Timer("export") as timer:
            try:
                self._pre_export_cleanup()
                ensure_directory(self._output_dir)
            except OSError as exc:
                self._errors.append(f"Cannot prepare output directory {self._output_dir}: {exc}")
                logger.error("Cannot prepare output directory %s: %s", self._output_dir, exc)
            else:
                for generated in files:
                    self._write_generated_file(generated)
                if self._generate_manifest:
                    self._write_manifest_file()

        manifest: ExportManifest = self._build_manifest()
        success: bool = len(self._errors) == 0

        if success:
            logger.info(
                "Export completed successfully: %d files, %d bytes, %.3fs.",
                manifest.total_files,
                manifest.total_bytes,
                timer.elapsed,
            )
        else:
            logger.error("Export completed with %d error(s) in %.3fs.", len(self._errors), timer.elapsed)

        return ExportResult(
            success=success,
            manifest=manifest,
            errors=tuple(self._errors),
            warnings=tuple(self._warnings),
            elapsed_seconds=timer.elapsed,
        )

    # -----------------------------------------------------------------
    # Output directory housekeeping
    # -----------------------------------------------------------------

    def _pre_export_cleanup(self) -> None:
        """Empty the output directory, keeping VCS markers."""
        if not self._clean_before_export or not self._output_dir.is_dir():
            return

        logger.info("Cleaning output directory: %s", self._output_dir)
        for item in self._output_dir.iterdir():
            if item.name in {".git", ".gitignore", ".gitkeep"}:
                continue
            try:
                if item.is_dir():
                    shutil.rmtree(item)
                else:
                    item.unlink()
            except OSError as exc:
                warning_msg: str = f"Could not remove {item}: {exc}"
                self._warnings.append(warning_msg)
                logger.warning(warning_msg)

    # -----------------------------------------------------------------
    # Writing
    # -----------------------------------------------------------------

    def _write_generated_file(self, generated: GeneratedFile) -> None:
        full_path: Path = self._output_dir / generated.path
        try:
            record: FileRecord = self._write_single_file(
                full_path, generated.content, generated.path, str(generated.kind)
            )
        except OSError as exc:
            error_msg: str = f"Failed to write {generated.path}: {type(exc).__name__}: {exc}"
            self._errors.append(error_msg)
            logger.error(error_msg)
            return
        self._file_records.append(record)

    def _write_single_file(
        self,
        full_path: Path,
        content: str,
        rel_path: str,
        kind: str,
    ) -> FileRecord:
        size_bytes: int = write_file(full_path, content, atomic=self._atomic_writes)
        line_count: int = count_lines(content)
        logger.debug("Wrote file: %s (%d bytes, %d lines).", rel_path, size_bytes, line_count)
        return FileRecord(
            relative_path=rel_path,
            absolute_path=str(full_path),
            kind=kind,
            size_bytes=size_bytes,
            line_count=line_count,
            sha256=sha256_hex(content),
        )

    # -----------------------------------------------------------------
    # manifest.json
    # -----------------------------------------------------------------

    def _build_manifest(self) -> ExportManifest:
        """Manifest over the files written so far."""
        import schemagen

        return ExportManifest(
            generator_version=schemagen.__version__,
            export_timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
            output_directory=str(self._output_dir),
            total_files=len(self._file_records),
            total_bytes=sum(r.size_bytes for r in self._file_records),
            total_lines=sum(r.line_count for r in self._file_records),
            files=list(self._file_records),
        )

    def _write_manifest_file(self) -> None:
        """Write manifest.json; a failure here is a warning, not an error."""
        manifest_path: Path = self._output_dir / MANIFEST_FILE_NAME
        try:
            write_file(manifest_path, self._build_manifest().to_json() + "\n", atomic=self._atomic_writes)
            logger.debug("Wrote manifest to %s.", manifest_path)
        except OSError as exc:
            self._warnings.append(f"Could not write manifest: {exc}")
            logger.warning("Failed to write manifest: %s", exc)


__all__: List[str] = [
    "MANIFEST_FILE_NAME",
    "SourceExporter",
    "ExportManifest",
    "ExportResult",
    "FileRecord",
]

logger.debug("schemagen.exporters loaded — %d public symbols.", len(__all__))
