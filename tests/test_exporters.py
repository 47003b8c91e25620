"""
tests/test_exporters.py
Tests for schemagen.exporters.SourceExporter and the file helpers it uses.
"""

from __future__ import annotations

import hashlib
import json
import pathlib
from typing import List

import pytest

from schemagen.exporters import MANIFEST_FILE_NAME, ExportManifest, SourceExporter
from schemagen.models import ClassKind, GeneratedFile
from schemagen.utils import count_lines, namespace_to_path, sha256_hex, write_file


@pytest.fixture()
def files() -> List[GeneratedFile]:
    return [
        GeneratedFile(path="App/Entity/User.php", content="<?php\n\nclass User\n{\n}\n", kind=ClassKind.ENTITY),
        GeneratedFile(path="App/Dto/UserDto.php", content="<?php\r\n\r\nclass UserDto\r\n{\r\n}\r\n", kind=ClassKind.DTO),
    ]


class TestSourceExporter:

    def test_writes_files_and_manifest(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        result = SourceExporter(output_dir).export(files)
        assert result.success
        assert result.errors == ()
        for generated in files:
            assert (output_dir / generated.path).read_bytes() == generated.content.encode("utf-8")

        manifest = json.loads((output_dir / MANIFEST_FILE_NAME).read_text(encoding="utf-8"))
        assert manifest["total_files"] == 2
        first = manifest["files"][0]
        assert first["path"] == "App/Entity/User.php"
        assert first["kind"] == "entity"
        assert first["bytes"] == len(files[0].content.encode("utf-8"))
        assert first["lines"] == 5
        assert first["sha256"] == hashlib.sha256(files[0].content.encode("utf-8")).hexdigest()

    def test_crlf_content_is_written_verbatim(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        SourceExporter(output_dir).export(files)
        raw = (output_dir / "App/Dto/UserDto.php").read_bytes()
        assert raw.count(b"\r\n") == 5
        assert b"\r\r\n" not in raw

    def test_manifest_totals(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        manifest: ExportManifest = SourceExporter(output_dir).export(files).manifest
        assert manifest.total_files == 2
        assert manifest.total_bytes == sum(f.size_bytes for f in files)
        assert manifest.total_lines == 10
        assert manifest.output_directory == str(output_dir.resolve())

    def test_manifest_can_be_disabled(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        SourceExporter(output_dir, generate_manifest=False).export(files)
        assert not (output_dir / MANIFEST_FILE_NAME).exists()

    def test_non_atomic_writes(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        assert SourceExporter(output_dir, atomic_writes=False).export(files).success
        assert (output_dir / "App/Entity/User.php").is_file()

    def test_clean_before_export(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        (output_dir / "Old").mkdir(parents=True)
        (output_dir / "Old" / "Stale.php").write_text("stale", encoding="utf-8")
        (output_dir / ".gitkeep").write_text("", encoding="utf-8")

        SourceExporter(output_dir, clean_before_export=True).export(files)
        assert not (output_dir / "Old").exists()
        assert (output_dir / ".gitkeep").exists()
        assert (output_dir / "App/Entity/User.php").is_file()

    def test_single_write_failure_is_recorded(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        # a directory where the DTO file should go
        (output_dir / "App/Dto/UserDto.php").mkdir(parents=True)
        result = SourceExporter(output_dir).export(files)
        assert not result.success
        assert len(result.errors) == 1
        assert "App/Dto/UserDto.php" in result.errors[0]
        assert result.manifest.total_files == 1
        assert (output_dir / "App/Entity/User.php").is_file()

    def test_reused_exporter_starts_fresh(self, files: List[GeneratedFile], output_dir: pathlib.Path) -> None:
        blocker = output_dir / "App/Dto/UserDto.php"
        blocker.mkdir(parents=True)
        exporter = SourceExporter(output_dir)
        assert not exporter.export(files).success

        blocker.rmdir()
        result = exporter.export(files)
        assert result.success
        assert result.errors == ()
        assert result.manifest.total_files == 2
        manifest = json.loads((output_dir / MANIFEST_FILE_NAME).read_text(encoding="utf-8"))
        assert [f["path"] for f in manifest["files"]] == [f.path for f in files]

    def test_unusable_output_directory(self, files: List[GeneratedFile], tmp_path: pathlib.Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        result = SourceExporter(blocker).export(files)
        assert not result.success
        assert result.manifest.total_files == 0


class TestFileHelpers:

    def test_write_file_returns_byte_count(self, tmp_path: pathlib.Path) -> None:
        target = tmp_path / "a" / "b.txt"
        assert write_file(target, "héllo\n") == len("héllo\n".encode("utf-8"))
        assert target.read_text(encoding="utf-8") == "héllo\n"
        assert not [p for p in target.parent.iterdir() if p.name.endswith(".tmp")]

    def test_count_lines(self) -> None:
        assert count_lines("") == 0
        assert count_lines("a") == 1
        assert count_lines("a\nb\n") == 2
        assert count_lines("a\nb") == 2

    def test_sha256_hex(self) -> None:
        assert sha256_hex("x") == hashlib.sha256(b"x").hexdigest()

    def test_namespace_to_path(self) -> None:
        assert namespace_to_path("App\\Entity").as_posix() == "App/Entity"
        assert namespace_to_path("").as_posix() == "."
