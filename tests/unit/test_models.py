"""
Unit tests for data models.

Tests cover:
- FileMetadata construction from stat results
- FileRecord path helpers and JSON rendering
- ScanSummary aggregation
"""

import dataclasses
import json
import os
import stat
from datetime import datetime
from pathlib import Path

import pytest

from dirreader.models import FileMetadata, FileRecord, ScanSummary


def make_metadata(name: str = "a.txt", size: int = 10) -> FileMetadata:
    return FileMetadata(
        name=name,
        size=size,
        mode=stat.S_IFREG | 0o644,
        mod_time=datetime(2024, 1, 2, 3, 4, 5),
        is_dir=False,
    )


class TestFileMetadata:
    """Tests for FileMetadata dataclass."""

    def test_from_stat_regular_file(self, temp_dir: Path) -> None:
        path = temp_dir / "file.bin"
        path.write_bytes(b"x" * 42)
        st = os.lstat(path)

        metadata = FileMetadata.from_stat("file.bin", st)

        assert metadata.name == "file.bin"
        assert metadata.size == 42
        assert metadata.mode == st.st_mode
        assert metadata.mod_time == datetime.fromtimestamp(st.st_mtime)
        assert metadata.is_dir is False

    def test_from_stat_directory(self, temp_dir: Path) -> None:
        metadata = FileMetadata.from_stat("dir", os.lstat(temp_dir))
        assert metadata.is_dir is True

    def test_mode_string(self) -> None:
        assert make_metadata().mode_string == "-rw-r--r--"

    def test_frozen(self) -> None:
        metadata = make_metadata()
        with pytest.raises(dataclasses.FrozenInstanceError):
            metadata.size = 99


class TestFileRecord:
    """Tests for FileRecord dataclass."""

    def test_defaults_to_empty_digest(self) -> None:
        record = FileRecord(metadata=make_metadata(), path_abs=Path("/r/a.txt"), path_rel="")
        assert record.digest == ""

    def test_rel_file_top_level(self) -> None:
        record = FileRecord(metadata=make_metadata("a.txt"), path_abs=Path("/r/a.txt"), path_rel="")
        assert record.rel_file == "a.txt"
        assert record.name == "a.txt"

    def test_rel_file_nested(self) -> None:
        rel = os.path.join("sub", "deeper")
        record = FileRecord(
            metadata=make_metadata("c.txt"),
            path_abs=Path("/r/sub/deeper/c.txt"),
            path_rel=rel,
        )
        assert record.rel_file == os.path.join("sub", "deeper", "c.txt")

    def test_to_dict_is_json_serializable(self) -> None:
        record = FileRecord(
            metadata=make_metadata("a.txt", size=7),
            path_abs=Path("/r/a.txt"),
            path_rel="",
            digest="abc123",
        )

        data = json.loads(json.dumps(record.to_dict()))

        assert data == {
            "name": "a.txt",
            "size": 7,
            "mode": "-rw-r--r--",
            "mod_time": "2024-01-02T03:04:05",
            "is_dir": False,
            "path_abs": str(Path("/r/a.txt")),
            "path_rel": "",
            "digest": "abc123",
        }

    def test_frozen(self) -> None:
        record = FileRecord(metadata=make_metadata(), path_abs=Path("/r/a.txt"), path_rel="")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.digest = "changed"


class TestScanSummary:
    """Tests for ScanSummary aggregation."""

    def test_defaults(self) -> None:
        summary = ScanSummary(root=Path("/r"))

        assert summary.records == []
        assert summary.errors == []
        assert summary.file_count == 0
        assert summary.total_size == 0
        assert summary.succeeded is True

    def test_totals(self) -> None:
        records = [
            FileRecord(metadata=make_metadata("a", 10), path_abs=Path("/r/a"), path_rel=""),
            FileRecord(metadata=make_metadata("b", 32), path_abs=Path("/r/b"), path_rel=""),
        ]
        summary = ScanSummary(root=Path("/r"), records=records)

        assert summary.file_count == 2
        assert summary.total_size == 42

    def test_errors_mark_failure(self) -> None:
        summary = ScanSummary(root=Path("/r"), errors=["open /r/x: Permission denied"])
        assert summary.succeeded is False

    def test_interrupted_marks_failure(self) -> None:
        summary = ScanSummary(root=Path("/r"), interrupted=True)
        assert summary.succeeded is False

    def test_independent_default_lists(self) -> None:
        first = ScanSummary(root=Path("/a"))
        second = ScanSummary(root=Path("/b"))
        first.errors.append("boom")
        assert second.errors == []
