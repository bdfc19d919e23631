# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for filesystem utilities: atomic writes and safe reads.

The target file either has the full new content or doesn't exist at all.
There should never be a partially written file or a leftover temp file.
"""

from pathlib import Path

import pytest

from perfgate.utils import filesystem
from perfgate.utils.filesystem import atomic_write, safe_read


class TestAtomicWrite:
    def test_writes_content_successfully(self, tmp_path: Path) -> None:
        target = tmp_path / "verdict.json"
        atomic_write(target, '{"passed": true}')
        assert target.read_text(encoding="utf-8") == '{"passed": true}'

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "deep" / "summary.md"
        atomic_write(target, "nested content")
        assert target.read_text(encoding="utf-8") == "nested content"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "summary.md"
        atomic_write(target, "first version")
        atomic_write(target, "second version")
        assert target.read_text(encoding="utf-8") == "second version"

    def test_no_leftover_temp_files_on_success(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "clean.txt", "clean write")
        assert list(tmp_path.glob(".perfgate_tmp_*")) == []

    def test_failed_rename_keeps_old_content(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "verdict.json"
        atomic_write(target, "old")

        def _fail(*_args: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(filesystem.os, "replace", _fail)
        with pytest.raises(OSError, match="disk full"):
            atomic_write(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert list(tmp_path.glob(".perfgate_tmp_*")) == []


class TestSafeRead:
    def test_reads_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "summary.md"
        target.write_text("## ✓ Performance goals met", encoding="utf-8")
        assert safe_read(target) == "## ✓ Performance goals met"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            safe_read(tmp_path / "missing.md")

    def test_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(IsADirectoryError):
            safe_read(tmp_path)
