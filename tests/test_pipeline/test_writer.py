"""Tests for clientgen.pipeline.writer."""

from __future__ import annotations

from pathlib import Path

import pytest

from clientgen.exceptions import WriteError
from clientgen.models import PlannedFile
from clientgen.pipeline.writer import DryRunWriter, FileSystemWriter, replace_file


class TestDryRunWriter:
    def test_reports_everything_without_writing(self, tmp_path: Path) -> None:
        files = [PlannedFile(path="a.ts", content="x")]
        result = DryRunWriter().write(files)
        assert result.files_written == files
        assert result.skipped_files == 0
        assert list(tmp_path.iterdir()) == []

    def test_has_no_output_root(self) -> None:
        assert DryRunWriter().output_root is None


class TestFileSystemWriter:
    def test_writes_nested_files(self, tmp_path: Path) -> None:
        writer = FileSystemWriter(tmp_path / "out")
        result = writer.write([PlannedFile(path="functions/api/a.ts", content="export {};\n")])
        assert (tmp_path / "out" / "functions" / "api" / "a.ts").read_text() == "export {};\n"
        assert len(result.files_written) == 1
        assert writer.output_root == tmp_path / "out"

    def test_second_run_skips_identical_files(self, tmp_path: Path) -> None:
        files = [
            PlannedFile(path="a.ts", content="a\n"),
            PlannedFile(path="b/b.ts", content="b\n"),
        ]
        writer = FileSystemWriter(tmp_path)
        writer.write(files)
        mtime = (tmp_path / "a.ts").stat().st_mtime_ns

        result = writer.write(files)
        assert result.files_written == []
        assert result.skipped_files == 2
        assert (tmp_path / "a.ts").stat().st_mtime_ns == mtime

    def test_changed_file_is_rewritten(self, tmp_path: Path) -> None:
        (tmp_path / "a.ts").write_text("old\n")
        result = FileSystemWriter(tmp_path).write([PlannedFile(path="a.ts", content="new\n")])
        assert [f.path for f in result.files_written] == ["a.ts"]
        assert (tmp_path / "a.ts").read_text() == "new\n"

    def test_only_the_changed_file_is_rewritten(self, tmp_path: Path) -> None:
        files = [PlannedFile(path=f"d/{n}.ts", content=f"export const v{n} = {n};\n") for n in range(4)]
        writer = FileSystemWriter(tmp_path)
        writer.write(files)
        mtimes = {f.path: (tmp_path / f.path).stat().st_mtime_ns for f in files}

        files[2] = PlannedFile(path="d/2.ts", content="export const v2 = 20;\n")
        result = writer.write(files)

        assert result.skipped_files == 3
        assert [f.path for f in result.files_written] == ["d/2.ts"]
        assert (tmp_path / "d" / "2.ts").read_text() == "export const v2 = 20;\n"
        for path in ("d/0.ts", "d/1.ts", "d/3.ts"):
            assert (tmp_path / path).stat().st_mtime_ns == mtimes[path]

    def test_no_temp_files_left_behind(self, tmp_path: Path) -> None:
        FileSystemWriter(tmp_path).write([PlannedFile(path="a.ts", content="a\n")])
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.ts"]


class TestReplaceFile:
    def test_replaces_existing_content(self, tmp_path: Path) -> None:
        target = tmp_path / "config.json"
        target.write_text("{}")
        replace_file(target, b'{"a": 1}')
        assert target.read_bytes() == b'{"a": 1}'

    def test_parent_is_a_file_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(WriteError) as exc_info:
            replace_file(blocker / "a.ts", b"x")
        assert exc_info.value.path == str(blocker / "a.ts")
