"""Tests for clientgen.pipeline.formatter."""

from __future__ import annotations

import sys

import pytest

from clientgen.exceptions import FormatError
from clientgen.models import PlannedFile
from clientgen.pipeline.formatter import PassthroughFormatter, PrettierFormatter

_UPPERCASE = "import sys; sys.stdout.write(sys.stdin.read().upper())"
_ECHO_PATH = "import sys; sys.stdout.write(sys.argv[-1])"
_FAIL = "import sys; sys.stderr.write('unexpected token'); sys.exit(2)"


class TestPassthroughFormatter:
    def test_returns_content_unchanged(self) -> None:
        files = [PlannedFile(path="a.ts", content="const a=1\n")]
        assert PassthroughFormatter().format_all(files) == files


class TestPrettierFormatter:
    def test_pipes_content_through_command(self) -> None:
        formatter = PrettierFormatter([sys.executable, "-c", _UPPERCASE])
        assert formatter.format("a.ts", "const a = 1;\n") == "CONST A = 1;\n"

    def test_passes_stdin_filepath(self) -> None:
        formatter = PrettierFormatter([sys.executable, "-c", _ECHO_PATH])
        assert formatter.format("functions/api/a.ts", "") == "functions/api/a.ts"

    def test_format_all_keeps_paths(self) -> None:
        formatter = PrettierFormatter([sys.executable, "-c", _UPPERCASE])
        result = formatter.format_all([PlannedFile(path="x/a.ts", content="a")])
        assert result == [PlannedFile(path="x/a.ts", content="A")]

    def test_failure_raises_with_stderr(self) -> None:
        formatter = PrettierFormatter([sys.executable, "-c", _FAIL])
        with pytest.raises(FormatError, match="unexpected token"):
            formatter.format("a.ts", "const")

    def test_missing_executable_raises(self) -> None:
        formatter = PrettierFormatter(["clientgen-no-such-formatter"])
        with pytest.raises(FormatError, match="not found"):
            formatter.format("a.ts", "")
