"""Source formatter collaborators.

Formatting runs after layout and before the writer, so the writer's
byte-for-byte comparison sees formatted text and formatting-only
differences never cause a rewrite. The pipeline never formats code itself;
it either passes text through or hands it to an external formatter such as
Prettier over stdin/stdout.
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence

from clientgen.exceptions import FormatError
from clientgen.models import PlannedFile


class Formatter(ABC):
    """Base class for source formatters."""

    id: str = "formatter"

    @abstractmethod
    def format(self, path: str, content: str) -> str:
        """Return the formatted *content* of the file at *path*.

        Raises:
            FormatError: If the formatter rejects the text.
        """

    def format_all(self, files: list[PlannedFile]) -> list[PlannedFile]:
        return [PlannedFile(path=f.path, content=self.format(f.path, f.content)) for f in files]


class PassthroughFormatter(Formatter):
    id = "passthrough"

    def format(self, path: str, content: str) -> str:
        return content


class PrettierFormatter(Formatter):
    """Pipe each file through an external Prettier-compatible command.

    The command receives the text on stdin and ``--stdin-filepath <path>``
    so it can infer the parser from the extension.

    Args:
        command: Executable and leading arguments, e.g. ``["npx", "prettier"]``.
        timeout: Seconds to wait per file.
    """

    id = "prettier"

    def __init__(self, command: Sequence[str] = ("prettier",), timeout: float = 30.0) -> None:
        self._command = list(command)
        self._timeout = timeout

    def format(self, path: str, content: str) -> str:
        try:
            proc = subprocess.run(
                [*self._command, "--stdin-filepath", path],
                input=content,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise FormatError(f"Formatter not found: {self._command[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise FormatError(f"Formatter timed out on {path}") from exc

        if proc.returncode != 0:
            detail = proc.stderr.strip() or f"exit code {proc.returncode}"
            raise FormatError(f"Formatter failed on {path}: {detail}")
        return proc.stdout
