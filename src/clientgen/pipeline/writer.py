"""Writers -- apply a list of planned files to an output directory.

:class:`FileSystemWriter` is idempotent: a file whose current bytes equal
the planned content is counted as skipped and not touched, so regenerating
an unchanged tree leaves version control clean. Changed files are replaced
atomically (temp file in the same directory, then rename), so an
interrupted run never leaves a half-written file behind.

There is no locking between invocations; two writers targeting the same
directory race and the last rename wins.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from clientgen.exceptions import WriteError
from clientgen.models import PlannedFile, WriteResult

logger = logging.getLogger(__name__)


class Writer(ABC):
    """Base class for writers."""

    id: str = "writer"

    @property
    def output_root(self) -> Optional[Path]:
        """Directory planned paths are resolved against, if any."""
        return None

    @abstractmethod
    def write(self, files: list[PlannedFile]) -> WriteResult:
        """Apply *files* and report what happened.

        Raises:
            WriteError: If a file cannot be read or written.
        """


class DryRunWriter(Writer):
    """Reports every planned file as written without touching the disk."""

    id = "dry-run"

    def write(self, files: list[PlannedFile]) -> WriteResult:
        return WriteResult(files_written=list(files), skipped_files=0)


class FileSystemWriter(Writer):
    """Writes planned files below *output_root*, skipping unchanged ones.

    Args:
        output_root: Directory planned paths are relative to. Created on
            first write if it does not exist.
    """

    id = "fs"

    def __init__(self, output_root: str | Path) -> None:
        self._root = Path(output_root)

    @property
    def output_root(self) -> Optional[Path]:
        return self._root

    def write(self, files: list[PlannedFile]) -> WriteResult:
        written: list[PlannedFile] = []
        skipped = 0
        for planned in files:
            target = self._root / planned.path
            content = planned.content.encode("utf-8")
            if _read_bytes(target) == content:
                skipped += 1
                continue
            replace_file(target, content)
            logger.debug("Wrote %s", target)
            written.append(planned)
        return WriteResult(files_written=written, skipped_files=skipped)


def _read_bytes(path: Path) -> Optional[bytes]:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise WriteError(str(path), f"cannot read existing file: {exc}") from exc


def replace_file(path: Path, data: bytes) -> None:
    """Write *data* to a sibling temp file, remove *path*, then rename.

    On any failure the temp file is cleaned up and :class:`WriteError` is
    raised with the target path.
    """
    tmp_path: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fd:
            tmp_path = fd.name
            fd.write(data)
            fd.flush()
            os.fsync(fd.fileno())
        if path.exists():
            path.unlink()
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as exc:
        raise WriteError(str(path), str(exc)) from exc
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
