"""Layout strategies -- post-processing over the union of renderer output.

:class:`BarrelLayout` synthesizes ``index.ts`` barrel files that re-export
every module below a set of root directories, so consumers can write
``import { assignmentAdd } from "./functions"``. Given::

    functions/assignment/add.ts
    functions/assignment/delete.ts

with root ``functions`` it adds::

    functions/assignment/index.ts   export * from "./add";
                                    export * from "./delete";
    functions/index.ts              export * from "./assignment";

:func:`generate_barrels_for_directory` runs the same export collection over
an existing tree on disk.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from clientgen.exceptions import WriteError
from clientgen.models import PlannedFile

logger = logging.getLogger(__name__)

INDEX_FILE = "index.ts"
_EXPORT_LINE_RE = re.compile(r'^export \* from "\./[^"]+";$')


class LayoutStrategy(ABC):
    """Base class for layout strategies."""

    id: str = "layout"

    @abstractmethod
    def apply(self, files: list[PlannedFile]) -> list[PlannedFile]:
        """Return the final file list; must not touch the filesystem."""


class IdentityLayout(LayoutStrategy):
    id = "identity"

    def apply(self, files: list[PlannedFile]) -> list[PlannedFile]:
        return files


class BarrelLayout(LayoutStrategy):
    """Add an ``index.ts`` to every directory under the configured roots.

    Args:
        roots: Directories (relative to the output root, ``/``-separated)
            whose subtree gets barrels. The root itself gets one too.
    """

    id = "barrel"

    def __init__(self, roots: Iterable[str]) -> None:
        self._roots = [PurePosixPath(root.strip("/")) for root in roots if root.strip("/")]

    def apply(self, files: list[PlannedFile]) -> list[PlannedFile]:
        sources = [PurePosixPath(f.path) for f in files if _is_barrel_source(f.path)]
        barrels = {
            str(directory / INDEX_FILE): content
            for directory, content in build_barrels(sources, self._roots).items()
        }

        result = [f for f in files if f.path not in barrels]
        result.extend(
            PlannedFile(path=path, content=content) for path, content in sorted(barrels.items())
        )
        return result


def build_barrels(
    sources: Iterable[PurePosixPath],
    roots: Iterable[PurePosixPath],
) -> dict[PurePosixPath, str]:
    """Compute barrel contents keyed by directory.

    Args:
        sources: Relative paths of eligible ``.ts`` files.
        roots: Directories that bound the upward climb. A source outside
            every root is ignored; a source under several roots climbs to
            the nearest one.

    Returns:
        Mapping of directory to barrel content, for directories with at
        least one export. Lines are sorted, so the result is independent of
        the order of *sources*.
    """
    roots = sorted(set(roots), key=lambda r: len(r.parts), reverse=True)
    exports: dict[PurePosixPath, set[str]] = {}

    for source in sources:
        root = _nearest_root(source, roots)
        if root is None:
            continue

        exports.setdefault(source.parent, set()).add(_module_name(source))
        directory = source.parent
        while directory != root:
            # A subdirectory is exported from its parent because it holds an
            # eligible file.
            exports.setdefault(directory.parent, set()).add(directory.name)
            directory = directory.parent

    return {
        directory: "".join(f'export * from "./{name}";\n' for name in sorted(names))
        for directory, names in exports.items()
        if names
    }


def generate_barrels_for_directory(root: str | Path) -> list[PlannedFile]:
    """Plan barrels for an existing tree of ``.ts`` files.

    Paths in the result are relative to *root*. Directories without any
    export get no planned file, so an existing ``index.ts`` (for example a
    hand-written one in a directory of declaration files) is never replaced
    by empty content. An existing non-empty ``index.ts`` holding anything
    other than ``export * from "./name";`` lines is hand-written and is
    left out of the result.

    Args:
        root: Directory to scan.

    Returns:
        Planned barrel files, sorted by path.
    """
    root_path = Path(root)
    sources = [
        PurePosixPath(path.relative_to(root_path).as_posix())
        for path in sorted(root_path.rglob("*.ts"))
        if path.is_file() and _is_barrel_source(path.name)
    ]
    barrels = build_barrels(sources, [PurePosixPath(".")])
    logger.debug("Scanned %d sources under %s, %d barrels", len(sources), root_path, len(barrels))
    planned = []
    for directory, content in sorted(barrels.items()):
        target = root_path / directory / INDEX_FILE
        if _is_hand_written(target):
            logger.warning("Keeping hand-written %s", target)
            continue
        planned.append(PlannedFile(path=(directory / INDEX_FILE).as_posix(), content=content))
    return planned


def _is_hand_written(index_path: Path) -> bool:
    if not index_path.is_file():
        return False
    try:
        lines = index_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise WriteError(str(index_path), f"cannot read existing barrel: {exc}") from exc
    lines = [line.strip() for line in lines if line.strip()]
    return bool(lines) and not all(_EXPORT_LINE_RE.match(line) for line in lines)


def _is_barrel_source(path: str) -> bool:
    name = PurePosixPath(path).name
    return name.endswith(".ts") and not name.endswith(".d.ts") and name != INDEX_FILE


def _module_name(path: PurePosixPath) -> str:
    return path.name[: -len(".ts")]


def _nearest_root(
    source: PurePosixPath, roots: list[PurePosixPath]
) -> PurePosixPath | None:
    for root in roots:
        if root == PurePosixPath(".") or root in source.parents:
            return root
    return None
