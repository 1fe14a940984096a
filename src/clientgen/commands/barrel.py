"""Barrel commands -- ``index.ts`` files for an existing tree."""

from __future__ import annotations

from pathlib import Path

import typer

from clientgen.exceptions import InvalidUsageError
from clientgen.output import info, print_paths, success
from clientgen.pipeline.layout import generate_barrels_for_directory
from clientgen.pipeline.writer import DryRunWriter, FileSystemWriter

barrel_app = typer.Typer(no_args_is_help=True)


@barrel_app.command("gen")
def barrel_gen(
    roots: list[Path] = typer.Argument(help="Directories to scan."),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="List barrels without writing them."
    ),
) -> None:
    """Write an ``index.ts`` into every directory that has exportable modules.

    Unchanged barrels are left alone; directories without exports are
    skipped, so existing hand-written index files there survive.

    Example::

        clientgen barrel gen src/api/functions src/models
    """
    for root in roots:
        if not root.is_dir():
            raise InvalidUsageError(f"Not a directory: {root}")

        files = generate_barrels_for_directory(root)
        writer = DryRunWriter() if dry_run else FileSystemWriter(root)
        result = writer.write(files)

        if dry_run:
            print_paths((root / planned.path).as_posix() for planned in result.files_written)
            info(f"Dry run: {len(files)} barrels planned under {root}")
        else:
            success(
                f"{root}: {len(result.files_written)} barrels written, "
                f"{result.skipped_files} unchanged"
            )
