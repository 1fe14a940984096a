"""Model commands -- type declarations for the document's named schemas.

Provides the ``clientgen model`` sub-command group:

* ``gen`` -- render model files, optionally merging an enum patch document.
* ``ir`` -- print the model IR as JSON.
* ``enum-plan`` -- print or save the editable enum plan.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from clientgen.commands.common import (
    build_formatter,
    context_config,
    load_input_document,
    parse_formatter_command,
)
from clientgen.model_pipeline import (
    apply_enum_patches,
    build_model_enum_plan,
    build_model_ir,
    load_existing_enums,
    read_enum_patches,
    render_model_files,
)
from clientgen.models import CodegenConfig, EnumConflictPolicy, ModelIr, ModelRenderStyle
from clientgen.output import info, print_json, print_paths, success
from clientgen.pipeline.writer import DryRunWriter, FileSystemWriter, replace_file

model_app = typer.Typer(no_args_is_help=True)


def _model_ir(
    config: CodegenConfig,
    enum_patch: Optional[str],
    conflict_policy: Optional[str],
) -> ModelIr:
    """Build the model IR and merge the configured enum patch, if any."""
    ir = build_model_ir(load_input_document(config))
    patch_path = enum_patch or config.enum_patch
    if patch_path:
        policy = (
            EnumConflictPolicy.parse(conflict_policy)
            if conflict_policy is not None
            else config.conflict_policy
        )
        apply_enum_patches(ir, read_enum_patches(patch_path), policy)
    return ir


@model_app.command("gen")
def model_gen(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Model output directory."
    ),
    style: Optional[str] = typer.Option(
        None, "--style", help="Output style: declaration|module."
    ),
    name: Optional[list[str]] = typer.Option(
        None, "--name", help="Only render this model (repeatable)."
    ),
    enum_patch: Optional[str] = typer.Option(
        None, "--enum-patch", help="Enum patch document to merge."
    ),
    conflict_policy: Optional[str] = typer.Option(
        None, "--conflict-policy", help="patch-first|schema-first."
    ),
    formatter: Optional[str] = typer.Option(
        None, "--formatter", help="External formatter command, e.g. 'npx prettier'."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="List files without writing them."
    ),
) -> None:
    """Generate one TypeScript file per named schema.

    Example::

        clientgen model gen -i openapi.json -o src/models --style module
        clientgen model gen -i openapi.json -o types --enum-patch enum-patch.json
    """
    config = context_config(ctx, cli_input=input)
    render_style = ModelRenderStyle.parse(style) if style is not None else config.model_style
    target = output or config.model_output or config.output

    ir = _model_ir(config, enum_patch, conflict_policy)
    files = render_model_files(ir, render_style, name)

    formatter_command = parse_formatter_command(formatter)
    files = build_formatter(formatter_command or config.formatter).format_all(files)

    writer = DryRunWriter() if dry_run else FileSystemWriter(target)
    result = writer.write(files)

    if dry_run:
        print_paths(planned.path for planned in result.files_written)
        info(f"Dry run: {len(files)} model files planned")
    else:
        success(
            f"Generated {len(result.files_written)} model files in {target} "
            f"({result.skipped_files} unchanged)"
        )


@model_app.command("ir")
def model_ir(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    enum_patch: Optional[str] = typer.Option(
        None, "--enum-patch", help="Enum patch document to merge first."
    ),
    conflict_policy: Optional[str] = typer.Option(
        None, "--conflict-policy", help="patch-first|schema-first."
    ),
) -> None:
    """Print the model IR as JSON.

    Example::

        clientgen model ir -i openapi.json
    """
    config = context_config(ctx, cli_input=input)
    print_json(_model_ir(config, enum_patch, conflict_policy).model_dump_json(indent=2))


@model_app.command("enum-plan")
def model_enum_plan(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    model_dir: Optional[Path] = typer.Option(
        None, "--model-dir", help="Existing model directory whose enum member names are kept."
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", help="Write the plan to this file instead of stdout."
    ),
) -> None:
    """List every enum and its member names as an editable plan.

    Example::

        clientgen model enum-plan -i openapi.json --model-dir src/models --out enum-plan.json
    """
    config = context_config(ctx, cli_input=input)
    ir = build_model_ir(load_input_document(config))
    existing = load_existing_enums(model_dir) if model_dir is not None else None
    plan = build_model_enum_plan(ir, existing)

    text = plan.model_dump_json(indent=2)
    if out is None:
        print_json(text)
        return
    replace_file(out, (text + "\n").encode("utf-8"))
    success(f"Wrote enum plan for {len(plan.enums)} enums to {out}")
