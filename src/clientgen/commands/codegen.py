"""Codegen commands -- run the pipeline and inspect its inputs.

Provides the ``clientgen codegen`` sub-command group:

* ``run`` -- parse, transform, render, lay out, format and write.
* ``ir`` -- print the transformed endpoint IR as JSON.
* ``renderers`` -- list the renderer ids available to ``run``.
"""

from __future__ import annotations

from typing import Optional

import typer

from clientgen.commands.common import (
    build_formatter,
    context_config,
    load_input_document,
    parse_formatter_command,
)
from clientgen.exceptions import InvalidUsageError
from clientgen.models import ClientImportMode, CodegenConfig, ModelImportType
from clientgen.output import info, print_json, print_paths, print_table, success, warning
from clientgen.pipeline.layout import BarrelLayout
from clientgen.pipeline.orchestrator import CodegenPipeline
from clientgen.pipeline.transform import BUILTIN_PASSES, NormalizeEndpointPass
from clientgen.pipeline.writer import DryRunWriter, FileSystemWriter
from clientgen.renderers.registry import RendererRegistry

codegen_app = typer.Typer(no_args_is_help=True)


def build_pipeline(
    config: CodegenConfig,
    registry: Optional[RendererRegistry] = None,
    dry_run: bool = False,
) -> CodegenPipeline:
    """Assemble a :class:`CodegenPipeline` from a resolved config.

    Raises:
        InvalidUsageError: If a configured pass name is unknown, or two
            configured renderers share an output slot.
        RendererError: If a configured renderer id is unknown.
    """
    registry = registry or RendererRegistry.with_builtins()
    pipeline = CodegenPipeline()

    for name in config.passes:
        if name == NormalizeEndpointPass.name:
            continue
        pass_cls = BUILTIN_PASSES.get(name)
        if pass_cls is None:
            available = ", ".join(sorted(BUILTIN_PASSES))
            raise InvalidUsageError(f"Unknown transform pass '{name}'. Available: {available}")
        pipeline.with_pass(pass_cls())

    slots: dict[str, str] = {}
    for renderer_id in config.renderers:
        renderer = registry.create(renderer_id)
        slot = renderer.output_slot
        if slot is not None:
            other = slots.setdefault(slot, renderer.id)
            if other != renderer.id:
                raise InvalidUsageError(
                    f"Renderers '{other}' and '{renderer.id}' write the same files "
                    f"({slot}); select only one of them"
                )
        pipeline.with_renderer(renderer)

    if config.barrel_roots:
        pipeline.with_layout(BarrelLayout(config.barrel_roots))

    pipeline.with_formatter(build_formatter(config.formatter))
    pipeline.with_writer(DryRunWriter() if dry_run else FileSystemWriter(config.output))
    pipeline.with_output_root(config.output)
    pipeline.with_client_import(config.client_import)
    pipeline.with_model_import(config.model_import)
    return pipeline


def _apply_import_flags(
    config: CodegenConfig,
    client_mode: Optional[str],
    client_path: Optional[str],
    client_package: Optional[str],
    client_import_name: Optional[str],
    model_import: Optional[str],
    model_path: Optional[str],
) -> None:
    if client_mode is not None:
        config.client_import.mode = ClientImportMode.parse(client_mode)
    if client_path is not None:
        config.client_import.client_path = client_path
    if client_package is not None:
        config.client_import.client_package = client_package
    if client_import_name is not None:
        config.client_import.import_name = client_import_name

    if model_import is not None:
        config.model_import.import_type = ModelImportType.parse(model_import)
    if model_path is not None:
        if config.model_import.import_type == ModelImportType.PACKAGE:
            config.model_import.package_path = model_path
        else:
            config.model_import.relative_path = model_path


@codegen_app.command("run")
def codegen_run(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output directory."
    ),
    renderer: Optional[list[str]] = typer.Option(
        None, "--renderer", "-r", help="Renderer id (repeatable)."
    ),
    barrel: Optional[list[str]] = typer.Option(
        None, "--barrel", help="Directory under the output root that gets index.ts barrels (repeatable)."
    ),
    transform: Optional[list[str]] = typer.Option(
        None, "--pass", help="Transform pass run after normalization (repeatable)."
    ),
    client_mode: Optional[str] = typer.Option(
        None, "--client-mode", help="API client import mode: global|local|package."
    ),
    client_path: Optional[str] = typer.Option(
        None, "--client-path", help="Client module path for the local mode."
    ),
    client_package: Optional[str] = typer.Option(
        None, "--client-package", help="Client package for the package mode."
    ),
    client_import_name: Optional[str] = typer.Option(
        None, "--client-import-name", help="Name of the client accessor function."
    ),
    model_import: Optional[str] = typer.Option(
        None, "--model-import", help="Model import style: package|relative."
    ),
    model_path: Optional[str] = typer.Option(
        None, "--model-path", help="Model package specifier or relative directory."
    ),
    formatter: Optional[str] = typer.Option(
        None, "--formatter", help="External formatter command, e.g. 'npx prettier'."
    ),
    discover: bool = typer.Option(
        False, "--discover", help="Also load renderers from installed plugins."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Plan files without writing them."
    ),
    report: bool = typer.Option(
        False, "--report", help="Print the execution report as JSON."
    ),
) -> None:
    """Generate client code from an OpenAPI document.

    Example::

        clientgen codegen run -i openapi.json -o src/api -r functions -r react-query --barrel functions
        clientgen codegen run -i openapi.json --dry-run --report
    """
    config = context_config(ctx, cli_input=input, cli_output=output)
    if renderer:
        config.renderers = renderer
    if barrel:
        config.barrel_roots = barrel
    if transform:
        config.passes = transform
    formatter_command = parse_formatter_command(formatter)
    if formatter_command is not None:
        config.formatter = formatter_command
    _apply_import_flags(
        config, client_mode, client_path, client_package, client_import_name, model_import, model_path
    )

    registry = RendererRegistry.with_builtins()
    if discover:
        registry.discover()

    document = load_input_document(config)
    plan = build_pipeline(config, registry, dry_run=dry_run).plan(document)

    for renderer_report in plan.renderer_reports:
        for message in renderer_report.warnings:
            warning(f"[{renderer_report.renderer_id}] {message}")

    if report:
        print_json(plan.to_json())
    elif dry_run:
        print_paths(planned.path for planned in plan.planned_files)

    if dry_run:
        info(f"Dry run: {plan.layout_files} files planned for {plan.endpoint_count} endpoints")
    else:
        success(
            f"Generated {len(plan.planned_files)} files in {config.output} "
            f"({plan.skipped_files} unchanged, {plan.endpoint_count} endpoints)"
        )


@codegen_app.command("ir")
def codegen_ir(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    transform: Optional[list[str]] = typer.Option(
        None, "--pass", help="Transform pass run after normalization (repeatable)."
    ),
) -> None:
    """Print the endpoint IR after all transform passes.

    Example::

        clientgen codegen ir -i openapi.json > ir.json
    """
    config = context_config(ctx, cli_input=input)
    if transform:
        config.passes = transform
    config.renderers = []

    document = load_input_document(config)
    print_json(build_pipeline(config, dry_run=True).ir_snapshot_json(document))


@codegen_app.command("renderers")
def codegen_renderers(
    discover: bool = typer.Option(
        True, "--discover/--no-discover", help="Include renderers from installed plugins."
    ),
) -> None:
    """List available renderer ids.

    Example::

        clientgen codegen renderers
    """
    registry = RendererRegistry.with_builtins()
    builtin = set(registry.ids())
    if discover:
        registry.discover()

    rows = [[rid, "built-in" if rid in builtin else "plugin"] for rid in registry.ids()]
    print_table(["Renderer", "Source"], rows, title="Renderers")
