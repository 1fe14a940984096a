"""Enum-patch commands -- source enum labels from a live backend."""

from __future__ import annotations

from typing import Optional

import typer

from clientgen.commands.common import context_config, load_input_document
from clientgen.enum_patch import export_enum_patch
from clientgen.models import NamingStrategy
from clientgen.output import success

enum_patch_app = typer.Typer(no_args_is_help=True)


@enum_patch_app.command("export")
def enum_patch_export(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Backend base URL the enum paths are appended to."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Patch document path (default: enum-patch.json)."
    ),
    max_retries: Optional[int] = typer.Option(
        None, "--max-retries", min=0, help="Total attempts per enum endpoint."
    ),
    timeout_ms: Optional[int] = typer.Option(
        None, "--timeout-ms", min=1, help="Per-attempt timeout in milliseconds."
    ),
    naming_strategy: Optional[str] = typer.Option(
        None, "--naming-strategy", help="auto|none."
    ),
) -> None:
    """Fetch every ``/Enums/GetAll{Name}`` endpoint into an enum patch document.

    Example::

        clientgen enum-patch export -i openapi.json --base-url https://api.example.com -o enum-patch.json
    """
    config = context_config(ctx, cli_input=input, cli_base_url=base_url)
    options = config.enum_fetch
    if output is not None:
        options.output = output
    if max_retries is not None:
        options.max_retries = max_retries
    if timeout_ms is not None:
        options.timeout_ms = timeout_ms
    if naming_strategy is not None:
        options.naming_strategy = NamingStrategy.parse(naming_strategy)

    document = export_enum_patch(load_input_document(config), options)
    success(f"Wrote {len(document.patches)} enum patches to {options.output}")
