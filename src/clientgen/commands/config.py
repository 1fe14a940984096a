"""Config commands -- view and initialise the project configuration.

Provides the ``clientgen config`` sub-command group for printing the
effective configuration (project file plus environment overrides) and for
creating a starter ``clientgen.json``.
"""

from __future__ import annotations

from typing import Optional

import typer

from clientgen.commands.common import context_config
from clientgen.config import project_config_path, save_project_config
from clientgen.models import CodegenConfig
from clientgen.output import error, info, print_json, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration.

    Example::

        clientgen config show
        CLIENTGEN_OUTPUT=out clientgen config show
    """
    path = (ctx.obj or {}).get("config_path") or project_config_path()
    info(f"Config file: {path}{'' if path.is_file() else ' (not found, using defaults)'}")
    print_json(context_config(ctx).model_dump_json(indent=2))


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document the project generates from."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output directory."
    ),
    renderer: Optional[list[str]] = typer.Option(
        None, "--renderer", "-r", help="Renderer id (repeatable)."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file."
    ),
) -> None:
    """Create a ``clientgen.json`` with the given settings.

    Example::

        clientgen config init -i openapi.json -o src/api -r functions -r react-query
    """
    path = (ctx.obj or {}).get("config_path") or project_config_path()
    if path.exists() and not force:
        error(f"{path} already exists (use --force to overwrite)")
        raise typer.Exit(code=2)

    config = CodegenConfig(input=input)
    if output is not None:
        config.output = output
    if renderer:
        config.renderers = renderer

    save_project_config(config, path)
    success(f"Wrote {path}")
