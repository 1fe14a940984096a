"""Root Typer application for the ``clientgen`` console script.

Sub-command groups live in :mod:`clientgen.commands`; this module only mounts
them, handles the global flags, and turns exceptions into exit codes in
:func:`main`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from clientgen import __version__
from clientgen.commands.barrel import barrel_app
from clientgen.commands.codegen import codegen_app
from clientgen.commands.config import config_app
from clientgen.commands.enum_patch import enum_patch_app
from clientgen.commands.model import model_app
from clientgen.exceptions import ClientgenError
from clientgen.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from clientgen.output import OutputFormat, OutputManager, error, install_log_handler, set_output

app = typer.Typer(
    name="clientgen",
    help="Generate typed TypeScript API clients from OpenAPI documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_COMMAND_GROUPS = (
    (codegen_app, "codegen", "Run the client code generation pipeline."),
    (model_app, "model", "Generate model type declarations."),
    (barrel_app, "barrel", "Generate index.ts barrel files."),
    (enum_patch_app, "enum-patch", "Fetch enum labels from a live backend."),
    (config_app, "config", "Project configuration management."),
)

for _group, _name, _help in _COMMAND_GROUPS:
    app.add_typer(_group, name=_name, help=_help)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"clientgen {__version__}")
        raise typer.Exit()


def _stdout_format(json_output: bool, plain_output: bool) -> OutputFormat:
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project config file (default: ./clientgen.json)."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print listings and tables as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Print unstyled text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print results, warnings and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show pipeline debug logging."),
) -> None:
    """Install the output manager and the log bridge, then remember ``--config``.

    Sub-commands read the config path back from ``ctx.obj`` when they resolve
    the project configuration.
    """
    set_output(
        OutputManager(
            format=_stdout_format(json_output, plain_output),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    install_log_handler(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def _cancel() -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _setup_signal_handlers() -> None:
    def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
        _cancel()

    signal.signal(signal.SIGINT, _on_sigint)


def _write_crash_log(exc: Exception) -> Path:
    """Dump the traceback of *exc* under ``<data dir>/logs`` and return the file."""
    from clientgen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        encoding="utf-8",
    )
    return log_path


def main() -> None:
    """Console-script entry point.

    :class:`~clientgen.exceptions.ClientgenError` subclasses map to their
    ``exit_code``; anything else is a bug, so its traceback goes to a crash
    log instead of the terminal.
    """
    _setup_signal_handlers()
    try:
        app()
    except KeyboardInterrupt:
        _cancel()
    except ClientgenError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:  # noqa: BLE001
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
