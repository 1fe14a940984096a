"""Helpers shared by the sub-command modules."""

from __future__ import annotations

import shlex
from typing import Any, Optional

import typer

from clientgen.config import resolve_config
from clientgen.exceptions import InvalidUsageError
from clientgen.models import CodegenConfig
from clientgen.parser.loader import load_document
from clientgen.pipeline.formatter import Formatter, PassthroughFormatter, PrettierFormatter


def context_config(
    ctx: typer.Context,
    cli_input: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_base_url: Optional[str] = None,
) -> CodegenConfig:
    """Resolve the effective config using the root ``--config`` option."""
    config_path = (ctx.obj or {}).get("config_path")
    return resolve_config(
        cli_input=cli_input,
        cli_output=cli_output,
        cli_base_url=cli_base_url,
        config_path=config_path,
    )


def load_input_document(config: CodegenConfig) -> dict[str, Any]:
    """Load the document named by ``config.input``.

    Raises:
        InvalidUsageError: If no input is configured.
        DocumentLoadError: If the document cannot be loaded.
    """
    if not config.input:
        raise InvalidUsageError(
            "No input document. Pass --input, set CLIENTGEN_INPUT, or add 'input' to clientgen.json"
        )
    return load_document(config.input)


def parse_formatter_command(command: Optional[str]) -> Optional[list[str]]:
    """Split a ``--formatter`` value such as ``"npx prettier"``."""
    if command is None:
        return None
    parts = shlex.split(command)
    if not parts:
        raise InvalidUsageError("--formatter must not be empty")
    return parts


def build_formatter(command: Optional[list[str]]) -> Formatter:
    if command:
        return PrettierFormatter(command)
    return PassthroughFormatter()
