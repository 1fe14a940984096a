"""Jinja2 environment for the code templates under ``renderers/templates``."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATE_DIR = Path(__file__).parent / "templates"


def create_environment() -> Environment:
    """Create the environment shared by the code renderers.

    Autoescape is disabled for ``.ts.j2`` and ``.js.j2`` templates, which
    produce source code, not HTML. Block tags on their own line leave no
    trace in the output, and undefined variables raise instead of rendering
    as empty text.

    Returns:
        A configured :class:`~jinja2.Environment` instance.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2", "js.j2"), default=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
