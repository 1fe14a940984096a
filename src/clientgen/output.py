"""Terminal output for the clientgen CLI.

Generated code never goes through this module; it is written by the pipeline
writers. What remains is what the user sees:

* **stdout** -- machine-readable results: IR snapshots, execution reports,
  enum plans, and the file lists printed by ``--dry-run``. Safe to pipe into
  ``jq`` or redirect to a file.
* **stderr** -- status lines, renderer warnings, and errors.

Rich styling is used only when stdout is a terminal and colour has not been
turned off by ``NO_COLOR``, ``TERM=dumb``, or ``--no-color``.

Commands do not construct an :class:`OutputManager` themselves. The root
callback in :mod:`clientgen.app` installs one with :func:`set_output` and
everything else goes through :func:`get_output` or the module-level helpers.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Iterable, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout results are rendered. ``AUTO`` picks ``RICH`` on a colour TTY."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes results to stdout and diagnostics to stderr.

    Args:
        format: Requested stdout format; ``AUTO`` is resolved once here.
        no_color: Force plain, unstyled text on both streams.
        quiet: Drop ``info`` and ``success`` lines.
        verbose: Show ``debug`` lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _color_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* to stdout as-is, followed by a newline."""
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Print a JSON document, re-indenting it when given as text.

        Strings are expected to hold serialized JSON, typically from a
        pydantic ``model_dump_json`` call. Text that does not parse is
        printed unchanged.
        """
        if isinstance(data, str):
            try:
                text = json.dumps(json.loads(data), indent=2, ensure_ascii=False)
            except (json.JSONDecodeError, TypeError):
                text = data
        else:
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)

        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self.print_data(text)

    def print_paths(self, paths: Iterable[str]) -> None:
        """List generated file paths, one per line or as a JSON array."""
        paths = list(paths)
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(paths, indent=2, ensure_ascii=False))
            return
        for path in paths:
            self.print_data(path)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a Rich table, a JSON list of objects, or TSV lines."""
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def _diagnostic(self, plain: str, styled: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(styled)

    def info(self, message: str) -> None:
        """Status line. Hidden by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message, message)

    def success(self, message: str) -> None:
        """Green completion line. Hidden by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Yellow warning. Always shown."""
        self._diagnostic(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Bold red error. Always shown."""
        self._diagnostic(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Dimmed trace line. Shown only with ``--verbose``."""
        if self._verbose:
            self._diagnostic(f"[debug] {message}", f"[dim][debug] {message}[/dim]")


class OutputLogHandler(logging.Handler):
    """Send ``clientgen.*`` log records to the active :class:`OutputManager`.

    Pipeline modules log with the standard :mod:`logging` API. ERROR records
    become errors, WARNING records become warnings, and anything lower is
    debug output.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:  # noqa: BLE001
            self.handleError(record)
            return
        output = get_output()
        if record.levelno >= logging.ERROR:
            output.error(message)
        elif record.levelno >= logging.WARNING:
            output.warning(message)
        else:
            output.debug(message)


def install_log_handler(verbose: bool = False) -> None:
    """Attach exactly one :class:`OutputLogHandler` to the ``clientgen`` logger."""
    logger = logging.getLogger("clientgen")
    for handler in list(logger.handlers):
        if isinstance(handler, OutputLogHandler):
            logger.removeHandler(handler)
    logger.addHandler(OutputLogHandler())
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _color_disabled_by_env() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb`` turn colour off."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (used between tests)."""
    global _output
    _output = None


def print_json(data: Any) -> None:
    get_output().print_json(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_paths(paths: Iterable[str]) -> None:
    get_output().print_paths(paths)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
