"""Shared test fixtures for clientgen.

Provides the sample OpenAPI document, an isolated working directory for
config-sensitive tests, output state management and a CLI runner. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from clientgen.models import GeneratorInput
from clientgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_DOCUMENT = FIXTURES_DIR / "sample_openapi.json"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def _sample_document_cached() -> dict[str, Any]:
    with open(SAMPLE_DOCUMENT, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_document(_sample_document_cached: dict[str, Any]) -> dict[str, Any]:
    """A fresh copy of the sample OpenAPI document (safe to mutate)."""
    return copy.deepcopy(_sample_document_cached)


@pytest.fixture
def sample_ir(sample_document: dict[str, Any]) -> GeneratorInput:
    """The sample document parsed and run through the built-in passes."""
    from clientgen.pipeline.transform import (
        NormalizeEndpointPass,
        QueryClassificationPass,
        RefreshTokenMetaPass,
    )
    from clientgen.parser import OpenApiParser

    ir = OpenApiParser().parse(sample_document)
    for transform in (NormalizeEndpointPass(), QueryClassificationPass(), RefreshTokenMetaPass()):
        transform.apply(ir)
    return ir


# ---------------------------------------------------------------------------
# Working directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside an empty directory with no ``CLIENTGEN_*`` overrides.

    Sets XDG_DATA_HOME below tmp_path so crash logs never touch the real
    home directory, and changes the working directory so that the default
    ``./clientgen.json`` lookup sees nothing.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["CLIENTGEN_INPUT", "CLIENTGEN_OUTPUT", "CLIENTGEN_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
