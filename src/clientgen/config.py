"""Project configuration with precedence resolution and atomic writes.

A project keeps its generator settings in ``./clientgen.json``, the
JSON form of :class:`~clientgen.models.CodegenConfig`. Commands resolve the
effective configuration with :func:`resolve_config`:

Precedence (high to low):
    1. CLI flags
    2. Environment variables (``CLIENTGEN_INPUT``, ``CLIENTGEN_OUTPUT``,
       ``CLIENTGEN_BASE_URL``)
    3. Project config (``./clientgen.json``)
    4. Defaults

Crash logs go to the XDG data directory (:func:`get_data_dir`).
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

import pydantic

from clientgen.exceptions import ConfigError
from clientgen.models import CodegenConfig
from clientgen.pipeline.writer import replace_file

_APP_NAME = "clientgen"
PROJECT_CONFIG_FILENAME = "clientgen.json"

ENV_INPUT = "CLIENTGEN_INPUT"
ENV_OUTPUT = "CLIENTGEN_OUTPUT"
ENV_BASE_URL = "CLIENTGEN_BASE_URL"


# --- Data directory ---


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/clientgen/`` (default
    ``~/.local/share/clientgen/``). Elsewhere: ``~/.clientgen/``.
    """
    system = platform.system()
    if system == "Linux" or system.endswith("BSD"):
        base = os.environ.get("XDG_DATA_HOME", "")
        root = Path(base) if base else Path.home() / ".local" / "share"
        path = root / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project config ---


def project_config_path(directory: Optional[Path] = None) -> Path:
    """Path of the project config file in *directory* (default: the cwd)."""
    return (directory or Path.cwd()) / PROJECT_CONFIG_FILENAME


def load_project_config(path: Optional[Path] = None) -> Optional[CodegenConfig]:
    """Load the project configuration.

    Args:
        path: Config file to read; defaults to ``./clientgen.json``.

    Returns:
        The validated config, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = path or project_config_path()
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return CodegenConfig.model_validate(data)
    except OSError as exc:
        raise ConfigError(f"Cannot read project config at {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in project config at {path}: {exc}") from exc
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def save_project_config(config: CodegenConfig, path: Optional[Path] = None) -> Path:
    """Persist *config* atomically and return the path written.

    Fields still at their default are omitted, so the file only records
    what the project chose.
    """
    path = path or project_config_path()
    text = config.model_dump_json(indent=2, exclude_defaults=True) + "\n"
    replace_file(path, text.encode("utf-8"))
    return path


# --- Precedence resolution ---


def resolve_config(
    cli_input: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_base_url: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> CodegenConfig:
    """Resolve the effective configuration.

    Args:
        cli_input: ``--input`` flag value.
        cli_output: ``--output`` flag value.
        cli_base_url: ``--base-url`` flag value (enum value backend).
        config_path: Project config file; defaults to ``./clientgen.json``.

    Returns:
        A fresh :class:`CodegenConfig`; the project file is never modified.

    Raises:
        ConfigError: If the project config is invalid.
    """
    config = load_project_config(config_path) or CodegenConfig()

    config.input = _pick(cli_input, os.environ.get(ENV_INPUT), config.input)
    config.output = _pick(cli_output, os.environ.get(ENV_OUTPUT), config.output)
    config.enum_fetch.base_url = _pick(
        cli_base_url, os.environ.get(ENV_BASE_URL), config.enum_fetch.base_url
    )
    return config


def _pick(cli_value: Optional[str], env_value: Optional[str], current):  # noqa: ANN001, ANN202
    if cli_value is not None:
        return cli_value
    if env_value:
        return env_value
    return current
