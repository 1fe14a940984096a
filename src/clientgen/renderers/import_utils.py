"""Module-specifier helpers: client imports, model imports, file-to-file imports.

All paths handled here are ``/``-separated and relative to the output root
unless stated otherwise; results are import-ready specifiers without file
extensions.
"""

from __future__ import annotations

import posixpath
from typing import Optional

from clientgen.models import (
    ClientImportConfig,
    ClientImportMode,
    GeneratorInput,
    ModelImportConfig,
    ModelImportType,
)

DEFAULT_CLIENT_PACKAGE = "@aptx/api-client"
DEFAULT_CLIENT_PATH = "../../api/client"
DEFAULT_CUSTOM_CLIENT_PACKAGE = "@my-org/api-client"
DEFAULT_CLIENT_IMPORT_NAME = "getApiClient"

DEFAULT_MODEL_IMPORT_BASE = "../../../spec/types"
DEFAULT_MODEL_PACKAGE = "@my-org/models"


def resolve_client_import(config: Optional[ClientImportConfig]) -> tuple[list[str], str]:
    """Import lines for the API client and the expression that obtains it.

    Returns:
        ``(lines, call)`` where *lines* import ``PerCallOptions`` and the
        client accessor, and *call* is e.g. ``"getApiClient()"``.

    Example::

        >>> lines, call = resolve_client_import(
        ...     ClientImportConfig(mode="local", client_path="../client"))
        >>> lines[1]
        'import { getApiClient } from "../client/client";'
    """
    config = config or ClientImportConfig()
    import_name = config.import_name or DEFAULT_CLIENT_IMPORT_NAME

    if config.mode == ClientImportMode.LOCAL:
        base = config.client_path or DEFAULT_CLIENT_PATH
    elif config.mode == ClientImportMode.PACKAGE:
        base = config.client_package or DEFAULT_CUSTOM_CLIENT_PACKAGE
    else:
        lines = [
            f'import type {{ PerCallOptions }} from "{DEFAULT_CLIENT_PACKAGE}";',
            f'import {{ {import_name} }} from "{DEFAULT_CLIENT_PACKAGE}";',
        ]
        return lines, f"{import_name}()"

    lines = [
        f'import type {{ PerCallOptions }} from "{base}/types";',
        f'import {{ {import_name} }} from "{base}/client";',
    ]
    return lines, f"{import_name}()"


def should_use_package_import(config: Optional[ModelImportConfig]) -> bool:
    return config is not None and config.import_type == ModelImportType.PACKAGE


def relative_import_path(from_file: str, to_file: str) -> str:
    """Specifier that imports *to_file* from *from_file*.

    Example::

        >>> relative_import_path("functions/api/assignment/add.ts",
        ...                      "spec/endpoints/assignment/add.ts")
        '../../../spec/endpoints/assignment/add'
    """
    from_dir = posixpath.dirname(from_file) or "."
    target = posixpath.splitext(to_file)[0]
    return _to_import_specifier(posixpath.relpath(target, from_dir))


def resolve_model_import_base(input: GeneratorInput, generated_file_path: str) -> str:
    """Base specifier for model type imports in *generated_file_path*.

    * No configuration: ``../../../spec/types``.
    * ``package``: the configured package path (default ``@my-org/models``).
    * ``relative``: ``relative_path`` names the model directory relative to
      the working directory. When the run also knows its ``output_root``,
      the specifier is recomputed from the generated file's own directory;
      otherwise ``relative_path`` is used verbatim.
    """
    config = input.model_import
    if config is None:
        return DEFAULT_MODEL_IMPORT_BASE
    if config.import_type == ModelImportType.PACKAGE:
        return config.package_path or DEFAULT_MODEL_PACKAGE

    model_dir = (config.relative_path or "").strip()
    if not model_dir:
        return DEFAULT_MODEL_IMPORT_BASE
    model_dir = model_dir.replace("\\", "/")
    output_root = (input.output_root or "").strip().replace("\\", "/")
    if not output_root:
        return model_dir

    # Purely lexical; the filesystem is never consulted.
    generated = posixpath.normpath(posixpath.join(output_root, generated_file_path))
    generated_dir = posixpath.dirname(generated) or "."
    relative = posixpath.relpath(posixpath.normpath(model_dir), generated_dir)
    return _to_import_specifier(relative)


def _to_import_specifier(path: str) -> str:
    if path in ("", "."):
        return "./"
    if path.startswith("./") or path.startswith("../") or path == "..":
        return path
    return f"./{path}"
