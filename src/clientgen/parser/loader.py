"""Load OpenAPI documents from a URL, local file, or stdin.

This module is the I/O edge of the parser package: it fetches the raw text,
decodes JSON or YAML into a plain ``dict`` and performs the minimal shape
check every later stage relies on (the top level is a mapping). It does not
validate the document against the OpenAPI schema; the endpoint and model
parsers read only the fields they need and raise their own errors when a
required section is missing.

* :func:`load_document` -- Load and decode a document from any source.
* :func:`load_json_file` -- Read a JSON file (enum patches, enum plans),
  accepting either an object or an array at the top level.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from clientgen.exceptions import DocumentLoadError

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_document(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The decoded document.

    Raises:
        DocumentLoadError: If the source cannot be read or decoded.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def load_json_file(path: str | Path) -> Any:
    """Read and decode a JSON file.

    Raises:
        DocumentLoadError: If the file is missing or is not valid JSON.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"File not found: {file_path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentLoadError(f"Invalid JSON in {file_path}: {exc}") from exc


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP(S), using the content type as a format hint."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    hint = _content_type_hint(response.headers.get("content-type", ""))
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from disk, using the extension as a format hint."""
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"Document is empty: {path}")

    return _parse_content(content, hint=_SUFFIX_HINTS.get(file_path.suffix.lower(), ""))


def _content_type_hint(content_type: str) -> str:
    if "json" in content_type:
        return "json"
    if "yaml" in content_type or "yml" in content_type:
        return "yaml"
    return ""


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* as JSON or YAML.

    JSON is tried first unless the hint says YAML; an explicit JSON hint
    disables the YAML fallback.

    Raises:
        DocumentLoadError: If neither format decodes to a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
            json_error = exc
        else:
            return _ensure_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DocumentLoadError(msg) from exc

    return _ensure_mapping(result)


def _ensure_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"Document must be a JSON/YAML object (got {kind})")
    return result
