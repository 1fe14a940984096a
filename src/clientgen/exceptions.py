"""Exception hierarchy for clientgen.

All exceptions inherit from :class:`ClientgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`clientgen.exit_codes`.
Pipeline stages raise these directly; the orchestrator lets the first one
propagate so that no later stage (in particular the writer) runs. The
top-level error handler in :func:`clientgen.app.main` catches
``ClientgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ClientgenError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- StructuralError       (exit 3)
    |   +-- MissingFieldError (exit 3)
    +-- ValidationError       (exit 4)
    +-- WriteError            (exit 5)
    +-- NetworkError          (exit 6)
    +-- FormatError           (exit 7)
    +-- SchemaShapeError      (exit 8)
    +-- DocumentLoadError     (exit 9)
    +-- RendererError         (exit 10)
    +-- ConfigError           (exit 1)
"""

from __future__ import annotations

from typing import Optional

from clientgen.exit_codes import (
    EXIT_DOCUMENT_LOAD_ERROR,
    EXIT_FORMAT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
    EXIT_RENDERER_ERROR,
    EXIT_SCHEMA_SHAPE_ERROR,
    EXIT_STRUCTURAL_ERROR,
    EXIT_VALIDATION_ERROR,
    EXIT_WRITE_ERROR,
)


class ClientgenError(Exception):
    """Base exception for all clientgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`clientgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ClientgenError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class StructuralError(ClientgenError):
    """Raised when a required section of the API document is absent."""

    exit_code = EXIT_STRUCTURAL_ERROR


class MissingFieldError(StructuralError):
    """Raised when the document lacks a field the parser cannot do without.

    Args:
        field: Dotted name of the missing field (e.g. ``"paths"``).
        message: Optional override for the generated message.
    """

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class ValidationError(ClientgenError):
    """Raised for invalid IR state or unknown option strings (style, policy, mode)."""

    exit_code = EXIT_VALIDATION_ERROR


class WriteError(ClientgenError):
    """Raised when a file cannot be read or written.

    Args:
        path: The filesystem path involved in the failed operation.
        message: Description of the failure.
    """

    exit_code = EXIT_WRITE_ERROR

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class NetworkError(ClientgenError):
    """Raised when an HTTP fetch exhausts its retry budget.

    Only the final attempt's error is surfaced, wrapped with the URL.
    """

    exit_code = EXIT_NETWORK_ERROR

    def __init__(self, url: str, message: str):
        super().__init__(f"failed to fetch enum values from {url}: {message}")
        self.url = url


class FormatError(ClientgenError):
    """Raised when the external source formatter fails on generated text."""

    exit_code = EXIT_FORMAT_ERROR


class SchemaShapeError(ClientgenError):
    """Raised when the model parser meets a schema variant it does not recognise."""

    exit_code = EXIT_SCHEMA_SHAPE_ERROR


class DocumentLoadError(ClientgenError):
    """Raised when the API document cannot be fetched, read, or decoded."""

    exit_code = EXIT_DOCUMENT_LOAD_ERROR


class RendererError(ClientgenError):
    """Raised when a renderer is unknown, fails to load, or fails to render."""

    exit_code = EXIT_RENDERER_ERROR


class ConfigError(ClientgenError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
