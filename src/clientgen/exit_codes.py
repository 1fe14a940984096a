"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~clientgen.exceptions.ClientgenError` subclass.
CI scripts can inspect the exit code to tell a broken document apart from
a failed write or an unreachable enum backend without parsing stderr.

Example::

    $ clientgen codegen run --input broken.json --output out
    $ echo $?
    3   # EXIT_STRUCTURAL_ERROR -- the document declares no operations
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_STRUCTURAL_ERROR = 3
"""A required section of the API document is absent."""

EXIT_VALIDATION_ERROR = 4
"""The IR or an option value failed validation."""

EXIT_WRITE_ERROR = 5
"""A generated file could not be read or written."""

EXIT_NETWORK_ERROR = 6
"""A remote endpoint could not be reached within the retry budget."""

EXIT_FORMAT_ERROR = 7
"""The external source formatter rejected generated text."""

EXIT_SCHEMA_SHAPE_ERROR = 8
"""A schema uses a shape the model parser does not recognise."""

EXIT_DOCUMENT_LOAD_ERROR = 9
"""The API document could not be loaded or decoded."""

EXIT_RENDERER_ERROR = 10
"""A renderer failed to load or to render its output."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C (128 + SIGINT)."""
