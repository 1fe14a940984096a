"""clientgen -- Generate typed TypeScript API clients from OpenAPI documents.

This package turns an OpenAPI 3.x document into a tree of generated client
source files: request builders, typed async functions, query/mutation hooks
for React and Vue, grouped service classes, and model type declarations.

Typical workflow::

    clientgen codegen run --input openapi.json --output src/api \\
        --renderer functions --renderer react-query --barrel functions
    clientgen model gen --input openapi.json --output src/models --style module

The heavy lifting happens in a staged pipeline (parse, transform, render,
layout, format, write) whose output is deterministic and written
idempotently, so regenerating from an unchanged document leaves the tree
untouched.

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic IR models shared across the pipeline.
    config: Project configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
