"""API document parsing -- load documents and extract the endpoint IR.

This sub-package is the first stage of the codegen pipeline: turning a raw
OpenAPI document (JSON or YAML, local file or remote URL) into a
:class:`~clientgen.models.GeneratorInput` that transform passes and
renderers consume.

Typical usage::

    from clientgen.parser import OpenApiParser, load_document

    document = load_document("openapi.yaml")
    ir = OpenApiParser().parse(document)

Sub-modules:

* :mod:`~clientgen.parser.loader` -- I/O layer (URL, file, stdin) plus
  JSON/YAML decoding.
* :mod:`~clientgen.parser.schema` -- ``$ref`` lookup and schema to
  TypeScript type-expression conversion.
* :mod:`~clientgen.parser.endpoints` -- :class:`OpenApiParser` and the
  export-name assignment.
"""

from clientgen.parser.endpoints import OpenApiParser, Parser
from clientgen.parser.loader import load_document, load_json_file

__all__ = ["OpenApiParser", "Parser", "load_document", "load_json_file"]
