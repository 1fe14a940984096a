"""The ``functions`` renderer: request builders plus typed call functions.

For every endpoint two files are planned:

* ``spec/endpoints/{namespace}/{operation}.ts`` exports the request builder
  ``build{Export}Spec(input)``, which returns the plain request description
  ``{ method, path, query, body }``.
* ``functions/api/{namespace}/{operation}.ts`` exports ``{export}(input,
  options?)``, which hands the builder's result to the API client's
  ``execute`` and returns its promise.
"""

from __future__ import annotations

from typing import Optional

from jinja2 import Environment

from clientgen.models import EndpointItem, GeneratorInput, PlannedFile, RenderOutput
from clientgen.pipeline.transform import META_SKIP_AUTH_REFRESH, meta_flag
from clientgen.renderers.base import Renderer
from clientgen.renderers.import_utils import (
    relative_import_path,
    resolve_client_import,
    resolve_model_import_base,
    should_use_package_import,
)
from clientgen.renderers.request import (
    body_expression,
    doc_comment_text,
    file_stems,
    has_input,
    input_type_expression,
    query_object,
    url_expression,
)
from clientgen.renderers.templating import create_environment
from clientgen.renderers.type_utils import normalize_type_ref, render_type_import_lines


def spec_file_path(endpoint: EndpointItem, stem: Optional[str] = None) -> str:
    return f"spec/endpoints/{'/'.join(endpoint.namespace)}/{stem or endpoint.operation_name}.ts"


def function_file_path(endpoint: EndpointItem, stem: Optional[str] = None) -> str:
    return f"functions/api/{'/'.join(endpoint.namespace)}/{stem or endpoint.operation_name}.ts"


def call_options_expression(endpoint: EndpointItem) -> str:
    """The per-call options argument passed to ``execute``."""
    if meta_flag(endpoint.meta, META_SKIP_AUTH_REFRESH):
        return "{ ...options, skipAuthRefresh: true }"
    return "options"


def unknown_type_warnings(endpoint: EndpointItem) -> list[str]:
    """Warnings for input/output types that had to be replaced by ``unknown``."""
    warnings = []
    for label, raw in (
        ("input", endpoint.input_shape or endpoint.input_type_name),
        ("output", endpoint.output_type_name),
    ):
        if raw.strip() and raw.strip() != "unknown" and normalize_type_ref(raw) == "unknown":
            warnings.append(
                f"{endpoint.method} {endpoint.path}: {label} type '{raw}' is not a valid "
                "TypeScript type, using 'unknown'"
            )
    return warnings


def render_spec_file(
    env: Environment,
    endpoint: EndpointItem,
    model_import_base: str,
    use_package: bool,
) -> str:
    """Render the request-builder module of *endpoint*."""
    input_type = input_type_expression(endpoint)
    with_input = has_input(endpoint)
    return env.get_template("spec_builder.ts.j2").render(
        type_imports=render_type_import_lines(
            [input_type] if with_input else [], model_import_base, use_package
        ),
        builder=endpoint.builder_name,
        signature=f"input: {input_type}" if with_input else "",
        method=endpoint.method,
        url=url_expression(endpoint),
        query=query_object(endpoint),
        body=body_expression(endpoint) if with_input else None,
    )


class FunctionsRenderer(Renderer):
    """Spec-builder and call-function pairs for ``@aptx/api-client``."""

    id = "functions"

    def __init__(self) -> None:
        self._env = create_environment()

    def render(self, input: GeneratorInput) -> RenderOutput:
        use_package = should_use_package_import(input.model_import)
        client_imports, client_call = resolve_client_import(input.client_import)
        stems = file_stems(input.endpoints)
        files: list[PlannedFile] = []
        warnings: list[str] = []

        for endpoint in input.endpoints:
            warnings.extend(unknown_type_warnings(endpoint))
            stem = stems[(endpoint.method, endpoint.path)]
            spec_path = spec_file_path(endpoint, stem)
            function_path = function_file_path(endpoint, stem)

            files.append(PlannedFile(
                path=spec_path,
                content=render_spec_file(
                    self._env,
                    endpoint,
                    resolve_model_import_base(input, spec_path),
                    use_package,
                ),
            ))
            files.append(PlannedFile(
                path=function_path,
                content=self._render_function_file(
                    endpoint,
                    function_path,
                    spec_path,
                    resolve_model_import_base(input, function_path),
                    use_package,
                    client_imports,
                    client_call,
                ),
            ))

        return RenderOutput(files=files, warnings=warnings)

    def _render_function_file(
        self,
        endpoint: EndpointItem,
        current_path: str,
        spec_path: str,
        model_import_base: str,
        use_package: bool,
        client_imports: list[str],
        client_call: str,
    ) -> str:
        input_type = input_type_expression(endpoint)
        output_type = normalize_type_ref(endpoint.output_type_name)
        with_input = has_input(endpoint)
        referenced = [input_type, output_type] if with_input else [output_type]

        return self._env.get_template("function.ts.j2").render(
            client_imports=client_imports,
            builder=endpoint.builder_name,
            spec_import=relative_import_path(current_path, spec_path),
            type_imports=render_type_import_lines(referenced, model_import_base, use_package),
            summary=doc_comment_text(endpoint.summary),
            deprecated=endpoint.deprecated,
            export_name=endpoint.export_name,
            has_input=with_input,
            input_type=input_type,
            output_type=output_type,
            client_call=client_call,
            options_expr=call_options_expression(endpoint),
        )
