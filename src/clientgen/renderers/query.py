"""Query and mutation hook renderers for the React and Vue terminals.

Each query-capable endpoint gets ``{terminal}/{namespace}/{operation}.query.ts``
and each mutation-capable endpoint ``{terminal}/{namespace}/{operation}.mutation.ts``.
Both import the endpoint's request builder from the ``functions`` layout
(``spec/endpoints/...``), and plan that builder module too, so a hooks-only
run still produces compilable output. When the ``functions`` renderer runs
as well, both plan identical builder files and the pipeline keeps one.

The two terminals differ only in the hook-factory package and names; see
:class:`QueryTerminal`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from clientgen.models import EndpointItem, GeneratorInput, PlannedFile, RenderOutput
from clientgen.naming import to_pascal_case
from clientgen.pipeline.transform import META_SKIP_AUTH_REFRESH, meta_flag
from clientgen.renderers.base import Renderer
from clientgen.renderers.functions import (
    call_options_expression,
    render_spec_file,
    spec_file_path,
    unknown_type_warnings,
)
from clientgen.renderers.import_utils import (
    relative_import_path,
    resolve_client_import,
    resolve_model_import_base,
    should_use_package_import,
)
from clientgen.renderers.request import file_stems, has_input, input_type_expression
from clientgen.renderers.templating import create_environment
from clientgen.renderers.type_utils import normalize_type_ref, render_type_import_lines


@dataclass(frozen=True)
class QueryTerminal:
    """Names that vary between hook libraries."""

    directory: str
    package: str
    query_factory: str
    mutation_factory: str
    query_alias: str = "useAptxQuery"
    mutation_alias: str = "useAptxMutation"


REACT_TERMINAL = QueryTerminal(
    directory="react-query",
    package="@aptx/react-query",
    query_factory="createReactQueryHooks",
    mutation_factory="createReactMutationHooks",
)

VUE_TERMINAL = QueryTerminal(
    directory="vue-query",
    package="@aptx/vue-query",
    query_factory="createVueQueryHooks",
    mutation_factory="createVueMutationHooks",
)


def query_file_path(
    endpoint: EndpointItem, terminal: QueryTerminal, stem: Optional[str] = None
) -> str:
    return f"{terminal.directory}/{'/'.join(endpoint.namespace)}/{stem or endpoint.operation_name}.query.ts"


def mutation_file_path(
    endpoint: EndpointItem, terminal: QueryTerminal, stem: Optional[str] = None
) -> str:
    return f"{terminal.directory}/{'/'.join(endpoint.namespace)}/{stem or endpoint.operation_name}.mutation.ts"


def query_key_prefix(endpoint: EndpointItem) -> str:
    """Namespace segments followed by the operation name, as TS string literals."""
    return ", ".join(f'"{part}"' for part in [*endpoint.namespace, endpoint.operation_name])


class QueryHooksRenderer(Renderer):
    """Query/mutation hook files for one :class:`QueryTerminal`."""

    terminal: QueryTerminal

    def __init__(self) -> None:
        self._env = create_environment()

    def render(self, input: GeneratorInput) -> RenderOutput:
        use_package = should_use_package_import(input.model_import)
        client_imports, client_call = resolve_client_import(input.client_import)
        stems = file_stems(input.endpoints)
        files: list[PlannedFile] = []
        warnings: list[str] = []

        for endpoint in input.endpoints:
            if not (endpoint.supports_query or endpoint.supports_mutation):
                continue
            warnings.extend(unknown_type_warnings(endpoint))

            stem = stems[(endpoint.method, endpoint.path)]
            spec_path = spec_file_path(endpoint, stem)
            files.append(PlannedFile(
                path=spec_path,
                content=render_spec_file(
                    self._env, endpoint, resolve_model_import_base(input, spec_path), use_package
                ),
            ))

            for path, template, kind in self._hook_files(endpoint, stem):
                context = self._context(
                    endpoint, path, spec_path, resolve_model_import_base(input, path), use_package, kind
                )
                files.append(PlannedFile(
                    path=path,
                    content=self._env.get_template(template).render(
                        client_imports=client_imports, client_call=client_call, **context
                    ),
                ))

        return RenderOutput(files=files, warnings=warnings)

    def _hook_files(self, endpoint: EndpointItem, stem: str) -> list[tuple[str, str, str]]:
        result = []
        if endpoint.supports_query:
            result.append((query_file_path(endpoint, self.terminal, stem), "query.ts.j2", "Query"))
        if endpoint.supports_mutation:
            result.append((mutation_file_path(endpoint, self.terminal, stem), "mutation.ts.j2", "Mutation"))
        return result

    def _context(
        self,
        endpoint: EndpointItem,
        current_path: str,
        spec_path: str,
        model_import_base: str,
        use_package: bool,
        kind: str,
    ) -> dict:
        input_type = input_type_expression(endpoint)
        output_type = normalize_type_ref(endpoint.output_type_name)
        with_input = has_input(endpoint)
        referenced = [input_type, output_type] if with_input else [output_type]
        is_query = kind == "Query"

        return {
            "hook_factory": self.terminal.query_factory if is_query else self.terminal.mutation_factory,
            "hook_package": self.terminal.package,
            "hook_alias": self.terminal.query_alias if is_query else self.terminal.mutation_alias,
            "hook_name": f"use{to_pascal_case(endpoint.export_name)}{kind}",
            "builder": endpoint.builder_name,
            "spec_import": relative_import_path(current_path, spec_path),
            "type_imports": render_type_import_lines(referenced, model_import_base, use_package),
            "has_input": with_input,
            "input_type": input_type,
            "output_type": output_type,
            "definition": f"{endpoint.export_name}{kind}Def",
            "key_name": f"{endpoint.export_name}Key",
            "key_prefix": query_key_prefix(endpoint),
            "skip_auth_refresh": meta_flag(endpoint.meta, META_SKIP_AUTH_REFRESH),
            "options_expr": call_options_expression(endpoint),
        }


class ReactQueryRenderer(QueryHooksRenderer):
    id = "react-query"
    terminal = REACT_TERMINAL


class VueQueryRenderer(QueryHooksRenderer):
    id = "vue-query"
    terminal = VUE_TERMINAL
