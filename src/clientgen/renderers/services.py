"""Service renderers: axios-ts, uniapp and axios-js.

The class-based renderers group endpoints by their first namespace segment
and emit one ``{Group}Service.ts`` per group, in sorted group order, each a
tsyringe ``@singleton()`` extending the project's hand-written
``BaseService``. Within a class one method is generated per endpoint, named
after the operation in PascalCase (suffixed ``2``, ``3``... on collisions).

Call conventions:

* ``axios-ts`` mirrors axios' positional signatures. ``post``, ``put`` and
  ``patch`` take ``(url, body, config)``, so a query-only call passes
  ``null`` as the body placeholder; other methods take ``(url, config)``.
* ``uniapp`` always passes ``(url[, body][, config])`` and never a ``null``
  placeholder.
* ``axios-js`` emits a single ``index.js`` of plain functions calling
  ``axios.request({ url, method, data, params })``.
"""

from __future__ import annotations

from abc import abstractmethod
from collections import defaultdict
from typing import Optional

from clientgen.models import EndpointItem, GeneratorInput, PlannedFile, RenderOutput
from clientgen.naming import to_pascal_case, unique_name
from clientgen.renderers.base import Renderer
from clientgen.renderers.import_utils import resolve_model_import_base, should_use_package_import
from clientgen.renderers.request import (
    body_expression,
    doc_comment_text,
    has_input,
    input_type_expression,
    query_object,
    url_expression,
)
from clientgen.renderers.templating import create_environment
from clientgen.renderers.type_utils import normalize_type_ref, render_type_import_lines

_SERVICE_HEADER = [
    'import { singleton } from "tsyringe";',
    'import { BaseService } from "./BaseService";',
]

_BODY_METHODS = ("post", "put", "patch")


def group_endpoints(endpoints: list[EndpointItem]) -> dict[str, list[EndpointItem]]:
    """Endpoints keyed by first namespace segment, groups in sorted order."""
    grouped: dict[str, list[EndpointItem]] = defaultdict(list)
    for endpoint in endpoints:
        grouped[endpoint.namespace[0] if endpoint.namespace else "default"].append(endpoint)
    return {group: grouped[group] for group in sorted(grouped)}


def service_class_name(group: str) -> str:
    return f"{to_pascal_case(group) or 'Default'}Service"


class ServiceClassRenderer(Renderer):
    """Shared driver for the class-per-group renderers."""

    output_slot = "service-classes"

    def __init__(self) -> None:
        self._env = create_environment()

    def render(self, input: GeneratorInput) -> RenderOutput:
        use_package = should_use_package_import(input.model_import)
        files = []
        for group, endpoints in group_endpoints(input.endpoints).items():
            class_name = service_class_name(group)
            path = f"{class_name}.ts"
            files.append(PlannedFile(
                path=path,
                content=self._render_class(
                    class_name, endpoints, resolve_model_import_base(input, path), use_package
                ),
            ))
        return RenderOutput(files=files)

    def _render_class(
        self,
        class_name: str,
        endpoints: list[EndpointItem],
        model_import_base: str,
        use_package: bool,
    ) -> str:
        used: set[str] = set()
        methods = []
        referenced: list[str] = []

        for endpoint in endpoints:
            input_type = input_type_expression(endpoint)
            output_type = normalize_type_ref(endpoint.output_type_name)
            with_input = has_input(endpoint)
            if with_input:
                referenced.append(input_type)
            referenced.append(output_type)

            methods.append({
                "summary": doc_comment_text(endpoint.summary),
                "name": unique_name(to_pascal_case(endpoint.operation_name) or "Call", used),
                "signature": f"input: {input_type}" if with_input else "",
                "call": self.build_call(endpoint, output_type),
            })

        return self._env.get_template("service_class.ts.j2").render(
            header_imports=_SERVICE_HEADER,
            type_imports=render_type_import_lines(referenced, model_import_base, use_package),
            class_name=class_name,
            methods=methods,
        )

    @abstractmethod
    def build_call(self, endpoint: EndpointItem, output_type: str) -> str:
        """The `return` expression of the method generated for *endpoint*."""


class AxiosTsRenderer(ServiceClassRenderer):
    id = "axios-ts"

    def build_call(self, endpoint: EndpointItem, output_type: str) -> str:
        method = endpoint.method.lower()
        target = f"this.{method}<{output_type}>"
        url = url_expression(endpoint)
        body = body_expression(endpoint)
        config = _params_config(query_object(endpoint))

        if method in _BODY_METHODS:
            if config is not None:
                return f"{target}({url}, {body or 'null'}, {config})"
            if body is not None:
                return f"{target}({url}, {body})"
            return f"{target}({url})"

        if config is not None:
            return f"{target}({url}, {config})"
        return f"{target}({url})"


class UniAppRenderer(ServiceClassRenderer):
    id = "uniapp"

    def build_call(self, endpoint: EndpointItem, output_type: str) -> str:
        args = [url_expression(endpoint)]
        body = body_expression(endpoint)
        if body is not None:
            args.append(body)
        config = _params_config(query_object(endpoint))
        if config is not None:
            args.append(config)
        return f"this.{endpoint.method.lower()}<{output_type}>({', '.join(args)})"


class AxiosJsRenderer(Renderer):
    """Plain ``axios.request`` functions in a single ``index.js``."""

    id = "axios-js"

    def __init__(self) -> None:
        self._env = create_environment()

    def render(self, input: GeneratorInput) -> RenderOutput:
        functions = []
        for endpoint in input.endpoints:
            config = [
                f"url: {url_expression(endpoint, optional=True)}",
                f'method: "{endpoint.method.lower()}"',
            ]
            body = body_expression(endpoint, optional=True)
            if body is not None:
                config.append(f"data: {body}")
            query = query_object(endpoint, optional=True)
            if query is not None:
                config.append(f"params: {query}")

            functions.append({
                "summary": doc_comment_text(endpoint.summary),
                "name": endpoint.export_name,
                "signature": "input" if has_input(endpoint) else "",
                "config": config,
            })

        content = self._env.get_template("axios_functions.js.j2").render(functions=functions)
        return RenderOutput(files=[PlannedFile(path="index.js", content=content)])


def _params_config(query: Optional[str]) -> Optional[str]:
    if query is None:
        return None
    return f"{{ params: {query} }}"
