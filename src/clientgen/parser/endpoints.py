"""Extract the endpoint IR from a decoded OpenAPI document.

:class:`OpenApiParser` walks ``paths`` in sorted order and, per path, the
methods GET, POST, PUT, PATCH and DELETE in that order, producing one
:class:`~clientgen.models.EndpointItem` per declared operation. The result
is a :class:`~clientgen.models.GeneratorInput` that knows nothing about any
particular output dialect: parameters are recorded as field-name lists, and
only the input/output type *names* are resolved here.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they
share the same ``name`` and ``in`` values.

After extraction every endpoint gets a unique ``export_name`` (the name of
the generated function) and ``builder_name`` (the name of its request
builder). Collisions are resolved by widening the controller prefix, then
adding the method, then the path fields, then a serial suffix.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from clientgen.exceptions import MissingFieldError
from clientgen.models import EndpointItem, GeneratorInput, HTTPMethod, ProjectContext
from clientgen.naming import split_words, to_camel_case, to_kebab_case, to_pascal_case
from clientgen.parser.schema import deref, pick_json_schema, schema_to_ts

_RESERVED_WORDS = frozenset({
    "delete", "default", "class", "function", "new", "return",
    "switch", "case", "var", "let", "const", "import",
})

_SUCCESS_STATUSES = ("200", "201", "default")

_MEMBER_KEY_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class Parser(ABC):
    """Turns a decoded API document into a :class:`GeneratorInput`."""

    @abstractmethod
    def parse(self, document: dict[str, Any]) -> GeneratorInput:
        """Build the IR.

        Raises:
            StructuralError: If a required document section is absent.
        """


class OpenApiParser(Parser):
    """Parser for OpenAPI 3.x documents (Swagger 2 ``definitions`` tolerated)."""

    def parse(self, document: dict[str, Any]) -> GeneratorInput:
        """Extract every operation of *document* into a :class:`GeneratorInput`.

        Args:
            document: The decoded OpenAPI document.

        Returns:
            The IR with endpoints in extraction order and unique export names.

        Raises:
            MissingFieldError: If the document has no ``paths`` or declares
                no operations at all.

        Example::

            document = load_document("openapi.yaml")
            ir = OpenApiParser().parse(document)
            for endpoint in ir.endpoints:
                print(endpoint.method, endpoint.path, endpoint.export_name)
        """
        paths = document.get("paths")
        if not isinstance(paths, dict):
            raise MissingFieldError("paths")

        endpoints: list[EndpointItem] = []
        for path in sorted(paths):
            path_item = deref(paths[path], document)
            if not isinstance(path_item, dict):
                continue
            for method, operation in _collect_operations(path_item):
                endpoints.append(
                    _build_endpoint(path, method, path_item, operation, document)
                )

        if not endpoints:
            raise MissingFieldError("paths", "Document declares no operations")

        apply_endpoint_names(endpoints)

        info = document.get("info") or {}
        return GeneratorInput(
            project=ProjectContext(package_name=info.get("title") or "generated"),
            endpoints=endpoints,
        )


def _collect_operations(path_item: dict[str, Any]) -> list[tuple[str, dict[str, Any]]]:
    result = []
    for method in HTTPMethod:
        operation = path_item.get(method.value.lower())
        if isinstance(operation, dict):
            result.append((method.value, operation))
    return result


def _build_endpoint(
    path: str,
    method: str,
    path_item: dict[str, Any],
    operation: dict[str, Any],
    document: dict[str, Any],
) -> EndpointItem:
    namespace = _namespace_from_tags(operation.get("tags"))
    parameters = _merge_parameters(
        path_item.get("parameters") or [],
        operation.get("parameters") or [],
        document,
    )
    path_params = [p for p in parameters if p.get("in") == "path"]
    query_params = [p for p in parameters if p.get("in") == "query"]

    body_schema = _request_body_schema(operation.get("requestBody"), document)
    has_body = operation.get("requestBody") is not None

    func_name = operation.get("operationId") or _fallback_func_name(method, path)
    operation_name = derive_operation_name(func_name, method, namespace)

    input_shape = None
    inputs: list[str] = [schema_to_ts(_param_schema(p)) for p in path_params + query_params]
    if has_body:
        inputs.append(schema_to_ts(body_schema))

    if not inputs:
        input_type_name = "void"
    elif len(inputs) == 1:
        input_type_name = inputs[0]
    else:
        input_type_name = f"{to_pascal_case(operation_name)}Input"
        input_shape = _input_shape(path_params, query_params, inputs[-1] if has_body else None)

    return EndpointItem(
        namespace=namespace,
        operation_name=operation_name,
        summary=operation.get("summary"),
        method=method,
        path=path,
        input_type_name=input_type_name,
        input_shape=input_shape,
        output_type_name=_response_type(operation.get("responses"), document),
        request_body_field="body" if has_body else None,
        query_fields=[p["name"] for p in query_params],
        path_fields=[p["name"] for p in path_params],
        has_request_options=True,
        supports_query=method == HTTPMethod.GET.value,
        supports_mutation=method != HTTPMethod.GET.value,
        deprecated=bool(operation.get("deprecated", False)),
    )


def _input_shape(
    path_params: list[dict[str, Any]],
    query_params: list[dict[str, Any]],
    body_type: Optional[str],
) -> str:
    """Inline object type of a multi-slot input, e.g. ``{ id: number; page?: number; body: Order }``.

    Path fields and the body are required; query fields only when declared so.
    """
    members = [f"{_member_key(p['name'])}: {schema_to_ts(_param_schema(p))}" for p in path_params]
    for p in query_params:
        mark = "" if p.get("required") else "?"
        members.append(f"{_member_key(p['name'])}{mark}: {schema_to_ts(_param_schema(p))}")
    if body_type is not None:
        members.append(f"body: {body_type}")
    return "{ " + "; ".join(members) + " }"


def _member_key(name: str) -> str:
    return name if _MEMBER_KEY_RE.match(name) else json.dumps(name)


def _namespace_from_tags(tags: Any) -> list[str]:
    if not tags:
        return ["default"]
    segments = [to_kebab_case(segment) for segment in str(tags[0]).split("/") if segment.strip()]
    segments = [segment for segment in segments if segment]
    return segments or ["default"]


def _merge_parameters(
    path_params: list[Any],
    op_params: list[Any],
    document: dict[str, Any],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters keyed on ``(name, in)``.

    Order is path-level first, with operation-level overrides replacing
    their counterpart in place and new operation parameters appended.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in list(path_params) + list(op_params):
        param = deref(raw, document)
        if not isinstance(param, dict) or "name" not in param:
            continue
        merged[(param["name"], param.get("in", ""))] = param
    return list(merged.values())


def _param_schema(param: dict[str, Any]) -> dict[str, Any]:
    schema = param.get("schema")
    if isinstance(schema, dict):
        return schema
    # Swagger 2 puts the type on the parameter itself.
    return {key: param[key] for key in ("type", "items", "enum") if key in param}


def _request_body_schema(request_body: Any, document: dict[str, Any]) -> Optional[dict[str, Any]]:
    body = deref(request_body, document)
    if not isinstance(body, dict):
        return None
    return pick_json_schema(body.get("content"))


def _response_type(responses: Any, document: dict[str, Any]) -> str:
    if not isinstance(responses, dict):
        return "void"
    for status in _SUCCESS_STATUSES:
        response = deref(responses.get(status), document)
        if not isinstance(response, dict):
            continue
        schema = pick_json_schema(response.get("content"))
        if schema is None:
            schema = response.get("schema")
        return schema_to_ts(schema) if schema else "void"
    return "void"


def _fallback_func_name(method: str, path: str) -> str:
    words = [w for segment in path.split("/") if not segment.startswith("{") for w in split_words(segment)]
    return to_camel_case(" ".join([method.lower(), *words]))


def derive_operation_name(func_name: str, method: str, namespace: list[str]) -> str:
    """Strip a ``{Method}MainAPI{Namespace}`` prefix from *func_name* and camelCase it.

    Example::

        >>> derive_operation_name("PostMainAPIAssignmentAdd", "POST", ["assignment"])
        'add'
        >>> derive_operation_name("listPets", "GET", ["pets"])
        'listPets'
    """
    namespace_prefix = "".join(to_pascal_case(segment) for segment in namespace)
    full_prefix = f"{to_pascal_case(method.lower())}MainAPI{namespace_prefix}"

    short_name = func_name
    if namespace_prefix and func_name.startswith(full_prefix):
        short_name = func_name[len(full_prefix):]

    if not short_name.strip():
        return to_camel_case(func_name)
    return to_camel_case(short_name)


# ------------------------------------------------------------------ #
# Export / builder names
# ------------------------------------------------------------------ #


def apply_endpoint_names(endpoints: list[EndpointItem]) -> None:
    """Assign unique ``export_name`` and ``builder_name`` values in place.

    Candidates, tried in order until one is unused:

    1. last namespace segment + action (``assignmentAdd``)
    2. last two namespace segments + action (``mainAssignmentAdd``)
    3. candidate 2 + method (``mainAssignmentAddPost``)
    4. previous candidate + ``By{PathFields}`` when the endpoint has path fields
    5. previous candidate + ``_2``, ``_3``, ...
    """
    used: set[str] = set()

    for endpoint in endpoints:
        action = to_pascal_case(_normalize_identifier(to_camel_case(endpoint.operation_name)))

        candidate = _sanitize(f"{_controller_prefix(endpoint.namespace, 1)}{action}")
        if candidate in used:
            candidate = _sanitize(f"{_controller_prefix(endpoint.namespace, 2)}{action}")
        if candidate in used:
            candidate = _sanitize(
                f"{_controller_prefix(endpoint.namespace, 2)}{action}"
                f"{to_pascal_case(endpoint.method.lower())}"
            )
        if candidate in used and endpoint.path_fields:
            by_suffix = "".join(to_pascal_case(field) for field in endpoint.path_fields)
            candidate = _sanitize(f"{candidate}By{by_suffix}")
        if candidate in used:
            serial = 2
            while f"{candidate}_{serial}" in used:
                serial += 1
            candidate = f"{candidate}_{serial}"

        used.add(candidate)
        endpoint.export_name = candidate
        endpoint.builder_name = f"build{to_pascal_case(candidate)}Spec"


def _controller_prefix(namespace: list[str], take_last: int) -> str:
    raw = "-".join(namespace[-take_last:])
    prefix = _normalize_identifier(to_camel_case(raw))
    return prefix or "default"


def _normalize_identifier(value: str) -> str:
    if not value.strip():
        return "op"
    if value[0].isdigit():
        return f"op{to_pascal_case(value)}"
    return value


def _sanitize(value: str) -> str:
    value = _normalize_identifier(value)
    if value in _RESERVED_WORDS:
        return f"do{to_pascal_case(value)}"
    return value
