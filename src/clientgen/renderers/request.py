"""Request-building expressions shared by the code renderers.

Generated functions take a single ``input`` argument. When an endpoint has
exactly one input slot (one path field, one query field, or only a body),
``input`` *is* that value and its type is the slot's own type; with several
slots ``input`` is an object keyed by field name.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Optional

from clientgen.models import EndpointItem
from clientgen.renderers.type_utils import is_identifier_type, normalize_type_ref


def has_input(endpoint: EndpointItem) -> bool:
    return endpoint.input_type_name.strip() != "void"


def input_type_expression(endpoint: EndpointItem) -> str:
    """TypeScript type of the generated ``input`` argument."""
    return normalize_type_ref(endpoint.input_shape or endpoint.input_type_name)


def input_accessor(endpoint: EndpointItem, field: str, optional: bool = False) -> str:
    """Expression reading *field* from the generated ``input`` argument."""
    if endpoint.input_slots == 1:
        return "input"
    dot = "?." if optional else "."
    if is_identifier_type(field):
        return f"input{dot}{field}"
    bracket = "?.[" if optional else "["
    return f"input{bracket}{json.dumps(field)}]"


def url_expression(endpoint: EndpointItem, optional: bool = False) -> str:
    """The request path as a string literal, or a template literal when it has path fields.

    Example::

        "/pets"                      for /pets
        `/pets/${input}`             for /pets/{id} with one slot
        `/pets/${input.id}/toys`     for /pets/{id}/toys with several slots
    """
    if not endpoint.path_fields or not has_input(endpoint):
        return json.dumps(endpoint.path)
    path = endpoint.path.replace("`", "\\`")
    for field in endpoint.path_fields:
        path = path.replace(f"{{{field}}}", f"${{{input_accessor(endpoint, field, optional)}}}")
    return f"`{path}`"


def query_object(endpoint: EndpointItem, optional: bool = False) -> Optional[str]:
    """Object literal of the query fields, or ``None`` if there are none."""
    if not endpoint.query_fields or not has_input(endpoint):
        return None
    pairs = ", ".join(
        f"{_object_key(field)}: {input_accessor(endpoint, field, optional)}"
        for field in endpoint.query_fields
    )
    return f"{{ {pairs} }}"


def body_expression(endpoint: EndpointItem, optional: bool = False) -> Optional[str]:
    """Expression for the request body, or ``None`` if the endpoint has none."""
    if endpoint.request_body_field is None:
        return None
    if not has_input(endpoint):
        return "undefined"
    return input_accessor(endpoint, endpoint.request_body_field, optional)


def doc_comment_text(text: Optional[str]) -> str:
    """Single-line text safe to place inside ``/** ... */``."""
    if not text:
        return ""
    return " ".join(text.split()).replace("*/", "*\\/")


def _object_key(field: str) -> str:
    return field if is_identifier_type(field) else json.dumps(field)


def file_stems(endpoints: list[EndpointItem]) -> dict[tuple[str, str], str]:
    """File name stem per ``(method, path)``.

    The stem is the operation name, except where two endpoints of one
    namespace share an operation name (``GetMainAPIOrderAdd`` and
    ``PostMainAPIOrderAdd`` both become ``add``); those use their unique
    export name instead.
    """
    counts = Counter((tuple(e.namespace), e.operation_name) for e in endpoints)
    return {
        (e.method, e.path): (
            e.operation_name if counts[(tuple(e.namespace), e.operation_name)] == 1 else e.export_name
        )
        for e in endpoints
    }
