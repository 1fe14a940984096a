"""Schema lookup and TypeScript type-expression helpers for the endpoint parser.

The endpoint parser never inlines referenced schemas: a ``$ref`` becomes the
referenced type's name so generated code imports it from the model tree.
Only parameter objects, request bodies and responses are dereferenced, since
their shape (not their name) is what the parser reads.
"""

from __future__ import annotations

from typing import Any, Optional

from clientgen.exceptions import StructuralError

_JSON_CONTENT_TYPES = ("application/json", "text/json", "*/*")


def resolve_ref(ref: str, document: dict[str, Any]) -> Any:
    """Resolve an internal JSON Pointer such as ``#/components/schemas/Pet``.

    Handles RFC 6901 escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Raises:
        StructuralError: If the reference is external or points nowhere.
    """
    if not ref.startswith("#/"):
        raise StructuralError(f"External $ref not supported: {ref}")

    current: Any = document
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            raise StructuralError(f"Cannot resolve $ref '{ref}': '{segment}' not found")
    return current


def deref(node: Any, document: dict[str, Any], _depth: int = 0) -> Any:
    """Follow ``$ref`` chains on *node* until a non-reference value is reached."""
    while isinstance(node, dict) and "$ref" in node and _depth < 32:
        node = resolve_ref(node["$ref"], document)
        _depth += 1
    return node


def ref_name(ref: str) -> str:
    """Return the last pointer segment of a ``$ref`` (the referenced type name)."""
    return ref.rsplit("/", 1)[-1]


def get_schemas(document: dict[str, Any]) -> dict[str, Any]:
    """Return ``components.schemas`` (OpenAPI 3) or ``definitions`` (Swagger 2)."""
    components = document.get("components") or {}
    schemas = components.get("schemas")
    if schemas is None:
        schemas = document.get("definitions")
    return schemas or {}


def schema_to_ts(schema: Any) -> str:
    """Render a JSON schema as a TypeScript type expression.

    Example::

        >>> schema_to_ts({"type": "array", "items": {"$ref": "#/components/schemas/Pet"}})
        'Pet[]'
        >>> schema_to_ts({"type": "integer"})
        'number'
    """
    if not isinstance(schema, dict) or not schema:
        return "unknown"

    if "$ref" in schema:
        return ref_name(schema["$ref"])

    for key in ("oneOf", "anyOf"):
        if key in schema:
            variants = _dedupe(schema_to_ts(item) for item in schema[key])
            return " | ".join(variants) if variants else "unknown"

    if "allOf" in schema:
        parts = _dedupe(schema_to_ts(item) for item in schema["allOf"])
        if not parts:
            return "unknown"
        return parts[0] if len(parts) == 1 else " & ".join(parts)

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        variants = [t for t in schema_type if t != "null"]
        schema_type = variants[0] if len(variants) == 1 else None

    if schema_type in ("integer", "number"):
        return "number"
    if schema_type == "string":
        return "string"
    if schema_type == "boolean":
        return "boolean"
    if schema_type == "array" or "items" in schema:
        item = schema_to_ts(schema.get("items"))
        if item.replace("_", "").isalnum():
            return f"{item}[]"
        return f"Array<{item}>"
    if schema_type == "object" or "properties" in schema:
        return _object_to_ts(schema)
    return "unknown"


def _object_to_ts(schema: dict[str, Any]) -> str:
    properties = schema.get("properties") or {}
    if not properties:
        extra = schema.get("additionalProperties")
        if isinstance(extra, dict):
            return f"Record<string, {schema_to_ts(extra)}>"
        return "object"
    required = set(schema.get("required") or [])
    fields = [
        f"{name}{':' if name in required else '?:'} {schema_to_ts(prop)}"
        for name, prop in properties.items()
    ]
    return "{ " + "; ".join(fields) + " }"


def _dedupe(items) -> list[str]:  # noqa: ANN001
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)


def pick_json_schema(content: Any) -> Optional[dict[str, Any]]:
    """Pick the schema of the preferred media type from a ``content`` map."""
    if not isinstance(content, dict) or not content:
        return None
    for media_type in _JSON_CONTENT_TYPES:
        if media_type in content:
            return (content[media_type] or {}).get("schema")
    first = next(iter(content.values())) or {}
    return first.get("schema")
