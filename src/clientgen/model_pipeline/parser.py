"""Build the model IR from the named schemas of an OpenAPI document.

Every schema under ``components.schemas`` (or Swagger 2 ``definitions``)
becomes one :class:`~clientgen.models.ModelNode`, sorted by name:

* object schemas (``type: object`` or a ``properties`` map) become
  interfaces with properties sorted by name;
* string, integer and number schemas with an ``enum`` list become enums
  whose members are named ``Value1``, ``Value2``... by position;
* everything else becomes an alias of its :data:`~clientgen.models.ModelType`.

Nullability is resolved through ``$ref`` chains, OpenAPI 3.0 ``nullable``,
OpenAPI 3.1 ``type: [..., "null"]`` and composition variants of
``type: null``.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from clientgen.exceptions import SchemaShapeError, StructuralError
from clientgen.models import (
    AliasKind,
    ArrayType,
    BooleanType,
    EnumKind,
    InterfaceKind,
    LiteralType,
    ModelEnumMember,
    ModelIr,
    ModelLiteral,
    ModelNode,
    ModelProperty,
    ModelType,
    NumberType,
    ObjectType,
    RefType,
    StringType,
    UnionType,
)
from clientgen.parser.schema import get_schemas, ref_name, resolve_ref

_COMPOSITION_KEYS = ("allOf", "oneOf", "anyOf")
_NUMERIC_TYPES = ("integer", "number")
_KNOWN_TYPES = frozenset({"string", "integer", "number", "boolean", "object", "array", "null"})


def build_model_ir(document: dict[str, Any]) -> ModelIr:
    """Classify every named schema of *document*.

    Raises:
        SchemaShapeError: If a schema is not a mapping or declares an
            unknown ``type``.
    """
    schemas = get_schemas(document)
    return ModelIr(
        models=[_schema_to_node(name, schemas[name], document) for name in sorted(schemas)]
    )


def _schema_to_node(name: str, schema: Any, document: dict[str, Any]) -> ModelNode:
    if not isinstance(schema, dict):
        raise SchemaShapeError(f"Schema '{name}' is not an object")

    description = schema.get("description")
    schema_type = _single_type(schema, name)

    if "$ref" not in schema and not _has_composition(schema):
        if schema_type == "object" or (schema_type is None and "properties" in schema):
            return ModelNode(
                name=name,
                description=description,
                kind=InterfaceKind(properties=_properties(schema, document, name)),
            )
        if schema_type in ("string", *_NUMERIC_TYPES):
            values = _enum_values(schema)
            if values:
                literal_kind = "string" if schema_type == "string" else "number"
                return ModelNode(
                    name=name,
                    description=description,
                    kind=EnumKind(members=[
                        ModelEnumMember(
                            name=f"Value{index + 1}",
                            value=ModelLiteral(kind=literal_kind, value=_literal_text(value)),
                        )
                        for index, value in enumerate(values)
                    ]),
                )
            return ModelNode(
                name=name,
                description=description,
                kind=AliasKind(
                    target=StringType() if schema_type == "string" else NumberType(),
                    nullable=can_be_null(schema, document),
                ),
            )

    return ModelNode(
        name=name,
        description=description,
        kind=AliasKind(
            target=schema_to_model_type(schema, document, name),
            nullable=can_be_null(schema, document),
        ),
    )


def _properties(schema: dict[str, Any], document: dict[str, Any], owner: str) -> list[ModelProperty]:
    properties = schema.get("properties") or {}
    if not isinstance(properties, dict):
        raise SchemaShapeError(f"Schema '{owner}' has a non-object 'properties' value")
    required = set(schema.get("required") or [])

    result = []
    for key in sorted(properties):
        child = properties[key]
        if not isinstance(child, dict):
            raise SchemaShapeError(f"Property '{owner}.{key}' is not an object")
        result.append(ModelProperty(
            name=key,
            description=child.get("description"),
            required=key in required,
            nullable=can_be_null(child, document),
            type=schema_to_model_type(child, document, f"{owner}.{key}"),
        ))
    return result


def schema_to_model_type(schema: Any, document: dict[str, Any], where: str = "schema") -> ModelType:
    """Convert an (unnamed) schema into a :data:`ModelType` tree.

    Enum lists on primitive schemas become unions of literals; ``allOf``
    with a single member collapses to that member, with several to
    ``object``.

    Args:
        schema: The schema node.
        document: The document *schema* belongs to.
        where: Human-readable location used in error messages.

    Raises:
        SchemaShapeError: If *schema* is not a mapping or has an unknown type.
    """
    if not isinstance(schema, dict):
        raise SchemaShapeError(f"{where}: schema is not an object")

    if "$ref" in schema:
        return RefType(name=ref_name(schema["$ref"]))

    for key in ("oneOf", "anyOf"):
        if key in schema:
            variants = [
                schema_to_model_type(variant, document, where)
                for variant in schema[key] or []
                if not _is_null_schema(variant)
            ]
            return _union(variants)

    if "allOf" in schema:
        members = [m for m in schema["allOf"] or [] if not _is_null_schema(m)]
        if len(members) == 1:
            return schema_to_model_type(members[0], document, where)
        return ObjectType()

    raw_type = schema.get("type")
    if isinstance(raw_type, list):
        variants = [
            schema_to_model_type({**schema, "type": item}, document, where)
            for item in raw_type
            if item != "null"
        ]
        return _union(variants)

    schema_type = _single_type(schema, where)
    if schema_type == "string":
        values = _enum_values(schema)
        if values:
            return _literal_union("string", values)
        return StringType()
    if schema_type in _NUMERIC_TYPES:
        values = _enum_values(schema)
        if values:
            return _literal_union("number", values)
        return NumberType()
    if schema_type == "boolean":
        return BooleanType()
    if schema_type == "array":
        items = schema.get("items")
        if items is None:
            return ArrayType(item=ObjectType())
        return ArrayType(item=schema_to_model_type(items, document, f"{where}[]"))
    return ObjectType()


def can_be_null(schema: Any, document: dict[str, Any], _seen: Optional[set[str]] = None) -> bool:
    """Whether a value described by *schema* may be ``null``."""
    if not isinstance(schema, dict):
        return False

    ref = schema.get("$ref")
    if isinstance(ref, str):
        seen = _seen if _seen is not None else set()
        if ref in seen:
            return False
        seen.add(ref)
        try:
            target = resolve_ref(ref, document)
        except StructuralError:
            return False
        return can_be_null(target, document, seen)

    if schema.get("nullable") is True or _is_null_schema(schema):
        return True
    raw_type = schema.get("type")
    if isinstance(raw_type, list) and "null" in raw_type:
        return True
    for key in _COMPOSITION_KEYS:
        for variant in schema.get(key) or []:
            if can_be_null(variant, document, _seen):
                return True
    return False


# ------------------------------------------------------------------ #
# Internal helpers
# ------------------------------------------------------------------ #


def _single_type(schema: dict[str, Any], where: str) -> Optional[str]:
    """The schema's type when it names exactly one non-null type."""
    raw_type = schema.get("type")
    if raw_type is None:
        return None
    if isinstance(raw_type, list):
        for item in raw_type:
            _check_type(item, where)
        concrete = [item for item in raw_type if item != "null"]
        return concrete[0] if len(concrete) == 1 else None
    _check_type(raw_type, where)
    return raw_type


def _check_type(value: Any, where: str) -> None:
    if value not in _KNOWN_TYPES:
        raise SchemaShapeError(f"{where}: unsupported schema type {value!r}")


def _has_composition(schema: dict[str, Any]) -> bool:
    return any(key in schema for key in _COMPOSITION_KEYS)


def _is_null_schema(schema: Any) -> bool:
    return isinstance(schema, dict) and schema.get("type") == "null"


def _enum_values(schema: dict[str, Any]) -> list[Any]:
    values = schema.get("enum")
    if not isinstance(values, list):
        return []
    return [value for value in values if value is not None]


def _literal_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _literal_union(kind: str, values: list[Any]) -> UnionType:
    return UnionType(variants=[
        LiteralType(value=ModelLiteral(kind=kind, value=_literal_text(value))) for value in values
    ])


def _union(variants: list[ModelType]) -> ModelType:
    if len(variants) == 1:
        return variants[0]
    if not variants:
        return ObjectType()
    return UnionType(variants=variants)
