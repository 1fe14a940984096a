"""Tests for clientgen.parser.schema."""

from __future__ import annotations

import pytest

from clientgen.exceptions import StructuralError
from clientgen.parser.schema import (
    deref,
    get_schemas,
    pick_json_schema,
    resolve_ref,
    schema_to_ts,
)


class TestResolveRef:
    def test_resolves_internal_pointer(self) -> None:
        doc = {"components": {"schemas": {"Pet": {"type": "object"}}}}
        assert resolve_ref("#/components/schemas/Pet", doc) == {"type": "object"}

    def test_escaped_segments(self) -> None:
        doc = {"paths": {"/pets/{id}": {"get": {}}}}
        assert resolve_ref("#/paths/~1pets~1{id}/get", doc) == {}

    def test_external_ref_raises(self) -> None:
        with pytest.raises(StructuralError, match="External"):
            resolve_ref("other.json#/Pet", {})

    def test_deref_follows_chains(self) -> None:
        doc = {"components": {"schemas": {
            "A": {"$ref": "#/components/schemas/B"},
            "B": {"type": "string"},
        }}}
        assert deref({"$ref": "#/components/schemas/A"}, doc) == {"type": "string"}


class TestSchemaToTs:
    @pytest.mark.parametrize(
        ("schema", "expected"),
        [
            ({"type": "integer"}, "number"),
            ({"type": "string", "format": "date-time"}, "string"),
            ({"type": "boolean"}, "boolean"),
            ({"$ref": "#/components/schemas/Pet"}, "Pet"),
            ({"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}, "Pet[]"),
            ({"type": "array", "items": {"oneOf": [{"type": "string"}, {"type": "integer"}]}},
             "Array<string | number>"),
            ({"type": ["string", "null"]}, "string"),
            ({"type": "object", "additionalProperties": {"type": "integer"}}, "Record<string, number>"),
            ({"type": "object"}, "object"),
            ({}, "unknown"),
            (None, "unknown"),
        ],
    )
    def test_conversions(self, schema, expected: str) -> None:
        assert schema_to_ts(schema) == expected

    def test_inline_object(self) -> None:
        schema = {
            "type": "object",
            "required": ["id"],
            "properties": {"id": {"type": "integer"}, "tags": {"type": "array", "items": {"type": "string"}}},
        }
        assert schema_to_ts(schema) == "{ id: number; tags?: string[] }"

    def test_all_of(self) -> None:
        assert schema_to_ts({"allOf": [{"$ref": "#/x/A"}]}) == "A"
        assert schema_to_ts({"allOf": [{"$ref": "#/x/A"}, {"$ref": "#/x/B"}]}) == "A & B"


class TestHelpers:
    def test_get_schemas_openapi3(self) -> None:
        assert get_schemas({"components": {"schemas": {"A": {}}}}) == {"A": {}}

    def test_get_schemas_swagger2(self) -> None:
        assert get_schemas({"definitions": {"B": {}}}) == {"B": {}}

    def test_get_schemas_missing(self) -> None:
        assert get_schemas({}) == {}

    def test_pick_json_schema_prefers_json(self) -> None:
        content = {
            "text/plain": {"schema": {"type": "string"}},
            "application/json": {"schema": {"type": "integer"}},
        }
        assert pick_json_schema(content) == {"type": "integer"}

    def test_pick_json_schema_falls_back_to_first(self) -> None:
        assert pick_json_schema({"text/plain": {"schema": {"type": "string"}}}) == {"type": "string"}
        assert pick_json_schema(None) is None
