"""Tests for clientgen.enum_patch.detect."""

from __future__ import annotations

import pytest

from clientgen.enum_patch.detect import EnumEndpoint, detect_enum_endpoints, extract_enum_name


class TestExtractEnumName:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/MainAPI/Enums/GetAllOrderStatus", "OrderStatus"),
            ("/api/v2/Enums/GetAllRole/extra", "Role"),
            ("/MainAPI/Orders/GetAll", None),
            ("/MainAPI/Enums/GetAll", None),
        ],
    )
    def test_paths(self, path: str, expected: str | None) -> None:
        assert extract_enum_name(path) == expected


class TestDetectEnumEndpoints:
    def test_sample_document(self, sample_document) -> None:
        assert detect_enum_endpoints(sample_document) == [
            EnumEndpoint(enum_name="AssignmentStatus", path="/MainAPI/Enums/GetAllAssignmentStatus")
        ]

    def test_requires_named_schema(self) -> None:
        document = {
            "paths": {
                "/MainAPI/Enums/GetAllRole": {},
                "/MainAPI/Enums/GetAllGhost": {},
                "/MainAPI/Enums/GetAllColor": {},
            },
            "components": {"schemas": {"Role": {"type": "integer"}, "Color": {"type": "string"}}},
        }
        assert [e.enum_name for e in detect_enum_endpoints(document)] == ["Color", "Role"]

    def test_no_paths(self) -> None:
        assert detect_enum_endpoints({}) == []
