"""Tests for clientgen.model_pipeline.enum_plan."""

from __future__ import annotations

from pathlib import Path

import pytest

from clientgen.model_pipeline.enum_plan import (
    ExistingEnumMember,
    build_model_enum_plan,
    default_member_name,
    is_auto_generated,
    load_existing_enums,
    parse_enum_source,
)
from clientgen.model_pipeline.parser import build_model_ir
from clientgen.model_pipeline.renderer import render_model_files
from clientgen.models import ModelRenderStyle


class TestDefaultMemberName:
    @pytest.mark.parametrize(
        ("value", "index", "expected"),
        [
            ("in-progress", 1, "InProgress"),
            ("1", 2, "Value1"),
            ("--", 3, "Value3"),
            ("ACTIVE", 1, "Active"),
        ],
    )
    def test_names(self, value: str, index: int, expected: str) -> None:
        assert default_member_name(value, index) == expected


class TestIsAutoGenerated:
    def test_positional_names(self) -> None:
        assert is_auto_generated("Value1", "0", 0)
        assert is_auto_generated("Value7", "0", 0)

    def test_value_derived_name(self) -> None:
        assert is_auto_generated("InProgress", "in-progress", 0)

    def test_hand_chosen_name(self) -> None:
        assert not is_auto_generated("Pending", "0", 0)


class TestBuildModelEnumPlan:
    def test_lists_enums_only(self, sample_document) -> None:
        plan = build_model_enum_plan(build_model_ir(sample_document))
        assert plan.schema_version == "1"
        assert [item.enum_name for item in plan.enums] == ["AssignmentStatus"]
        item = plan.enums[0]
        assert item.source == "openapi"
        assert [(m.name, m.value) for m in item.members] == [
            ("Value1", "0"),
            ("Value2", "1"),
            ("Value3", "2"),
        ]

    def test_keeps_hand_chosen_names(self, sample_document) -> None:
        existing = {"AssignmentStatus": {
            "0": ExistingEnumMember(name="Pending", comment="Waiting"),
            "1": ExistingEnumMember(name="Value2"),
        }}
        plan = build_model_enum_plan(build_model_ir(sample_document), existing)
        assert [(m.name, m.comment) for m in plan.enums[0].members] == [
            ("Pending", "Waiting"),
            ("Value2", None),
            ("Value3", None),
        ]

    def test_schema_comment_is_not_overwritten(self, sample_document) -> None:
        ir = build_model_ir(sample_document)
        ir.get("AssignmentStatus").kind.members[0].comment = "From schema"
        existing = {"AssignmentStatus": {"0": ExistingEnumMember(name="Pending", comment="Old")}}
        plan = build_model_enum_plan(ir, existing)
        assert plan.enums[0].members[0].comment == "From schema"


class TestParseEnumSource:
    def test_members_and_comments(self) -> None:
        source = (
            "export enum Color {\n"
            "  /** Warm colour */\n"
            '  Red = "red",\n'
            '  Blue = "blue",\n'
            "}\n"
        )
        name, members = parse_enum_source(source)
        assert name == "Color"
        assert members == {
            "red": ExistingEnumMember(name="Red", comment="Warm colour"),
            "blue": ExistingEnumMember(name="Blue"),
        }

    def test_numeric_values(self) -> None:
        _, members = parse_enum_source("export enum S {\n  Open = 0,\n  Closed = 1\n}\n")
        assert members["0"].name == "Open"
        assert members["1"].name == "Closed"

    def test_no_enum(self) -> None:
        assert parse_enum_source("export interface X {}\n") is None


class TestLoadExistingEnums:
    def test_reads_ts_files(self, tmp_path: Path) -> None:
        (tmp_path / "Status.ts").write_text("export enum Status {\n  Open = 0,\n}\n", encoding="utf-8")
        (tmp_path / "Pet.d.ts").write_text("declare interface Pet {}\n", encoding="utf-8")
        (tmp_path / "util.ts").write_text("export const x = 1;\n", encoding="utf-8")
        assert load_existing_enums(tmp_path) == {"Status": {"0": ExistingEnumMember(name="Open")}}

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert load_existing_enums(tmp_path / "missing") == {}

    def test_round_trip_through_rendered_file(self, sample_document, tmp_path: Path) -> None:
        ir = build_model_ir(sample_document)
        ir.get("AssignmentStatus").kind.members[0].name = "Pending"
        for planned in render_model_files(ir, ModelRenderStyle.MODULE, ["AssignmentStatus"]):
            (tmp_path / planned.path).write_text(planned.content, encoding="utf-8")

        plan = build_model_enum_plan(build_model_ir(sample_document), load_existing_enums(tmp_path))
        assert [m.name for m in plan.enums[0].members] == ["Pending", "Value2", "Value3"]
