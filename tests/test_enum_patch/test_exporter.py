"""Tests for clientgen.enum_patch.exporter."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from clientgen.enum_patch.exporter import build_patch_members, export_enum_patch
from clientgen.exceptions import InvalidUsageError, NetworkError
from clientgen.models import EnumFetchConfig, NamingStrategy


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("clientgen.enum_patch.fetcher.time.sleep", lambda seconds: None)


class TestBuildPatchMembers:
    def test_auto_names(self) -> None:
        members = build_patch_members("Role", [("0", "Admin User"), ("1", "Admin User"), ("2", " ")])
        assert [m.suggested_name for m in members] == ["AdminUser", "AdminUser2", "RoleValue2"]
        assert [m.comment for m in members] == ["Admin User", "Admin User", None]

    def test_blank_label_and_symbolic_value(self) -> None:
        members = build_patch_members("Role", [("--", "")])
        assert members[0].suggested_name == "RoleValue"

    def test_none_strategy(self) -> None:
        members = build_patch_members("Role", [("0", "Admin")], NamingStrategy.NONE)
        assert members[0].suggested_name is None
        assert members[0].comment == "Admin"


class TestExportEnumPatch:
    def test_writes_document(self, sample_document, tmp_path: Path) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, json={"Data": [
                {"Key": 0, "Value": "Draft"},
                {"Key": 1, "Value": "Active"},
            ]})

        output = tmp_path / "enum-patch.json"
        result = export_enum_patch(
            sample_document,
            EnumFetchConfig(base_url="https://api.example.com/", output=str(output)),
            transport=httpx.MockTransport(handler),
        )

        assert requested == ["https://api.example.com/MainAPI/Enums/GetAllAssignmentStatus"]
        written = json.loads(output.read_text(encoding="utf-8"))
        assert written == result.model_dump(mode="json")
        assert written["schema_version"] == "1"
        patch = written["patches"][0]
        assert patch["enum_name"] == "AssignmentStatus"
        assert patch["source"] == "materal-api"
        assert patch["confidence"] == 0.7
        assert patch["members"] == [
            {"value": "0", "suggested_name": "Draft", "comment": "Draft"},
            {"value": "1", "suggested_name": "Active", "comment": "Active"},
        ]

    def test_requires_base_url(self, sample_document, tmp_path: Path) -> None:
        with pytest.raises(InvalidUsageError, match="base URL"):
            export_enum_patch(sample_document, EnumFetchConfig(output=str(tmp_path / "p.json")))

    def test_network_failure_writes_nothing(self, sample_document, tmp_path: Path) -> None:
        output = tmp_path / "enum-patch.json"
        with pytest.raises(NetworkError):
            export_enum_patch(
                sample_document,
                EnumFetchConfig(base_url="https://api.example.com", output=str(output), max_retries=2),
                transport=httpx.MockTransport(lambda request: httpx.Response(502)),
            )
        assert not output.exists()

    def test_document_without_enum_endpoints(self, tmp_path: Path) -> None:
        output = tmp_path / "enum-patch.json"
        result = export_enum_patch(
            {"paths": {}},
            EnumFetchConfig(base_url="https://api.example.com", output=str(output)),
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        assert result.patches == []
        assert json.loads(output.read_text(encoding="utf-8"))["patches"] == []
