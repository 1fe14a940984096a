"""Tests for clientgen.pipeline.orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from clientgen.exceptions import RendererError, ValidationError
from clientgen.models import (
    GeneratorInput,
    ModelImportConfig,
    PlannedFile,
    RenderOutput,
    WriteResult,
)
from clientgen.pipeline.layout import BarrelLayout
from clientgen.pipeline.orchestrator import CodegenPipeline
from clientgen.pipeline.transform import QueryClassificationPass, RefreshTokenMetaPass, TransformPass
from clientgen.pipeline.writer import FileSystemWriter, Writer
from clientgen.renderers.base import Renderer
from clientgen.renderers.functions import FunctionsRenderer
from clientgen.renderers.query import ReactQueryRenderer


class _StaticRenderer(Renderer):
    def __init__(self, renderer_id: str, files: dict[str, str], warnings=None) -> None:
        self.id = renderer_id
        self._files = files
        self._warnings = warnings or []

    def render(self, input: GeneratorInput) -> RenderOutput:
        return RenderOutput(
            files=[PlannedFile(path=p, content=c) for p, c in self._files.items()],
            warnings=self._warnings,
        )


class _FailingRenderer(Renderer):
    id = "failing"

    def render(self, input: GeneratorInput) -> RenderOutput:
        raise RendererError("template exploded")


class _RecordingWriter(Writer):
    def __init__(self) -> None:
        self.calls: list[list[PlannedFile]] = []

    def write(self, files: list[PlannedFile]) -> WriteResult:
        self.calls.append(files)
        return WriteResult(files_written=list(files))


class _RecordingPass(TransformPass):
    name = "recording"

    def __init__(self) -> None:
        self.seen: list[str] = []

    def apply(self, input: GeneratorInput) -> None:
        self.seen = [e.export_name for e in input.endpoints]
        input.endpoints[0].meta["seen"] = "true"


# ---------------------------------------------------------------------------
# Defaults and reports
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_default_pipeline_plans_nothing(self, sample_document) -> None:
        plan = CodegenPipeline().plan(sample_document)
        assert plan.endpoint_count == 6
        assert plan.transform_steps == ["normalize-endpoint"]
        assert plan.planned_files == []
        assert plan.layout_files == 0
        assert [r.renderer_id for r in plan.renderer_reports] == ["noop"]

    def test_first_renderer_replaces_noop(self) -> None:
        pipeline = CodegenPipeline().with_renderer(FunctionsRenderer()).with_renderer(ReactQueryRenderer())
        assert pipeline.renderer_ids == ["functions", "react-query"]

    def test_transform_steps_in_declared_order(self, sample_document) -> None:
        plan = (
            CodegenPipeline()
            .with_pass(RefreshTokenMetaPass())
            .with_pass(QueryClassificationPass())
            .plan(sample_document)
        )
        assert plan.transform_steps == ["normalize-endpoint", "refresh-token-meta", "query-classification"]

    def test_passes_see_normalized_ir(self, sample_document) -> None:
        recording = _RecordingPass()
        ir = CodegenPipeline().with_pass(recording).parse(sample_document)
        assert recording.seen[0] == "assignmentAdd"
        assert ir.endpoints[0].meta["seen"] == "true"

    def test_metrics_are_consistent(self, sample_document) -> None:
        plan = CodegenPipeline().with_renderer(FunctionsRenderer()).plan(sample_document)
        metrics = plan.metrics
        phases = [
            metrics.parse_ms, metrics.transform_ms, metrics.render_ms,
            metrics.layout_ms, metrics.format_ms, metrics.write_ms,
        ]
        assert all(value >= 0 for value in phases)
        assert all(metrics.total_ms >= value for value in phases)

    def test_report_is_json(self, sample_document) -> None:
        plan = CodegenPipeline().with_renderer(FunctionsRenderer()).plan(sample_document)
        report = json.loads(plan.to_json())
        assert report["endpoint_count"] == 6
        assert report["renderer_reports"][0] == {"renderer_id": "functions", "planned_files": 12, "warnings": []}
        assert set(report["metrics"]) == {
            "parse_ms", "transform_ms", "render_ms", "layout_ms", "format_ms", "write_ms", "total_ms",
        }

    def test_renderer_warnings_are_reported(self, sample_document) -> None:
        plan = CodegenPipeline().with_renderer(
            _StaticRenderer("warner", {}, warnings=["something odd"])
        ).plan(sample_document)
        assert plan.renderer_reports[0].warnings == ["something odd"]


# ---------------------------------------------------------------------------
# Merging renderer output
# ---------------------------------------------------------------------------


class TestRendererMerge:
    def test_identical_paths_are_deduplicated(self, sample_document) -> None:
        plan = (
            CodegenPipeline()
            .with_pass(QueryClassificationPass())
            .with_renderer(FunctionsRenderer())
            .with_renderer(ReactQueryRenderer())
            .plan(sample_document)
        )
        paths = [f.path for f in plan.planned_files]
        assert len(paths) == len(set(paths))
        assert paths.count("spec/endpoints/assignment/add.ts") == 1
        # 6 builders + 6 functions + 7 hooks (getList is both query and mutation)
        assert len(paths) == 19

    def test_conflicting_content_raises_before_write(self, sample_document) -> None:
        writer = _RecordingWriter()
        pipeline = (
            CodegenPipeline()
            .with_renderer(_StaticRenderer("one", {"same.ts": "a"}))
            .with_renderer(_StaticRenderer("two", {"same.ts": "b"}))
            .with_writer(writer)
        )
        with pytest.raises(RendererError, match="'one' and 'two'"):
            pipeline.plan(sample_document)
        assert writer.calls == []


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------


class TestFailures:
    def test_renderer_error_leaves_disk_untouched(self, sample_document, tmp_path: Path) -> None:
        pipeline = (
            CodegenPipeline()
            .with_renderer(FunctionsRenderer())
            .with_renderer(_FailingRenderer())
            .with_writer(FileSystemWriter(tmp_path / "out"))
        )
        with pytest.raises(RendererError, match="template exploded"):
            pipeline.plan(sample_document)
        assert not (tmp_path / "out").exists()

    def test_pass_error_stops_pipeline(self, sample_document) -> None:
        class _Reject(TransformPass):
            name = "reject"

            def apply(self, input: GeneratorInput) -> None:
                raise ValidationError("rejected")

        writer = _RecordingWriter()
        with pytest.raises(ValidationError):
            CodegenPipeline().with_pass(_Reject()).with_writer(writer).plan(sample_document)
        assert writer.calls == []


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


class TestWriting:
    def test_second_run_is_all_skipped(self, sample_document, tmp_path: Path) -> None:
        def build() -> CodegenPipeline:
            return (
                CodegenPipeline()
                .with_renderer(FunctionsRenderer())
                .with_layout(BarrelLayout(["functions"]))
                .with_writer(FileSystemWriter(tmp_path))
            )

        first = build().plan(sample_document)
        assert len(first.planned_files) == first.layout_files
        assert (tmp_path / "functions" / "index.ts").read_text() == 'export * from "./api";\n'

        second = build().plan(sample_document)
        assert second.planned_files == []
        assert second.skipped_files == second.layout_files == first.layout_files

    def test_output_root_defaults_to_writer_root(self, sample_document, tmp_path: Path) -> None:
        pipeline = (
            CodegenPipeline()
            .with_model_import(ModelImportConfig(import_type="relative", relative_path=str(tmp_path / "models")))
            .with_writer(FileSystemWriter(tmp_path / "out"))
        )
        assert pipeline.parse(sample_document).output_root == str(tmp_path / "out")

    def test_explicit_output_root_wins(self, sample_document, tmp_path: Path) -> None:
        pipeline = (
            CodegenPipeline()
            .with_writer(FileSystemWriter(tmp_path / "out"))
            .with_output_root("elsewhere")
        )
        assert pipeline.parse(sample_document).output_root == "elsewhere"

    def test_ir_snapshot_json(self, sample_document) -> None:
        snapshot = json.loads(CodegenPipeline().ir_snapshot_json(sample_document))
        assert snapshot["project"]["package_name"] == "Sample API"
        assert [e["export_name"] for e in snapshot["endpoints"]][:2] == ["assignmentAdd", "assignmentDelete"]
