"""CodegenPipeline -- composes parser, passes, renderers, layout, formatter and writer.

The pipeline is configured builder-style and run with :meth:`CodegenPipeline.plan`::

    plan = (
        CodegenPipeline()
        .with_pass(QueryClassificationPass())
        .with_renderer(FunctionsRenderer())
        .with_layout(BarrelLayout(["functions"]))
        .with_writer(FileSystemWriter("generated"))
        .plan(document)
    )
    print(plan.to_json())

Stages run strictly in sequence: parse, transform passes in declared order,
renderers in declared order, layout, formatter, writer. The first exception
propagates unchanged and no later stage runs, so a failing renderer never
leaves a partially written tree.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from clientgen.exceptions import RendererError
from clientgen.models import (
    ClientImportConfig,
    ExecutionMetrics,
    ExecutionPlan,
    GeneratorInput,
    ModelImportConfig,
    PlannedFile,
    RendererReport,
)
from clientgen.parser.endpoints import OpenApiParser, Parser
from clientgen.pipeline.formatter import Formatter, PassthroughFormatter
from clientgen.pipeline.layout import IdentityLayout, LayoutStrategy
from clientgen.pipeline.transform import NormalizeEndpointPass, TransformPass
from clientgen.pipeline.writer import DryRunWriter, Writer
from clientgen.renderers.base import NoopRenderer, Renderer

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class CodegenPipeline:
    """Builder-style code generation pipeline.

    Defaults: :class:`OpenApiParser`, a single :class:`NormalizeEndpointPass`,
    a :class:`NoopRenderer`, :class:`IdentityLayout`,
    :class:`PassthroughFormatter` and :class:`DryRunWriter`. Every ``with_*``
    method returns the pipeline itself.
    """

    def __init__(self) -> None:
        self._parser: Parser = OpenApiParser()
        self._passes: list[TransformPass] = [NormalizeEndpointPass()]
        self._renderers: list[Renderer] = [NoopRenderer()]
        self._layout: LayoutStrategy = IdentityLayout()
        self._formatter: Formatter = PassthroughFormatter()
        self._writer: Writer = DryRunWriter()
        self._client_import: Optional[ClientImportConfig] = None
        self._model_import: Optional[ModelImportConfig] = None
        self._output_root: Optional[str] = None

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    def with_parser(self, parser: Parser) -> CodegenPipeline:
        self._parser = parser
        return self

    def with_pass(self, transform: TransformPass) -> CodegenPipeline:
        """Append *transform* after the passes already configured."""
        self._passes.append(transform)
        return self

    def with_renderer(self, renderer: Renderer) -> CodegenPipeline:
        """Append *renderer*; the first call replaces the default no-op renderer."""
        if len(self._renderers) == 1 and isinstance(self._renderers[0], NoopRenderer):
            self._renderers = [renderer]
        else:
            self._renderers.append(renderer)
        return self

    def with_layout(self, layout: LayoutStrategy) -> CodegenPipeline:
        self._layout = layout
        return self

    def with_formatter(self, formatter: Formatter) -> CodegenPipeline:
        self._formatter = formatter
        return self

    def with_writer(self, writer: Writer) -> CodegenPipeline:
        self._writer = writer
        return self

    def with_client_import(self, config: Optional[ClientImportConfig]) -> CodegenPipeline:
        self._client_import = config
        return self

    def with_model_import(self, config: Optional[ModelImportConfig]) -> CodegenPipeline:
        self._model_import = config
        return self

    def with_output_root(self, output_root: Optional[str]) -> CodegenPipeline:
        """Directory model-import paths are computed against.

        Defaults to the writer's output root when the writer has one.
        """
        self._output_root = output_root
        return self

    @property
    def renderer_ids(self) -> list[str]:
        return [renderer.id for renderer in self._renderers]

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def parse(self, document: dict[str, Any]) -> GeneratorInput:
        """Parse *document* and run every transform pass, without rendering."""
        input = self._parse_input(document)
        for transform in self._passes:
            transform.apply(input)
        return input

    def ir_snapshot_json(self, document: dict[str, Any]) -> str:
        """The transformed IR of *document* as pretty-printed JSON."""
        return self.parse(document).model_dump_json(indent=2)

    def plan(self, document: dict[str, Any]) -> ExecutionPlan:
        """Run every stage on *document* and report what happened.

        Returns:
            The :class:`ExecutionPlan`; ``planned_files`` lists the files the
            writer actually wrote.

        Raises:
            ClientgenError: From whichever stage failed first.
        """
        total_start = time.perf_counter()

        start = time.perf_counter()
        input = self._parse_input(document)
        parse_ms = _elapsed_ms(start)

        start = time.perf_counter()
        transform_steps: list[str] = []
        for transform in self._passes:
            transform.apply(input)
            transform_steps.append(transform.name)
        transform_ms = _elapsed_ms(start)

        start = time.perf_counter()
        reports, files = self._render(input)
        render_ms = _elapsed_ms(start)

        start = time.perf_counter()
        files = self._layout.apply(files)
        layout_ms = _elapsed_ms(start)

        start = time.perf_counter()
        files = self._formatter.format_all(files)
        format_ms = _elapsed_ms(start)

        start = time.perf_counter()
        result = self._writer.write(files)
        write_ms = _elapsed_ms(start)

        logger.debug(
            "Planned %d files for %d endpoints (%d written, %d unchanged)",
            len(files),
            len(input.endpoints),
            len(result.files_written),
            result.skipped_files,
        )

        return ExecutionPlan(
            endpoint_count=len(input.endpoints),
            transform_steps=transform_steps,
            renderer_reports=reports,
            planned_files=result.files_written,
            skipped_files=result.skipped_files,
            layout_files=len(files),
            metrics=ExecutionMetrics(
                parse_ms=parse_ms,
                transform_ms=transform_ms,
                render_ms=render_ms,
                layout_ms=layout_ms,
                format_ms=format_ms,
                write_ms=write_ms,
                total_ms=_elapsed_ms(total_start),
            ),
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _parse_input(self, document: dict[str, Any]) -> GeneratorInput:
        input = self._parser.parse(document)
        if self._client_import is not None:
            input.client_import = self._client_import
        if self._model_import is not None:
            input.model_import = self._model_import

        output_root = self._output_root
        if output_root is None and self._writer.output_root is not None:
            output_root = str(self._writer.output_root)
        input.output_root = output_root
        return input

    def _render(self, input: GeneratorInput) -> tuple[list[RendererReport], list[PlannedFile]]:
        """Run every renderer and merge their files.

        Two renderers may plan the same path only with identical content
        (e.g. a shared request builder); the later copy is dropped.

        Raises:
            RendererError: If two renderers plan different content for one path.
        """
        reports: list[RendererReport] = []
        merged: dict[str, PlannedFile] = {}
        owners: dict[str, str] = {}

        for renderer in self._renderers:
            output = renderer.render(input)
            reports.append(RendererReport(
                renderer_id=renderer.id,
                planned_files=len(output.files),
                warnings=output.warnings,
            ))
            for planned in output.files:
                existing = merged.get(planned.path)
                if existing is None:
                    merged[planned.path] = planned
                    owners[planned.path] = renderer.id
                elif existing.content != planned.content:
                    raise RendererError(
                        f"Renderers '{owners[planned.path]}' and '{renderer.id}' "
                        f"produced different content for {planned.path}"
                    )

        return reports, list(merged.values())
