"""Pipeline stages -- transform passes, layout, formatting, writing, orchestration.

:class:`CodegenPipeline` composes a parser, ordered transform passes,
renderers, a layout strategy, a formatter and a writer into a single
``plan(document)`` call.
"""

from clientgen.pipeline.orchestrator import CodegenPipeline

__all__ = ["CodegenPipeline"]
