"""Renderer base class.

A renderer turns the transformed IR into planned files. Renderers are pure:
they never touch the filesystem, and two calls with equal input return
equal output. An exception raised from :meth:`Renderer.render` aborts the
pipeline before anything is written.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from clientgen.models import GeneratorInput, RenderOutput


class Renderer(ABC):
    """Base class for all renderers.

    Subclasses set :attr:`id`, the name users select the renderer by on the
    command line and in ``clientgen.json``.

    Renderers that plan the same file paths share an :attr:`output_slot`;
    a pipeline may hold only one renderer per slot.
    """

    id: str = "renderer"
    output_slot: Optional[str] = None

    @abstractmethod
    def render(self, input: GeneratorInput) -> RenderOutput:
        """Produce planned files for *input*.

        Raises:
            ClientgenError: To abort the pipeline.
        """


class NoopRenderer(Renderer):
    """Placeholder used until a real renderer is configured."""

    id = "noop"

    def render(self, input: GeneratorInput) -> RenderOutput:
        return RenderOutput()
