"""Renderer registry -- maps renderer ids to factories.

A registry is a plain value built once per pipeline assembly; there is no
module-level registration. :meth:`RendererRegistry.with_builtins` returns a
registry holding every renderer shipped with clientgen, and
:meth:`RendererRegistry.discover` adds renderers published by other
packages under the ``clientgen.renderers`` entry-point group::

    [project.entry-points."clientgen.renderers"]
    my-renderer = "my_package.renderer:MyRenderer"

The entry point must resolve to a zero-argument callable (usually the
renderer class) returning a :class:`~clientgen.renderers.base.Renderer`.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Callable

from clientgen.exceptions import RendererError
from clientgen.renderers.base import Renderer
from clientgen.renderers.functions import FunctionsRenderer
from clientgen.renderers.query import ReactQueryRenderer, VueQueryRenderer
from clientgen.renderers.services import AxiosJsRenderer, AxiosTsRenderer, UniAppRenderer

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "clientgen.renderers"
"""The entry-point group name used for renderer discovery."""

RendererFactory = Callable[[], Renderer]

BUILTIN_RENDERERS: tuple[type[Renderer], ...] = (
    FunctionsRenderer,
    ReactQueryRenderer,
    VueQueryRenderer,
    AxiosTsRenderer,
    AxiosJsRenderer,
    UniAppRenderer,
)


class RendererRegistry:
    """Lookup table from renderer id to factory.

    Example::

        registry = RendererRegistry.with_builtins()
        registry.discover()
        renderer = registry.create("react-query")
    """

    def __init__(self) -> None:
        self._factories: dict[str, RendererFactory] = {}

    @classmethod
    def with_builtins(cls) -> RendererRegistry:
        registry = cls()
        for renderer_cls in BUILTIN_RENDERERS:
            registry.register(renderer_cls.id, renderer_cls)
        return registry

    def register(self, renderer_id: str, factory: RendererFactory) -> None:
        """Register *factory* under *renderer_id*, replacing any previous one."""
        if renderer_id in self._factories:
            logger.debug("Renderer '%s' re-registered", renderer_id)
        self._factories[renderer_id] = factory

    def ids(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, renderer_id: object) -> bool:
        return renderer_id in self._factories

    def create(self, renderer_id: str) -> Renderer:
        """Instantiate the renderer registered as *renderer_id*.

        Raises:
            RendererError: If no renderer has that id.
        """
        factory = self._factories.get(renderer_id)
        if factory is None:
            available = ", ".join(self.ids()) or "none"
            raise RendererError(f"Unknown renderer '{renderer_id}'. Available: {available}")
        return factory()

    def discover(self) -> list[str]:
        """Register renderers published through the entry-point group.

        Entry points that fail to load are logged as warnings and skipped.

        Returns:
            The ids registered by this call.
        """
        loaded: list[str] = []
        for ep in importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP):
            try:
                factory = ep.load()
            except Exception as exc:
                logger.warning("Failed to load renderer '%s': %s", ep.name, exc)
                continue
            self.register(ep.name, factory)
            loaded.append(ep.name)
        return loaded
