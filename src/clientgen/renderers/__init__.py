"""Renderers -- turn the transformed IR into planned TypeScript/JavaScript files.

* :class:`Renderer` -- base class; :class:`NoopRenderer` renders nothing.
* :class:`RendererRegistry` -- id-to-factory lookup with entry-point
  discovery.
* Built-ins: ``functions``, ``react-query``, ``vue-query``, ``axios-ts``,
  ``axios-js`` and ``uniapp``.
"""

from clientgen.renderers.base import NoopRenderer, Renderer
from clientgen.renderers.registry import RendererRegistry

__all__ = ["NoopRenderer", "Renderer", "RendererRegistry"]
