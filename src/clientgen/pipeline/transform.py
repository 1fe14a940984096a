"""Transform passes -- ordered, in-place mutations of the endpoint IR.

A pass sees the mutations of every pass declared before it. Passes that
encode a business rule never add fields to
:class:`~clientgen.models.EndpointItem`; they write string flags into
``endpoint.meta`` under one of the reserved keys below, and renderers read
those keys treating an absent key as ``"false"``.

Built-in passes:

* :class:`NormalizeEndpointPass` -- canonical ordering, namespace default,
  empty-name check, GET/non-GET capability flags. Always first.
* :class:`QueryClassificationPass` -- marks read-style POST endpoints
  (``getList``, ``searchOrders``...) as query-capable.
* :class:`RefreshTokenMetaPass` -- flags token-refresh endpoints so the
  generated call skips auth-refresh wrapping.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from clientgen.exceptions import ValidationError
from clientgen.models import GeneratorInput, HTTPMethod

META_SUPPORTS_QUERY = "__supports_query"
"""Set to ``"true"`` when a non-GET endpoint was classified as a query."""

META_SKIP_AUTH_REFRESH = "skipAuthRefresh"
"""Set to ``"true"`` on endpoints whose calls must bypass auth refresh."""

_QUERY_VERB_RE = re.compile(r"^(get|query|search|fetch|find|list)[A-Z]")


def meta_flag(meta: dict[str, str], key: str) -> bool:
    """Read a boolean flag from an endpoint's meta map (absent means false)."""
    return meta.get(key, "false").lower() == "true"


class TransformPass(ABC):
    """Base class for IR transform passes."""

    name: str = "transform"

    @abstractmethod
    def apply(self, input: GeneratorInput) -> None:
        """Mutate *input* in place.

        Raises:
            ClientgenError: To abort the pipeline.
        """


class NormalizeEndpointPass(TransformPass):
    """Sort endpoints canonically and enforce the IR invariants.

    Running the pass twice yields the same order and flags as running it
    once.
    """

    name = "normalize-endpoint"

    def apply(self, input: GeneratorInput) -> None:
        input.endpoints.sort(key=lambda e: (e.path, e.method, e.operation_name))

        for endpoint in input.endpoints:
            if not endpoint.namespace:
                endpoint.namespace = ["default"]
            if not endpoint.operation_name.strip():
                raise ValidationError(
                    f"operation_name is empty for endpoint {endpoint.method} {endpoint.path}"
                )
            if endpoint.method == HTTPMethod.GET.value:
                endpoint.supports_query = True
                endpoint.supports_mutation = False
            else:
                endpoint.supports_mutation = True


class QueryClassificationPass(TransformPass):
    """Treat POST endpoints named like reads as query-capable.

    The operation name must start with ``get``, ``query``, ``search``,
    ``fetch``, ``find`` or ``list`` followed directly by an uppercase letter,
    so ``getList`` matches while ``get`` and ``getting`` do not.
    """

    name = "query-classification"

    def apply(self, input: GeneratorInput) -> None:
        for endpoint in input.endpoints:
            if endpoint.method != HTTPMethod.POST.value:
                continue
            if _QUERY_VERB_RE.match(endpoint.operation_name):
                endpoint.supports_query = True
                endpoint.meta[META_SUPPORTS_QUERY] = "true"


class RefreshTokenMetaPass(TransformPass):
    """Flag endpoints whose operation name or path ends in ``RefreshToken``."""

    name = "refresh-token-meta"

    def apply(self, input: GeneratorInput) -> None:
        for endpoint in input.endpoints:
            name = endpoint.operation_name.lower()
            path = endpoint.path.lower()
            if name.endswith("refreshtoken") or path.endswith("/refreshtoken"):
                endpoint.meta[META_SKIP_AUTH_REFRESH] = "true"


BUILTIN_PASSES: dict[str, type[TransformPass]] = {
    NormalizeEndpointPass.name: NormalizeEndpointPass,
    QueryClassificationPass.name: QueryClassificationPass,
    RefreshTokenMetaPass.name: RefreshTokenMetaPass,
}
