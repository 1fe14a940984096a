"""Build and write an enum patch document from live enum endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from clientgen.enum_patch.detect import detect_enum_endpoints
from clientgen.enum_patch.fetcher import EnumValueFetcher
from clientgen.exceptions import InvalidUsageError
from clientgen.model_pipeline.enum_patch import write_enum_patch_document
from clientgen.models import (
    EnumFetchConfig,
    EnumPatch,
    EnumPatchDocument,
    EnumPatchMember,
    NamingStrategy,
)
from clientgen.naming import sanitize_to_pascal, unique_name

logger = logging.getLogger(__name__)

PATCH_SOURCE = "materal-api"
PATCH_CONFIDENCE = 0.7


def build_patch_members(
    enum_name: str,
    values: list[tuple[str, str]],
    strategy: NamingStrategy = NamingStrategy.AUTO,
) -> list[EnumPatchMember]:
    """Turn fetched ``(value, label)`` pairs into patch members.

    With the ``auto`` strategy a suggested name is derived from the label,
    falling back to ``{enum_name}{Value}`` and then ``{enum_name}Value``;
    repeated names get numeric suffixes from 2. The ``none`` strategy
    leaves names unset. Labels become comments when not blank.

    Example::

        >>> [m.suggested_name for m in build_patch_members(
        ...     "Role", [("0", "Admin User"), ("1", "Admin User"), ("2", " ")])]
        ['AdminUser', 'AdminUser2', 'RoleValue2']
    """
    used: set[str] = set()
    members = []
    for value, label in values:
        comment = label.strip() or None
        suggested = None
        if strategy == NamingStrategy.AUTO:
            base = sanitize_to_pascal(comment or "")
            if not base:
                suffix = sanitize_to_pascal(value)
                base = f"{enum_name}{suffix}" if suffix else f"{enum_name}Value"
            suggested = unique_name(base, used)
        members.append(EnumPatchMember(value=value, suggested_name=suggested, comment=comment))
    return members


def export_enum_patch(
    document: dict[str, Any],
    options: EnumFetchConfig,
    transport: Optional[httpx.BaseTransport] = None,
) -> EnumPatchDocument:
    """Fetch every detected enum endpoint and write the patch document.

    Endpoints are fetched one at a time in path order; the first endpoint
    whose retries are exhausted aborts the export before anything is written.

    Args:
        document: The OpenAPI document.
        options: Base URL, output path, retry and naming settings.
        transport: Optional httpx transport used by the fetcher.

    Returns:
        The document that was written to ``options.output``.

    Raises:
        InvalidUsageError: If no base URL is configured.
        NetworkError: If an endpoint cannot be fetched.
        WriteError: If the output file cannot be written.
    """
    if not options.base_url:
        raise InvalidUsageError("A base URL is required to fetch enum values (--base-url)")
    base_url = options.base_url.rstrip("/")

    patches = []
    with EnumValueFetcher(options.max_retries, options.timeout_ms, transport) as fetcher:
        for endpoint in detect_enum_endpoints(document):
            url = f"{base_url}{endpoint.path}"
            logger.debug("Fetching enum %s from %s", endpoint.enum_name, url)
            values = fetcher.fetch(url)
            patches.append(EnumPatch(
                enum_name=endpoint.enum_name,
                members=build_patch_members(endpoint.enum_name, values, options.naming_strategy),
                source=PATCH_SOURCE,
                confidence=PATCH_CONFIDENCE,
            ))

    result = EnumPatchDocument(patches=patches)
    write_enum_patch_document(options.output, result)
    return result
