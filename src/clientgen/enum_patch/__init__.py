"""Enum-patch acquisition: fetch enum labels from a live backend.

Some backends publish the display labels of their enums at
``{base}/.../Enums/GetAll{EnumName}``. This package finds those endpoints in
an OpenAPI document, fetches the ``{Key, Value}`` pairs they return and turns
them into an :class:`~clientgen.models.EnumPatchDocument` that the model
pipeline merges into generated enums.
"""

from clientgen.enum_patch.detect import EnumEndpoint, detect_enum_endpoints, extract_enum_name
from clientgen.enum_patch.exporter import build_patch_members, export_enum_patch
from clientgen.enum_patch.fetcher import EnumValueFetcher

__all__ = [
    "EnumEndpoint",
    "EnumValueFetcher",
    "build_patch_members",
    "detect_enum_endpoints",
    "export_enum_patch",
    "extract_enum_name",
]
