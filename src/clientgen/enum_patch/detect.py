"""Find the enum-listing endpoints of a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from clientgen.parser.schema import get_schemas

ENUM_PATH_MARKER = "/Enums/GetAll"


@dataclass(frozen=True)
class EnumEndpoint:
    enum_name: str
    path: str


def extract_enum_name(path: str) -> Optional[str]:
    """Return the enum named by an enum-listing path, or ``None``.

    Example::

        >>> extract_enum_name("/MainAPI/Enums/GetAllOrderStatus")
        'OrderStatus'
        >>> extract_enum_name("/MainAPI/Orders/GetAll") is None
        True
    """
    index = path.find(ENUM_PATH_MARKER)
    if index == -1:
        return None
    name = path[index + len(ENUM_PATH_MARKER):].split("/", 1)[0].strip()
    return name or None


def detect_enum_endpoints(document: dict[str, Any]) -> list[EnumEndpoint]:
    """Enum-listing paths of *document* whose enum is a named schema, sorted by path."""
    paths = document.get("paths") or {}
    schemas = get_schemas(document)

    result = []
    for path in sorted(paths):
        name = extract_enum_name(path)
        if name is not None and name in schemas:
            result.append(EnumEndpoint(enum_name=name, path=path))
    return result
