"""Enum plan -- an editable listing of every schema enum and its member names.

The plan is regenerated from the schemas on every run. Names someone chose
by hand survive regeneration: given the enums already rendered in a model
directory, a member whose existing name is not one the generator would
have produced itself (``Value3``, or the value-derived default) keeps that
name in the new plan.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from clientgen.models import EnumKind, ModelEnumPlan, ModelEnumPlanItem, ModelEnumPlanMember, ModelIr
from clientgen.naming import to_pascal_case

logger = logging.getLogger(__name__)

_AUTO_NAME_RE = re.compile(r"^Value\d+$")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")
_ENUM_HEADER_RE = re.compile(r"export\s+enum\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*\{")


@dataclass
class ExistingEnumMember:
    """A member found in a previously rendered enum file."""

    name: str
    comment: Optional[str] = None


ExistingEnums = dict[str, dict[str, ExistingEnumMember]]
"""Enum name -> member value text -> existing member."""


def default_member_name(value: str, index: int) -> str:
    """The name the generator derives from a member value.

    Example::

        >>> default_member_name("in-progress", 1)
        'InProgress'
        >>> default_member_name("1", 2)
        'Value1'
        >>> default_member_name("--", 3)
        'Value3'
    """
    pascal = to_pascal_case(_NON_ALNUM_RE.sub(" ", value).strip())
    if not pascal:
        return f"Value{index}"
    if pascal[0].isdigit():
        return f"Value{pascal}"
    return pascal


def is_auto_generated(name: str, value: str, index: int) -> bool:
    """Whether *name* looks generated for the member at zero-based *index*."""
    return (
        bool(_AUTO_NAME_RE.match(name))
        or name == f"Value{index + 1}"
        or name == default_member_name(value, index + 1)
    )


def build_model_enum_plan(ir: ModelIr, existing: Optional[ExistingEnums] = None) -> ModelEnumPlan:
    """List every enum of *ir*, keeping hand-chosen names from *existing*."""
    existing = existing or {}
    enums = []
    for model in ir.models:
        if not isinstance(model.kind, EnumKind):
            continue
        previous = existing.get(model.name, {})

        members = []
        for index, member in enumerate(model.kind.members):
            value = member.value.key
            name = member.name
            comment = member.comment
            historical = previous.get(value)
            if historical is not None:
                if not is_auto_generated(historical.name, value, index):
                    name = historical.name
                if comment is None:
                    comment = historical.comment
            members.append(ModelEnumPlanMember(name=name, value=value, comment=comment))

        enums.append(ModelEnumPlanItem(
            enum_name=model.name,
            description=model.description,
            members=members,
        ))
    return ModelEnumPlan(enums=enums)


def load_existing_enums(directory: str | Path) -> ExistingEnums:
    """Collect ``export enum`` declarations from the ``.ts`` files in *directory*.

    Only the first enum of each file is read. Unreadable files and files
    without an enum are skipped; a missing directory yields an empty map.
    """
    result: ExistingEnums = {}
    root = Path(directory)
    if not root.is_dir():
        return result

    for path in sorted(root.glob("*.ts")):
        if path.name.endswith(".d.ts"):
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping %s: %s", path, exc)
            continue
        parsed = parse_enum_source(content)
        if parsed is not None and parsed[1]:
            result[parsed[0]] = parsed[1]
    return result


def parse_enum_source(content: str) -> Optional[tuple[str, dict[str, ExistingEnumMember]]]:
    """Extract the first ``export enum`` of a TypeScript file.

    Returns:
        ``(enum_name, members_by_value)`` or ``None`` when the file declares
        no enum. A single-line ``/** ... */`` comment directly above a
        member becomes that member's comment.
    """
    header = _ENUM_HEADER_RE.search(content)
    if header is None:
        return None
    body_end = content.find("}", header.end())
    if body_end == -1:
        return None
    body = content[header.end():body_end]

    members: dict[str, ExistingEnumMember] = {}
    pending_comment: Optional[str] = None
    for raw_line in body.splitlines():
        line = raw_line.strip()
        if line.startswith("/**") and line.endswith("*/"):
            pending_comment = line[3:-2].strip() or None
            continue
        if not line or line.startswith(("*", "//", "/*")):
            continue

        name, sep, raw_value = line.rstrip(",").partition("=")
        name, raw_value = name.strip(), raw_value.strip()
        if not sep or not name or not raw_value:
            pending_comment = None
            continue
        members[_value_key(raw_value)] = ExistingEnumMember(name=name, comment=pending_comment)
        pending_comment = None

    return header.group(1), members


def _value_key(raw_value: str) -> str:
    if raw_value.startswith('"'):
        try:
            return str(json.loads(raw_value))
        except json.JSONDecodeError:
            return raw_value
    return raw_value
