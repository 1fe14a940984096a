"""Merge curated enum metadata into the model IR, and read/write patch documents.

An :class:`~clientgen.models.EnumPatchDocument` carries, per enum, a list of
``{value, suggested_name, comment}`` entries. Entries are matched to schema
members by value text (``"1"`` matches the number literal ``1``); the
conflict policy decides which source wins:

* ``patch-first`` -- a non-empty suggested name replaces the member name
  and a non-empty comment replaces the member comment.
* ``schema-first`` -- member names are kept; a patch comment only fills in
  a missing one.

Patch entries for values the schema does not declare are ignored, so a
patch never adds members. After merging, duplicate member names within an
enum get numeric suffixes (``Name``, ``Name2``...).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pydantic

from clientgen.exceptions import ValidationError
from clientgen.models import (
    EnumConflictPolicy,
    EnumKind,
    EnumPatch,
    EnumPatchDocument,
    EnumPatchMember,
    ModelEnumMember,
    ModelIr,
)
from clientgen.naming import sanitize_to_pascal, unique_name
from clientgen.parser.loader import load_json_file
from clientgen.pipeline.writer import replace_file
from clientgen.renderers.type_utils import is_identifier_type

logger = logging.getLogger(__name__)

_PATCH_LIST = pydantic.TypeAdapter(list[EnumPatch])


def apply_enum_patches(
    ir: ModelIr,
    patches: list[EnumPatch],
    policy: EnumConflictPolicy = EnumConflictPolicy.PATCH_FIRST,
) -> list[str]:
    """Apply *patches* to the enums of *ir* in place.

    Args:
        ir: Model IR to update.
        patches: Patches in document order; a later patch for the same enum
            applies on top of an earlier one.
        policy: Which source wins when both name a member.

    Returns:
        Warnings for patches that were skipped because their target is
        missing or not an enum.
    """
    warnings: list[str] = []
    for patch in patches:
        model = ir.get(patch.enum_name)
        if model is None:
            warnings.append(f"Enum patch for '{patch.enum_name}' skipped: no such schema")
            continue
        if not isinstance(model.kind, EnumKind):
            warnings.append(f"Enum patch for '{patch.enum_name}' skipped: schema is not an enum")
            continue
        _apply_patch(model.kind.members, patch.members, policy)

    for message in warnings:
        logger.warning(message)
    return warnings


def _apply_patch(
    members: list[ModelEnumMember],
    patch_members: list[EnumPatchMember],
    policy: EnumConflictPolicy,
) -> None:
    by_value: dict[str, EnumPatchMember] = {}
    for entry in patch_members:
        by_value.setdefault(entry.value, entry)

    for member in members:
        entry = by_value.get(member.value.key)
        if entry is None:
            continue
        name = _identifier(entry.suggested_name)
        comment = (entry.comment or "").strip()

        if policy == EnumConflictPolicy.PATCH_FIRST:
            if name:
                member.name = name
            if comment:
                member.comment = comment
        elif comment and not member.comment:
            member.comment = comment

    used: set[str] = set()
    for member in members:
        member.name = unique_name(member.name, used)


def _identifier(suggested: Any) -> str:
    text = (suggested or "").strip()
    if not text or is_identifier_type(text):
        return text
    return sanitize_to_pascal(text)


def read_enum_patches(path: str | Path) -> list[EnumPatch]:
    """Load patches from a patch document or a bare JSON array of patches.

    Raises:
        DocumentLoadError: If the file cannot be read or is not JSON.
        ValidationError: If the JSON does not describe enum patches.
    """
    data = load_json_file(path)
    try:
        if isinstance(data, list):
            return _PATCH_LIST.validate_python(data)
        if isinstance(data, dict):
            return EnumPatchDocument.model_validate(data).patches
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid enum patch document {path}: {exc}") from exc
    raise ValidationError(
        f"Invalid enum patch document {path}: expected an object or an array, "
        f"got {type(data).__name__}"
    )


def write_enum_patch_document(path: str | Path, document: EnumPatchDocument) -> None:
    """Write *document* as pretty-printed JSON, replacing *path* atomically.

    Raises:
        WriteError: If the file cannot be written.
    """
    text = document.model_dump_json(indent=2) + "\n"
    replace_file(Path(path), text.encode("utf-8"))
