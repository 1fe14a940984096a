"""TypeScript type-expression helpers shared by the renderers.

The parser records input and output types as TypeScript source text
(``Pet``, ``Pet[]``, ``{ id: number; tags?: Tag[] }``, ``A | B``...). Before
a renderer interpolates such text into generated code it passes it through
:func:`normalize_type_ref`, and it derives the ``import type`` lines the file
needs with :func:`render_type_import_lines`.

Example::

    >>> extract_type_identifiers("Record<string, Pet[]> | { owner: Owner }")
    ['Pet', 'Owner']
    >>> render_type_import_lines(["Pet[]"], "@my-org/models", use_package=True)
    ['import type { Pet } from "@my-org/models";']
"""

from __future__ import annotations

import re
from collections.abc import Iterable

PRIMITIVE_TYPES = frozenset({"string", "number", "boolean", "void", "object", "unknown"})

BUILTIN_TYPES = frozenset({
    # Utility and global types
    "Array", "ReadonlyArray", "Record", "Partial", "Required", "Readonly",
    "Pick", "Omit", "Exclude", "Extract", "NonNullable", "ReturnType",
    "Parameters", "Promise", "Date", "Map", "Set", "Blob", "File", "FormData",
    "ArrayBuffer", "Uint8Array", "String", "Number", "Boolean", "Object",
    "Function", "Symbol",
    # Keywords that can appear in type position
    "any", "never", "null", "undefined", "true", "false", "bigint", "symbol",
    "keyof", "typeof", "readonly", "unique", "infer", "extends", "import",
    "in", "is",
})

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TOKEN_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_ALLOWED_RE = re.compile(r"""^[A-Za-z0-9_$\s<>\[\]{}()|&,:;?.'"\-]+$""")
_CLOSERS = {")": "(", "]": "[", "}": "{", ">": "<"}


def is_primitive_type(type_name: str) -> bool:
    return type_name in PRIMITIVE_TYPES


def is_identifier_type(type_name: str) -> bool:
    """Whether *type_name* is a bare identifier such as ``Pet`` or ``_Id2``."""
    return bool(_IDENTIFIER_RE.match(type_name))


def normalize_type_ref(type_name: str) -> str:
    """Return *type_name* trimmed, or ``"unknown"`` if it is not usable.

    Primitives and identifiers pass through, as does any well-formed type
    expression: only characters that occur in TypeScript types, with
    balanced brackets outside string literals. Empty or malformed text
    becomes ``"unknown"``.
    """
    trimmed = type_name.strip()
    if not trimmed:
        return "unknown"
    if is_primitive_type(trimmed) or is_identifier_type(trimmed):
        return trimmed
    if _ALLOWED_RE.match(trimmed) and _is_balanced(trimmed):
        return trimmed
    return "unknown"


def _is_balanced(text: str) -> bool:
    stack: list[str] = []
    quote = ""
    for index, char in enumerate(text):
        if quote:
            if char == quote and text[index - 1] != "\\":
                quote = ""
            continue
        if char in "'\"":
            quote = char
        elif char in "([{<":
            stack.append(char)
        elif char in _CLOSERS:
            # "=>" never appears in the allowed alphabet, so ">" always closes.
            if not stack or stack.pop() != _CLOSERS[char]:
                return False
    return not stack and not quote


def extract_type_identifiers(type_expr: str) -> list[str]:
    """Collect the named types referenced by *type_expr*.

    Walks the expression token by token and keeps identifiers that name a
    type: property keys inside object literals (``id`` in ``{ id: X }``),
    members after a dot, string-literal contents, primitives and
    :data:`BUILTIN_TYPES` are skipped. The result is deduplicated in
    first-seen order.
    """
    found: list[str] = []
    index = 0
    length = len(type_expr)
    while index < length:
        char = type_expr[index]
        if char in "'\"":
            end = type_expr.find(char, index + 1)
            index = length if end == -1 else end + 1
            continue
        match = _TOKEN_RE.match(type_expr, index)
        if match is None:
            index += 1
            continue

        token = match.group(0)
        index = match.end()
        rest = type_expr[index:].lstrip()
        if rest.startswith(":") or rest.startswith("?:"):
            continue
        if type_expr[: match.start()].rstrip().endswith("."):
            continue
        if "$" in token or is_primitive_type(token) or token in BUILTIN_TYPES:
            continue
        if token not in found:
            found.append(token)
    return found


def render_type_import_lines(
    type_exprs: Iterable[str],
    base_import_path: str,
    use_package: bool,
) -> list[str]:
    """One ``import type`` line per named type used by *type_exprs*.

    Args:
        type_exprs: Type expressions the generated file mentions.
        base_import_path: Package specifier or directory of the model files.
        use_package: Import every type from *base_import_path* itself rather
            than from ``<base>/<Type>``.

    Returns:
        Import lines without trailing newlines, deduplicated across all
        expressions in first-seen order.
    """
    names: list[str] = []
    for expr in type_exprs:
        for name in extract_type_identifiers(expr):
            if name not in names:
                names.append(name)

    if use_package:
        return [f'import type {{ {name} }} from "{base_import_path}";' for name in names]
    return [f'import type {{ {name} }} from "{base_import_path}/{name}";' for name in names]
