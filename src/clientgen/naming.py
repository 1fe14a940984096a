"""Identifier case conversion shared by the parser, renderers and enum tools.

Words are split on any non-alphanumeric run and on case boundaries, so
``"MainAPI/order-items"`` yields ``["Main", "API", "order", "items"]``.

Example::

    >>> to_camel_case("GetOrderList")
    'getOrderList'
    >>> to_pascal_case("order_items")
    'OrderItems'
    >>> to_kebab_case("OrderItems")
    'order-items'
    >>> sanitize_to_pascal("Admin user")
    'AdminUser'
"""

from __future__ import annotations

import re

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
_ALNUM_RUN_RE = re.compile(r"[A-Za-z0-9]+")


def split_words(value: str) -> list[str]:
    """Split *value* into words on separators and case boundaries."""
    return _WORD_RE.findall(value)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_pascal_case(value: str) -> str:
    return "".join(_capitalize(word) for word in split_words(value))


def to_camel_case(value: str) -> str:
    words = split_words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def to_kebab_case(value: str) -> str:
    return "-".join(word.lower() for word in split_words(value))


def sanitize_to_pascal(raw: str) -> str:
    """PascalCase *raw* treating every non-alphanumeric run as a word boundary.

    Unlike :func:`to_pascal_case`, case boundaries inside a word are not
    split: each word keeps its first letter upper-cased and the rest
    lower-cased (``"ADMIN user"`` becomes ``"AdminUser"``). A result that
    starts with a digit is prefixed with ``"Value"``.

    Args:
        raw: Free text such as an enum label or value.

    Returns:
        The sanitized identifier, or an empty string when *raw* has no
        alphanumeric characters.
    """
    result = "".join(_capitalize(word) for word in _ALNUM_RUN_RE.findall(raw))
    if result[:1].isdigit():
        return f"Value{result}"
    return result


def unique_name(base: str, used: set[str]) -> str:
    """Return *base*, or *base* with the smallest free numeric suffix from 2.

    The returned name is added to *used*.
    """
    candidate = base
    index = 2
    while candidate in used:
        candidate = f"{base}{index}"
        index += 1
    used.add(candidate)
    return candidate
