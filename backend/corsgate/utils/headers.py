"""
HTTP header helpers.

Pure string transforms used to build CORS header values: list
normalization, element-wise conversion and canonical header-name casing.
None of these depend on a specific HTTP library's header map.
"""

from __future__ import annotations

import string
from typing import Callable, Iterable

# RFC 7230 token characters (field names are tokens)
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def normalize(values: Iterable[str] | None) -> list[str]:
    """Trim, lower-case and de-duplicate *values*, keeping first-seen order."""
    if values is None:
        return []
    seen: set[str] = set()
    normalized: list[str] = []
    for value in values:
        value = value.strip().lower()
        if not value or value in seen:
            continue
        seen.add(value)
        normalized.append(value)
    return normalized


def convert(values: Iterable[str], converter: Callable[[str], str]) -> list[str]:
    """Apply *converter* to every element of *values*."""
    return [converter(v) for v in values]


def canonical_header_key(name: str) -> str:
    """
    Return the canonical form of a header name.

    The first letter and any letter following a hyphen are upper-cased,
    the rest lower-cased: ``content-type`` -> ``Content-Type``.  Names
    holding a space or a non-token character are returned unchanged.
    """
    if not name or any(ch not in _TOKEN_CHARS for ch in name):
        return name

    out = []
    upper = True
    for ch in name:
        out.append(ch.upper() if upper else ch.lower())
        upper = ch == "-"
    return "".join(out)
