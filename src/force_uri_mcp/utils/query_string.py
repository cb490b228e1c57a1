"""Helpers for appending query-string parameters to paths and URLs."""

from __future__ import annotations

from typing import Iterable, Mapping
from urllib.parse import quote

QueryParams = Mapping[str, str] | Iterable[tuple[str, str]]


def add_query_string(uri: str, name: str, value: str) -> str:
    """Append a single ``name=value`` pair to ``uri``."""
    return add_query_params(uri, [(name, value)])


def add_query_params(uri: str, params: QueryParams) -> str:
    """Append parameters to ``uri`` in the order given.

    Keys are inserted verbatim and values are percent-encoded. Repeated keys
    are kept, and an existing ``#fragment`` stays at the end of the result.
    """
    pairs = params.items() if isinstance(params, Mapping) else params

    anchor_index = uri.find("#")
    base, anchor = (uri, "") if anchor_index == -1 else (uri[:anchor_index], uri[anchor_index:])

    parts = [base]
    has_query = "?" in base
    for name, value in pairs:
        parts.append("&" if has_query else "?")
        parts.append(name)
        parts.append("=")
        parts.append(quote(value, safe="", errors="replace"))
        has_query = True
    parts.append(anchor)
    return "".join(parts)
