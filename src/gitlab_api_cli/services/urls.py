"""URL template resolution and query composition.

Templates are API paths with ``:token`` placeholders, e.g.
``/projects/:id/hooks/:hook_id``. Values are percent-encoded on the way in
so that ``group/project`` style ids stay a single path segment.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Literal, Union
from urllib.parse import quote

import httpx

from gitlab_api_cli.services.errors import UnresolvedPlaceholderError

QueryValue = Union[str, int, Iterable[Union[str, int]]]
Query = Union[Mapping[str, QueryValue], Iterable[tuple[str, Union[str, int]]]]

_PLACEHOLDER = re.compile(r"(?<![\w%]):[A-Za-z_][A-Za-z0-9_]*")


def resolve_template(
    template: str,
    params: Mapping[str, str | int] | None = None,
    *,
    strict: bool = False,
) -> str:
    """Replace every occurrence of each key of ``params`` in ``template``.

    Tokens with no entry in ``params`` are left as they are, unless
    ``strict`` is set, in which case they raise UnresolvedPlaceholderError.
    """
    path = template
    # Longest first so ":id" never eats into ":id_ext"
    for key in sorted(params or {}, key=len, reverse=True):
        path = path.replace(key, quote(str(params[key]), safe=""))

    if strict:
        leftover = _PLACEHOLDER.findall(path.split("?", 1)[0])
        if leftover:
            raise UnresolvedPlaceholderError(template, leftover)
    return path


def query_pairs(query: Query | None) -> list[tuple[str, str]]:
    """Flatten a flat or multi-value mapping, or a pair sequence."""
    if query is None:
        return []
    if isinstance(query, Mapping):
        pairs: list[tuple[str, str]] = []
        for key, value in query.items():
            if isinstance(value, (str, int)):
                pairs.append((key, str(value)))
            else:
                pairs.extend((key, str(v)) for v in value)
        return pairs
    return [(key, str(value)) for key, value in query]


def merge_query(
    url: str,
    query: Query | None,
    mode: Literal["set", "add"] = "set",
) -> str:
    """Merge ``query`` onto the query component already present in ``url``.

    ``set`` replaces existing values of the same key, ``add`` appends.
    """
    if mode not in ("set", "add"):
        raise ValueError(f"Unknown query merge mode '{mode}'")

    target = httpx.URL(url)
    params = target.params
    pairs = query_pairs(query)
    if mode == "set":
        for key in dict.fromkeys(key for key, _ in pairs):
            params = params.remove(key)
    for key, value in pairs:
        params = params.add(key, value)
    return str(target.copy_with(params=params))
