"""URL decomposition and query string parsing."""

from __future__ import annotations

from urllib.parse import unquote_plus

from urlmatch._types import Location


def parse_location(url: str) -> Location:
    """Split a raw URL into path, query string and fragment.

    The fragment is everything after the first ``#``; the query string is
    everything between the first ``?`` and the fragment. Only an empty URL
    defaults to path ``"/"``: ``"?x=1"`` keeps an empty path.
    """
    if not url:
        return Location(path="/")
    rest, _, fragment = url.partition("#")
    path, _, query_string = rest.partition("?")
    return Location(path=path, query_string=query_string, fragment=fragment)


def parse_query(query_string: str) -> dict[str, str | None]:
    """Parse a query string into a flat mapping.

    A leading ``?`` is ignored, ``+`` decodes to a space and the first
    value of a repeated key wins. ``k=`` maps to ``""`` while a bare ``k``
    maps to None, so a flag key still counts as present.
    """
    params: dict[str, str | None] = {}
    for part in query_string.removeprefix("?").split("&"):
        if not part:
            continue
        key, sep, value = part.partition("=")
        params.setdefault(unquote_plus(key), unquote_plus(value) if sep else None)
    return params
