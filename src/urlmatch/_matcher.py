"""UrlMatcher — match a URL against one descriptor.

Three independent dimensions are checked in order, failing fast:

1. path: the descriptor's pattern must match the location's path
2. query: every constrained key must satisfy its ValueMatcher
3. hash: the fragment must satisfy the hash matcher, if any

No match is a normal outcome and returns None. Only a malformed pattern
raises, and it does so at compile time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from urlmatch._cache import PATTERN_CACHE_LIMIT, PatternCache, QueryCache
from urlmatch._config import MatcherDescriptor, as_descriptor
from urlmatch._location import parse_location
from urlmatch._types import Location, MatchResult
from urlmatch._values import as_value_matcher, match_value

if TYPE_CHECKING:
    from collections.abc import Mapping

    from urlmatch._types import Transform


@dataclass(frozen=True, slots=True)
class PathMatch:
    """Outcome of running a path pattern.

    ``captured`` is None when the path does not match. Otherwise index 0
    is the matched text and the rest align with ``param_names``.
    """

    captured: tuple[str | None, ...] | None
    param_names: tuple[str, ...]


class UrlMatcher:
    """Matches URLs against descriptors, owning its own caches.

    Usage::

        matcher = UrlMatcher()
        result = matcher.match("/users/42?tab=info", {"path": "/users/:id"})
        if result is not None:
            print(result.matched_path, result.query["tab"])

    A UrlMatcher is safe to share between threads. Cache state affects
    performance only, never the result of a match.
    """

    __slots__ = ("_patterns", "_queries")

    def __init__(self, *, pattern_cache_limit: int = PATTERN_CACHE_LIMIT) -> None:
        self._patterns = PatternCache(limit=pattern_cache_limit)
        self._queries = QueryCache()

    @property
    def patterns(self) -> PatternCache:
        return self._patterns

    @property
    def queries(self) -> QueryCache:
        return self._queries

    def match(
        self,
        location: str | Location,
        matchers: MatcherDescriptor | Mapping[str, Any],
        *,
        partial: bool = False,
        strict: bool = False,
        transform: Transform | None = None,
    ) -> MatchResult | None:
        """Match *location* against *matchers*.

        Args:
            location: Raw URL or an already decomposed Location.
            matchers: Descriptor, or a mapping with the same keys. Mapping
                values follow the raw value table of ``as_value_matcher``.
            partial: Allow the pattern to match a prefix of the path.
            strict: Make the trailing slash significant.
            transform: Called as ``transform(value, name)`` for every path
                parameter to build ``params``. Without it ``params`` is None.

        Returns:
            A MatchResult, or None if the path, query or hash does not match.

        Raises:
            PatternSyntaxError: The descriptor's path pattern is malformed.
            ConfigParseError: *matchers* has no string path.
        """
        if isinstance(location, str):
            location = parse_location(location)
        descriptor = as_descriptor(matchers)

        path_match = self.match_path(
            location.path, descriptor.path, partial=partial, strict=strict
        )
        if path_match.captured is None:
            return None

        query = self.match_query(location.query_string, descriptor.query)
        if query is None:
            return None

        if descriptor.hash is not None and not match_value(
            location.fragment, descriptor.hash
        ):
            return None

        matched, *values = path_match.captured

        params = None
        if transform is not None:
            params = {
                name: transform(value, name)
                for name, value in zip(path_match.param_names, values, strict=True)
            }

        if descriptor.path == "/" and matched == "":
            matched = "/"

        return MatchResult(
            params=params,
            query=query,
            hash=location.fragment,
            matched_path=matched or "",
            matchers=matchers,
            partial=partial,
        )

    def match_path(
        self, path: str, pattern: str, *, partial: bool = False, strict: bool = False
    ) -> PathMatch:
        """Run *pattern* against *path* through the pattern cache."""
        compiled = self._patterns.compile(pattern, partial=partial, strict=strict)
        return PathMatch(captured=compiled.exec(path), param_names=compiled.param_names)

    def match_query(
        self, query_string: str, matchers: Mapping[str, Any] | None = None
    ) -> Mapping[str, str | None] | None:
        """Parse *query_string* and check it against *matchers*.

        Keys without a matcher are not checked but are still returned.
        Returns None as soon as one constrained key fails.
        """
        query = self._queries.parse(query_string)
        if matchers is None:
            return query

        for key, expected in matchers.items():
            if not match_value(
                query.get(key), as_value_matcher(expected), present=key in query
            ):
                return None
        return query


_default = UrlMatcher()


def default_matcher() -> UrlMatcher:
    """The process-wide UrlMatcher used by ``match_url``."""
    return _default


def match_url(
    location: str | Location,
    matchers: MatcherDescriptor | Mapping[str, Any],
    *,
    partial: bool = False,
    strict: bool = False,
    transform: Transform | None = None,
) -> MatchResult | None:
    """Match *location* against *matchers* using the process-wide caches.

    See ``UrlMatcher.match`` for the arguments.
    """
    return _default.match(
        location, matchers, partial=partial, strict=strict, transform=transform
    )
