"""Caches for compiled path patterns and parsed query strings.

PatternCache is a one-way latch, not an evicting cache: once ``limit``
patterns have been stored, further misses are compiled and returned but
never stored. Stored entries are never replaced or removed.

QueryCache is unbounded. Distinct query strings are assumed to be
low-cardinality.

Both caches guard their read-check-insert sequence with a lock, so a
single instance can be shared between threads.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING

from urlmatch._location import parse_query
from urlmatch._pattern import compile_pattern

if TYPE_CHECKING:
    from collections.abc import Mapping

    from urlmatch._pattern import CompiledPattern

logger = logging.getLogger("urlmatch")

PATTERN_CACHE_LIMIT = 10_000

_EMPTY_QUERY: Mapping[str, str | None] = MappingProxyType({})


def _bucket(partial: bool, strict: bool) -> int:
    """Two-bit flag combining the compile options."""
    return (int(partial) << 1) | int(strict)


class PatternCache:
    """Memoizes compiled path patterns per (partial, strict) combination.

    Usage::

        cache = PatternCache()
        compiled = cache.compile("/users/:id")
        assert cache.compile("/users/:id") is compiled
    """

    __slots__ = ("_buckets", "_count", "_limit", "_lock")

    def __init__(self, limit: int = PATTERN_CACHE_LIMIT) -> None:
        self._buckets: tuple[dict[str, CompiledPattern], ...] = ({}, {}, {}, {})
        self._count = 0
        self._limit = limit
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        """Number of patterns stored across all buckets."""
        return self._count

    @property
    def limit(self) -> int:
        """Number of patterns after which the cache stops storing."""
        return self._limit

    @property
    def full(self) -> bool:
        """True once the cache has stopped storing new patterns."""
        return self._count >= self._limit

    def compile(
        self, pattern: str, *, partial: bool = False, strict: bool = False
    ) -> CompiledPattern:
        """Return the compiled form of *pattern*, compiling on a miss.

        Raises:
            PatternSyntaxError: If the pattern cannot be compiled.
        """
        bucket = self._buckets[_bucket(partial, strict)]
        with self._lock:
            cached = bucket.get(pattern)
        if cached is not None:
            return cached

        compiled = compile_pattern(pattern, end=not partial, strict=strict)
        logger.debug(
            "compiled path pattern %r (partial=%s, strict=%s)", pattern, partial, strict
        )

        with self._lock:
            # Another thread may have stored the same key meanwhile.
            existing = bucket.get(pattern)
            if existing is not None:
                return existing
            if self._count < self._limit:
                bucket[pattern] = compiled
                self._count += 1
                if self._count == self._limit:
                    logger.warning(
                        "path pattern cache reached %d entries; "
                        "new patterns will be compiled on every use",
                        self._limit,
                    )
        return compiled

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        """Check for a cached ``(pattern, partial, strict)`` triple."""
        if not isinstance(key, tuple) or len(key) != 3:
            return False
        pattern, partial, strict = key
        return pattern in self._buckets[_bucket(bool(partial), bool(strict))]


class QueryCache:
    """Memoizes parsed query strings, keyed by the raw string.

    Returned mappings are read-only and shared between callers.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, Mapping[str, str | None]] = {}
        self._lock = threading.Lock()

    def parse(self, query_string: str) -> Mapping[str, str | None]:
        """Parse *query_string*, reusing an earlier result when possible."""
        if not query_string:
            return _EMPTY_QUERY

        with self._lock:
            cached = self._entries.get(query_string)
        if cached is not None:
            return cached

        parsed = MappingProxyType(parse_query(query_string))
        with self._lock:
            return self._entries.setdefault(query_string, parsed)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query_string: object) -> bool:
        return query_string in self._entries
