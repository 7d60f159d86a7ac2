"""Core data types for urlmatch.

- Location is the decomposed URL a descriptor is matched against
- MatchResult is what a successful match produces
- Transform converts a captured path value into a parameter value
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from urlmatch._config import MatcherDescriptor

# Receives the captured value (None for an unmatched optional segment)
# and the parameter name.
Transform: TypeAlias = Callable[[str | None, str], Any]


@dataclass(frozen=True, slots=True)
class Location:
    """A URL split into path, query string and fragment.

    The query string and fragment are stored without their ``?`` and
    ``#`` markers.
    """

    path: str
    query_string: str = ""
    fragment: str = ""


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful match.

    ``params`` is None unless a transform was supplied, so "no transform
    requested" stays distinguishable from "transform produced no keys".
    """

    params: dict[str, Any] | None
    query: Mapping[str, str | None]
    hash: str
    matched_path: str
    matchers: MatcherDescriptor | Mapping[str, Any]
    partial: bool = False
