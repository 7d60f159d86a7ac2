"""Value matchers — constraints on a single query value or fragment.

A ValueMatcher is one of four frozen dataclasses. Raw Python values are
coerced into a variant once, when a descriptor is built, so matching never
inspects runtime shapes.

| Raw value             | Variant            |
|-----------------------|--------------------|
| ``True`` / ``False``  | PresenceMatcher    |
| ``str``               | ExactMatcher       |
| compiled regex        | RegexMatcher       |
| other callable        | PredicateMatcher   |
| ``None`` / other      | no constraint      |

String regexes use ``google-re2`` for guaranteed linear-time matching.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias, runtime_checkable

import re2

from urlmatch._errors import MatcherError


@runtime_checkable
class Searchable(Protocol):
    """Anything with a regex-style ``search`` method."""

    def search(self, string: str, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class PresenceMatcher:
    """Requires the value to be present and non-blank.

    The flag itself is not consulted: ``PresenceMatcher(False)`` also
    requires a present, non-blank value. Boolean matchers in descriptors
    have always behaved this way and callers depend on it.

    A valueless query key (``?debug``) is observed as None but is still
    present; callers that can tell it apart from a missing key pass
    ``present``.
    """

    expected: bool = True

    def matches(self, value: str | None, /, *, present: bool | None = None) -> bool:
        if present is None:
            present = value is not None
        return present and value != ""


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    """Exact string equality."""

    value: str

    def matches(self, value: str | None, /) -> bool:
        return value == self.value


@dataclass(frozen=True, slots=True)
class PredicateMatcher:
    """Delegates to a caller-supplied function of the observed value.

    The function receives None when the value is absent.
    """

    fn: Callable[[str | None], Any]

    def matches(self, value: str | None, /) -> bool:
        return bool(self.fn(value))


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Regular expression search anywhere in the value.

    A string pattern is compiled at construction time via ``google-re2``.
    An already-compiled pattern (stdlib ``re`` or ``re2``) is used as-is.
    An absent value never matches.

    Raises:
        MatcherError: If a string pattern is not valid RE2 syntax.
    """

    pattern: str | Searchable
    _compiled: Searchable = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str):
            object.__setattr__(self, "_compiled", self.pattern)
            return
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid regex pattern "{self.pattern}": {e}'
            raise MatcherError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, value: str | None, /) -> bool:
        if value is None:
            return False
        return self._compiled.search(value) is not None


ValueMatcher: TypeAlias = PresenceMatcher | ExactMatcher | PredicateMatcher | RegexMatcher


def as_value_matcher(raw: Any) -> ValueMatcher | None:
    """Coerce a raw descriptor value into a ValueMatcher.

    Returns None for values that impose no constraint.
    """
    match raw:
        case PresenceMatcher() | ExactMatcher() | PredicateMatcher() | RegexMatcher():
            return raw
        case None:
            return None
        case bool():
            return PresenceMatcher(raw)
        case str():
            return ExactMatcher(raw)
        case re.Pattern():
            return RegexMatcher(raw)
        case Searchable():
            return RegexMatcher(raw)
        case _ if callable(raw):
            return PredicateMatcher(raw)
        case _:
            return None


def match_value(
    observed: str | None,
    expected: ValueMatcher | None,
    *,
    present: bool | None = None,
) -> bool:
    """Decide whether *observed* satisfies *expected*.

    A missing matcher imposes no constraint. ``present`` says whether the
    key exists at all; it defaults to ``observed is not None``.
    """
    match expected:
        case None:
            return True
        case PresenceMatcher():
            return expected.matches(observed, present=present)
        case _:
            return expected.matches(observed)
