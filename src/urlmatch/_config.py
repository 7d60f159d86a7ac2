"""Matcher descriptors and their dict/YAML config form.

A descriptor says what a URL must look like to match: a path pattern plus
optional per-key query constraints and an optional fragment constraint.

Config shape (same dict works from JSON or YAML)::

    path: /users/:id
    query:
      tab: settings            # exact
      debug: true              # presence
      page: {regex: '^\\d+$'}  # regex
      sort: {exact: asc}       # explicit exact
      any: null                # no constraint
    hash: {present: true}

Config path: dict → parse_descriptor() → MatcherDescriptor → UrlMatcher.match()

UrlMatcher.match() also takes a mapping directly. It goes through
as_descriptor(), which skips validation: unsupported values impose no
constraint there.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from urlmatch._errors import MatcherError
from urlmatch._values import (
    ExactMatcher,
    PredicateMatcher,
    PresenceMatcher,
    RegexMatcher,
    Searchable,
    ValueMatcher,
    as_value_matcher,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Descriptor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class MatcherDescriptor:
    """What a URL must look like to match.

    Raw values for ``query`` entries and ``hash`` are coerced into
    ValueMatcher variants at construction (see ``as_value_matcher``).
    The query mapping is stored read-only. A ``hash`` of ``""`` or
    ``False`` counts as no constraint.

    Descriptors are immutable and meant to be built once and reused
    across many match calls.
    """

    path: str
    query: Mapping[str, Any] | None = None
    hash: Any = None

    def __post_init__(self) -> None:
        if self.query is not None:
            coerced = {key: as_value_matcher(raw) for key, raw in self.query.items()}
            object.__setattr__(self, "query", MappingProxyType(coerced))

        raw_hash = self.hash
        if isinstance(raw_hash, str | bool) and not raw_hash:
            raw_hash = None
        object.__setattr__(self, "hash", as_value_matcher(raw_hash))


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → descriptor)
# ═══════════════════════════════════════════════════════════════════════════════

_VALUE_MATCH_FORMS = frozenset({"exact", "regex", "present"})


class ConfigParseError(Exception):
    """Error parsing a config dict into a descriptor."""


def parse_descriptor(data: Mapping[str, Any] | MatcherDescriptor) -> MatcherDescriptor:
    """Parse a dict into a MatcherDescriptor.

    A MatcherDescriptor is returned unchanged.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if isinstance(data, MatcherDescriptor):
        return data
    if not isinstance(data, Mapping):
        msg = f"expected mapping, got {type(data).__name__}"
        raise ConfigParseError(msg)

    path = data.get("path")
    if path is None:
        msg = "missing required field 'path'"
        raise ConfigParseError(msg)
    if not isinstance(path, str):
        msg = f"'path' must be a string, got {type(path).__name__}"
        raise ConfigParseError(msg)

    query = None
    raw_query = data.get("query")
    if raw_query is not None:
        if not isinstance(raw_query, Mapping):
            msg = f"'query' must be a mapping, got {type(raw_query).__name__}"
            raise ConfigParseError(msg)
        query = {}
        for key, raw in raw_query.items():
            if not isinstance(key, str):
                msg = f"query keys must be strings, got {type(key).__name__}"
                raise ConfigParseError(msg)
            query[key] = _parse_value_match(raw, f"query.{key}")

    hash_ = _parse_value_match(data.get("hash"), "hash")
    return MatcherDescriptor(path=path, query=query, hash=hash_)


def as_descriptor(data: Mapping[str, Any] | MatcherDescriptor) -> MatcherDescriptor:
    """Coerce a runtime descriptor mapping without config validation.

    Unlike ``parse_descriptor``, value constraints follow the raw value
    table of ``as_value_matcher``: an unsupported value (a number, a plain
    dict) imposes no constraint instead of raising. A ``query`` that is not
    a mapping constrains nothing.

    Raises:
        ConfigParseError: If *data* is not a mapping or has no string path.
    """
    if isinstance(data, MatcherDescriptor):
        return data
    if not isinstance(data, Mapping):
        msg = f"expected mapping, got {type(data).__name__}"
        raise ConfigParseError(msg)

    path = data.get("path")
    if not isinstance(path, str):
        msg = f"'path' must be a string, got {type(path).__name__}"
        raise ConfigParseError(msg)

    query = data.get("query")
    if not isinstance(query, Mapping):
        query = None
    return MatcherDescriptor(path=path, query=query, hash=data.get("hash"))


def parse_descriptors(
    data: list[Mapping[str, Any] | MatcherDescriptor],
) -> tuple[MatcherDescriptor, ...]:
    """Parse a list of descriptor dicts (e.g. a loaded YAML route table).

    Raises:
        ConfigParseError: If the list or any entry is malformed.
    """
    if not isinstance(data, list):
        msg = f"expected list, got {type(data).__name__}"
        raise ConfigParseError(msg)
    return tuple(parse_descriptor(entry) for entry in data)


def _parse_value_match(data: Any, where: str) -> Any:
    """Parse one value constraint.

    Scalars (None, bool, str) and runtime matchers (callables, compiled
    regexes, ValueMatcher variants) pass through for the descriptor to
    coerce. Dicts must use exactly one of the explicit forms.
    """
    match data:
        case None | bool() | str():
            return data
        case PresenceMatcher() | ExactMatcher() | PredicateMatcher() | RegexMatcher():
            return data
        case re.Pattern() | Searchable():
            return data
        case Mapping():
            return _parse_explicit_match(data, where)
        case _ if callable(data):
            return data
        case _:
            msg = f"{where}: unsupported matcher value of type {type(data).__name__}"
            raise ConfigParseError(msg)


def _parse_explicit_match(data: Mapping[str, Any], where: str) -> ValueMatcher:
    """Parse ``{exact: ...}``, ``{regex: ...}`` or ``{present: ...}``."""
    forms = [key for key in data if key in _VALUE_MATCH_FORMS]
    if len(forms) != 1 or len(data) != 1:
        expected = sorted(_VALUE_MATCH_FORMS)
        msg = (
            f"{where}: matcher must contain exactly one of {expected}, "
            f"got keys: {sorted(map(str, data.keys()))}"
        )
        raise ConfigParseError(msg)

    form = forms[0]
    value = data[form]

    if form == "present":
        if not isinstance(value, bool):
            msg = f"{where}: 'present' must be a boolean, got {type(value).__name__}"
            raise ConfigParseError(msg)
        return PresenceMatcher(value)

    if not isinstance(value, str):
        msg = f"{where}: '{form}' must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)

    if form == "exact":
        return ExactMatcher(value)

    try:
        return RegexMatcher(value)
    except MatcherError as e:
        msg = f"{where}: {e}"
        raise ConfigParseError(msg) from e
