"""urlmatch — match URLs against declarative route descriptors.

All public types are exported from this module for flat imports:

    from urlmatch import match_url, MatcherDescriptor, UrlMatcher
"""

__version__ = "0.1.0"

# Descriptors and their config form
from urlmatch._cache import PATTERN_CACHE_LIMIT, PatternCache, QueryCache
from urlmatch._config import (
    ConfigParseError,
    MatcherDescriptor,
    as_descriptor,
    parse_descriptor,
    parse_descriptors,
)
from urlmatch._errors import MatcherError, PatternSyntaxError
from urlmatch._location import parse_location, parse_query

# Matching
from urlmatch._matcher import PathMatch, UrlMatcher, default_matcher, match_url

# Path patterns
from urlmatch._pattern import CompiledPattern, Token, compile_pattern, parse_pattern
from urlmatch._types import Location, MatchResult, Transform

# Value matchers
from urlmatch._values import (
    ExactMatcher,
    PredicateMatcher,
    PresenceMatcher,
    RegexMatcher,
    ValueMatcher,
    as_value_matcher,
    match_value,
)

__all__ = [
    # Matching
    "match_url",
    "UrlMatcher",
    "PathMatch",
    "default_matcher",
    # Data types
    "Location",
    "MatchResult",
    "Transform",
    "parse_location",
    "parse_query",
    # Descriptors
    "MatcherDescriptor",
    "parse_descriptor",
    "parse_descriptors",
    "as_descriptor",
    # Value matchers
    "ValueMatcher",
    "PresenceMatcher",
    "ExactMatcher",
    "PredicateMatcher",
    "RegexMatcher",
    "as_value_matcher",
    "match_value",
    # Path patterns
    "CompiledPattern",
    "Token",
    "compile_pattern",
    "parse_pattern",
    # Caches
    "PatternCache",
    "QueryCache",
    "PATTERN_CACHE_LIMIT",
    # Errors
    "MatcherError",
    "PatternSyntaxError",
    "ConfigParseError",
]
