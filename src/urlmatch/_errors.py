"""Error types shared across urlmatch."""


class MatcherError(Exception):
    """Base class for matcher construction errors."""


class PatternSyntaxError(MatcherError):
    """A path pattern could not be compiled.

    Raised at compile time, typically while a route table is being set up.
    Never raised for a URL that simply does not match.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid path pattern {pattern!r}: {reason}")
