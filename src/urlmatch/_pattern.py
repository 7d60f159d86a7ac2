"""Path pattern compiler — Express-style patterns to RE2 regexes.

Supported syntax (path-to-regexp 1.x dialect):

| Pattern            | Meaning                                          |
|--------------------|--------------------------------------------------|
| ``/users/:id``     | named segment, matches ``[^/]+?``                |
| ``/items/:id(\\d+)`` | named segment with a custom pattern            |
| ``/a/(\\d+)``      | unnamed segment, named ``"0"``, ``"1"``, ...     |
| ``/static/*``      | unnamed segment matching ``.*``                  |
| ``/posts/:id?``    | optional segment (its prefix becomes optional)   |
| ``/files/:path+``  | one or more segments                             |
| ``/files/:path*``  | zero or more segments                            |
| ``\\:``            | literal character                                |

Matching is case-insensitive. Regexes compile with ``google-re2``, so every
match runs in linear time. RE2 has no lookahead; the delimiter boundary
required by prefix matching is expressed as a trailing non-capturing group
outside the capture of the matched text instead.
"""

from __future__ import annotations

from dataclasses import dataclass

import re2

from urlmatch._errors import PatternSyntaxError

_DELIMITER = "/"

# escaped char | [prefix] (:name[(pattern)] | (pattern)) [modifier] | [prefix] *
_TOKEN_RE = re2.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))"
)

_STRING_ESCAPES = str.maketrans({c: "\\" + c for c in ".+*?=^!:${}()[]|/\\"})
_GROUP_ESCAPES = str.maketrans({c: "\\" + c for c in "=!:$/()"})


def _escape_string(value: str) -> str:
    return value.translate(_STRING_ESCAPES)


def _escape_group(value: str) -> str:
    return value.translate(_GROUP_ESCAPES)


@dataclass(frozen=True, slots=True)
class Token:
    """A parameter segment of a parsed path pattern.

    Literal runs between parameters are represented as plain strings.
    """

    name: str
    prefix: str
    delimiter: str
    optional: bool
    repeat: bool
    partial: bool
    asterisk: bool
    pattern: str


def parse_pattern(pattern: str) -> list[str | Token]:
    """Split a path pattern into literal strings and parameter tokens.

    ``"/users/:id"`` parses to ``["/users", Token(name="id", prefix="/", ...)]``.
    """
    tokens: list[str | Token] = []
    key = 0
    index = 0
    path = ""

    for m in _TOKEN_RE.finditer(pattern):
        escaped, prefix, name, capture, group, modifier, asterisk = m.groups()
        path += pattern[index : m.start()]
        index = m.end()

        if escaped:
            path += escaped[1]
            continue

        if path:
            tokens.append(path)
            path = ""

        following = pattern[index : index + 1]
        if name is None:
            name = str(key)
            key += 1

        delimiter = prefix or _DELIMITER
        regex = capture or group
        if regex:
            segment = _escape_group(regex)
        elif asterisk:
            segment = ".*"
        else:
            segment = f"[^{_escape_string(delimiter)}]+?"

        tokens.append(
            Token(
                name=name,
                prefix=prefix or "",
                delimiter=delimiter,
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                partial=prefix is not None and following not in ("", prefix),
                asterisk=asterisk is not None,
                pattern=segment,
            )
        )

    path += pattern[index:]
    if path:
        tokens.append(path)
    return tokens


def tokens_to_regex(tokens: list[str | Token], *, end: bool, strict: bool) -> str:
    """Build the RE2 source for a token list.

    Group 1 always wraps the matched text; parameter captures follow it
    in declaration order.
    """
    route = ""
    for token in tokens:
        if isinstance(token, str):
            route += _escape_string(token)
            continue

        prefix = _escape_string(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"

        if token.optional:
            if token.partial:
                capture = f"{prefix}({capture})?"
            else:
                capture = f"(?:{prefix}({capture}))?"
        else:
            capture = f"{prefix}({capture})"
        route += capture

    delimiter = _escape_string(_DELIMITER)
    ends_with_delimiter = route.endswith(delimiter)

    if not strict:
        if ends_with_delimiter:
            route = route[: -len(delimiter)]
        route += f"(?:{delimiter}$)?"

    if end:
        return f"(?i)^({route})$"
    if strict and ends_with_delimiter:
        return f"(?i)^({route})"
    return f"(?i)^({route})(?:{delimiter}|$)"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """The executable form of a path pattern.

    Immutable once created, so a single instance can be shared by every
    caller of a cache.
    """

    pattern: str
    regex: re2.Pattern[str]
    param_names: tuple[str, ...]
    end: bool = True
    strict: bool = False

    def exec(self, path: str) -> tuple[str | None, ...] | None:
        """Run the pattern against *path*.

        Returns None on failure. Otherwise index 0 is the matched text and
        the remaining items are the captured values aligned with
        ``param_names`` (None for optional segments that did not match).
        """
        m = self.regex.match(path)
        if m is None:
            return None
        return m.groups()


def compile_pattern(
    pattern: str, *, end: bool = True, strict: bool = False
) -> CompiledPattern:
    """Compile a path pattern.

    Args:
        pattern: Express-style path pattern.
        end: Require the whole path to be consumed.
        strict: Make the trailing slash significant.

    Raises:
        PatternSyntaxError: If a custom segment pattern is not valid RE2.
    """
    tokens = parse_pattern(pattern)
    source = tokens_to_regex(tokens, end=end, strict=strict)
    try:
        regex = re2.compile(source)
    except re2.error as e:
        raise PatternSyntaxError(pattern, str(e)) from e

    return CompiledPattern(
        pattern=pattern,
        regex=regex,
        param_names=tuple(t.name for t in tokens if isinstance(t, Token)),
        end=end,
        strict=strict,
    )
