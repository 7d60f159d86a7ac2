"""Tests for the path pattern compiler."""

from __future__ import annotations

import pytest

from urlmatch import (
    MatcherError,
    PatternSyntaxError,
    Token,
    compile_pattern,
    parse_pattern,
)


class TestParsePattern:
    def test_literal_only(self) -> None:
        assert parse_pattern("/about/team") == ["/about/team"]

    def test_named_segment(self) -> None:
        assert parse_pattern("/users/:id") == [
            "/users",
            Token(
                name="id",
                prefix="/",
                delimiter="/",
                optional=False,
                repeat=False,
                partial=False,
                asterisk=False,
                pattern="[^\\/]+?",
            ),
        ]

    def test_modifiers(self) -> None:
        optional, plus, star = (
            parse_pattern("/:a?")[0],
            parse_pattern("/:b+")[0],
            parse_pattern("/:c*")[0],
        )
        assert isinstance(optional, Token)
        assert isinstance(plus, Token)
        assert isinstance(star, Token)
        assert (optional.optional, optional.repeat) == (True, False)
        assert (plus.optional, plus.repeat) == (False, True)
        assert (star.optional, star.repeat) == (True, True)

    def test_custom_pattern(self) -> None:
        tokens = parse_pattern("/items/:id(\\d+)")
        assert tokens[1] == Token(
            name="id",
            prefix="/",
            delimiter="/",
            optional=False,
            repeat=False,
            partial=False,
            asterisk=False,
            pattern="\\d+",
        )

    def test_unnamed_groups_numbered_in_order(self) -> None:
        tokens = parse_pattern("/a/(\\d+)/:b/(\\w+)")
        names = [t.name for t in tokens if isinstance(t, Token)]
        assert names == ["0", "b", "1"]

    def test_asterisk(self) -> None:
        token = parse_pattern("/static/*")[1]
        assert isinstance(token, Token)
        assert token.asterisk is True
        assert token.name == "0"
        assert token.pattern == ".*"

    def test_escaped_character_is_literal(self) -> None:
        assert parse_pattern("/a\\:b") == ["/a:b"]

    def test_dot_prefix_marks_partial(self) -> None:
        tokens = parse_pattern("/files/:name.:ext")
        name, ext = tokens[1], tokens[2]
        assert isinstance(name, Token)
        assert isinstance(ext, Token)
        assert name.partial is True
        assert ext.prefix == "."
        assert ext.pattern == "[^\\.]+?"


class TestCompilePattern:
    def test_param_names(self) -> None:
        compiled = compile_pattern("/a/:x/:y")
        assert compiled.param_names == ("x", "y")

    def test_exec_returns_matched_text_then_captures(self) -> None:
        compiled = compile_pattern("/users/:id")
        assert compiled.exec("/users/42") == ("/users/42", "42")

    def test_exec_no_match(self) -> None:
        compiled = compile_pattern("/users/:id")
        assert compiled.exec("/posts/42") is None
        assert compiled.exec("/users") is None
        assert compiled.exec("/users/42/edit") is None

    def test_trailing_slash_optional_by_default(self) -> None:
        compiled = compile_pattern("/users/:id")
        assert compiled.exec("/users/42/") == ("/users/42/", "42")

    def test_strict_rejects_trailing_slash(self) -> None:
        compiled = compile_pattern("/users/:id", strict=True)
        assert compiled.exec("/users/42/") is None
        assert compiled.exec("/users/42") == ("/users/42", "42")

    def test_case_insensitive(self) -> None:
        compiled = compile_pattern("/users/:id")
        assert compiled.exec("/Users/AbC") == ("/Users/AbC", "AbC")

    def test_prefix_match_stops_at_delimiter(self) -> None:
        compiled = compile_pattern("/users", end=False)
        assert compiled.exec("/users/42/edit") == ("/users",)
        assert compiled.exec("/users") == ("/users",)
        assert compiled.exec("/usersettings") is None

    def test_prefix_match_keeps_final_slash(self) -> None:
        compiled = compile_pattern("/users", end=False)
        assert compiled.exec("/users/") == ("/users/",)

    def test_strict_prefix_ending_in_delimiter(self) -> None:
        compiled = compile_pattern("/users/", end=False, strict=True)
        assert compiled.exec("/users/42") == ("/users/",)

    def test_root_pattern(self) -> None:
        compiled = compile_pattern("/")
        assert compiled.exec("/") == ("/",)
        assert compiled.exec("") == ("",)
        assert compiled.exec("/a") is None

    def test_optional_segment(self) -> None:
        compiled = compile_pattern("/posts/:id?")
        assert compiled.exec("/posts") == ("/posts", None)
        assert compiled.exec("/posts/7") == ("/posts/7", "7")

    def test_repeated_segments(self) -> None:
        star = compile_pattern("/files/:path*")
        plus = compile_pattern("/files/:path+")
        assert star.exec("/files/a/b/c") == ("/files/a/b/c", "a/b/c")
        assert star.exec("/files") == ("/files", None)
        assert plus.exec("/files") is None
        assert plus.exec("/files/a") == ("/files/a", "a")

    def test_custom_pattern_constrains_segment(self) -> None:
        compiled = compile_pattern("/items/:id(\\d+)")
        assert compiled.exec("/items/12") == ("/items/12", "12")
        assert compiled.exec("/items/abc") is None

    def test_literal_regex_characters_are_escaped(self) -> None:
        compiled = compile_pattern("/v1.0/a+b")
        assert compiled.exec("/v1.0/a+b") == ("/v1.0/a+b",)
        assert compiled.exec("/v1x0/aab") is None

    def test_options_recorded(self) -> None:
        compiled = compile_pattern("/a", end=False, strict=True)
        assert compiled.end is False
        assert compiled.strict is True
        assert compiled.pattern == "/a"

    def test_invalid_custom_pattern_raises(self) -> None:
        with pytest.raises(PatternSyntaxError) as exc_info:
            compile_pattern("/a/:id([)")
        assert exc_info.value.pattern == "/a/:id([)"
        assert isinstance(exc_info.value, MatcherError)
