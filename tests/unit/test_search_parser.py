"""Unit tests for the search parser."""

from __future__ import annotations

import pytest

from notez.exceptions import SearchSyntaxError
from notez.search.ast_nodes import And, Folder, Not, Or, Pinned, Tag, Text
from notez.search.parser import parse, parse_query
from notez.search.tokenizer import tokenize

# ---------------------------------------------------------------------------
# Atoms
# ---------------------------------------------------------------------------


class TestAtoms:
    def test_single_word(self) -> None:
        assert parse("hello") == Text("hello")

    def test_tag(self) -> None:
        assert parse("tag:work") == Tag("work")

    def test_folder(self) -> None:
        assert parse("folder:archive") == Folder("archive")

    def test_pinned(self) -> None:
        assert parse("pinned:true") == Pinned(True)
        assert parse("pinned:false") == Pinned(False)

    def test_quoted_tag_keeps_spaces(self) -> None:
        assert parse('tag:"co op"') == Tag("co op")

    def test_accepts_token_sequence(self) -> None:
        assert parse(tokenize("tag:work urgent")) == parse("tag:work urgent")


# ---------------------------------------------------------------------------
# Precedence and associativity
# ---------------------------------------------------------------------------


class TestPrecedence:
    def test_and_binds_tighter_than_or(self) -> None:
        assert parse("a OR b AND c") == Or(Text("a"), And(Text("b"), Text("c")))

    def test_and_before_or(self) -> None:
        assert parse("a AND b OR c") == Or(And(Text("a"), Text("b")), Text("c"))

    def test_or_left_associative(self) -> None:
        assert parse("a OR b OR c") == Or(Or(Text("a"), Text("b")), Text("c"))

    def test_and_left_associative(self) -> None:
        assert parse("a AND b AND c") == And(And(Text("a"), Text("b")), Text("c"))

    def test_not_binds_single_atom(self) -> None:
        assert parse("NOT tag:work AND folder:x") == And(Not(Tag("work")), Folder("x"))

    def test_not_on_group(self) -> None:
        assert parse("NOT (a OR b)") == Not(Or(Text("a"), Text("b")))

    def test_parentheses_override(self) -> None:
        assert parse("(a OR b) AND c") == And(Or(Text("a"), Text("b")), Text("c"))

    def test_nested_parentheses(self) -> None:
        assert parse("((a))") == Text("a")

    def test_lowercase_keywords(self) -> None:
        assert parse("a or b and not c") == Or(Text("a"), And(Text("b"), Not(Text("c"))))


# ---------------------------------------------------------------------------
# Implicit AND
# ---------------------------------------------------------------------------


class TestImplicitAnd:
    def test_tag_then_word(self) -> None:
        assert parse("tag:work urgent") == And(Tag("work"), Text("urgent"))

    def test_two_words(self) -> None:
        assert parse("dark psy") == And(Text("dark"), Text("psy"))

    def test_tag_then_folder(self) -> None:
        assert parse("tag:work folder:x") == And(Tag("work"), Folder("x"))

    def test_pinned_then_group(self) -> None:
        assert parse("pinned:true (a OR b)") == And(Pinned(True), Or(Text("a"), Text("b")))

    def test_mixed_with_explicit(self) -> None:
        assert parse("a b AND c") == And(And(Text("a"), Text("b")), Text("c"))

    def test_implicit_and_inside_or(self) -> None:
        assert parse("a b OR c d") == Or(
            And(Text("a"), Text("b")),
            And(Text("c"), Text("d")),
        )

    def test_not_does_not_start_implicit_and(self) -> None:
        """A NOT after an atom needs an explicit AND; without it parsing stops."""
        assert parse("tag:a NOT tag:b") == Tag("a")
        assert parse("tag:a AND NOT tag:b") == And(Tag("a"), Not(Tag("b")))


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformed:
    def test_empty(self) -> None:
        assert parse("") is None
        assert parse([]) is None

    def test_only_noise(self) -> None:
        assert parse("!!! ???") is None

    def test_dangling_not(self) -> None:
        assert parse("NOT") is None

    def test_dangling_not_after_and_keeps_left(self) -> None:
        assert parse("tag:a AND NOT") == Tag("a")

    def test_trailing_and(self) -> None:
        assert parse("tag:a AND") == Tag("a")

    def test_trailing_or(self) -> None:
        assert parse("a OR") == Text("a")

    def test_leading_operator(self) -> None:
        assert parse("AND a") is None
        assert parse("OR a") is None

    def test_quotes_around_words_ignored(self) -> None:
        assert parse('"bread rye"') == And(Text("bread"), Text("rye"))

    def test_quoted_not_is_operator(self) -> None:
        assert parse('"NOT" a') == Not(Text("a"))

    def test_double_not(self) -> None:
        assert parse("NOT NOT a") is None

    def test_unmatched_open_paren(self) -> None:
        assert parse("(tag:work") == parse("(tag:work)") == Tag("work")

    def test_unmatched_open_paren_with_more(self) -> None:
        assert parse("(a OR b") == Or(Text("a"), Text("b"))

    def test_stray_close_paren_truncates(self) -> None:
        assert parse("a ) b") == Text("a")

    def test_empty_group(self) -> None:
        assert parse("()") is None

    def test_empty_group_after_atom(self) -> None:
        assert parse("a ()") == Text("a")


# ---------------------------------------------------------------------------
# parse_query
# ---------------------------------------------------------------------------


class TestParseQuery:
    def test_blank_is_no_filter(self) -> None:
        assert parse_query("") is None
        assert parse_query("   ") is None

    def test_valid(self) -> None:
        assert parse_query("tag:work") == Tag("work")

    def test_invalid_raises(self) -> None:
        with pytest.raises(SearchSyntaxError) as exc_info:
            parse_query("NOT")
        assert str(exc_info.value) == "Invalid search syntax"
        assert exc_info.value.query == "NOT"

    def test_noise_only_raises(self) -> None:
        with pytest.raises(SearchSyntaxError):
            parse_query("%%%")
