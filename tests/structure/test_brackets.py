"""Tests for BracketMatcher.

Covers forward and backward matching, candidate order around the cursor,
string-literal suppression, selection width, mismatched/unclosed pairs and
delimiters hidden inside comments or strings.
"""

from __future__ import annotations

import pytest

from json5_editor.result import BracketPair
from json5_editor.structure.brackets import BracketMatcher

DOC = '{ "x": [1,2] }'


@pytest.fixture
def matcher() -> BracketMatcher:
    """A fresh BracketMatcher instance for each test."""
    return BracketMatcher()


class TestMatching:
    def test_cursor_after_opening_brace(self, matcher: BracketMatcher) -> None:
        assert matcher.match(DOC, 1) == BracketPair(open=0, close=13)

    def test_cursor_before_opening_brace(self, matcher: BracketMatcher) -> None:
        assert matcher.match(DOC, 0) == BracketPair(open=0, close=13)

    def test_cursor_after_closing_bracket(self, matcher: BracketMatcher) -> None:
        assert matcher.match(DOC, 12) == BracketPair(open=7, close=11)

    def test_cursor_before_closing_brace(self, matcher: BracketMatcher) -> None:
        assert matcher.match(DOC, 13) == BracketPair(open=0, close=13)

    def test_opener_after_cursor_wins_over_closer_before(
        self, matcher: BracketMatcher
    ) -> None:
        text = "[1][2]"
        assert matcher.match(text, 3) == BracketPair(open=3, close=5)

    def test_parentheses(self, matcher: BracketMatcher) -> None:
        assert matcher.match('("a" | "b")', 0) == BracketPair(open=0, close=10)

    def test_no_adjacent_delimiter(self, matcher: BracketMatcher) -> None:
        assert matcher.match('{ "x": 1 }', 7) is None

    def test_single_character_selection_is_allowed(
        self, matcher: BracketMatcher
    ) -> None:
        assert matcher.match(DOC, 0, 1) == BracketPair(open=0, close=13)


class TestDeclines:
    def test_cursor_inside_string(self, matcher: BracketMatcher) -> None:
        assert matcher.match(DOC, 3) is None

    def test_cursor_inside_single_quoted_string(self, matcher: BracketMatcher) -> None:
        assert matcher.match("{a: '[x]'}", 6) is None

    def test_wide_selection(self, matcher: BracketMatcher) -> None:
        assert matcher.match(DOC, 0, 5) is None

    def test_unclosed(self, matcher: BracketMatcher) -> None:
        assert matcher.match("{[}", 0) is None

    def test_mismatched_partner(self, matcher: BracketMatcher) -> None:
        assert matcher.match("[}", 0) is None

    def test_empty_text(self, matcher: BracketMatcher) -> None:
        assert matcher.match("", 0) is None


class TestHiddenDelimiters:
    def test_brace_in_comment_is_skipped(self, matcher: BracketMatcher) -> None:
        assert matcher.match("{ // }\n}", 0) == BracketPair(open=0, close=7)

    def test_bracket_in_string_is_skipped(self, matcher: BracketMatcher) -> None:
        assert matcher.match("['a]', 1]", 0) == BracketPair(open=0, close=8)

    def test_cursor_next_to_commented_brace(self, matcher: BracketMatcher) -> None:
        assert matcher.match("// {\n1", 4) is None
