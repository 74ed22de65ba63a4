"""Tests for the reference Json5Tokenizer.

Covers token kinds for every construct of the dialect, the gap-free
guarantee (tokens concatenate back to the input), unquoted property names
with ``*``/``?``, comments, alternation separators and malformed input.
"""

from __future__ import annotations

import pytest

from json5_editor.lexer import Json5Tokenizer, LexicalToken, TokenKind
from json5_editor.protocols import Tokenizer


@pytest.fixture
def tokenizer() -> Json5Tokenizer:
    """A fresh Json5Tokenizer instance for each test."""
    return Json5Tokenizer()


def _kinds(tokens: list[LexicalToken]) -> list[TokenKind]:
    return [t.kind for t in tokens]


def _significant(tokens: list[LexicalToken]) -> list[tuple[TokenKind, str]]:
    layout = {TokenKind.WHITESPACE, TokenKind.INDENT, TokenKind.LINEBREAK}
    return [(t.kind, t.content) for t in tokens if t.kind not in layout]


class TestBasicKinds:
    def test_simple_object(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("{a: 1}")
        assert _kinds(tokens) == [
            TokenKind.PUNCTUATION,
            TokenKind.PROPERTY,
            TokenKind.OPERATOR,
            TokenKind.WHITESPACE,
            TokenKind.NUMBER,
            TokenKind.PUNCTUATION,
        ]

    def test_quoted_property_and_string_value(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("\"a\": 'b'")
        assert _significant(tokens) == [
            (TokenKind.PROPERTY, '"a"'),
            (TokenKind.OPERATOR, ":"),
            (TokenKind.STRING, "'b'"),
        ]

    def test_keywords(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("[true, false, null]")
        keywords = [t.content for t in tokens if t.kind == TokenKind.KEYWORD]
        assert keywords == ["true", "false", "null"]

    def test_keyword_prefix_is_unknown(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("truex")
        assert _significant(tokens) == [(TokenKind.UNKNOWN, "truex")]

    @pytest.mark.parametrize("literal", ["42", "-1.5e3", "0x1F", ".5", "Infinity", "NaN"])
    def test_numbers(self, tokenizer: Json5Tokenizer, literal: str) -> None:
        assert _significant(tokenizer.tokenize(literal)) == [(TokenKind.NUMBER, literal)]

    def test_bare_word_value_is_unknown(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("a: bar")
        assert _significant(tokens)[-1] == (TokenKind.UNKNOWN, "bar")


class TestProperties:
    @pytest.mark.parametrize("name", ["items*", "name?", "$id", "_private", "*"])
    def test_extended_bare_names(self, tokenizer: Json5Tokenizer, name: str) -> None:
        tokens = tokenizer.tokenize(f"{name}: 1")
        assert tokens[0] == LexicalToken(TokenKind.PROPERTY, name)

    def test_space_before_colon_still_property(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("key  : 1")
        assert tokens[0] == LexicalToken(TokenKind.PROPERTY, "key")

    def test_keyword_followed_by_colon_is_property(
        self, tokenizer: Json5Tokenizer
    ) -> None:
        tokens = tokenizer.tokenize("true: 1")
        assert tokens[0].kind == TokenKind.PROPERTY


class TestCommentsAndSeparators:
    def test_line_comment_runs_to_end_of_line(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("1 // note {\n2")
        assert (TokenKind.COMMENT, "// note {") in _significant(tokens)

    def test_block_comment(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("/* a\nb */1")
        assert tokens[0] == LexicalToken(TokenKind.COMMENT, "/* a\nb */")

    def test_comment_marker_inside_string_is_not_comment(
        self, tokenizer: Json5Tokenizer
    ) -> None:
        tokens = tokenizer.tokenize('"http://x"')
        assert _significant(tokens) == [(TokenKind.STRING, '"http://x"')]

    def test_alternation(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize('("a" | "b")')
        assert _significant(tokens) == [
            (TokenKind.SEPARATOR, "("),
            (TokenKind.STRING, '"a"'),
            (TokenKind.SEPARATOR, "|"),
            (TokenKind.STRING, '"b"'),
            (TokenKind.SEPARATOR, ")"),
        ]


class TestLayout:
    def test_linebreak_and_indent(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("{\n    a: 1\n}")
        assert _kinds(tokens)[:4] == [
            TokenKind.PUNCTUATION,
            TokenKind.LINEBREAK,
            TokenKind.INDENT,
            TokenKind.INDENT,
        ]

    def test_crlf_is_one_linebreak(self, tokenizer: Json5Tokenizer) -> None:
        tokens = tokenizer.tokenize("1\r\n2")
        assert tokens[1] == LexicalToken(TokenKind.LINEBREAK, "\r\n")

    def test_empty_text(self, tokenizer: Json5Tokenizer) -> None:
        assert tokenizer.tokenize("") == []

    @pytest.mark.parametrize(
        "text",
        [
            "{a: 1, b: [1, 2, {c: 'x'}], // tail\n}",
            "{{]]}: : ,, ||| 'unterminated",
            "@#%^&\t\r\n  \"a\\\"b\": `tick`",
            "/* never closed",
        ],
    )
    def test_tokens_cover_input_without_gaps(
        self, tokenizer: Json5Tokenizer, text: str
    ) -> None:
        tokens = tokenizer.tokenize(text)
        assert "".join(t.content for t in tokens) == text
        assert all(t.length > 0 for t in tokens)


class TestProtocolConformance:
    def test_reference_tokenizer_satisfies_protocol(self) -> None:
        assert isinstance(Json5Tokenizer(), Tokenizer)

    def test_custom_tokenizer_satisfies_protocol(self) -> None:
        class WordTokenizer:
            def tokenize(self, text: str) -> list[LexicalToken]:
                return [LexicalToken(TokenKind.UNKNOWN, text)] if text else []

        assert isinstance(WordTokenizer(), Tokenizer)
