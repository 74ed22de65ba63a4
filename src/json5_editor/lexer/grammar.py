"""Json5Tokenizer: reference tokenizer for the editor's JSON5 dialect.

The dialect is JSON5 extended in four ways:
- Bare property names may contain ``*`` anywhere and ``?`` after the first
  character (e.g. ``items*``, ``name?``).
- Line breaks and two-space indents are tokens of their own, so a token
  stream can be mapped back onto character offsets without gaps.
- ``|``, ``(`` and ``)`` are separators used for alternation values such as
  ``"a" | "b"``.
- Anything the grammar does not recognise becomes an UNKNOWN token instead of
  an error, so half-typed documents still tokenize.

Alternatives are tried at each position in the order they appear in
``_PATTERNS``; the first one that matches wins.
"""

from __future__ import annotations

import re

from json5_editor.lexer.tokens import LexicalToken, TokenKind

# (kind, pattern) in priority order. Comments must precede everything else so
# that ``//`` is never read as two separators; properties must precede strings
# and keywords so that ``"a":`` and ``true:`` are keys.
_PATTERNS: tuple[tuple[TokenKind, str], ...] = (
    (TokenKind.COMMENT, r"//[^\r\n]*|/\*[\s\S]*?(?:\*/|\Z)"),
    (
        TokenKind.PROPERTY,
        r"(?:\"(?:\\.|[^\\\"\r\n])*\"|'(?:\\.|[^\\'\r\n])*')(?=[^\S\r\n]*:)"
        r"|[_$a-zA-Z\u00a0-\uffff*][$\w\u00a0-\uffff*?]*(?=[^\S\r\n]*:)",
    ),
    (TokenKind.STRING, r"\"(?:\\.|[^\\\"\r\n])*\"?|'(?:\\.|[^\\'\r\n])*'?"),
    (
        TokenKind.NUMBER,
        r"[+-]?(?:NaN|Infinity|0[xX][0-9a-fA-F]+)(?![$\w])"
        r"|[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?(?![$\w])",
    ),
    (TokenKind.KEYWORD, r"(?:true|false|null)(?![$\w])"),
    (TokenKind.PUNCTUATION, r"[{}\[\],]"),
    (TokenKind.OPERATOR, r":"),
    (TokenKind.SEPARATOR, r"[|()]"),
    (TokenKind.LINEBREAK, r"\r?\n"),
    (TokenKind.INDENT, r"[ ]{2}"),
    (TokenKind.WHITESPACE, r"[^\S\r\n]+"),
    (TokenKind.UNKNOWN, r"[^\s{}\[\],:|()\"'/]+|[\s\S]"),
)

# Module-level master pattern (compiled once, stateless, safe to share).
_MASTER = re.compile(
    "|".join(f"(?P<{kind.name}>{pattern})" for kind, pattern in _PATTERNS)
)


class Json5Tokenizer:
    """Splits JSON5 text into a gap-free sequence of LexicalTokens.

    Concatenating the ``content`` of every returned token reproduces the
    input exactly.

    Example::
        tokens = Json5Tokenizer().tokenize("{a: 1}")
        [t.kind for t in tokens]
        # [PUNCTUATION, PROPERTY, OPERATOR, WHITESPACE, NUMBER, PUNCTUATION]
    """

    def tokenize(self, text: str) -> list[LexicalToken]:
        """Tokenize ``text``.

        Args:
            text: Raw document text. May be empty or malformed.

        Returns:
            The ordered token list. Empty for empty input.
        """
        tokens: list[LexicalToken] = []
        for match in _MASTER.finditer(text):
            kind = TokenKind[match.lastgroup]  # type: ignore[misc]
            tokens.append(LexicalToken(kind=kind, content=match.group()))
        return tokens
