"""LexicalToken dataclass and TokenKind StrEnum for the JSON5 token stream.

Provides the foundational data types shared by the tokenizer, the path
annotator, the formatter and the auto-indent engine. Tokens are immutable:
everything computed about a token (paths, duplicate flags) lives in separate
annotation maps keyed by the token's index.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Enumeration of the lexical token kinds of the JSON5 dialect.

    StrEnum values are the lowercased member names:
    - PUNCTUATION -> "punctuation" : ``{ } [ ] ,``
    - OPERATOR    -> "operator"    : ``:``
    - SEPARATOR   -> "separator"   : ``| ( )``
    - STRING      -> "string"      : single- or double-quoted literal
    - NUMBER      -> "number"      : JSON5 numeric literal
    - KEYWORD     -> "keyword"     : ``true``, ``false``, ``null``
    - PROPERTY    -> "property"    : object key, quoted or bare
    - COMMENT     -> "comment"     : ``// ...`` or ``/* ... */``
    - LINEBREAK   -> "linebreak"   : ``\\n`` or ``\\r\\n``
    - INDENT      -> "indent"      : a two-space run
    - WHITESPACE  -> "whitespace"  : any other blank run
    - UNKNOWN     -> "unknown"     : anything the grammar does not recognise
    """

    PUNCTUATION = auto()
    OPERATOR = auto()
    SEPARATOR = auto()
    STRING = auto()
    NUMBER = auto()
    KEYWORD = auto()
    PROPERTY = auto()
    COMMENT = auto()
    LINEBREAK = auto()
    INDENT = auto()
    WHITESPACE = auto()
    UNKNOWN = auto()


# Kinds that carry layout only; the formatter regenerates them.
LAYOUT_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.LINEBREAK, TokenKind.INDENT, TokenKind.WHITESPACE}
)

# Kinds that form a value on their own.
SCALAR_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.STRING, TokenKind.NUMBER, TokenKind.KEYWORD, TokenKind.UNKNOWN}
)

OPENERS: str = "{[("
CLOSERS: str = "}])"
PAIRS: dict[str, str] = {"{": "}", "[": "]", "(": ")"}


@dataclass(frozen=True, slots=True)
class LexicalToken:
    """One lexical unit of a JSON5 document.

    Attributes:
        kind:    Which kind of token this is (see TokenKind).
        content: The exact source text of the token.
    """

    kind: TokenKind
    content: str

    @property
    def length(self) -> int:
        """Number of source characters covered by this token."""
        return len(self.content)

    def is_delimiter(self, char: str) -> bool:
        """True when this token is the single structural character ``char``."""
        return self.content == char and self.kind in (
            TokenKind.PUNCTUATION,
            TokenKind.SEPARATOR,
        )
