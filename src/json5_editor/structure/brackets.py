"""BracketMatcher: finds the structural partner of a delimiter next to the cursor.

Matching works on the current text only. The text is tokenized so that
delimiters inside string literals and comments never take part in the depth
count; only PUNCTUATION/SEPARATOR tokens for ``{ [ ( } ] )`` do.
"""

from __future__ import annotations

import logging

from json5_editor.lexer.grammar import Json5Tokenizer
from json5_editor.lexer.tokens import CLOSERS, OPENERS, PAIRS, TokenKind
from json5_editor.protocols import Tokenizer
from json5_editor.result import BracketPair

__all__ = ["BracketMatcher"]

_LOG = logging.getLogger(__name__)


def _count_unescaped(text: str, quote: str) -> int:
    count = 0
    backslashes = 0
    for char in text:
        if char == "\\":
            backslashes += 1
            continue
        if char == quote and backslashes % 2 == 0:
            count += 1
        backslashes = 0
    return count


def _inside_string(text: str, cursor: int) -> bool:
    """An odd number of unescaped quotes after the cursor means it sits in a string."""
    tail = text[cursor:]
    return _count_unescaped(tail, '"') % 2 == 1 or _count_unescaped(tail, "'") % 2 == 1


class BracketMatcher:
    """Locates matching delimiter pairs around a cursor.

    Stateless apart from its tokenizer; a single instance may serve any
    number of sessions.

    Example::
        BracketMatcher().match('{ "x": [1,2] }', 1)
        # BracketPair(open=0, close=13)
    """

    def __init__(self, tokenizer: Tokenizer | None = None) -> None:
        self._tokenizer: Tokenizer = (
            tokenizer if tokenizer is not None else Json5Tokenizer()
        )

    def match(
        self, text: str, cursor: int, selection_end: int | None = None
    ) -> BracketPair | None:
        """Return the delimiter pair adjacent to the cursor, if any.

        Candidates are tried in order: an opener right after the cursor, an
        opener right before it, a closer right before the selection end, a
        closer right after it.

        Args:
            text: Current document text.
            cursor: Selection start offset.
            selection_end: Selection end offset. Defaults to ``cursor``.

        Returns:
            The matched pair, or None when the selection is wider than one
            character, the cursor is inside a string, no delimiter is
            adjacent, or the delimiter has no well-formed partner.
        """
        end = cursor if selection_end is None else selection_end
        if abs(end - cursor) > 1:
            return None
        if _inside_string(text, cursor):
            return None

        delimiters = self._delimiters(text)
        for offset, wanted in (
            (cursor, OPENERS),
            (cursor - 1, OPENERS),
            (end - 1, CLOSERS),
            (end, CLOSERS),
        ):
            if 0 <= offset < len(text) and text[offset] in wanted:
                if offset not in delimiters:
                    # Delimiter character inside a comment or literal.
                    continue
                return self._scan(delimiters, offset)
        return None

    def _delimiters(self, text: str) -> dict[int, str]:
        positions: dict[int, str] = {}
        offset = 0
        for token in self._tokenizer.tokenize(text):
            if token.kind in (TokenKind.PUNCTUATION, TokenKind.SEPARATOR) and (
                token.content in OPENERS or token.content in CLOSERS
            ):
                positions[offset] = token.content
            offset += token.length
        return positions

    def _scan(self, delimiters: dict[int, str], start: int) -> BracketPair | None:
        char = delimiters[start]
        forward = char in OPENERS
        same_side = OPENERS if forward else CLOSERS
        ordered = sorted(delimiters, reverse=not forward)
        depth = 0
        for offset in ordered[ordered.index(start) :]:
            depth += 1 if delimiters[offset] in same_side else -1
            if depth == 0:
                open_at, close_at = (start, offset) if forward else (offset, start)
                if PAIRS[delimiters[open_at]] != delimiters[close_at]:
                    _LOG.debug("mismatched pair at %d/%d", open_at, close_at)
                    return None
                return BracketPair(open=open_at, close=close_at)
        return None
