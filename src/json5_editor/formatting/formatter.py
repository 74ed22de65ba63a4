"""Formatter: re-serializes a JSON5 token stream into canonical text.

Canonical text follows a small set of layout rules:
- ``{``/``[`` with content break the line and indent one level; the closer
  sits on its own line at the outer level.  Empty ``{}``/``[]`` stay inline.
- Every entry inside a container ends in ``,``, the last one included.
- ``key: value`` has exactly one space after the colon; ``|`` is padded with
  single spaces; nothing is padded inside ``(`` and ``)``.
- A comment that shared a source line with the code before it stays on
  that line after a single space (commas go before it).  A comment that
  started its own source line keeps its own line.
- Blank lines and irregular whitespace collapse.

Literal content is copied verbatim; only whitespace and punctuation
placement change, so formatting canonical output yields the same output.

Unbalanced input never raises.  On an unmatched closer the formatted prefix
is followed by the remaining source verbatim; unclosed containers are
formatted as far as they go.  Either way ``FormatResult.ok`` is False.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cachetools import LRUCache

from json5_editor.config import EditorConfig
from json5_editor.lexer.tokens import (
    LAYOUT_KINDS,
    PAIRS,
    SCALAR_KINDS,
    LexicalToken,
    TokenKind,
)
from json5_editor.result import FormatResult

__all__ = ["Formatter"]

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class _Line:
    depth: int
    code: str = ""
    comment: str = ""

    @property
    def blank(self) -> bool:
        return not self.code and not self.comment

    def render(self, unit: str) -> str:
        body = " ".join(part for part in (self.code, self.comment) if part)
        return f"{unit * self.depth}{body}"


def _join(code: str, text: str) -> str:
    if not code:
        return text
    if text in (",", ":") or text == ")" or code.endswith("("):
        return code + text
    return f"{code} {text}"


class _Layout:
    """Line buffer plus the bookkeeping for one formatting pass."""

    def __init__(self) -> None:
        self.lines: list[_Line] = [_Line(depth=0)]
        self.stack: list[str] = []
        self.needs_comma = False
        self.value_line = 0
        self.pending_break = False

    @property
    def current(self) -> _Line:
        return self.lines[-1]

    def break_line(self) -> None:
        if self.current.blank:
            self.current.depth = len(self.stack)
        else:
            self.lines.append(_Line(depth=len(self.stack)))

    def write(self, text: str) -> None:
        if self.current.comment:
            self.break_line()
        self.current.code = _join(self.current.code, text)

    def begin_value(self, after_break: bool) -> None:
        if self.needs_comma and after_break:
            self.end_entry()
        if self.pending_break:
            self.break_line()
            self.pending_break = False

    def mark_value(self) -> None:
        self.needs_comma = True
        self.value_line = len(self.lines) - 1

    def end_entry(self) -> None:
        if not self.needs_comma:
            return
        # Top-level values are separated by line breaks only.
        if self.stack:
            line = self.lines[self.value_line]
            line.code = _join(line.code, ",")
        self.needs_comma = False
        self.pending_break = True

    def comment(self, content: str, inline: bool) -> None:
        if inline and content.startswith("/*") and "\n" not in content:
            self.current.code = _join(self.current.code, content)
            return
        if inline and self.current.code and not self.current.comment:
            self.current.comment = content
            return
        if not self.current.blank:
            self.lines.append(_Line(depth=len(self.stack)))
        else:
            self.current.depth = len(self.stack)
        self.current.comment = content

    def render(self, unit: str) -> str:
        return "\n".join(line.render(unit) for line in self.lines if not line.blank)


def _next_significant(tokens: Sequence[LexicalToken], start: int) -> int | None:
    for index in range(start, len(tokens)):
        if tokens[index].kind not in LAYOUT_KINDS:
            return index
    return None


class Formatter:
    """Produces canonical text from a token sequence.

    Results are memoized per instance in an LRU cache keyed by the token
    sequence itself (tokens are immutable and hashable).  Two Formatter
    instances never share cache state.

    Example::
        tokens = Json5Tokenizer().tokenize("{a:1}")
        Formatter().format(tokens).text
        # '{\\n  a: 1,\\n}'
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._cache: LRUCache[tuple[LexicalToken, ...], FormatResult] = LRUCache(
            maxsize=self._config.format_cache_size
        )

    @property
    def cache_size(self) -> int:
        """The current number of memoized results."""
        return int(self._cache.currsize)

    def format(self, tokens: Sequence[LexicalToken]) -> FormatResult:
        """Format ``tokens`` into canonical text.

        Args:
            tokens: Token sequence in source order. May be empty or unbalanced.

        Returns:
            A FormatResult; ``ok`` is False when the input was unbalanced.
        """
        key = tuple(tokens)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        result = self._format(key)
        if not result.ok:
            _LOG.debug("formatted unbalanced token stream (%d tokens)", len(key))
        self._cache[key] = result
        return result

    def _format(self, tokens: tuple[LexicalToken, ...]) -> FormatResult:
        unit = self._config.indent_unit
        layout = _Layout()
        after_break = True
        skip_to = -1

        for index, token in enumerate(tokens):
            if index <= skip_to:
                continue
            kind = token.kind
            content = token.content
            if kind in LAYOUT_KINDS:
                after_break = after_break or kind == TokenKind.LINEBREAK
                continue

            if kind == TokenKind.COMMENT:
                layout.comment(content, inline=not after_break)
            elif token.is_delimiter("{") or token.is_delimiter("["):
                layout.begin_value(after_break)
                closer = _next_significant(tokens, index + 1)
                if closer is not None and tokens[closer].is_delimiter(PAIRS[content]):
                    layout.write(content + PAIRS[content])
                    layout.mark_value()
                    skip_to = closer
                else:
                    layout.write(content)
                    layout.stack.append(content)
                    layout.needs_comma = False
                    layout.pending_break = True
            elif token.is_delimiter("}") or token.is_delimiter("]"):
                if not layout.stack or PAIRS[layout.stack[-1]] != content:
                    remainder = "".join(t.content for t in tokens[index:])
                    return FormatResult(text=layout.render(unit) + remainder, ok=False)
                layout.end_entry()
                layout.stack.pop()
                layout.pending_break = False
                layout.break_line()
                layout.write(content)
                layout.mark_value()
                if not layout.stack:
                    layout.pending_break = True
            elif token.is_delimiter(","):
                layout.end_entry()
            elif kind == TokenKind.PROPERTY:
                layout.begin_value(after_break=True)
                layout.write(content)
            elif kind == TokenKind.OPERATOR or token.is_delimiter("|"):
                layout.needs_comma = False
                layout.write(content)
            elif token.is_delimiter("("):
                layout.begin_value(after_break)
                layout.needs_comma = False
                layout.write(content)
            elif token.is_delimiter(")"):
                layout.write(content)
                layout.mark_value()
            elif kind in SCALAR_KINDS:
                layout.begin_value(after_break)
                layout.write(content)
                layout.mark_value()
            else:
                layout.write(content)
            after_break = False

        return FormatResult(text=layout.render(unit), ok=not layout.stack)
