"""AutoIndentEngine: rewrites keystrokes into indented, auto-completed text.

The engine sees each keystroke before the default insertion happens and may
return an Edit (the full replacement text plus the new cursor offset).
Returning None means "let the keystroke through unchanged".

Handled keys:
- Enter between an empty ``{}``/``[]`` pair opens an indented blank line.
- Enter on a bare ``key: value`` line normalizes it into a property:
  ``foo: bar`` becomes ``foo: "bar",`` and the cursor moves to a fresh line
  at the same indent.  Lines that start with a comment are left alone.
- ``/`` typed after ``,/`` becomes ``, // `` (start a trailing comment);
  after any other ``/`` it becomes ``/ ``.
- ``:`` inserts ``: ``.
- ``|`` inserts `` | `` (no doubled space before it).
- ``"`` and ``'`` insert the closing quote as well.

Property-line grammar, applied to the text between line start and cursor:

    line    := key ":" rest
    rest    := value [ "//" comment ]     (split at the last "//" outside quotes)
    value   := text [ "," ]               (one trailing comma is dropped)

The comment is split off before the trailing comma is trimmed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from json5_editor.config import EditorConfig
from json5_editor.lexer.tokens import OPENERS, PAIRS, TokenKind
from json5_editor.result import Edit
from json5_editor.session import SessionId, SessionRegistry

__all__ = ["AutoIndentEngine", "KeyEvent"]

_LOG = logging.getLogger(__name__)

# Key, then the first colon, then a non-empty rest of line.
_PROPERTY_LINE = re.compile(r"([^:]*):(.+)")

# Strings that JavaScript's Number() converts to a finite or infinite number.
_NUMERIC = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+"
)

# A value containing any of these already looks like a string, array,
# object or alternation.
_STRUCTURED_MARKERS = ('"', "'", "[", "{", "|")


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A keystroke as reported by the host.

    Attributes:
        key: The produced character, or ``"Enter"``.
        is_composing: True while an input method composition is active.
        selection_end: End of the current selection; None for a bare cursor.
    """

    key: str
    is_composing: bool = False
    selection_end: int | None = None


def _split_comment(rest: str) -> tuple[str, str]:
    """Split ``rest`` at the last ``//`` that is not inside a quoted string."""
    split_at = -1
    quote = ""
    index = 0
    while index < len(rest):
        char = rest[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = ""
        elif char in ('"', "'"):
            quote = char
        elif rest.startswith("//", index):
            split_at = index
        index += 1
    if split_at == -1:
        return rest, ""
    return rest[:split_at], rest[split_at:]


def _leading_spaces(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" "))]


class AutoIndentEngine:
    """Keystroke interceptor bound to a SessionRegistry.

    The registry supplies the session's cached tokens, used to decline any
    keystroke typed inside a string literal.

    Example::
        engine = AutoIndentEngine(registry)
        engine.handle_keydown(KeyEvent("Enter"), "foo: bar", 8, sid)
        # Edit(text='foo: "bar",\\n', cursor=12)
    """

    def __init__(
        self, registry: SessionRegistry, config: EditorConfig | None = None
    ) -> None:
        self._registry = registry
        self._config: EditorConfig = config if config is not None else EditorConfig()

    def handle_keydown(
        self, event: KeyEvent, text: str, cursor: int, session_id: SessionId
    ) -> Edit | None:
        """Return the rewritten text for ``event``, or None to allow the default.

        Args:
            event: The keystroke.
            text: Document text before the keystroke is applied.
            cursor: Cursor offset (selection start).
            session_id: Session of the editor receiving the keystroke.

        Returns:
            An Edit, or None when the key is not handled, the selection is
            non-empty, the session is stale, or the cursor is in a string.
        """
        if event.selection_end is not None and event.selection_end != cursor:
            return None
        session = self._registry.get(session_id)
        if session is None:
            _LOG.debug("keydown ignored for stale session %s", session_id)
            return None
        token = session.token_at(cursor)
        if token is not None and token.kind == TokenKind.STRING:
            return None

        if event.key == "Enter":
            if event.is_composing:
                return None
            return self._expand_pair(text, cursor) or self._property_line(
                text, cursor
            )
        if event.key == "/":
            return self._slash(text, cursor)
        if event.key == ":":
            return self._insert(text, cursor, ": ")
        if event.key == "|":
            before = "" if cursor > 0 and text[cursor - 1] == " " else " "
            return self._insert(text, cursor, f"{before}| ")
        if event.key in ('"', "'"):
            return self._insert(text, cursor, event.key * 2, advance=1)
        return None

    # ------------------------------------------------------------------
    # Enter
    # ------------------------------------------------------------------

    def _expand_pair(self, text: str, cursor: int) -> Edit | None:
        if cursor == 0 or text[cursor - 1] not in "{[":
            return None
        if text[cursor : cursor + 1] != PAIRS[text[cursor - 1]]:
            return None
        line_start = text.rfind("\n", 0, cursor) + 1
        indent = _leading_spaces(text[line_start:cursor])
        inner = indent + self._config.indent_unit
        new_text = f"{text[:cursor]}\n{inner}\n{indent}{text[cursor:]}"
        return Edit(text=new_text, cursor=cursor + 1 + len(inner))

    def _property_line(self, text: str, cursor: int) -> Edit | None:
        line_start = text.rfind("\n", 0, cursor) + 1
        line = text[line_start:cursor]
        if line.lstrip().startswith(("//", "/*")):
            # Comment text, not a property.
            return None
        match = _PROPERTY_LINE.match(line)
        if match is None:
            return None
        raw_value, comment = _split_comment(match.group(2))
        key, value, comment = (
            match.group(1).strip(),
            raw_value.strip(),
            comment.strip(),
        )
        if not key or not value:
            return None
        if value[-1] in OPENERS:
            # Opening a container, not completing a property.
            return None
        if value.endswith(","):
            value = value[:-1]
        if self._needs_quotes(value):
            quote = self._config.quote_char
            value = f"{quote}{value}{quote}"

        indent = _leading_spaces(line)
        suffix = f" {comment}" if comment else ""
        rewritten = f"{indent}{key}: {value},{suffix}\n{indent}"
        new_text = text[:line_start] + rewritten + text[cursor:]
        return Edit(text=new_text, cursor=line_start + len(rewritten))

    def _needs_quotes(self, value: str) -> bool:
        if _NUMERIC.fullmatch(value):
            return False
        if any(marker in value for marker in _STRUCTURED_MARKERS):
            return False
        return value not in self._config.keywords

    # ------------------------------------------------------------------
    # Character keys
    # ------------------------------------------------------------------

    def _slash(self, text: str, cursor: int) -> Edit | None:
        if cursor == 0 or text[cursor - 1] != "/":
            return None
        if cursor >= 2 and text[cursor - 2] == ",":
            new_text = f"{text[: cursor - 2]}, // {text[cursor:]}"
            return Edit(text=new_text, cursor=cursor + 3)
        return self._insert(text, cursor, "/ ")

    @staticmethod
    def _insert(
        text: str, cursor: int, inserted: str, advance: int | None = None
    ) -> Edit:
        step = len(inserted) if advance is None else advance
        return Edit(text=text[:cursor] + inserted + text[cursor:], cursor=cursor + step)
