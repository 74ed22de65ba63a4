"""Public API functions for json5-editor.

This module provides stateless, session-free helpers: format_json5,
format_json5_result, annotate_paths and match_brackets. Each call creates
fresh tokenizer/engine objects to guarantee zero global state mutation
between calls.
"""

from __future__ import annotations

from json5_editor.config import EditorConfig
from json5_editor.formatting.formatter import Formatter
from json5_editor.lexer.grammar import Json5Tokenizer
from json5_editor.result import BracketPair, FormatResult, PropertyAnnotation
from json5_editor.structure.brackets import BracketMatcher
from json5_editor.structure.paths import PathAnnotator

__all__ = ["annotate_paths", "format_json5", "format_json5_result", "match_brackets"]


def format_json5_result(
    text: str,
    config: EditorConfig | None = None,
) -> FormatResult:
    """Tokenize and format ``text``, reporting whether it was balanced.

    Args:
        text:   JSON5 source text.
        config: Editor settings. Defaults to ``EditorConfig()`` when None.

    Returns:
        A ``FormatResult``; ``ok`` is False for unbalanced input.
    """
    tokens = Json5Tokenizer().tokenize(text)
    return Formatter(config).format(tokens)


def format_json5(text: str, config: EditorConfig | None = None) -> str:
    """Return the canonical form of ``text``.

    Never raises: unbalanced input yields best-effort text.

    Args:
        text:   JSON5 source text.
        config: Editor settings. Defaults to ``EditorConfig()`` when None.

    Returns:
        Canonical text.
    """
    return format_json5_result(text, config=config).text


def annotate_paths(text: str) -> list[PropertyAnnotation]:
    """Return the path and duplicate flag of every property in ``text``.

    Args:
        text: JSON5 source text.

    Returns:
        One ``PropertyAnnotation`` per property, in source order.
    """
    return PathAnnotator().annotate(Json5Tokenizer().tokenize(text))


def match_brackets(
    text: str,
    cursor: int,
    selection_end: int | None = None,
) -> BracketPair | None:
    """Return the delimiter pair adjacent to ``cursor`` in ``text``, if any.

    Args:
        text:          JSON5 source text.
        cursor:        Cursor offset (selection start).
        selection_end: Selection end offset. Defaults to ``cursor``.

    Returns:
        A ``BracketPair`` or None.
    """
    return BracketMatcher().match(text, cursor, selection_end)
