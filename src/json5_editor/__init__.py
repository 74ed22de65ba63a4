"""json5-editor - structural editing core for a JSON-with-comments dialect."""

from __future__ import annotations

from json5_editor.api import (
    annotate_paths,
    format_json5,
    format_json5_result,
    match_brackets,
)
from json5_editor.config import EditorConfig
from json5_editor.editing import AutoIndentEngine, KeyEvent
from json5_editor.editor import Editor
from json5_editor.formatting import Formatter
from json5_editor.lexer import Json5Tokenizer, LexicalToken, TokenKind
from json5_editor.result import BracketPair, Edit, FormatResult, PropertyAnnotation
from json5_editor.session import Session, SessionRegistry
from json5_editor.structure import BracketMatcher, PathAnnotator

__version__: str = "0.1.0"
__all__: list[str] = [
    "AutoIndentEngine",
    "BracketMatcher",
    "BracketPair",
    "Edit",
    "Editor",
    "EditorConfig",
    "FormatResult",
    "Formatter",
    "Json5Tokenizer",
    "KeyEvent",
    "LexicalToken",
    "PathAnnotator",
    "PropertyAnnotation",
    "Session",
    "SessionRegistry",
    "TokenKind",
    "annotate_paths",
    "format_json5",
    "format_json5_result",
    "match_brackets",
]
