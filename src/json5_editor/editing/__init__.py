"""Editing subpackage: keystroke interception for the JSON5 editor."""

from json5_editor.editing.autoindent import AutoIndentEngine, KeyEvent

__all__ = ["AutoIndentEngine", "KeyEvent"]
