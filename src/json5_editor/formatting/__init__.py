"""Formatting subpackage: canonical re-serialization of JSON5 token streams."""

from json5_editor.formatting.formatter import Formatter

__all__ = ["Formatter"]
