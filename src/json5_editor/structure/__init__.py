"""Structure subpackage: structural queries over the JSON5 token stream.

Re-exports:
- PathAnnotator: per-property dotted paths and duplicate detection
- BracketMatcher: matching delimiter pairs around a cursor
"""

from json5_editor.structure.brackets import BracketMatcher
from json5_editor.structure.paths import PathAnnotator, unquote_property

__all__ = ["BracketMatcher", "PathAnnotator", "unquote_property"]
