"""EditorConfig: immutable settings shared by the formatter and the editing engines.

EditorConfig is a frozen (immutable) dataclass. Validation runs in
``__post_init__`` and raises ``ValueError`` for out-of-range values, so an
invalid configuration never reaches a session.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_KEYWORDS: tuple[str, ...] = ("true", "false", "null", "undefined")


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for a JSON5 editor.

    Attributes:
        indent_width: Spaces per nesting level in canonical text (>= 1).
        keywords: Bare values the property-line rewrite leaves unquoted.
        quote_char: Quote used when the property-line rewrite wraps a bare
            value.  Either ``'"'`` or ``"'"``.
        format_cache_size: Maximum number of format results memoized per
            Formatter instance (>= 1).
    """

    indent_width: int = 2
    keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    quote_char: str = '"'
    format_cache_size: int = 128

    def __post_init__(self) -> None:
        if self.indent_width < 1:
            msg = f"indent_width must be >= 1, got {self.indent_width}"
            raise ValueError(msg)
        if self.quote_char not in ('"', "'"):
            msg = f"quote_char must be a single or double quote, got {self.quote_char!r}"
            raise ValueError(msg)
        if self.format_cache_size < 1:
            msg = f"format_cache_size must be >= 1, got {self.format_cache_size}"
            raise ValueError(msg)

    @property
    def indent_unit(self) -> str:
        """One nesting level of indentation."""
        return " " * self.indent_width
