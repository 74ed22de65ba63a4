"""Result dataclasses returned across the core/host boundary.

Every type here is frozen: hosts receive values, never handles into session
state.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["BracketPair", "Edit", "FormatResult", "PropertyAnnotation"]


@dataclass(frozen=True, slots=True)
class PropertyAnnotation:
    """Path and duplicate flag computed for one property token.

    Attributes:
        index: Position of the property token in the token sequence.
        path: Dotted path from the document root, e.g. ``"c.0.d"``.
        duplicate: True when an earlier property in the same document
            resolved to the same path.
    """

    index: int
    path: str
    duplicate: bool = False


@dataclass(frozen=True, slots=True)
class FormatResult:
    """Outcome of formatting a token sequence.

    Attributes:
        text: Canonical text, or best-effort text when ``ok`` is False.
        ok: False when the token sequence was structurally unbalanced.
    """

    text: str
    ok: bool = True


@dataclass(frozen=True, slots=True)
class BracketPair:
    """Character offsets of a matched opening/closing delimiter pair."""

    open: int
    close: int


@dataclass(frozen=True, slots=True)
class Edit:
    """Replacement document text and cursor offset produced by a keystroke."""

    text: str
    cursor: int
