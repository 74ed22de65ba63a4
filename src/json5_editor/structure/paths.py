"""PathAnnotator: computes a dotted path for every property token.

A single left-to-right pass maintains a stack of scope frames (the property
name that opened each container, plus a marker frame for every open array)
and a parallel stack of 0-based array index counters. Paths are built by
joining the frames with ``.``, substituting each array marker with the
counter it owns:

    {a: {b: 1}, c: [ {d: 2}, {d: 3} ]}
    ->  a, a.b, c, c.0.d, c.1.d

Index counters advance only when a container closes back into an array
(``}`` or ``]`` whose new stack top is an array marker); scalar array
elements do not advance them. Hosts rely on these exact increment points,
so they are kept as-is.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from enum import Enum, auto

from json5_editor.lexer.tokens import LexicalToken, TokenKind
from json5_editor.result import PropertyAnnotation
from json5_editor.session import Session

__all__ = ["PathAnnotator", "unquote_property"]

_LOG = logging.getLogger(__name__)


class _Marker(Enum):
    ROOT = auto()
    ARRAY = auto()


_Frame = str | _Marker


def unquote_property(content: str) -> str:
    """Strip one leading and one trailing quote from a property token."""
    if content[:1] in ('"', "'"):
        return content[1:-1]
    return content


class _PathScope:
    """Scope frames and array index counters for one annotation pass."""

    def __init__(self) -> None:
        self.frames: list[_Frame] = []
        self.counters: list[int] = []
        self.pending: _Frame = _Marker.ROOT

    def open_object(self) -> None:
        self.frames.append(self.pending)
        self.pending = ""

    def open_array(self) -> None:
        self.frames.append(self.pending)
        self.frames.append(_Marker.ARRAY)
        self.counters.append(0)
        self.pending = ""

    def close_object(self) -> bool:
        if not self.frames:
            return False
        self.frames.pop()
        self._advance_enclosing_array()
        self.pending = ""
        return True

    def close_array(self) -> bool:
        if len(self.frames) < 2 or not self.counters:
            return False
        del self.frames[-2:]
        self.counters.pop()
        self._advance_enclosing_array()
        self.pending = ""
        return True

    def _advance_enclosing_array(self) -> None:
        if self.counters and self.frames and self.frames[-1] is _Marker.ARRAY:
            self.counters[-1] += 1

    def path_of(self, name: str) -> str:
        segments: list[str] = []
        array_index = 0
        for frame in [*self.frames, name]:
            if frame is _Marker.ARRAY:
                # Mis-nested closers can leave a marker without its counter.
                if array_index < len(self.counters):
                    segments.append(str(self.counters[array_index]))
                array_index += 1
            elif isinstance(frame, str) and frame:
                segments.append(frame)
        return ".".join(segments)


class PathAnnotator:
    """Assigns paths and duplicate flags to property tokens.

    The annotator itself is stateless; everything that must survive between
    passes is written to the Session handed to ``apply()``.

    Example::
        annotator = PathAnnotator()
        tokens = Json5Tokenizer().tokenize("{a: 1, a: 2}")
        [(a.path, a.duplicate) for a in annotator.annotate(tokens)]
        # [("a", False), ("a", True)]
    """

    def annotate(self, tokens: Sequence[LexicalToken]) -> list[PropertyAnnotation]:
        """Compute annotations for ``tokens`` without touching any session.

        A property is flagged duplicate when an earlier property in the same
        token sequence resolved to the same path.

        Args:
            tokens: Token sequence in source order.

        Returns:
            One PropertyAnnotation per PROPERTY token, in source order.
        """
        annotations, _ = self._walk(tokens)
        return annotations

    def apply(
        self, session: Session, tokens: Sequence[LexicalToken]
    ) -> list[PropertyAnnotation]:
        """Run a pass for ``session`` and record the results on it.

        ``cached_tokens`` is replaced even when the pass yields no
        annotations.  ``seen_paths`` is rebuilt from the properties that
        still exist; it is only emptied outright by a reset.

        Args:
            session: The live session that owns ``tokens``.
            tokens: The session's latest token sequence.

        Returns:
            The annotations recorded on the session.
        """
        annotations, seen = self._walk(tokens)
        session.cached_tokens = tuple(tokens)
        session.annotations = {a.index: a for a in annotations}
        session.seen_paths = dict(seen)
        return annotations

    def _walk(
        self, tokens: Sequence[LexicalToken]
    ) -> tuple[list[PropertyAnnotation], Counter[str]]:
        scope = _PathScope()
        seen: Counter[str] = Counter()
        annotations: list[PropertyAnnotation] = []

        for index, token in enumerate(tokens):
            if token.is_delimiter("{"):
                scope.open_object()
            elif token.is_delimiter("["):
                scope.open_array()
            elif token.is_delimiter("}"):
                if not scope.close_object():
                    _LOG.debug("unmatched '}' at token %d ignored", index)
            elif token.is_delimiter("]"):
                if not scope.close_array():
                    _LOG.debug("unmatched ']' at token %d ignored", index)
            elif token.kind == TokenKind.PROPERTY:
                name = unquote_property(token.content)
                scope.pending = name
                path = scope.path_of(name)
                annotations.append(
                    PropertyAnnotation(index=index, path=path, duplicate=path in seen)
                )
                seen[path] += 1

        return annotations, seen
