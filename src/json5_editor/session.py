"""Session state and the SessionRegistry that isolates concurrent editors.

Each mounted editor owns exactly one Session. Everything the core caches
between events (the last token list, property annotations, the paths seen so
far, the format error flag) lives on that Session and nowhere else, so two
editors showing identical documents never observe each other's state.

The registry is an explicit mapping from opaque session id to Session. Every
operation receives the id explicitly; looking up a closed id returns None,
which lets late callbacks from an unmounted editor detect that they are stale.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from json5_editor.lexer.tokens import LexicalToken
from json5_editor.result import PropertyAnnotation

__all__ = ["Session", "SessionId", "SessionRegistry"]

_LOG = logging.getLogger(__name__)

SessionId = str


@dataclass(slots=True)
class Session:
    """Per-editor mutable state.

    Attributes:
        id: Opaque identifier handed out by ``SessionRegistry.open()``.
        cached_tokens: Token list from the most recent tokenization. Replaced
            wholesale, never edited in place.
        seen_paths: Number of properties seen at each path by the current
            duplicate-tracking history.  Cleared only when the document is
            replaced wholesale.
        annotations: Property annotations keyed by token index.
        has_format_error: Set when the last format ran on unbalanced tokens;
            cleared on focus.
    """

    id: SessionId
    cached_tokens: tuple[LexicalToken, ...] = ()
    seen_paths: dict[str, int] = field(default_factory=dict)
    annotations: dict[int, PropertyAnnotation] = field(default_factory=dict)
    has_format_error: bool = False

    def token_at(self, offset: int) -> LexicalToken | None:
        """Return the cached token covering character ``offset``, if any."""
        remain = offset
        for token in self.cached_tokens:
            remain -= token.length
            if remain < 0:
                return token
        return None


class SessionRegistry:
    """Process-wide store of live sessions keyed by session id.

    Two registries never share sessions; within a registry each session's
    containers are private to it.

    Example::

        registry = SessionRegistry()
        sid = registry.open()
        registry.get(sid)      # Session(id=sid, ...)
        registry.close(sid)
        registry.get(sid)      # None
    """

    def __init__(self) -> None:
        self._sessions: dict[SessionId, Session] = {}

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self) -> SessionId:
        """Create a fresh session and return its id."""
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = Session(id=session_id)
        _LOG.debug("opened session %s", session_id)
        return session_id

    def close(self, session_id: SessionId) -> None:
        """Drop a session and everything it owns.

        Closing an unknown or already-closed id is a no-op.
        """
        if self._sessions.pop(session_id, None) is None:
            _LOG.debug("close ignored for unknown session %s", session_id)
            return
        _LOG.debug("closed session %s", session_id)

    def get(self, session_id: SessionId) -> Session | None:
        """Return the live session for ``session_id``, or None once closed."""
        return self._sessions.get(session_id)

    def reset(self, session_id: SessionId) -> None:
        """Forget duplicate-tracking history after a wholesale document replace."""
        session = self._sessions.get(session_id)
        if session is None:
            _LOG.debug("reset ignored for stale session %s", session_id)
            return
        session.seen_paths = {}
        session.annotations = {}

    def token_at(self, session_id: SessionId, offset: int) -> LexicalToken | None:
        """Return the cached token of ``session_id`` covering ``offset``."""
        session = self._sessions.get(session_id)
        if session is None:
            return None
        return session.token_at(offset)
