"""Editor: host-facing orchestrator for concurrently mounted JSON5 editors.

This is the central wiring layer between the tokenizer, the structural
engines and the host UI. It owns one SessionRegistry and routes every event
to the session named by its id:

- Text changes: ``set_value()`` for an external replacement of the whole
  document (resets duplicate tracking) and ``edit()`` for in-place typing.
  Both re-tokenize and run the PathAnnotator via ``after_tokenize()``.
- Keystrokes: ``handle_keydown()`` delegates to the AutoIndentEngine. When
  it rewrites the text, the token cache refresh for the new text is
  deferred to ``run_pending()`` so it observes the post-render state.
- Commit: ``blur()`` formats the cached tokens and records the canonical
  text as the session's new token state; ``focus()`` clears the format
  error flag.
- Cursor moves: ``match_brackets()`` is stateless and needs no session.

No method raises for a closed session; each returns an empty result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from json5_editor.config import EditorConfig
from json5_editor.editing.autoindent import AutoIndentEngine, KeyEvent
from json5_editor.formatting.formatter import Formatter
from json5_editor.lexer.grammar import Json5Tokenizer
from json5_editor.lexer.tokens import LexicalToken
from json5_editor.protocols import Tokenizer
from json5_editor.result import BracketPair, Edit, PropertyAnnotation
from json5_editor.scheduling import Task, TaskQueue
from json5_editor.session import Session, SessionId, SessionRegistry
from json5_editor.structure.brackets import BracketMatcher
from json5_editor.structure.paths import PathAnnotator

__all__ = ["Editor"]

_LOG = logging.getLogger(__name__)


class Editor:
    """Orchestrator for any number of isolated editor sessions.

    Example::

        editor = Editor()
        sid = editor.open()
        editor.set_value(sid, "{a:1,b:{c:2}}")
        [a.path for a in editor.annotations(sid)]   # ["a", "b", "b.c"]
        editor.blur(sid)                            # canonical text
        editor.close(sid)
    """

    def __init__(
        self,
        tokenizer: Tokenizer | None = None,
        config: EditorConfig | None = None,
    ) -> None:
        """Initialise the editor.

        Args:
            tokenizer: A Tokenizer-conformant object.  Defaults to
                ``Json5Tokenizer()`` when None.
            config: Editor settings.  Defaults to ``EditorConfig()``.
        """
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._tokenizer: Tokenizer = (
            tokenizer if tokenizer is not None else Json5Tokenizer()
        )
        self._registry = SessionRegistry()
        self._queue = TaskQueue(self._registry)
        self._annotator = PathAnnotator()
        self._formatter = Formatter(self._config)
        self._matcher = BracketMatcher(self._tokenizer)
        self._engine = AutoIndentEngine(self._registry, self._config)

    @property
    def registry(self) -> SessionRegistry:
        """The registry holding this editor's sessions."""
        return self._registry

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> SessionId:
        """Mount a new editor instance and return its session id."""
        return self._registry.open()

    def close(self, session_id: SessionId) -> None:
        """Unmount an editor instance; its pending deferred tasks are dropped."""
        self._queue.cancel(session_id)
        self._registry.close(session_id)

    # ------------------------------------------------------------------
    # Tokenizer pipeline hooks
    # ------------------------------------------------------------------

    def after_tokenize(
        self, tokens: Sequence[LexicalToken], session_id: SessionId
    ) -> list[PropertyAnnotation]:
        """Record a fresh tokenization for ``session_id`` and annotate it."""
        session = self._registry.get(session_id)
        if session is None:
            _LOG.debug("after_tokenize ignored for stale session %s", session_id)
            return []
        return self._annotator.apply(session, tokens)

    def before_insert(self, session_id: SessionId) -> None:
        """Signal that the session's document is about to be replaced wholesale."""
        self._registry.reset(session_id)

    # ------------------------------------------------------------------
    # Text changes
    # ------------------------------------------------------------------

    def set_value(self, session_id: SessionId, text: str) -> list[PropertyAnnotation]:
        """Replace the whole document (external value override)."""
        self.before_insert(session_id)
        return self.after_tokenize(self._tokenizer.tokenize(text), session_id)

    def edit(self, session_id: SessionId, text: str) -> list[PropertyAnnotation]:
        """Apply in-place typing; duplicate-tracking history is kept."""
        return self.after_tokenize(self._tokenizer.tokenize(text), session_id)

    def annotations(self, session_id: SessionId) -> list[PropertyAnnotation]:
        """Return the session's property annotations in source order."""
        session = self._registry.get(session_id)
        if session is None:
            return []
        return [session.annotations[index] for index in sorted(session.annotations)]

    # ------------------------------------------------------------------
    # Commit / focus
    # ------------------------------------------------------------------

    def format(
        self,
        session_id: SessionId,
        tokens: Sequence[LexicalToken] | None = None,
    ) -> str:
        """Format ``tokens`` (default: the session's cached tokens) to canonical text.

        Sets the session's format error flag when the tokens are unbalanced.
        Returns an empty string for a stale session.
        """
        session = self._registry.get(session_id)
        if session is None:
            _LOG.debug("format ignored for stale session %s", session_id)
            return ""
        result = self._formatter.format(
            session.cached_tokens if tokens is None else tokens
        )
        session.has_format_error = not result.ok
        return result.text

    def blur(self, session_id: SessionId) -> str:
        """Commit event: format the cached tokens and adopt the canonical text."""
        text = self.format(session_id)
        if session_id in self._registry:
            self.edit(session_id, text)
        return text

    def focus(self, session_id: SessionId) -> None:
        """Clear the non-fatal format error indicator."""
        session = self._registry.get(session_id)
        if session is not None:
            session.has_format_error = False

    def has_format_error(self, session_id: SessionId) -> bool:
        """True when the last format of a live session ran on unbalanced tokens."""
        session = self._registry.get(session_id)
        return session is not None and session.has_format_error

    # ------------------------------------------------------------------
    # Cursor and keystrokes
    # ------------------------------------------------------------------

    def match_brackets(
        self, text: str, cursor: int, selection_end: int | None = None
    ) -> BracketPair | None:
        """Return the delimiter pair adjacent to the cursor, if any."""
        return self._matcher.match(text, cursor, selection_end)

    def handle_keydown(
        self, event: KeyEvent, text: str, cursor: int, session_id: SessionId
    ) -> Edit | None:
        """Intercept a keystroke; a rewrite refreshes the token cache on the next tick."""
        edit = self._engine.handle_keydown(event, text, cursor, session_id)
        if edit is not None:
            self.defer(session_id, "retokenize", self._refresh_task(edit.text))
        return edit

    # ------------------------------------------------------------------
    # Deferred work
    # ------------------------------------------------------------------

    def defer(self, session_id: SessionId, key: str, task: Task) -> None:
        """Run ``task`` after the current event settles (see ``run_pending``)."""
        self._queue.schedule(session_id, key, task)

    def run_pending(self) -> int:
        """Run deferred tasks of live sessions; return how many ran."""
        return self._queue.run_pending()

    def _refresh_task(self, text: str) -> Task:
        def refresh(session: Session) -> None:
            self._annotator.apply(session, self._tokenizer.tokenize(text))

        return refresh
