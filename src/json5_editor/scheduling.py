"""TaskQueue: explicit "apply after the current event settles" primitive.

Corrective work that must observe post-update state (token cache refreshes,
cursor repositioning) is queued here and run when the host calls
``run_pending()`` on the next turn of its event loop.

Ordering rules:
- Tasks run in the order they were (last) scheduled.
- Scheduling a task under a ``(session_id, key)`` that is already pending
  replaces it and moves it to the back: the newest state wins and stale
  updates are never queued behind it.
- Before a task runs its session is looked up in the registry; tasks of
  closed sessions are dropped without running, so they can never recreate
  state for an unmounted editor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from json5_editor.session import Session, SessionId, SessionRegistry

__all__ = ["Task", "TaskQueue"]

_LOG = logging.getLogger(__name__)

Task = Callable[[Session], object]


class TaskQueue:
    """Deferred per-session tasks with liveness checks.

    Args:
        registry: Registry used to check that a task's session is still live.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self._registry = registry
        self._pending: dict[tuple[SessionId, str], Task] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def schedule(self, session_id: SessionId, key: str, task: Task) -> None:
        """Queue ``task`` for ``session_id``, replacing any pending task with ``key``."""
        self._pending.pop((session_id, key), None)
        self._pending[(session_id, key)] = task

    def cancel(self, session_id: SessionId) -> int:
        """Drop every pending task of ``session_id``; return how many were dropped."""
        doomed = [task_key for task_key in self._pending if task_key[0] == session_id]
        for task_key in doomed:
            del self._pending[task_key]
        return len(doomed)

    def run_pending(self) -> int:
        """Run all tasks queued so far and return how many actually ran.

        Tasks scheduled while running are kept for the next call.
        """
        batch = list(self._pending.items())
        self._pending.clear()
        ran = 0
        for (session_id, key), task in batch:
            session = self._registry.get(session_id)
            if session is None:
                _LOG.debug("dropped %r task for closed session %s", key, session_id)
                continue
            task(session)
            ran += 1
        return ran
