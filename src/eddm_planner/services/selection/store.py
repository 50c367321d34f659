"""In-memory registry of planning sessions for the HTTP layer."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Callable

from .session import PlanningSession

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or has been closed."""


class SessionStore:
    """Each session owns its own catalog; nothing is shared between sessions or persisted."""

    def __init__(self) -> None:
        self._sessions: dict[str, PlanningSession] = {}
        self._lock = threading.Lock()

    def create(self) -> tuple[str, PlanningSession]:
        session_id = uuid.uuid4().hex
        session = PlanningSession()
        with self._lock:
            self._sessions[session_id] = session
        logger.info(f"Opened planning session {session_id}")
        return session_id, session

    def get(self, session_id: str) -> PlanningSession:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None

    def update(
        self,
        session_id: str,
        transition: Callable[[PlanningSession], PlanningSession],
    ) -> PlanningSession:
        """Apply a transition and store its result."""
        with self._lock:
            try:
                current = self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None
            updated = transition(current)
            self._sessions[session_id] = updated
            return updated

    def close(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info(f"Closed planning session {session_id}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
