"""
Per-user dialogue session storage.

The engine only depends on the get / set / delete contract, so a durable
backend can replace the in-memory map without touching the dialogue code.
"""

from __future__ import annotations

import time
from typing import Dict, Optional, Protocol

from meeting_assistant.agent.state import DialogueState
from meeting_assistant.utils.logger import get_logger

log = get_logger("services.session_store")


class SessionStore(Protocol):
    def get(self, user_id: str) -> Optional[DialogueState]: ...

    def set(self, user_id: str, state: DialogueState) -> None: ...

    def delete(self, user_id: str) -> None: ...


class InMemorySessionStore:
    """Process-wide dict keyed by user id, with optional idle eviction."""

    def __init__(self, ttl_seconds: int = 0):
        self._sessions: Dict[str, DialogueState] = {}
        self._ttl = ttl_seconds

    def get(self, user_id: str) -> Optional[DialogueState]:
        state = self._sessions.get(user_id)
        if state is None:
            return None
        if self._ttl and time.time() - state.updated_at > self._ttl:
            log.info("Session for %s expired at step %s", user_id, state.step)
            self._sessions.pop(user_id, None)
            return None
        # hand out a copy so a failed turn never leaves half-applied edits
        return state.model_copy(deep=True)

    def set(self, user_id: str, state: DialogueState) -> None:
        state.updated_at = time.time()
        self._sessions[user_id] = state.model_copy(deep=True)

    def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
