from __future__ import annotations

import asyncio
import weakref
from datetime import date
from typing import Callable, Optional

from pydantic import BaseModel

from meeting_assistant.agent.graph import build_dialogue_graph
from meeting_assistant.agent.nodes import DialogueNodes
from meeting_assistant.agent.state import DialogueState, DialogueTurn
from meeting_assistant.services.auth_service import GoogleAuthorizer
from meeting_assistant.services.calendar_service import CalendarExecutor
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.services.session_store import SessionStore
from meeting_assistant.utils.clock import local_today
from meeting_assistant.utils.logger import get_logger

log = get_logger("agent.dialogue")


class DialogueReply(BaseModel):
    response: str
    outcome: str
    session: Optional[DialogueState] = None


class SchedulingDialogue:
    """
    Runs one scheduling turn per inbound message.

    The session is read from the store, pushed through the dialogue graph and
    written back (or deleted) before the reply is returned. Turns of the same
    user are serialized; different users proceed concurrently.
    """

    def __init__(
        self,
        store: SessionStore,
        credentials: CredentialStore,
        authorizer: GoogleAuthorizer,
        executor: CalendarExecutor,
        today: Callable[[], date] = local_today,
    ):
        self._store = store
        self._graph = build_dialogue_graph(
            DialogueNodes(credentials, authorizer, executor, today=today)
        )
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        # entries vanish once no turn holds or awaits the lock
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    async def handle(
        self, user_id: str, message: str, start_new: bool = True
    ) -> Optional[DialogueReply]:
        """
        Run one turn for ``user_id``.

        With ``start_new=False`` the message is only consumed when a session
        is already open; otherwise None is returned. The session lookup
        happens under the user's lock.
        """
        async with self._lock_for(user_id):
            session = self._store.get(user_id)
            if session is None and not start_new:
                return None

            turn: DialogueTurn = {
                "user_id": user_id,
                "message": message,
                "session": session,
                "response": "",
                "outcome": "continue",
            }
            result = await self._graph.ainvoke(turn)

            outcome = result["outcome"]
            session = result.get("session")
            if outcome == "continue" and session is not None:
                self._store.set(user_id, session)
            elif outcome == "unauthorized" and session is not None:
                pass  # entry guard never touches an existing session
            else:
                self._store.delete(user_id)
                session = None

            log.info("Turn for %s finished: outcome=%s step=%s",
                     user_id, outcome, session.step if session else None)
            return DialogueReply(response=result["response"], outcome=outcome, session=session)
