from __future__ import annotations

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from meeting_assistant.agent.router import MessageRouter
from meeting_assistant.agent.state import DialogueState
from meeting_assistant.config import settings
from meeting_assistant.exceptions import UnauthorizedError
from meeting_assistant.models.schemas import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    MeetingDetailsOut,
    MeetingsListResponse,
    SessionOut,
)
from meeting_assistant.services.auth_service import GoogleAuthorizer
from meeting_assistant.services.calendar_service import CalendarExecutor
from meeting_assistant.services.session_store import InMemorySessionStore
from meeting_assistant.utils.clock import local_now
from meeting_assistant.utils.logger import get_logger

log = get_logger("api.routes")

router = APIRouter(prefix="/api", tags=["meeting-assistant"])
oauth_router = APIRouter(tags=["oauth"])

# these are injected at startup from main.py
_message_router: Optional[MessageRouter] = None
_sessions: Optional[InMemorySessionStore] = None
_executor: Optional[CalendarExecutor] = None
_authorizer: Optional[GoogleAuthorizer] = None


def inject_dependencies(message_router, sessions, executor, authorizer):
    global _message_router, _sessions, _executor, _authorizer
    _message_router = message_router
    _sessions = sessions
    _executor = executor
    _authorizer = authorizer


def _details(state: DialogueState) -> MeetingDetailsOut:
    draft = state.draft
    return MeetingDetailsOut(
        date=draft.date.isoformat() if draft.date else None,
        time=str(draft.time) if draft.time else None,
        duration_minutes=draft.duration_minutes,
        attendees=draft.attendees,
        description=draft.description,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  POST /api/chat: main conversational endpoint
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest):
    """Send one chat message from a user and get the assistant's reply."""
    log.info("POST /api/chat  user=%s  msg=%s", req.user_id, req.message[:80])

    if _message_router is None:
        raise HTTPException(status_code=503, detail="Assistant not initialised yet")

    reply = await _message_router.handle_message(req.user_id, req.message)
    if reply.route == "error":
        raise HTTPException(status_code=500, detail=reply.response)

    session = reply.session
    return ChatResponse(
        user_id=req.user_id,
        response=reply.response,
        step=session.step if session else None,
        meeting_details=_details(session) if session else None,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  GET / DELETE /api/session/{user_id}
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/session/{user_id}", response_model=SessionOut)
async def get_session(user_id: str):
    """Retrieve the user's in-progress scheduling session."""
    state = _sessions.get(user_id) if _sessions is not None else None
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionOut(user_id=user_id, step=state.step, meeting_details=_details(state))


@router.delete("/session/{user_id}")
async def delete_session(user_id: str):
    """Discard the user's scheduling session."""
    if _sessions is not None:
        _sessions.delete(user_id)
    log.info("Session %s cleared", user_id)
    return {"message": "Session cleared"}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  GET /api/meetings
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/meetings", response_model=MeetingsListResponse)
async def list_meetings(user_id: str, days: int = 7):
    """List the user's meetings for the next ``days`` days."""
    if _executor is None:
        raise HTTPException(status_code=503, detail="Calendar service unavailable")

    now = local_now()
    try:
        events = await _executor.list_events(user_id, now, now + timedelta(days=days))
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=exc.message)
    return MeetingsListResponse(events=events)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  GET /api/health
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        calendar="mock" if settings.MOCK_CALENDAR else "live",
        active_sessions=len(_sessions) if _sessions is not None else 0,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  GET /oauth2callback
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_PAGE = (
    '<html><body style="text-align: center; font-family: Arial, sans-serif; padding: 50px;">'
    "<h1>{title}</h1><p>{body}</p></body></html>"
)


@oauth_router.get("/oauth2callback", response_class=HTMLResponse)
async def oauth2callback(code: Optional[str] = None, state: Optional[str] = None):
    if not code or not state or _authorizer is None:
        return HTMLResponse(
            _PAGE.format(title="❌ Authorization Failed", body="Please try again in the chat."),
            status_code=400,
        )
    try:
        await _authorizer.complete_auth(code, state)
    except Exception:
        log.exception("OAuth code exchange failed for %s", state)
        return HTMLResponse(
            _PAGE.format(title="❌ Authorization Failed", body="Please try again in the chat."),
            status_code=400,
        )
    return HTMLResponse(
        _PAGE.format(
            title="✅ Authorization Successful!",
            body="Return to the chat to schedule your meetings. You can close this window now.",
        )
    )
