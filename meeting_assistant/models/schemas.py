"""
Pydantic v2 request / response models for every endpoint.
"""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field


# ── Calendar ──────────────────────────────────────────
class CalendarEvent(BaseModel):
    id: str
    title: str = ""
    start: str
    end: str
    participants: list[str] = Field(default_factory=list)
    link: Optional[str] = None
    description: Optional[str] = None


# ── Chat ──────────────────────────────────────────────
class ChatRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="Stable chat user identifier")
    message: str = Field(..., min_length=1, description="User message text")


class MeetingDetailsOut(BaseModel):
    date: Optional[str] = None
    time: Optional[str] = None
    duration_minutes: Optional[int] = None
    attendees: list[str] = Field(default_factory=list)
    description: Optional[str] = None


class ChatResponse(BaseModel):
    user_id: str
    response: str
    step: Optional[str] = None  # None once no session is in progress
    meeting_details: Optional[MeetingDetailsOut] = None


# ── Session ───────────────────────────────────────────
class SessionOut(BaseModel):
    user_id: str
    step: str
    meeting_details: MeetingDetailsOut


# ── Health ────────────────────────────────────────────
class HealthResponse(BaseModel):
    status: str = "ok"
    calendar: str = "unknown"
    active_sessions: int = 0


# ── Meeting list ──────────────────────────────────────
class MeetingsListResponse(BaseModel):
    events: list[CalendarEvent] = Field(default_factory=list)
