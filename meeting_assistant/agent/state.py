from __future__ import annotations

import time
import datetime as dt
from typing import TypedDict, Optional, Literal

from pydantic import BaseModel, Field

Step = Literal["date", "time", "email", "duration", "description", "confirm"]

# order in which required fields are requested
FIELD_ORDER: tuple[Step, ...] = ("date", "time", "email", "duration")


class TimeInfo(BaseModel):
    hours: int = Field(..., ge=0, le=23)
    minutes: int = Field(..., ge=0, le=59)

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


class MeetingDraft(BaseModel):
    date: Optional[dt.date] = None
    time: Optional[TimeInfo] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    attendees: list[str] = Field(default_factory=list)
    description: Optional[str] = None

    def has(self, field: Step) -> bool:
        if field == "email":
            return bool(self.attendees)
        if field == "duration":
            return self.duration_minutes is not None
        return getattr(self, field) is not None


class DialogueState(BaseModel):
    step: Step = "date"
    draft: MeetingDraft = Field(default_factory=MeetingDraft)
    ask_description: bool = False
    updated_at: float = Field(default_factory=time.time)


def next_step(draft: MeetingDraft, ask_description: bool = False) -> Step:
    """First missing required field, then description (if still owed), then confirm."""
    for field in FIELD_ORDER:
        if not draft.has(field):
            return field
    return "description" if ask_description else "confirm"


class DialogueTurn(TypedDict):
    user_id: str
    message: str
    session: Optional[DialogueState]   # None → no session in progress
    response: str
    outcome: str                       # continue | unauthorized | cancelled | declined | created | failed
