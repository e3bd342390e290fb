from __future__ import annotations

import re
from typing import Literal

MeetingAction = Literal["create", "list"]

_SCHEDULE_VERBS = re.compile(r"\b(schedule|set\s*up|book|arrange|plan)\b", re.IGNORECASE)
_LIST_VERBS = re.compile(r"\b(list|show|view|get)\b", re.IGNORECASE)
_MEETING_NOUNS = re.compile(r"\b(meeting|call|appointment)\b", re.IGNORECASE)
_LIST_REQUEST = re.compile(
    r"\b(list|show|view|get)\b.*\b(meetings|schedule|calendar)\b",
    re.IGNORECASE | re.DOTALL,
)

_CANCEL_WORDS = re.compile(r"\b(cancel|stop|exit)\b", re.IGNORECASE)


def is_meeting_request(message: str) -> bool:
    """True if the message belongs to the scheduling domain."""
    return any(
        pattern.search(message)
        for pattern in (_SCHEDULE_VERBS, _LIST_VERBS, _MEETING_NOUNS)
    )


def determine_meeting_action(message: str) -> MeetingAction:
    if _LIST_REQUEST.search(message):
        return "list"
    return "create"


def is_cancellation(message: str) -> bool:
    return _CANCEL_WORDS.search(message) is not None
