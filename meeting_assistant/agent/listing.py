from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Optional

from meeting_assistant.agent.extractors import extract_date
from meeting_assistant.agent.nodes import auth_prompt
from meeting_assistant.models.schemas import CalendarEvent
from meeting_assistant.services.auth_service import GoogleAuthorizer
from meeting_assistant.services.calendar_service import CalendarExecutor
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.utils.clock import local_now
from meeting_assistant.utils.logger import get_logger

log = get_logger("agent.listing")

NO_MEETINGS_REPLY = "No meetings found for the specified time period."


def _end_of_day(day, tzinfo=None) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tzinfo)


def resolve_list_window(message: str, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Time window a "show my meetings ..." message refers to.

    A recognizable date selects that whole day, "next week" the same day a
    week ahead, "month" the coming month; anything else means the rest of today.
    """
    now = now or local_now()
    lower = message.lower()

    tz = now.tzinfo

    day = extract_date(lower, now.date())
    if day is not None:
        start = now if day == now.date() else datetime.combine(day, time.min, tzinfo=tz)
        return start, _end_of_day(day, tz)

    if "next week" in lower:
        day = now.date() + timedelta(days=7)
        return datetime.combine(day, time.min, tzinfo=tz), _end_of_day(day, tz)

    if "month" in lower:
        return now, now + timedelta(days=30)

    return now, _end_of_day(now.date(), tz)


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_events(events: list[CalendarEvent]) -> str:
    lines = ["📅 Here are your meetings:", ""]
    for event in events:
        start = _parse_iso(event.start)
        end = _parse_iso(event.end)
        # all-day events carry a bare date and no time of day
        if start is None or "T" not in event.start:
            continue
        duration = round((end - start).total_seconds() / 60) if end else 0
        lines.append(f"🕒 {start.strftime('%a %d %b, %I:%M %p')} ({duration} mins)")
        lines.append(f"📝 {event.title or 'Untitled'}")
        if event.participants:
            lines.append(f"👥 With: {', '.join(event.participants)}")
        lines.append("")
    return "\n".join(lines).rstrip()


class MeetingLister:

    def __init__(
        self,
        credentials: CredentialStore,
        authorizer: GoogleAuthorizer,
        executor: CalendarExecutor,
    ):
        self._credentials = credentials
        self._authorizer = authorizer
        self._executor = executor

    async def handle(self, user_id: str, message: str, now: Optional[datetime] = None) -> str:
        if not self._credentials.has_credential(user_id):
            return auth_prompt(self._authorizer.start_auth(user_id))

        start, end = resolve_list_window(message, now)
        log.info("Listing meetings for %s between %s and %s", user_id, start, end)
        events = await self._executor.list_events(user_id, start, end)
        timed = [e for e in events if "T" in e.start]
        if not timed:
            return NO_MEETINGS_REPLY
        return format_events(timed)
