"""
Google Calendar provider, in-memory mock provider and the calendar action
executor that the dialogue talks to.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Protocol
from zoneinfo import ZoneInfo

from meeting_assistant.config import settings
from meeting_assistant.exceptions import (
    ExecutorFailure,
    UnauthorizedError,
    wrap_provider_exception,
)
from meeting_assistant.models.schemas import CalendarEvent
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.utils.logger import get_logger

log = get_logger("services.calendar")


def _rfc3339(value: datetime, timezone: str) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(timezone))
    return value.isoformat()


def _event_from_api(e: Dict[str, Any]) -> CalendarEvent:
    return CalendarEvent(
        id=e["id"],
        title=e.get("summary", ""),
        start=e["start"].get("dateTime", e["start"].get("date", "")),
        end=e["end"].get("dateTime", e["end"].get("date", "")),
        participants=[a["email"] for a in e.get("attendees", []) if "email" in a],
        link=e.get("htmlLink", ""),
        description=e.get("description"),
    )


class CalendarProvider(Protocol):
    def insert_event(self, credential: Dict[str, Any], body: Dict[str, Any]) -> CalendarEvent: ...

    def list_events(
        self, credential: Dict[str, Any], time_min: datetime, time_max: datetime
    ) -> list[CalendarEvent]: ...


class GoogleCalendarProvider:
    """Thin wrapper over the Calendar v3 API, one client per credential."""

    def __init__(self, timezone: str = settings.DEFAULT_TIMEZONE):
        self._timezone = timezone

    @staticmethod
    def _build_service(credential: Dict[str, Any]):
        from google.oauth2.credentials import Credentials
        from googleapiclient.discovery import build

        creds = Credentials.from_authorized_user_info(credential, settings.GOOGLE_SCOPES)
        return build("calendar", "v3", credentials=creds, cache_discovery=False)

    # ── create ────────────────────────────────────────
    def insert_event(self, credential: Dict[str, Any], body: Dict[str, Any]) -> CalendarEvent:
        try:
            event = (
                self._build_service(credential)
                .events()
                .insert(calendarId="primary", body=body, sendUpdates="all")
                .execute()
            )
        except Exception as exc:
            raise wrap_provider_exception(exc, "insert_event") from exc
        log.info("Created event %s", event.get("id"))
        return _event_from_api(event)

    # ── list ──────────────────────────────────────────
    def list_events(
        self, credential: Dict[str, Any], time_min: datetime, time_max: datetime
    ) -> list[CalendarEvent]:
        try:
            result = (
                self._build_service(credential)
                .events()
                .list(
                    calendarId="primary",
                    timeMin=_rfc3339(time_min, self._timezone),
                    timeMax=_rfc3339(time_max, self._timezone),
                    singleEvents=True,
                    orderBy="startTime",
                )
                .execute()
            )
        except Exception as exc:
            raise wrap_provider_exception(exc, "list_events") from exc
        return [_event_from_api(e) for e in result.get("items", [])]


class MockCalendarProvider:
    """In-memory calendar for running without Google API."""

    def __init__(self, timezone: str = settings.DEFAULT_TIMEZONE):
        self._timezone = timezone
        self._events: list[Dict[str, Any]] = []
        log.info("Calendar running in MOCK mode")

    def insert_event(self, credential: Dict[str, Any], body: Dict[str, Any]) -> CalendarEvent:
        eid = f"mock_{uuid.uuid4().hex[:10]}"
        event = {
            "id": eid,
            "htmlLink": f"mock://{eid}",
            **body,
        }
        self._events.append(event)
        log.info("MOCK created event %s: %s", eid, body.get("summary"))
        return _event_from_api(event)

    def list_events(
        self, credential: Dict[str, Any], time_min: datetime, time_max: datetime
    ) -> list[CalendarEvent]:
        lo = _rfc3339(time_min, self._timezone)
        hi = _rfc3339(time_max, self._timezone)
        tz = ZoneInfo(self._timezone)

        def start_of(e: Dict[str, Any]) -> datetime:
            start = datetime.fromisoformat(e["start"]["dateTime"])
            return start if start.tzinfo else start.replace(tzinfo=tz)

        lo_dt, hi_dt = datetime.fromisoformat(lo), datetime.fromisoformat(hi)
        found = [e for e in self._events if lo_dt <= start_of(e) < hi_dt]
        found.sort(key=start_of)
        return [_event_from_api(e) for e in found]


class CalendarExecutor:
    """Maps meeting drafts onto provider calls for an authorized owner."""

    def __init__(
        self,
        credentials: CredentialStore,
        provider: CalendarProvider,
        timezone: str = settings.DEFAULT_TIMEZONE,
    ):
        self._credentials = credentials
        self._provider = provider
        self._timezone = timezone

    def _credential_for(self, owner_id: str) -> Dict[str, Any]:
        credential = self._credentials.get_credential(owner_id)
        if credential is None:
            raise UnauthorizedError(owner_id)
        return credential

    async def create_meeting(
        self,
        owner_id: str,
        summary: str,
        description: str,
        start_time: datetime,
        end_time: datetime,
        attendees: list[str],
    ) -> CalendarEvent:
        """
        Create one calendar event and notify all attendees.

        Raises:
            UnauthorizedError: no credential stored for ``owner_id``
            ExecutorFailure: the provider call failed (never retried)
        """
        credential = self._credential_for(owner_id)
        body = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": start_time.isoformat(), "timeZone": self._timezone},
            "end": {"dateTime": end_time.isoformat(), "timeZone": self._timezone},
            "attendees": [{"email": e} for e in attendees],
            "reminders": {"useDefault": True},
        }
        try:
            return await asyncio.to_thread(self._provider.insert_event, credential, body)
        except Exception as exc:
            log.exception("create_meeting failed for %s", owner_id)
            raise ExecutorFailure(
                str(exc),
                details={"owner_id": owner_id, "summary": summary},
                cause=exc,
            ) from exc

    async def list_events(
        self,
        owner_id: str,
        start_time: datetime,
        end_time: datetime,
    ) -> list[CalendarEvent]:
        """Events in ``[start_time, end_time)``; provider errors yield an empty list."""
        credential = self._credential_for(owner_id)
        try:
            return await asyncio.to_thread(
                self._provider.list_events, credential, start_time, end_time
            )
        except Exception:
            log.exception("list_events failed for %s", owner_id)
            return []


def build_calendar_provider(mock: Optional[bool] = None) -> CalendarProvider:
    mock = settings.MOCK_CALENDAR if mock is None else mock
    if mock:
        return MockCalendarProvider()
    return GoogleCalendarProvider()
