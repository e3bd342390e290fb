"""
Wall clock in the assistant's configured timezone.

Dates typed by users and calendar bodies are interpreted in
``settings.DEFAULT_TIMEZONE``, so "now" and "today" must come from the same
zone rather than from the server's local clock.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from meeting_assistant.config import settings


def local_now(timezone: str = settings.DEFAULT_TIMEZONE) -> datetime:
    return datetime.now(ZoneInfo(timezone))


def local_today(timezone: str = settings.DEFAULT_TIMEZONE) -> date:
    return local_now(timezone).date()
