"""
Natural-language field extractors used by the scheduling dialogue.

Every extractor is a pure function: text in, structured value or None out.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

from meeting_assistant.agent.state import TimeInfo
from meeting_assistant.utils.clock import local_today

WEEKDAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

# longest names first so "june" wins over "jun"
_MONTH_ALT = "|".join(sorted(MONTHS, key=len, reverse=True))

_ISO_RE = re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b")
_NUMERIC_RE = re.compile(r"\b(\d{1,2})[-/](\d{1,2})(?:[-/](\d{4}))?\b")
_DAY_MONTH_RE = re.compile(
    rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s*(?:of\s+)?({_MONTH_ALT})\b(?:\s*,?\s*(\d{{4}}))?",
    re.IGNORECASE,
)
_MONTH_DAY_RE = re.compile(
    rf"\b({_MONTH_ALT})\.?\s*(\d{{1,2}})(?:st|nd|rd|th)?\b(?:\s*,?\s*(\d{{4}}))?",
    re.IGNORECASE,
)

_TIME_24H_RE = re.compile(r"^(\d{1,2}):?(\d{2})$")
_TIME_12H_RE = re.compile(r"^(\d{1,2})(?::?(\d{2}))?(am|pm)$")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[A-Za-z]{2,}$")

_DURATION_PHRASE_RE = re.compile(r"\bfor\s+(\d+)\s*(?:minutes?|mins?)\b", re.IGNORECASE)
_DURATION_BARE_RE = re.compile(r"^(\d+)\s*(?:minutes?|mins?)?$", re.IGNORECASE)

_ATTENDEE_RE = re.compile(r"\bwith\s+(\S+)", re.IGNORECASE)
_AT_TIME_RE = re.compile(r"\bat\s+(\d{1,2}(?::?\d{2})?(?:\s*[ap]m)?)\b", re.IGNORECASE)
_LOOSE_TIME_RE = re.compile(r"\b(\d{1,2}(?::\d{2})?\s*[ap]m)\b", re.IGNORECASE)


# ── dates ─────────────────────────────────────────────

def _word(text: str, word: str) -> bool:
    return re.search(rf"\b{word}\b", text) is not None


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _weekday_date(lower: str, today: date) -> Optional[date]:
    for index, name in enumerate(WEEKDAYS):
        if _word(lower, name):
            # date.weekday() counts from monday, WEEKDAYS from sunday
            current = (today.weekday() + 1) % 7
            days_to_add = index - current
            if days_to_add <= 0 or _word(lower, "next"):
                days_to_add += 7
            return today + timedelta(days=days_to_add)
    return None


def _calendar_date(lower: str, today: date) -> Optional[date]:
    m = _ISO_RE.search(lower)
    if m:
        return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = _NUMERIC_RE.search(lower)
    if m:
        year = int(m.group(3)) if m.group(3) else today.year
        return _safe_date(year, int(m.group(2)), int(m.group(1)))

    m = _DAY_MONTH_RE.search(lower)
    if m:
        year = int(m.group(3)) if m.group(3) else today.year
        return _safe_date(year, MONTHS[m.group(2).lower()], int(m.group(1)))

    m = _MONTH_DAY_RE.search(lower)
    if m:
        year = int(m.group(3)) if m.group(3) else today.year
        return _safe_date(year, MONTHS[m.group(1).lower()], int(m.group(2)))

    return None


def is_valid_future_date(value: date, today: Optional[date] = None) -> bool:
    return value >= (today or local_today())


def extract_date(text: str, today: Optional[date] = None) -> Optional[date]:
    """
    Resolve a date mentioned in free text.

    Accepts today / tomorrow, weekday names ("next monday"), ISO dates,
    day-first numeric dates (3/2, 3-2-2027) and month-name dates
    ("3rd Feb", "Feb 3, 2027"). Dates before today are rejected.
    """
    today = today or local_today()
    lower = text.lower()

    if _word(lower, "today"):
        return today
    if _word(lower, "tomorrow"):
        return today + timedelta(days=1)

    parsed = _weekday_date(lower, today)
    if parsed is None:
        parsed = _calendar_date(lower, today)

    if parsed is None or not is_valid_future_date(parsed, today):
        return None
    return parsed


# ── times ─────────────────────────────────────────────

def extract_time(text: str) -> Optional[TimeInfo]:
    """Parse 24-hour (14:30, 1430) or 12-hour (2:30pm, 9am) times."""
    value = re.sub(r"\s+", "", text.lower())
    if value.startswith("at"):
        value = value[2:]

    m = _TIME_24H_RE.match(value)
    if m:
        hours, minutes = int(m.group(1)), int(m.group(2))
        if 0 <= hours < 24 and 0 <= minutes < 60:
            return TimeInfo(hours=hours, minutes=minutes)
        return None

    m = _TIME_12H_RE.match(value)
    if m:
        hours = int(m.group(1))
        minutes = int(m.group(2)) if m.group(2) else 0
        is_pm = m.group(3) == "pm"
        if 1 <= hours <= 12 and 0 <= minutes < 60:
            if is_pm and hours < 12:
                hours += 12
            if not is_pm and hours == 12:
                hours = 0
            return TimeInfo(hours=hours, minutes=minutes)

    return None


def extract_time_phrase(text: str) -> Optional[TimeInfo]:
    """Find a time inside a longer sentence ("... tomorrow at 2pm")."""
    for pattern in (_AT_TIME_RE, _LOOSE_TIME_RE):
        m = pattern.search(text)
        if m:
            parsed = extract_time(m.group(1))
            if parsed:
                return parsed
    return None


# ── emails / attendees ────────────────────────────────

def validate_email(text: str) -> Optional[str]:
    email = text.strip()
    return email if _EMAIL_RE.match(email) else None


def extract_attendee(text: str, default_domain: str) -> Optional[str]:
    m = _ATTENDEE_RE.search(text)
    if not m:
        return None
    candidate = m.group(1).rstrip(".,;:!?")
    if "@" not in candidate:
        candidate = f"{candidate}@{default_domain}"
    return validate_email(candidate)


# ── durations ─────────────────────────────────────────

def extract_duration_phrase(text: str) -> Optional[int]:
    m = _DURATION_PHRASE_RE.search(text)
    if m:
        minutes = int(m.group(1))
        if minutes > 0:
            return minutes
    return None


def parse_duration(text: str) -> Optional[int]:
    m = _DURATION_BARE_RE.match(text.strip())
    if m:
        minutes = int(m.group(1))
        if minutes > 0:
            return minutes
    return None
