"""
Tests for the natural-language field extractors
"""
from datetime import date, timedelta
from unittest.mock import patch

import pytest

from meeting_assistant.agent.extractors import (
    extract_attendee,
    extract_date,
    extract_duration_phrase,
    extract_time,
    extract_time_phrase,
    parse_duration,
    validate_email,
)
from meeting_assistant.agent.state import TimeInfo

# a Monday
TODAY = date(2026, 10, 19)


class TestExtractDate:
    """Date phrases resolved relative to a fixed Monday"""

    def test_today_and_tomorrow(self):
        assert extract_date("today", TODAY) == TODAY
        assert extract_date("Tomorrow please", TODAY) == TODAY + timedelta(days=1)

    def test_tomorrow_defaults_to_configured_zone_today(self):
        with patch("meeting_assistant.agent.extractors.local_today", return_value=TODAY):
            assert extract_date("tomorrow") == TODAY + timedelta(days=1)
            assert extract_date("3/10") is None

    @pytest.mark.parametrize("text,expected", [
        ("friday", date(2026, 10, 23)),
        ("Sunday", date(2026, 10, 25)),
        ("next friday", date(2026, 10, 30)),
    ])
    def test_weekday_names(self, text, expected):
        assert extract_date(text, TODAY) == expected

    def test_same_weekday_is_never_today(self):
        """Naming today's weekday means the one a week ahead"""
        assert extract_date("monday", TODAY) == date(2026, 10, 26)

    @pytest.mark.parametrize("text,expected", [
        ("25/12", date(2026, 12, 25)),
        ("25-12-2027", date(2027, 12, 25)),
        ("3/11/2026", date(2026, 11, 3)),
        ("2026-11-05", date(2026, 11, 5)),
    ])
    def test_numeric_dates_are_day_first(self, text, expected):
        assert extract_date(text, TODAY) == expected

    @pytest.mark.parametrize("text,expected", [
        ("3rd Nov", date(2026, 11, 3)),
        ("21st December, 2027", date(2027, 12, 21)),
        ("Nov 3rd, 2027", date(2027, 11, 3)),
        ("December 5", date(2026, 12, 5)),
        ("on oct 19", TODAY),
    ])
    def test_month_name_dates(self, text, expected):
        assert extract_date(text, TODAY) == expected

    @pytest.mark.parametrize("text", [
        "1/1/2025",
        "18/10",
        "feb 3",
        "2026-10-18",
    ])
    def test_past_dates_are_rejected(self, text):
        assert extract_date(text, TODAY) is None

    @pytest.mark.parametrize("text", ["31/2", "Feb 30", "whenever", "soon-ish", ""])
    def test_unparseable_dates(self, text):
        assert extract_date(text, TODAY) is None

    @pytest.mark.parametrize("text", [
        "today", "tomorrow", "friday", "next monday", "25/12", "3rd Nov", "Dec 5, 2027",
    ])
    def test_reparsing_iso_rendering_is_idempotent(self, text):
        parsed = extract_date(text, TODAY)
        assert parsed is not None
        assert extract_date(parsed.isoformat(), TODAY) == parsed


class TestExtractTime:
    """12- and 24-hour time parsing"""

    @pytest.mark.parametrize("text,hours,minutes", [
        ("2:30pm", 14, 30),
        ("12am", 0, 0),
        ("12pm", 12, 0),
        ("9am", 9, 0),
        ("2:30 PM", 14, 30),
        ("11pm", 23, 0),
        ("1015am", 10, 15),
        ("14:30", 14, 30),
        ("1430", 14, 30),
        ("930", 9, 30),
        ("00:00", 0, 0),
        ("at 3pm", 15, 0),
    ])
    def test_valid_times(self, text, hours, minutes):
        assert extract_time(text) == TimeInfo(hours=hours, minutes=minutes)

    @pytest.mark.parametrize("text", ["25:00", "12:60", "13pm", "0am", "14", "noon", "later"])
    def test_invalid_times(self, text):
        assert extract_time(text) is None

    def test_time_inside_sentence(self):
        assert extract_time_phrase("lunch tomorrow at 1:15pm") == TimeInfo(hours=13, minutes=15)
        assert extract_time_phrase("tomorrow 4pm works") == TimeInfo(hours=16, minutes=0)
        assert extract_time_phrase("for 30 minutes tomorrow") is None

    @pytest.mark.parametrize("text,expected", [
        ("sync tomorrow at 1430", TimeInfo(hours=14, minutes=30)),
        ("call at 0915 please", TimeInfo(hours=9, minutes=15)),
        ("at 930pm", TimeInfo(hours=21, minutes=30)),
    ])
    def test_compact_times_after_at(self, text, expected):
        assert extract_time_phrase(text) == expected


class TestEmails:

    def test_accepts_plain_address(self):
        assert validate_email("a@b.co") == "a@b.co"
        assert validate_email("  bob.smith+x@mail.example.com ") == "bob.smith+x@mail.example.com"

    @pytest.mark.parametrize("text", ["a@b", "a b@c.com", "a@@b.com", "a@b.c", "a@b.c0m", "not-an-email"])
    def test_rejects_malformed(self, text):
        assert validate_email(text) is None

    def test_attendee_shorthand(self):
        assert extract_attendee("meet with alice@example.com, tomorrow", "gmail.com") == "alice@example.com"
        assert extract_attendee("call with bob tomorrow", "gmail.com") == "bob@gmail.com"
        assert extract_attendee("schedule a call tomorrow", "gmail.com") is None


class TestDurations:

    @pytest.mark.parametrize("text,expected", [("45", 45), (" 30 ", 30), ("90 minutes", 90), ("15 min", 15)])
    def test_bare_durations(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["0", "-5", "half an hour", "about 20", ""])
    def test_invalid_durations(self, text):
        assert parse_duration(text) is None

    def test_duration_phrase(self):
        assert extract_duration_phrase("sync for 45 minutes tomorrow") == 45
        assert extract_duration_phrase("sync for 20 min") == 20
        assert extract_duration_phrase("sync for 0 minutes") is None
        assert extract_duration_phrase("sync for a while") is None
