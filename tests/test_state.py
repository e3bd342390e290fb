"""
Tests for the dialogue state models and step ordering
"""
from datetime import date

import pytest
from pydantic import ValidationError

from meeting_assistant.agent.state import FIELD_ORDER, MeetingDraft, TimeInfo, next_step


class TestNextStep:
    """Single source of truth for which field is asked next"""

    def test_empty_draft_asks_date(self):
        assert next_step(MeetingDraft()) == "date"

    def test_first_missing_field_in_order(self):
        draft = MeetingDraft(date=date(2026, 10, 20), attendees=["a@b.co"])
        assert next_step(draft) == "time"
        draft.time = TimeInfo(hours=9, minutes=0)
        assert next_step(draft) == "duration"

    def test_complete_draft(self):
        draft = MeetingDraft(
            date=date(2026, 10, 20),
            time=TimeInfo(hours=9, minutes=0),
            attendees=["a@b.co"],
            duration_minutes=30,
        )
        assert next_step(draft) == "confirm"
        assert next_step(draft, ask_description=True) == "description"

    def test_fields_are_asked_in_fixed_order(self):
        assert FIELD_ORDER == ("date", "time", "email", "duration")


class TestModels:

    def test_time_renders_zero_padded(self):
        assert str(TimeInfo(hours=9, minutes=5)) == "09:05"

    @pytest.mark.parametrize("hours,minutes", [(24, 0), (-1, 0), (10, 60)])
    def test_time_bounds(self, hours, minutes):
        with pytest.raises(ValidationError):
            TimeInfo(hours=hours, minutes=minutes)

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            MeetingDraft(duration_minutes=0)
