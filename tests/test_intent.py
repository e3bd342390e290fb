"""
Tests for intent classification
"""
import pytest

from meeting_assistant.agent.intent import (
    determine_meeting_action,
    is_cancellation,
    is_meeting_request,
)


class TestMeetingRequest:

    @pytest.mark.parametrize("text", [
        "Schedule a sync with the team",
        "can you set up something tomorrow",
        "book a call",
        "I have an appointment to plan",
        "show me my calendar",
        "new MEETING please",
    ])
    def test_scheduling_domain(self, text):
        assert is_meeting_request(text) is True

    @pytest.mark.parametrize("text", ["hello", "how are you?", "yes", "tell me a joke", "recalling old times"])
    def test_outside_domain(self, text):
        assert is_meeting_request(text) is False


class TestMeetingAction:

    @pytest.mark.parametrize("text", [
        "show my meetings for tomorrow",
        "List meetings",
        "can you get my schedule for friday",
        "view calendar",
    ])
    def test_list_action(self, text):
        assert determine_meeting_action(text) == "list"

    @pytest.mark.parametrize("text", [
        "schedule a meeting tomorrow",
        "my calendar, show it",
        "show me how to book a call",
    ])
    def test_create_action(self, text):
        assert determine_meeting_action(text) == "create"


class TestCancellation:

    @pytest.mark.parametrize("text", ["cancel", "Please STOP", "exit now"])
    def test_cancel_words(self, text):
        assert is_cancellation(text) is True

    @pytest.mark.parametrize("text", ["cancellation policy", "nonstop", "exiting", "tomorrow"])
    def test_whole_words_only(self, text):
        assert is_cancellation(text) is False
