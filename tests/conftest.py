"""
Pytest configuration and fixtures
"""
import os

# keep test runs off the real calendar and out of app.log
os.environ.setdefault("MOCK_CALENDAR", "true")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")

from datetime import date
from unittest.mock import Mock

import pytest

from meeting_assistant.agent.dialogue import SchedulingDialogue
from meeting_assistant.agent.listing import MeetingLister
from meeting_assistant.services.calendar_service import CalendarExecutor, MockCalendarProvider
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.services.session_store import InMemorySessionStore

# a Monday
TODAY = date(2026, 10, 19)
USER = "42"
AUTH_URL = "https://accounts.example.com/consent?state=42"


@pytest.fixture
def credentials():
    """Credential store with USER already authorized"""
    store = CredentialStore()
    store.save_credential(USER, {"token": "test-token"})
    return store


@pytest.fixture
def authorizer():
    fake = Mock()
    fake.start_auth.return_value = AUTH_URL
    return fake


@pytest.fixture
def provider():
    return MockCalendarProvider(timezone="UTC")


@pytest.fixture
def executor(credentials, provider):
    return CalendarExecutor(credentials, provider, timezone="UTC")


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def dialogue(sessions, credentials, authorizer, executor):
    return SchedulingDialogue(sessions, credentials, authorizer, executor, today=lambda: TODAY)


@pytest.fixture
def lister(credentials, authorizer, executor):
    return MeetingLister(credentials, authorizer, executor)
