from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Callable

from meeting_assistant.agent.extractors import (
    extract_attendee,
    extract_date,
    extract_duration_phrase,
    extract_time,
    extract_time_phrase,
    parse_duration,
    validate_email,
)
from meeting_assistant.agent.state import (
    DialogueState,
    DialogueTurn,
    MeetingDraft,
    Step,
    next_step,
)
from meeting_assistant.config import settings
from meeting_assistant.exceptions import ExecutorFailure, UnauthorizedError
from meeting_assistant.services.auth_service import GoogleAuthorizer
from meeting_assistant.services.calendar_service import CalendarExecutor
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.utils.clock import local_today
from meeting_assistant.utils.logger import get_logger

log = get_logger("agent.nodes")


# ── replies ───────────────────────────────────────────

FIELD_QUESTIONS: dict[Step, str] = {
    "date": "When would you like to schedule the meeting? (e.g., today, tomorrow, next Monday, Feb 3)",
    "time": "What time would you like to schedule the meeting? (e.g., 2:30 PM)",
    "email": "Who would you like to meet with? (Please provide their email)",
    "duration": "How long should the meeting be? (e.g., 30 minutes)",
    "description": 'Would you like to add a description for the meeting? (Type "skip" to skip)',
}

FIELD_REPROMPTS: dict[Step, str] = {
    "date": "Please provide a valid date (e.g., today, tomorrow, next Monday, Feb 3).",
    "time": "Please provide a valid time (e.g., 2:30 PM or 14:30).",
    "email": "Please provide a valid email address.",
    "duration": "Please provide a valid duration in minutes (e.g., 30).",
}

CANCELLED_REPLY = "Meeting scheduling cancelled. Let me know when you want to schedule another meeting!"
NOTHING_TO_CANCEL_REPLY = "There's no meeting being scheduled right now, so there's nothing to cancel."
DECLINED_REPLY = "No problem, let's start over. Just let me know when you want to schedule a meeting."
CREATED_REPLY = "✅ Meeting scheduled successfully! Calendar invite has been sent to all attendees."
DEFAULT_DESCRIPTION = "Meeting scheduled via Remo"


def auth_prompt(url: str) -> str:
    return "Please authorize the bot to access your Google Calendar first:\n" + url


def format_confirmation(draft: MeetingDraft) -> str:
    duration = draft.duration_minutes or settings.DEFAULT_DURATION_MINUTES
    return (
        "Please confirm these meeting details:\n\n"
        f"📅 Date: {draft.date.strftime('%a, %d %b %Y')}\n"
        f"⏰ Time: {draft.time}\n"
        f"👥 With: {draft.attendees[0]}\n"
        f"⏱️ Duration: {duration} minutes\n"
        f"📝 Description: {draft.description or 'No description'}\n\n"
        "Is this correct? (Reply with 'yes' to confirm or 'no' to start over)"
    )


def meeting_window(draft: MeetingDraft) -> tuple[datetime, datetime]:
    """Local wall-clock start and end of the drafted meeting."""
    start = datetime.combine(draft.date, time(draft.time.hours, draft.time.minutes))
    duration = draft.duration_minutes or settings.DEFAULT_DURATION_MINUTES
    return start, start + timedelta(minutes=duration)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  STATELESS NODES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def cancel_node(state: DialogueTurn) -> dict:
    if state["session"] is None:
        return {"response": NOTHING_TO_CANCEL_REPLY, "outcome": "cancelled"}
    log.info("User %s cancelled at step %s", state["user_id"], state["session"].step)
    return {"response": CANCELLED_REPLY, "session": None, "outcome": "cancelled"}


def prompt_node(state: DialogueTurn) -> dict:
    session = state["session"]
    if session.step == "confirm":
        return {"response": format_confirmation(session.draft), "outcome": "continue"}
    return {"response": FIELD_QUESTIONS[session.step], "outcome": "continue"}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  NODES WITH COLLABORATORS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class DialogueNodes:

    def __init__(
        self,
        credentials: CredentialStore,
        authorizer: GoogleAuthorizer,
        executor: CalendarExecutor,
        today: Callable[[], date] = local_today,
    ):
        self._credentials = credentials
        self._authorizer = authorizer
        self._executor = executor
        self._today = today

    # ── NODE: authorize ───────────────────────────────
    def authorize(self, state: DialogueTurn) -> dict:
        user_id = state["user_id"]
        if self._credentials.has_credential(user_id):
            return {"outcome": "continue"}
        log.info("User %s has no calendar credential", user_id)
        return {
            "response": auth_prompt(self._authorizer.start_auth(user_id)),
            "outcome": "unauthorized",
        }

    # ── NODE: initial_parse ───────────────────────────
    def initial_parse(self, state: DialogueTurn) -> dict:
        message = state["message"]
        draft = MeetingDraft(
            date=extract_date(message, self._today()),
            time=extract_time_phrase(message),
            duration_minutes=extract_duration_phrase(message),
        )
        attendee = extract_attendee(message, settings.DEFAULT_EMAIL_DOMAIN)
        if attendee:
            draft.attendees = [attendee]

        step = next_step(draft)
        session = DialogueState(step=step, draft=draft, ask_description=step != "confirm")
        log.info("Initial parse for %s → step=%s draft=%s", state["user_id"], step, draft)
        return {"session": session}

    # ── NODE: collect_field ───────────────────────────
    def collect_field(self, state: DialogueTurn) -> dict:
        session = state["session"].model_copy(deep=True)
        draft = session.draft
        message = state["message"]
        step = session.step

        if step == "date":
            value = extract_date(message, self._today())
            if value is not None:
                draft.date = value
        elif step == "time":
            value = extract_time(message)
            if value is not None:
                draft.time = value
        elif step == "email":
            value = validate_email(message)
            if value is not None:
                draft.attendees = [value]
        elif step == "duration":
            value = parse_duration(message)
            if value is not None:
                draft.duration_minutes = value
        else:
            value = None if message.strip().lower() == "skip" else message
            draft.description = value
            session.ask_description = False
            session.step = next_step(draft)
            return {"session": session, "response": ""}

        if value is None:
            log.debug("Could not read %s from %r", step, message)
            return {"response": FIELD_REPROMPTS[step], "outcome": "continue"}

        session.step = next_step(draft, session.ask_description)
        log.info("User %s: %s collected, next step %s", state["user_id"], step, session.step)
        return {"session": session, "response": ""}

    # ── NODE: confirm ─────────────────────────────────
    async def confirm(self, state: DialogueTurn) -> dict:
        user_id = state["user_id"]
        draft = state["session"].draft

        if state["message"].strip().lower() != "yes":
            log.info("User %s declined confirmation", user_id)
            return {"response": DECLINED_REPLY, "session": None, "outcome": "declined"}

        start, end = meeting_window(draft)
        try:
            event = await self._executor.create_meeting(
                user_id,
                f"Meeting with {draft.attendees[0].split('@')[0]}",
                draft.description or DEFAULT_DESCRIPTION,
                start,
                end,
                draft.attendees,
            )
        except UnauthorizedError:
            return {
                "response": auth_prompt(self._authorizer.start_auth(user_id)),
                "session": None,
                "outcome": "unauthorized",
            }
        except ExecutorFailure as exc:
            return {
                "response": f"Sorry, I couldn't schedule the meeting ({exc.message}). Please try again.",
                "session": None,
                "outcome": "failed",
            }

        log.info("User %s scheduled event %s", user_id, event.id)
        response = CREATED_REPLY
        if event.link:
            response += f"\n🔗 {event.link}"
        return {"response": response, "session": None, "outcome": "created"}
