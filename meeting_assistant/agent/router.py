from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from meeting_assistant.agent.dialogue import SchedulingDialogue
from meeting_assistant.agent.intent import determine_meeting_action, is_meeting_request
from meeting_assistant.agent.listing import MeetingLister
from meeting_assistant.agent.state import DialogueState
from meeting_assistant.services.auth_service import GoogleAuthorizer
from meeting_assistant.services.chat_service import ChatResponder
from meeting_assistant.utils.logger import get_logger

log = get_logger("agent.router")

WELCOME = (
    "Hello! I'm Remo, your personal AI assistant. 👋\n\n"
    "I can help you manage your meetings:\n\n"
    "📅 Meeting Management:\n"
    "• Schedule a new meeting\n"
    "• List your upcoming meetings\n\n"
    "Examples:\n"
    "• 'Schedule a meeting with alice@example.com tomorrow at 2pm for 30 minutes'\n"
    "• 'Show my meetings for tomorrow'\n"
    "• 'cancel' to stop scheduling at any point\n\n"
    "How can I assist you today?"
)

ERROR_REPLY = "I encountered an error. Please try again."


class RoutedReply(BaseModel):
    response: str
    route: str                          # command | dialogue | list | chat | error
    session: Optional[DialogueState] = None


class MessageRouter:
    """Decides which handler owns an inbound chat message."""

    def __init__(
        self,
        dialogue: SchedulingDialogue,
        lister: MeetingLister,
        authorizer: GoogleAuthorizer,
        chat: ChatResponder,
    ):
        self._dialogue = dialogue
        self._lister = lister
        self._authorizer = authorizer
        self._chat = chat

    async def handle_message(self, user_id: str, message: str) -> RoutedReply:
        text = message.strip()
        log.info("Processing message from %s: %s", user_id, text[:80])

        try:
            if text.startswith("/start"):
                return RoutedReply(response=WELCOME, route="command")

            if text.startswith("/auth"):
                url = self._authorizer.start_auth(user_id)
                return RoutedReply(
                    response="Please authorize the bot to access your Google Calendar by clicking this link:\n" + url,
                    route="command",
                )

            # an in-progress session owns every message
            creates = is_meeting_request(text) and determine_meeting_action(text) == "create"
            reply = await self._dialogue.handle(user_id, text, start_new=creates)
            if reply is not None:
                return RoutedReply(response=reply.response, route="dialogue", session=reply.session)

            if is_meeting_request(text):
                return RoutedReply(response=await self._lister.handle(user_id, text), route="list")

            return RoutedReply(response=await self._chat.reply(user_id, text), route="chat")

        except Exception:
            log.exception("handle_message failed for %s", user_id)
            return RoutedReply(response=ERROR_REPLY, route="error")
