"""
Tests for inbound message routing
"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from conftest import AUTH_URL, USER
from meeting_assistant.agent.nodes import DECLINED_REPLY, FIELD_QUESTIONS, FIELD_REPROMPTS
from meeting_assistant.agent.router import ERROR_REPLY, WELCOME, MessageRouter


@pytest.fixture
def chat():
    fake = AsyncMock()
    fake.reply.return_value = "small talk"
    return fake


@pytest.fixture
def message_router(dialogue, lister, authorizer, chat):
    return MessageRouter(dialogue=dialogue, lister=lister, authorizer=authorizer, chat=chat)


class TestCommands:

    async def test_start(self, message_router):
        reply = await message_router.handle_message(USER, "/start")
        assert reply.route == "command"
        assert reply.response == WELCOME

    async def test_auth_link(self, message_router, authorizer):
        reply = await message_router.handle_message(USER, "/auth")
        assert reply.route == "command"
        assert AUTH_URL in reply.response
        authorizer.start_auth.assert_called_once_with(USER)


class TestRouting:

    async def test_create_request_opens_dialogue(self, message_router, sessions):
        reply = await message_router.handle_message(USER, "Schedule a meeting")

        assert reply.route == "dialogue"
        assert reply.response == FIELD_QUESTIONS["date"]
        assert reply.session.step == "date"
        assert sessions.get(USER) is not None

    async def test_open_session_owns_every_message(self, message_router, chat):
        await message_router.handle_message(USER, "Schedule a meeting")

        # "show my meetings" would normally be a list request
        reply = await message_router.handle_message(USER, "show my meetings")

        assert reply.route == "dialogue"
        chat.reply.assert_not_called()

    async def test_list_request(self, message_router, sessions):
        reply = await message_router.handle_message(USER, "show my meetings")

        assert reply.route == "list"
        assert sessions.get(USER) is None

    async def test_everything_else_goes_to_chat(self, message_router, chat):
        reply = await message_router.handle_message(USER, "how are you?")

        assert reply.route == "chat"
        assert reply.response == "small talk"
        chat.reply.assert_awaited_once_with(USER, "how are you?")

    async def test_yes_after_decline_is_small_talk(self, message_router, chat):
        await message_router.handle_message(
            USER, "Schedule a meeting with alice@example.com for 30 minutes tomorrow at 2pm"
        )
        reply = await message_router.handle_message(USER, "no")
        assert reply.response == DECLINED_REPLY

        reply = await message_router.handle_message(USER, "yes")
        assert reply.route == "chat"

    async def test_handler_errors_become_error_reply(self, message_router, chat):
        chat.reply.side_effect = RuntimeError("boom")

        reply = await message_router.handle_message(USER, "tell me a joke")

        assert reply.route == "error"
        assert reply.response == ERROR_REPLY

    async def test_concurrent_messages_see_the_new_session(self, message_router, chat):
        first, second = await asyncio.gather(
            message_router.handle_message(USER, "Schedule a meeting"),
            message_router.handle_message(USER, "show my meetings"),
        )

        assert first.route == "dialogue"
        # routed after the first turn opened a session, so it is read as a date
        assert second.route == "dialogue"
        assert second.response == FIELD_REPROMPTS["date"]
        chat.reply.assert_not_called()
