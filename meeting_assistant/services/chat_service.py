"""
Small-talk fallback for messages outside the scheduling domain.
"""

from __future__ import annotations

import asyncio
import random
import time
from typing import Dict

from meeting_assistant.config import settings
from meeting_assistant.utils.logger import get_logger

log = get_logger("services.chat")

PERSONALITY = """You are Remo, a friendly and engaging AI assistant with a warm personality.
Keep replies natural, varied, concise and helpful. Use emojis sparingly.
You can schedule meetings and list the user's calendar, and you are also
happy to chat casually."""

GREETINGS = [
    "Hey! How's it going? 😊",
    "Hi there! What's on your mind today?",
    "Hello! How can I help you today? 💫",
    "Hey! Nice to see you! What's up? 😊",
    "Hi! How's your day going so far? ✨",
    "Hello there! What can I do for you today? 🌟",
]

_GREETING_WORDS = ("hi", "hello", "hey", "hola", "hii", "yo", "sup")

FALLBACK_REPLY = "I encountered an error. Could you try again?"

# conversations idle longer than this are forgotten
HISTORY_TTL_SECONDS = 3600
MAX_HISTORY = 12


class ChatResponder:

    def __init__(self, model: str = settings.HF_MODEL, token: str = settings.HF_TOKEN):
        self._model = model
        self._token = token
        self._client = None
        self._conversations: Dict[str, dict] = {}

    def _get_client(self):
        if self._client is None:
            from huggingface_hub import InferenceClient
            self._client = InferenceClient(model=self._model, token=self._token or None)
            log.info("HuggingFace InferenceClient ready: %s", self._model)
        return self._client

    def _prune(self) -> None:
        now = time.time()
        for user_id in [
            u for u, c in self._conversations.items()
            if now - c["last_update"] > HISTORY_TTL_SECONDS
        ]:
            del self._conversations[user_id]

    def _complete(self, messages: list[dict]) -> str:
        response = self._get_client().chat_completion(
            messages=messages,
            max_tokens=512,
            temperature=0.7,
        )
        text = response.choices[0].message.content
        return text.strip() if text else ""

    async def reply(self, user_id: str, message: str) -> str:
        lower = message.strip().lower()
        if lower in _GREETING_WORDS:
            return random.choice(GREETINGS)

        self._prune()
        conversation = self._conversations.setdefault(
            user_id, {"messages": [], "last_update": time.time()}
        )
        conversation["messages"].append({"role": "user", "content": message})
        conversation["messages"] = conversation["messages"][-MAX_HISTORY:]

        try:
            text = await asyncio.to_thread(
                self._complete,
                [{"role": "system", "content": PERSONALITY}, *conversation["messages"]],
            )
        except Exception as exc:
            log.warning("Chat completion failed: %s", exc)
            return FALLBACK_REPLY

        if not text:
            return "I'm having trouble understanding. Could you rephrase that?"

        conversation["messages"].append({"role": "assistant", "content": text})
        conversation["last_update"] = time.time()
        return text
