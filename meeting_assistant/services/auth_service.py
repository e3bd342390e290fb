"""
Google OAuth consent URLs and authorization-code exchange.
"""

from __future__ import annotations

import asyncio
import json
from typing import Dict

from meeting_assistant.config import settings
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.utils.logger import get_logger

log = get_logger("services.auth")


class GoogleAuthorizer:

    def __init__(self, credentials: CredentialStore, remember: bool = settings.REMEMBER_CREDENTIALS):
        self._credentials = credentials
        self._remember = remember
        # state (user id) → flow awaiting its callback
        self._pending: Dict[str, object] = {}

    @staticmethod
    def _new_flow():
        from google_auth_oauthlib.flow import Flow

        client_config = {
            "web": {
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": [settings.GOOGLE_REDIRECT_URI],
            }
        }
        return Flow.from_client_config(
            client_config,
            scopes=settings.GOOGLE_SCOPES,
            redirect_uri=settings.GOOGLE_REDIRECT_URI,
        )

    def start_auth(self, user_id: str) -> str:
        flow = self._new_flow()
        url, _ = flow.authorization_url(
            access_type="offline",
            state=str(user_id),
            prompt="consent select_account",
        )
        self._pending[str(user_id)] = flow
        log.info("Issued authorization URL for user %s", user_id)
        return url

    async def complete_auth(self, code: str, state: str) -> str:
        """Exchange ``code`` and store the credential. Returns the user id."""
        flow = self._pending.pop(state, None) or self._new_flow()
        await asyncio.to_thread(flow.fetch_token, code=code)
        token = json.loads(flow.credentials.to_json())
        self._credentials.save_credential(state, token, permanent=self._remember)
        log.info("Stored calendar credential for user %s (permanent=%s)", state, self._remember)
        return state
