"""
Calendar credential storage keyed by user id.

Session-only credentials live in memory; permanent ones are also written to a
JSON file (user id → authorized-user token info) and reloaded at startup.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from meeting_assistant.utils.logger import get_logger

log = get_logger("services.credentials")


class CredentialStore:

    def __init__(self, tokens_file: Optional[str] = None):
        self._tokens: Dict[str, Dict[str, Any]] = {}
        self._tokens_file = tokens_file

    # ── lookups ───────────────────────────────────────
    def has_credential(self, user_id: str) -> bool:
        return str(user_id) in self._tokens

    def get_credential(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self._tokens.get(str(user_id))

    # ── writes ────────────────────────────────────────
    def save_credential(self, user_id: str, token: Dict[str, Any], permanent: bool = False) -> None:
        self._tokens[str(user_id)] = token
        if permanent and self._tokens_file:
            self._save_permanent(str(user_id), token)

    def revoke(self, user_id: str) -> None:
        self._tokens.pop(str(user_id), None)

    # ── persistence ───────────────────────────────────
    def _read_file(self) -> Dict[str, Dict[str, Any]]:
        if not self._tokens_file or not os.path.exists(self._tokens_file):
            return {}
        try:
            with open(self._tokens_file, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            log.warning("Could not read tokens file %s: %s", self._tokens_file, exc)
            return {}

    def _save_permanent(self, user_id: str, token: Dict[str, Any]) -> None:
        all_tokens = self._read_file()
        all_tokens[user_id] = token
        with open(self._tokens_file, "w", encoding="utf-8") as f:
            json.dump(all_tokens, f, indent=2)
        log.info("Token saved permanently for user %s", user_id)

    def load_permanent(self) -> int:
        """Load persisted tokens into memory. Returns how many were loaded."""
        all_tokens = self._read_file()
        self._tokens.update(all_tokens)
        if all_tokens:
            log.info("Loaded %d permanent token(s)", len(all_tokens))
        else:
            log.info("No permanent tokens found")
        return len(all_tokens)
