"""
One-time local Google OAuth setup for a chat user.
Runs the consent flow in a browser and stores the resulting credential in
the tokens file, so the assistant loads it on its next start.

Usage:
    python setup_google_auth.py <chat-user-id>
"""

import json
import sys

from google_auth_oauthlib.flow import InstalledAppFlow

from meeting_assistant.config import settings
from meeting_assistant.services.credential_store import CredentialStore


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    user_id = sys.argv[1]

    print("=" * 60)
    print("  Google Calendar OAuth Setup")
    print("=" * 60)
    print()

    if not settings.GOOGLE_CLIENT_ID or not settings.GOOGLE_CLIENT_SECRET:
        print("[ERROR] GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET are not set in .env")
        print("   Create OAuth credentials in Google Cloud Console:")
        print("   https://console.cloud.google.com/apis/credentials")
        sys.exit(1)

    store = CredentialStore(settings.TOKENS_FILE)
    store.load_permanent()
    if store.has_credential(user_id):
        print(f"[OK] User {user_id} is already authorized.")
        return

    print(f"  Tokens file: {settings.TOKENS_FILE}")
    print("[INFO] Opening browser for Google sign-in...")
    print()

    flow = InstalledAppFlow.from_client_config(
        {
            "installed": {
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        },
        settings.GOOGLE_SCOPES,
    )
    creds = flow.run_local_server(port=0)
    store.save_credential(user_id, json.loads(creds.to_json()), permanent=True)

    print()
    print("[OK] Authentication successful!")
    print(f"     Credential for user {user_id} saved to: {settings.TOKENS_FILE}")
    print("     Make sure MOCK_CALENDAR=false in your .env file to use it.")


if __name__ == "__main__":
    main()
