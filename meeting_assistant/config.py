import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env FIRST before anything else
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings:
    BASE_DIR: Path = BASE_DIR
    APP_NAME: str = os.getenv("APP_NAME", "Remo Meeting Assistant")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # FastAPI
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Google OAuth / Calendar
    GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI: str = os.getenv("GOOGLE_REDIRECT_URI", "http://localhost:8000/oauth2callback")
    GOOGLE_SCOPES: list = ["https://www.googleapis.com/auth/calendar"]
    TOKENS_FILE: str = str(BASE_DIR / os.getenv("TOKENS_FILE", "tokens.json"))
    REMEMBER_CREDENTIALS: bool = os.getenv("REMEMBER_CREDENTIALS", "true").lower() == "true"
    MOCK_CALENDAR: bool = os.getenv("MOCK_CALENDAR", "true").lower() == "true"

    # HuggingFace chat fallback
    HF_TOKEN: str = os.getenv("HF_TOKEN", "")
    HF_MODEL: str = os.getenv("HF_MODEL", "zai-org/GLM-4.7-Flash")

    # Scheduling defaults
    DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "Asia/Kolkata")
    DEFAULT_EMAIL_DOMAIN: str = os.getenv("DEFAULT_EMAIL_DOMAIN", "gmail.com")
    DEFAULT_DURATION_MINUTES: int = int(os.getenv("DEFAULT_DURATION_MINUTES", "30"))

    # 0 disables session eviction
    SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "0"))

    LOG_FILE: str = os.getenv("LOG_FILE", "app.log")


settings = Settings()

# Debug print on import
if settings.DEBUG:
    print(f"[CONFIG] HF_MODEL    = {settings.HF_MODEL}")
    print(f"[CONFIG] MOCK_CAL    = {settings.MOCK_CALENDAR}")
    print(f"[CONFIG] TIMEZONE    = {settings.DEFAULT_TIMEZONE}")
    print(f"[CONFIG] TOKENS_FILE = {settings.TOKENS_FILE}")
