from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meeting_assistant.agent.dialogue import SchedulingDialogue
from meeting_assistant.agent.listing import MeetingLister
from meeting_assistant.agent.router import MessageRouter
from meeting_assistant.api.routes import router as api_router, oauth_router, inject_dependencies
from meeting_assistant.config import settings
from meeting_assistant.services.auth_service import GoogleAuthorizer
from meeting_assistant.services.calendar_service import CalendarExecutor, build_calendar_provider
from meeting_assistant.services.chat_service import ChatResponder
from meeting_assistant.services.credential_store import CredentialStore
from meeting_assistant.services.session_store import InMemorySessionStore
from meeting_assistant.utils.logger import get_logger

log = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # ── startup ──
    log.info("🚀 Starting %s", settings.APP_NAME)

    credentials = CredentialStore(settings.TOKENS_FILE)
    credentials.load_permanent()

    sessions = InMemorySessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)
    authorizer = GoogleAuthorizer(credentials)
    executor = CalendarExecutor(credentials, build_calendar_provider())

    message_router = MessageRouter(
        dialogue=SchedulingDialogue(sessions, credentials, authorizer, executor),
        lister=MeetingLister(credentials, authorizer, executor),
        authorizer=authorizer,
        chat=ChatResponder(),
    )
    inject_dependencies(message_router, sessions, executor, authorizer)
    log.info("Assistant ready")

    yield

    # ── shutdown ──
    log.info("Goodbye 👋")


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(oauth_router)


def run():
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
