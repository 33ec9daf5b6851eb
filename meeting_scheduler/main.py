# meeting_scheduler/main.py
from fastapi import FastAPI

from meeting_scheduler.api.routes import health, meetings, participants
from meeting_scheduler.core.config import get_settings
from meeting_scheduler.core.logging_config import configure_logging
from meeting_scheduler.db.session import init_db_for_startup


def create_app() -> FastAPI:
    """
    Application factory for the Meeting Scheduler service.
    """
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Backend service that books meetings for a set of participants without\n"
            "double-booking anyone, and proposes the next free slots when the\n"
            "requested time conflicts with an existing meeting."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(participants.router)
    app.include_router(meetings.router)

    @app.on_event("startup")
    async def on_startup() -> None:  # pragma: no cover
        await init_db_for_startup()

    return app


app = create_app()
