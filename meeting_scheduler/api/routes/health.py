# meeting_scheduler/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from meeting_scheduler.core.config import get_settings


router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Response schema for the health check endpoint.
    """

    status: str = Field(
        ...,
        description="Always `ok` while the process serves requests.",
        examples=["ok"],
    )
    app_name: str = Field(
        ...,
        description="Value of APP_NAME.",
        examples=["Meeting Scheduler"],
    )
    environment: str = Field(
        ...,
        description="Value of APP_ENV.",
        examples=["local"],
    )
    timestamp_utc: datetime = Field(
        ...,
        description="Server time in UTC.",
        examples=["2025-01-01T10:30:00Z"],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Reports that the scheduler process is up, with its name and environment.",
)
async def health_check() -> HealthResponse:
    """
    Answers without touching the database.
    """
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )
