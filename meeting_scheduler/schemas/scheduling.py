# meeting_scheduler/schemas/scheduling.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from meeting_scheduler.schemas.interval import ProposedSlot

MAX_DURATION_SECONDS = 7 * 24 * 60 * 60


class SchedulingError(str, Enum):
    """
    Enum representing why a scheduling request did not produce a booking.
    """

    PARTICIPANTS_NOT_FOUND = "PARTICIPANTS_NOT_FOUND"
    INVALID_TIMEZONE = "INVALID_TIMEZONE"
    PAST_START_TIME = "PAST_START_TIME"
    TIME_CONFLICT = "TIME_CONFLICT"
    INVALID_REQUEST = "INVALID_REQUEST"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class ScheduleMeetingRequest(BaseModel):
    """
    Payload accepted by POST /meetings/schedule.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Human-readable meeting title.",
        examples=["Sprint planning"],
    )
    start_time: datetime = Field(
        ...,
        description=(
            "Local wall-clock start time without offset, interpreted in "
            "`timezone_id`."
        ),
        examples=["2025-05-30T10:00:00"],
    )
    duration_seconds: int = Field(
        ...,
        gt=0,
        le=MAX_DURATION_SECONDS,
        description="Meeting length in seconds (at most 7 days).",
        examples=[3600],
    )
    participant_ids: list[UUID] = Field(
        ...,
        min_length=1,
        description="Identifiers of every participant to book.",
    )
    timezone_id: str = Field(
        default="",
        description=(
            "IANA timezone of `start_time` (e.g. America/Sao_Paulo). "
            "Empty means `start_time` is already UTC."
        ),
        examples=["America/Sao_Paulo"],
    )

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("start_time")
    @classmethod
    def _start_time_is_wall_clock(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            raise ValueError(
                "start_time must not carry a UTC offset; pass the zone in timezone_id"
            )
        return value


class ScheduleMeetingOutcome(BaseModel):
    """
    Result of a scheduling attempt.

    `success` is True only when a meeting was booked; otherwise `error`
    names the reason and, for time conflicts, `suggested_slots` lists the
    next free alternatives.
    """

    success: bool = Field(..., description="Whether the meeting was booked.")
    meeting_id: UUID | None = Field(
        None,
        description="Identifier of the booked meeting (success only).",
    )
    message: str = Field(
        ...,
        description="Human-readable explanation of the outcome.",
        examples=["Meeting scheduled successfully."],
    )
    error: SchedulingError | None = Field(
        None,
        description="Failure reason when `success` is false.",
    )
    suggested_slots: list[ProposedSlot] = Field(
        default_factory=list,
        description="Free alternatives, chronological, when the request conflicted.",
    )
