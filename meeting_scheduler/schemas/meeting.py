# meeting_scheduler/schemas/meeting.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from meeting_scheduler.models.meeting import Meeting


class MeetingRead(BaseModel):
    """
    Public representation of a booked meeting.
    """

    id: UUID = Field(..., description="Meeting identifier.")
    title: str = Field(..., description="Meeting title.", examples=["Team Sync"])
    start_utc: datetime = Field(
        ...,
        description="UTC start of the meeting.",
        examples=["2025-05-30T13:00:00Z"],
    )
    end_utc: datetime = Field(
        ...,
        description="UTC end of the meeting.",
        examples=["2025-05-30T14:00:00Z"],
    )
    participant_ids: list[UUID] = Field(
        default_factory=list,
        description="Identifiers of everyone attending.",
    )

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingRead":
        return cls(
            id=meeting.id,
            title=meeting.title,
            start_utc=meeting.start_utc,
            end_utc=meeting.end_utc,
            participant_ids=sorted((p.id for p in meeting.participants), key=str),
        )
