# meeting_scheduler/schemas/participant.py
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from meeting_scheduler.services.time_normalizer import InvalidTimezoneError, resolve_timezone


class ParticipantCreate(BaseModel):
    """
    Schema for registering a new participant.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name of the participant.",
        examples=["Rafael"],
    )
    timezone_id: str = Field(
        default="UTC",
        description="IANA timezone the participant lives in.",
        examples=["America/Sao_Paulo"],
    )

    @field_validator("timezone_id")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            resolve_timezone(value)
        except InvalidTimezoneError as exc:
            raise ValueError(str(exc)) from exc
        return value


class ParticipantRead(BaseModel):
    """
    Public representation of a participant.
    """

    id: UUID = Field(..., description="Participant identifier.")
    name: str = Field(..., description="Display name of the participant.")
    timezone_id: str = Field(..., description="IANA timezone of the participant.")

    class Config:
        from_attributes = True
