# meeting_scheduler/schemas/interval.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TimeInterval(BaseModel):
    """
    Half-open interval [start_utc, end_utc) on the absolute UTC timeline.

    Invariants
    ----------
    - Both ends are timezone-aware and carry a zero UTC offset.
    - start_utc < end_utc (zero-length and inverted intervals are rejected).
    - Immutable once constructed.
    """

    model_config = ConfigDict(frozen=True)

    start_utc: datetime = Field(
        ...,
        description="Inclusive UTC start of the interval.",
        examples=["2025-05-30T13:00:00Z"],
    )
    end_utc: datetime = Field(
        ...,
        description="Exclusive UTC end of the interval.",
        examples=["2025-05-30T14:00:00Z"],
    )

    @field_validator("start_utc", "end_utc")
    @classmethod
    def _require_utc(cls, value: datetime) -> datetime:
        offset = value.utcoffset()
        if offset is None:
            raise ValueError("interval bounds must be timezone-aware UTC datetimes")
        if offset != timedelta(0):
            raise ValueError("interval bounds must be expressed in UTC")
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _require_positive_length(self) -> "TimeInterval":
        if self.start_utc >= self.end_utc:
            raise ValueError("start_utc must be strictly before end_utc")
        return self

    @classmethod
    def starting_at(cls, start_utc: datetime, duration: timedelta) -> "TimeInterval":
        """
        Build the interval [start_utc, start_utc + duration).
        """
        return cls(start_utc=start_utc, end_utc=start_utc + duration)

    @property
    def duration(self) -> timedelta:
        return self.end_utc - self.start_utc


class ProposedSlot(TimeInterval):
    """
    A free interval offered as an alternative to a conflicting request.

    Proposed slots are not bookings; a separate scheduling call is needed.
    """
