# meeting_scheduler/models/meeting.py
from __future__ import annotations

from collections.abc import Iterable
from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import relationship

from meeting_scheduler.db.base import Base
from meeting_scheduler.db.types import UtcDateTime
from meeting_scheduler.models.participant import Participant
from meeting_scheduler.schemas.interval import TimeInterval


meeting_participants = Table(
    "meeting_participants",
    Base.metadata,
    Column(
        "meeting_id",
        Uuid,
        ForeignKey("meetings.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "participant_id",
        Uuid,
        ForeignKey("participants.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Meeting(Base):
    """
    A booked meeting on the absolute UTC timeline.

    Instances are built through `Meeting.create`, which enforces the
    interval invariant; once persisted a meeting is never edited in place.
    """

    __tablename__ = "meetings"

    id = Column(Uuid, primary_key=True, default=uuid4)

    title = Column(String(255), nullable=False)

    start_utc = Column(UtcDateTime, nullable=False, index=True)
    end_utc = Column(UtcDateTime, nullable=False, index=True)

    participants = relationship(
        "Participant",
        secondary=meeting_participants,
        back_populates="meetings",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("start_utc < end_utc", name="ck_meetings_start_before_end"),
    )

    @classmethod
    def create(
        cls,
        title: str,
        interval: TimeInterval,
        participants: Iterable[Participant],
    ) -> "Meeting":
        """
        Validating factory for new meetings.

        Raises ValueError for a blank title. The interval is already
        guaranteed UTC and strictly ordered by TimeInterval itself.
        """
        if not title or not title.strip():
            raise ValueError("Meeting title must not be empty.")

        return cls(
            id=uuid4(),
            title=title.strip(),
            start_utc=interval.start_utc,
            end_utc=interval.end_utc,
            participants=list(participants),
        )

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(start_utc=self.start_utc, end_utc=self.end_utc)

    def __repr__(self) -> str:
        return (
            f"<Meeting id={self.id} title={self.title!r} "
            f"start={self.start_utc} end={self.end_utc}>"
        )
