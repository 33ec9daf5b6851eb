# meeting_scheduler/models/participant.py
from uuid import uuid4

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from meeting_scheduler.db.base import Base


class Participant(Base):
    """
    A person who can be invited to meetings.

    The `meetings` back-reference is maintained by the ORM. It is lazy and
    never read by the scheduling core, which queries meeting intervals
    through the store instead.
    """

    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid4)

    name = Column(String(255), nullable=False)

    timezone_id = Column(
        String(64),
        nullable=False,
        default="UTC",
    )

    meetings = relationship(
        "Meeting",
        secondary="meeting_participants",
        back_populates="participants",
        order_by="Meeting.start_utc",
    )

    def __repr__(self) -> str:
        return f"<Participant id={self.id} name={self.name!r} tz={self.timezone_id}>"
