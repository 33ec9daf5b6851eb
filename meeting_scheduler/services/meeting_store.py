# meeting_scheduler/services/meeting_store.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_scheduler.models.meeting import Meeting
from meeting_scheduler.models.participant import Participant
from meeting_scheduler.services.intervals import overlaps

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """
    Raised when the store refuses or fails to durably write a meeting.
    """


class MeetingStore(Protocol):
    """
    Persistence boundary used by the scheduling core.
    """

    async def find_participants(self, participant_ids: Sequence[UUID]) -> list[Participant]:
        ...

    async def meetings_overlapping(
        self,
        participant_ids: Sequence[UUID],
        lower: datetime,
        upper: datetime,
    ) -> list[Meeting]:
        ...

    async def persist(self, meeting: Meeting) -> None:
        ...


class SqlMeetingStore:
    """
    SQLAlchemy-backed implementation of MeetingStore.

    Responsibilities
    ----------------
    - Resolve participants by id (partial results allowed).
    - Pre-filter meetings with the half-open overlap rule directly in SQL,
      ordered by start time.
    - Persist new meetings, re-checking for overlaps inside the write
      transaction so that a concurrent booking that won the race is
      reported instead of silently double-booking.

    Notes
    -----
    - The write-time re-check is only as strong as the isolation level of
      the underlying database.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Scheduling boundary
    # ------------------------------------------------------------------
    async def find_participants(self, participant_ids: Sequence[UUID]) -> list[Participant]:
        if not participant_ids:
            return []

        stmt = select(Participant).where(Participant.id.in_(list(participant_ids)))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def meetings_overlapping(
        self,
        participant_ids: Sequence[UUID],
        lower: datetime,
        upper: datetime,
    ) -> list[Meeting]:
        """
        Meetings involving any of `participant_ids` whose stored interval
        satisfies `start < upper and end > lower`, ascending by start.
        """
        if not participant_ids:
            return []

        stmt = (
            select(Meeting)
            .where(
                Meeting.participants.any(Participant.id.in_(list(participant_ids))),
                Meeting.start_utc < upper,
                Meeting.end_utc > lower,
            )
            .order_by(Meeting.start_utc.asc(), Meeting.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def persist(self, meeting: Meeting) -> None:
        """
        Durably store a new meeting.

        Raises PersistenceError when an overlapping meeting for one of the
        participants was committed in the meantime, or when the database
        rejects the write.
        """
        participant_ids = [p.id for p in meeting.participants]

        try:
            competing = await self.meetings_overlapping(
                participant_ids, meeting.start_utc, meeting.end_utc
            )
            clash = next((m for m in competing if overlaps(m, meeting)), None)
            if clash is not None:
                logger.warning(
                    "Write-time overlap for meeting %s: %s already holds the slot",
                    meeting.id,
                    clash.id,
                )
                raise PersistenceError(
                    f"Meeting {clash.id} was booked for the same participants "
                    f"between {clash.start_utc.isoformat()} and {clash.end_utc.isoformat()}."
                )

            self.session.add(meeting)
            await self.session.commit()
        except PersistenceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError(f"Failed to persist meeting {meeting.id}: {exc}") from exc

    # ------------------------------------------------------------------
    # Read helpers for the HTTP layer
    # ------------------------------------------------------------------
    async def list_participants(self) -> list[Participant]:
        result = await self.session.execute(select(Participant).order_by(Participant.name.asc()))
        return list(result.scalars().all())

    async def get_participant(self, participant_id: UUID) -> Participant | None:
        return await self.session.get(Participant, participant_id)

    async def add_participant(self, name: str, timezone_id: str) -> Participant:
        participant = Participant(name=name, timezone_id=timezone_id)
        self.session.add(participant)
        await self.session.commit()
        await self.session.refresh(participant)
        return participant

    async def get_meeting(self, meeting_id: UUID) -> Meeting | None:
        return await self.session.get(Meeting, meeting_id)

    async def meetings_for_participant(
        self,
        participant_id: UUID,
        lower: datetime | None = None,
        upper: datetime | None = None,
    ) -> list[Meeting]:
        """
        All meetings of one participant, optionally restricted to those
        overlapping [lower, upper).
        """
        conditions = [Meeting.participants.any(Participant.id == participant_id)]
        if lower is not None:
            conditions.append(Meeting.end_utc > lower)
        if upper is not None:
            conditions.append(Meeting.start_utc < upper)

        stmt = select(Meeting).where(*conditions).order_by(Meeting.start_utc.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
