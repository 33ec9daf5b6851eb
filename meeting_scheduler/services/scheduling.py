# meeting_scheduler/services/scheduling.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from uuid import UUID

from meeting_scheduler.models.meeting import Meeting
from meeting_scheduler.schemas.interval import TimeInterval
from meeting_scheduler.schemas.scheduling import ScheduleMeetingOutcome, SchedulingError
from meeting_scheduler.services.clock import Clock
from meeting_scheduler.services.conflict_detector import ConflictDetector
from meeting_scheduler.services.meeting_store import MeetingStore, PersistenceError
from meeting_scheduler.services.slot_search import DEFAULT_SUGGESTION_COUNT, SlotSearchEngine
from meeting_scheduler.services.time_normalizer import InvalidTimezoneError, TimeNormalizer

logger = logging.getLogger(__name__)


class SchedulingService:
    """
    Books meetings without double-booking any participant.

    Pipeline
    --------
    1) Resolve participants            -> PARTICIPANTS_NOT_FOUND
    2) Normalize local time to UTC     -> INVALID_TIMEZONE / INVALID_REQUEST
    3) Reject starts before `now`      -> PAST_START_TIME
    4) Conflict check; on conflict search for alternatives starting at the
       end of the requested interval   -> TIME_CONFLICT (+ suggestions)
    5) Create and persist the meeting  -> success / PERSISTENCE_FAILURE

    Every failure comes back as a ScheduleMeetingOutcome; nothing is retried.
    """

    def __init__(
        self,
        store: MeetingStore,
        clock: Clock,
        slot_search: SlotSearchEngine | None = None,
        suggestion_count: int = DEFAULT_SUGGESTION_COUNT,
    ) -> None:
        self.store = store
        self.clock = clock
        self.slot_search = slot_search or SlotSearchEngine(store=store, clock=clock)
        self.suggestion_count = suggestion_count

    async def schedule_meeting(
        self,
        title: str,
        start_local: datetime,
        duration_seconds: int,
        participant_ids: Sequence[UUID],
        timezone_id: str | None = None,
    ) -> ScheduleMeetingOutcome:
        logger.info("Attempting to schedule meeting: %s", title)

        requested_ids = list(dict.fromkeys(participant_ids))

        # 1. Participants
        participants = await self.store.find_participants(requested_ids)
        found_ids = {p.id for p in participants}
        missing_ids = [pid for pid in requested_ids if pid not in found_ids]
        if missing_ids:
            missing = ", ".join(str(pid) for pid in missing_ids)
            logger.warning("Participants not found: %s", missing)
            return ScheduleMeetingOutcome(
                success=False,
                error=SchedulingError.PARTICIPANTS_NOT_FOUND,
                message=f"One or more participants were not found. Missing IDs: {missing}",
            )

        # 2. Normalization
        try:
            duration = timedelta(seconds=duration_seconds)
            requested = TimeNormalizer.normalize(start_local, timezone_id, duration)
        except InvalidTimezoneError as exc:
            logger.warning("Timezone '%s' not found.", exc.timezone_id)
            return ScheduleMeetingOutcome(
                success=False,
                error=SchedulingError.INVALID_TIMEZONE,
                message=str(exc),
            )
        except (ValueError, OverflowError) as exc:
            logger.warning("Rejected interval for '%s': %s", title, exc)
            return ScheduleMeetingOutcome(
                success=False,
                error=SchedulingError.INVALID_REQUEST,
                message=(
                    "Meeting duration must be positive and within the calendar range, "
                    "and start_time a wall-clock time."
                ),
            )

        logger.info(
            "Proposed meeting UTC time: %s - %s",
            requested.start_utc.isoformat(),
            requested.end_utc.isoformat(),
        )

        # 3. Past start
        now = self.clock.utc_now()
        if requested.start_utc < now:
            logger.warning(
                "Cannot schedule meeting in the past. Proposed start: %s, current UTC: %s",
                requested.start_utc.isoformat(),
                now.isoformat(),
            )
            return ScheduleMeetingOutcome(
                success=False,
                error=SchedulingError.PAST_START_TIME,
                message="Cannot schedule a meeting in the past.",
            )

        # 4. Conflicts
        existing = await self.store.meetings_overlapping(
            requested_ids, requested.start_utc, requested.end_utc
        )
        conflict = ConflictDetector.find_conflict(requested, existing)
        if conflict is not None:
            logger.info(
                "Conflict detected with existing meeting: %s (%s - %s)",
                conflict.title,
                conflict.start_utc.isoformat(),
                conflict.end_utc.isoformat(),
            )
            return await self._conflict_outcome(requested_ids, requested)

        # 5. Booking
        try:
            meeting = Meeting.create(title, requested, participants)
        except ValueError as exc:
            return ScheduleMeetingOutcome(
                success=False,
                error=SchedulingError.INVALID_REQUEST,
                message=str(exc),
            )

        try:
            await self.store.persist(meeting)
        except PersistenceError as exc:
            logger.exception("Failed to persist meeting '%s'", title)
            return ScheduleMeetingOutcome(
                success=False,
                error=SchedulingError.PERSISTENCE_FAILURE,
                message=f"The meeting could not be saved: {exc}",
            )

        logger.info("Meeting '%s' scheduled successfully with ID: %s", title, meeting.id)
        return ScheduleMeetingOutcome(
            success=True,
            meeting_id=meeting.id,
            message="Meeting scheduled successfully.",
        )

    async def _conflict_outcome(
        self,
        participant_ids: Sequence[UUID],
        requested: TimeInterval,
    ) -> ScheduleMeetingOutcome:
        suggestions = await self.slot_search.find_available_slots(
            participant_ids,
            search_start=requested.end_utc,
            duration=requested.duration,
            count=self.suggestion_count,
        )
        return ScheduleMeetingOutcome(
            success=False,
            error=SchedulingError.TIME_CONFLICT,
            message="Scheduling failed due to a time conflict. See suggestions.",
            suggested_slots=suggestions,
        )
