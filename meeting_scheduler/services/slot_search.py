# meeting_scheduler/services/slot_search.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from uuid import UUID

from meeting_scheduler.schemas.interval import ProposedSlot, TimeInterval
from meeting_scheduler.services.clock import Clock
from meeting_scheduler.services.intervals import overlaps
from meeting_scheduler.services.meeting_store import MeetingStore

logger = logging.getLogger(__name__)

DEFAULT_HORIZON = timedelta(days=30)
DEFAULT_PROGRESS_STEP = timedelta(minutes=15)
DEFAULT_SUGGESTION_COUNT = 3


class SlotSearchEngine:
    """
    Finds the next free intervals shared by a set of participants.

    Algorithm
    ---------
    Starting from a cursor at `search_start`, repeatedly probe the candidate
    [cursor, cursor + duration):

    1) Fetch the participants' meetings overlapping the candidate, ascending
       by start time.
    2) The first one that truly overlaps blocks the candidate; the cursor
       jumps to that meeting's end and the candidate is re-probed. Later
       conflicts in the same pass are ignored, so stacked meetings are
       cleared over several iterations.
    3) If the blocking meeting ends exactly on the candidate's end, the
       cursor is pushed a further `progress_step` past it.
    4) An unblocked candidate is accepted and the cursor moves to its end.

    The search stops once `count` slots are found or the cursor reaches
    `clock.utc_now() + horizon`, whichever comes first.
    """

    def __init__(
        self,
        store: MeetingStore,
        clock: Clock,
        horizon: timedelta = DEFAULT_HORIZON,
        progress_step: timedelta = DEFAULT_PROGRESS_STEP,
    ) -> None:
        self.store = store
        self.clock = clock
        self.horizon = horizon
        self.progress_step = progress_step

    async def find_available_slots(
        self,
        participant_ids: Sequence[UUID],
        search_start: datetime,
        duration: timedelta,
        count: int = DEFAULT_SUGGESTION_COUNT,
    ) -> list[ProposedSlot]:
        """
        Return up to `count` chronologically ordered, mutually non-overlapping
        slots that are free for every participant at the time of the call.
        """
        slots: list[ProposedSlot] = []
        cursor = search_start
        cursor_max = self.clock.utc_now() + self.horizon
        probes = 0

        while len(slots) < count and cursor < cursor_max:
            probes += 1
            candidate = TimeInterval.starting_at(cursor, duration)

            meetings = await self.store.meetings_overlapping(
                participant_ids, candidate.start_utc, candidate.end_utc
            )

            blocker = next((m for m in meetings if overlaps(m, candidate)), None)

            if blocker is None:
                slots.append(
                    ProposedSlot(start_utc=candidate.start_utc, end_utc=candidate.end_utc)
                )
                cursor = candidate.end_utc
                continue

            cursor = blocker.end_utc
            if cursor == candidate.end_utc:
                cursor = cursor + self.progress_step

        logger.debug(
            "Slot search from %s found %d/%d slot(s) after %d probe(s)",
            search_start.isoformat(),
            len(slots),
            count,
            probes,
        )
        return slots
