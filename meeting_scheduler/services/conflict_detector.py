# meeting_scheduler/services/conflict_detector.py
from __future__ import annotations

from collections.abc import Iterable

from meeting_scheduler.models.meeting import Meeting
from meeting_scheduler.schemas.interval import TimeInterval
from meeting_scheduler.services.intervals import overlaps


class ConflictDetector:
    """
    Decides whether a candidate interval collides with any existing meeting.

    The store is expected to pre-filter rows with the same overlap rule, but
    every row is re-checked here regardless of what the store returned.
    """

    @staticmethod
    def find_conflict(
        candidate: TimeInterval,
        existing_meetings: Iterable[Meeting],
    ) -> Meeting | None:
        """
        Return the first meeting (in supplied order) overlapping `candidate`,
        or None when the candidate is clear.

        A meeting shared by several requested participants may be supplied
        more than once; it is only evaluated the first time.
        """
        seen: set = set()
        for meeting in existing_meetings:
            if meeting.id in seen:
                continue
            seen.add(meeting.id)

            if overlaps(meeting, candidate):
                return meeting

        return None
