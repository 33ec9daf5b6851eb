# meeting_scheduler/services/clock.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """
    Source of the current instant.

    Scheduling code never reads the system clock directly so that past-start
    validation and the search horizon stay deterministic under test.
    """

    def utc_now(self) -> datetime:
        ...


class SystemClock:
    """
    Clock backed by the host's real-time clock.
    """

    def utc_now(self) -> datetime:
        return datetime.now(tz=timezone.utc)
