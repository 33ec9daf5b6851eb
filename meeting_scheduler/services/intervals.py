# meeting_scheduler/services/intervals.py
from __future__ import annotations

from datetime import datetime
from typing import Protocol


class HasInterval(Protocol):
    start_utc: datetime
    end_utc: datetime


def overlaps(a: HasInterval, b: HasInterval) -> bool:
    """
    Half-open overlap test: [a.start, a.end) and [b.start, b.end) share an instant.

    Intervals that only touch (a.end == b.start) do not overlap. This is the
    single overlap rule used for conflict detection, slot validation and the
    store pre-filter.
    """
    return a.start_utc < b.end_utc and a.end_utc > b.start_utc
