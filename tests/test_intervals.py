# tests/test_intervals.py
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from meeting_scheduler.schemas.interval import ProposedSlot, TimeInterval
from meeting_scheduler.services.intervals import overlaps
from tests.fakes import utc


def _interval(start_hour: int, start_minute: int, end_hour: int, end_minute: int) -> TimeInterval:
    return TimeInterval(
        start_utc=utc(2025, 5, 30, start_hour, start_minute),
        end_utc=utc(2025, 5, 30, end_hour, end_minute),
    )


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((10, 0, 11, 0), (10, 30, 11, 30), True),   # partial overlap
        ((10, 0, 12, 0), (10, 30, 11, 0), True),    # containment
        ((10, 0, 11, 0), (11, 0, 12, 0), False),    # touching
        ((10, 0, 11, 0), (12, 0, 13, 0), False),    # disjoint
    ],
)
def test_overlaps_is_symmetric(a, b, expected):
    first, second = _interval(*a), _interval(*b)

    assert overlaps(first, second) is expected
    assert overlaps(second, first) is expected


def test_interval_overlaps_itself():
    interval = _interval(9, 0, 9, 1)
    assert overlaps(interval, interval) is True


def test_adjacent_intervals_never_overlap():
    """
    Half-open intervals that merely touch at a boundary are not conflicts.
    """
    morning = _interval(9, 0, 10, 0)
    next_one = _interval(10, 0, 10, 30)

    assert overlaps(morning, next_one) is False
    assert overlaps(next_one, morning) is False


def test_interval_rejects_zero_length():
    with pytest.raises(ValidationError):
        TimeInterval(start_utc=utc(2025, 5, 30, 10), end_utc=utc(2025, 5, 30, 10))


def test_interval_rejects_inverted_bounds():
    with pytest.raises(ValidationError):
        TimeInterval(start_utc=utc(2025, 5, 30, 11), end_utc=utc(2025, 5, 30, 10))


def test_interval_rejects_naive_datetimes():
    with pytest.raises(ValidationError):
        TimeInterval(start_utc=datetime(2025, 5, 30, 10), end_utc=datetime(2025, 5, 30, 11))


def test_interval_rejects_non_utc_offsets():
    minus_three = timezone(timedelta(hours=-3))
    with pytest.raises(ValidationError):
        TimeInterval(
            start_utc=datetime(2025, 5, 30, 10, tzinfo=minus_three),
            end_utc=datetime(2025, 5, 30, 11, tzinfo=minus_three),
        )


def test_interval_is_immutable():
    interval = _interval(10, 0, 11, 0)
    with pytest.raises(ValidationError):
        interval.start_utc = utc(2025, 5, 30, 9)


def test_starting_at_builds_duration():
    interval = TimeInterval.starting_at(utc(2025, 5, 30, 10), timedelta(minutes=45))

    assert interval.end_utc == utc(2025, 5, 30, 10, 45)
    assert interval.duration == timedelta(minutes=45)


def test_proposed_slot_serializes_as_plain_interval():
    slot = ProposedSlot(start_utc=utc(2025, 5, 30, 14), end_utc=utc(2025, 5, 30, 15))

    data = slot.model_dump(mode="json")
    assert set(data) == {"start_utc", "end_utc"}
    assert data["start_utc"].startswith("2025-05-30T14:00:00")
