# tests/test_slot_search.py
from datetime import timedelta

import pytest

from meeting_scheduler.services.intervals import overlaps
from meeting_scheduler.services.slot_search import SlotSearchEngine
from tests.fakes import FakeMeetingStore, FixedClock, make_meeting, make_participant, utc

NOW = utc(2025, 5, 29, 10, 0)
ONE_HOUR = timedelta(hours=1)


def _engine(store: FakeMeetingStore, now=NOW, **kwargs) -> SlotSearchEngine:
    return SlotSearchEngine(store=store, clock=FixedClock(now), **kwargs)


def _bounds(slots):
    return [(s.start_utc, s.end_utc) for s in slots]


@pytest.mark.asyncio
async def test_empty_calendar_returns_back_to_back_slots():
    alice = make_participant("Alice")
    engine = _engine(FakeMeetingStore([alice]))

    slots = await engine.find_available_slots([alice.id], utc(2025, 5, 30, 9), ONE_HOUR, count=3)

    assert _bounds(slots) == [
        (utc(2025, 5, 30, 9), utc(2025, 5, 30, 10)),
        (utc(2025, 5, 30, 10), utc(2025, 5, 30, 11)),
        (utc(2025, 5, 30, 11), utc(2025, 5, 30, 12)),
    ]


@pytest.mark.asyncio
async def test_boundary_conflict_adds_quarter_hour_offset():
    """
    Meetings 13-14 and 15-16, searching one-hour slots from 14:00:
    the 15-16 meeting ends exactly on the probe's end, so the cursor is
    pushed to 16:15 instead of 16:00.
    """
    alice = make_participant("Alice")
    store = FakeMeetingStore(
        [alice],
        [
            make_meeting(utc(2025, 5, 30, 13), utc(2025, 5, 30, 14), [alice]),
            make_meeting(utc(2025, 5, 30, 15), utc(2025, 5, 30, 16), [alice]),
        ],
    )

    slots = await _engine(store).find_available_slots(
        [alice.id], utc(2025, 5, 30, 14), ONE_HOUR, count=3
    )

    assert _bounds(slots) == [
        (utc(2025, 5, 30, 14, 0), utc(2025, 5, 30, 15, 0)),
        (utc(2025, 5, 30, 16, 15), utc(2025, 5, 30, 17, 15)),
        (utc(2025, 5, 30, 17, 15), utc(2025, 5, 30, 18, 15)),
    ]


@pytest.mark.asyncio
async def test_staggered_conflicts_of_two_participants():
    """
    10:00-11:00 for Alice and 10:30-11:30 for Bob; searching from 11:00
    must first land on 11:30.
    """
    alice, bob = make_participant("Alice"), make_participant("Bob")
    store = FakeMeetingStore(
        [alice, bob],
        [
            make_meeting(utc(2025, 5, 30, 10), utc(2025, 5, 30, 11), [alice]),
            make_meeting(utc(2025, 5, 30, 10, 30), utc(2025, 5, 30, 11, 30), [bob]),
        ],
    )

    slots = await _engine(store).find_available_slots(
        [alice.id, bob.id], utc(2025, 5, 30, 11), ONE_HOUR, count=1
    )

    assert _bounds(slots) == [(utc(2025, 5, 30, 11, 30), utc(2025, 5, 30, 12, 30))]


@pytest.mark.asyncio
async def test_only_earliest_starting_conflict_advances_the_cursor():
    """
    A (09:00-10:45) and B (10:15-12:00) both cover [10:00, 10:30).
    The cursor first jumps to A's end, and B is cleared on the next probe.
    """
    alice = make_participant("Alice")
    store = FakeMeetingStore(
        [alice],
        [
            make_meeting(utc(2025, 5, 30, 9), utc(2025, 5, 30, 10, 45), [alice]),
            make_meeting(utc(2025, 5, 30, 10, 15), utc(2025, 5, 30, 12), [alice]),
        ],
    )

    slots = await _engine(store).find_available_slots(
        [alice.id], utc(2025, 5, 30, 10), timedelta(minutes=30), count=1
    )

    assert _bounds(slots) == [(utc(2025, 5, 30, 12), utc(2025, 5, 30, 12, 30))]
    probed_starts = [lower for _, lower, _ in store.overlap_calls]
    assert probed_starts == [
        utc(2025, 5, 30, 10),
        utc(2025, 5, 30, 10, 45),
        utc(2025, 5, 30, 12),
    ]


@pytest.mark.asyncio
async def test_offset_applies_to_earliest_conflict_not_the_latest_end():
    """
    A (09:00-11:00) ends exactly on the probe end; B (10:30-11:10) ends a bit
    later. Advancing past A first triggers the 15-minute push to 11:15, which
    already clears B, so the first slot is 11:15 rather than 11:10.
    """
    alice = make_participant("Alice")
    store = FakeMeetingStore(
        [alice],
        [
            make_meeting(utc(2025, 5, 30, 9), utc(2025, 5, 30, 11), [alice]),
            make_meeting(utc(2025, 5, 30, 10, 30), utc(2025, 5, 30, 11, 10), [alice]),
        ],
    )

    slots = await _engine(store).find_available_slots(
        [alice.id], utc(2025, 5, 30, 10), ONE_HOUR, count=1
    )

    assert _bounds(slots) == [(utc(2025, 5, 30, 11, 15), utc(2025, 5, 30, 12, 15))]


@pytest.mark.asyncio
async def test_search_stops_at_horizon():
    alice = make_participant("Alice")
    engine = _engine(FakeMeetingStore([alice]))

    # Horizon is NOW + 30 days = 2025-06-28 10:00 UTC
    slots = await engine.find_available_slots(
        [alice.id], utc(2025, 6, 28, 8), ONE_HOUR, count=3
    )

    assert _bounds(slots) == [
        (utc(2025, 6, 28, 8), utc(2025, 6, 28, 9)),
        (utc(2025, 6, 28, 9), utc(2025, 6, 28, 10)),
    ]


@pytest.mark.asyncio
async def test_fully_booked_horizon_returns_nothing():
    alice = make_participant("Alice")
    store = FakeMeetingStore(
        [alice],
        [make_meeting(utc(2025, 5, 29, 0), utc(2025, 7, 31, 0), [alice], title="Sabbatical")],
    )

    slots = await _engine(store).find_available_slots(
        [alice.id], utc(2025, 5, 30, 9), ONE_HOUR, count=3
    )

    assert slots == []


@pytest.mark.asyncio
async def test_custom_horizon_and_progress_step():
    alice = make_participant("Alice")
    store = FakeMeetingStore(
        [alice],
        [make_meeting(utc(2025, 5, 29, 11), utc(2025, 5, 29, 12), [alice])],
    )
    engine = _engine(
        store,
        horizon=timedelta(hours=6),
        progress_step=timedelta(minutes=5),
    )

    slots = await engine.find_available_slots(
        [alice.id], utc(2025, 5, 29, 11), ONE_HOUR, count=10
    )

    # Blocked probe [11:00, 12:00) ends on the meeting's end -> 12:05.
    assert slots[0].start_utc == utc(2025, 5, 29, 12, 5)
    # Nothing may start at or after the 16:00 horizon.
    assert all(s.start_utc < utc(2025, 5, 29, 16) for s in slots)
    assert len(slots) == 4


@pytest.mark.asyncio
async def test_suggestions_are_free_ordered_and_disjoint():
    alice, bob = make_participant("Alice"), make_participant("Bob")
    meetings = [
        make_meeting(utc(2025, 5, 30, 9), utc(2025, 5, 30, 9, 45), [alice]),
        make_meeting(utc(2025, 5, 30, 9, 30), utc(2025, 5, 30, 10, 20), [bob]),
        make_meeting(utc(2025, 5, 30, 11), utc(2025, 5, 30, 11, 30), [alice, bob]),
        make_meeting(utc(2025, 5, 30, 12, 10), utc(2025, 5, 30, 13), [bob]),
    ]
    store = FakeMeetingStore([alice, bob], meetings)

    slots = await _engine(store).find_available_slots(
        [alice.id, bob.id], utc(2025, 5, 30, 9), timedelta(minutes=40), count=5
    )

    assert len(slots) == 5
    for slot in slots:
        assert not any(overlaps(slot, m) for m in meetings)
    for earlier, later in zip(slots, slots[1:]):
        assert earlier.end_utc <= later.start_utc


@pytest.mark.asyncio
async def test_unfiltered_store_rows_are_rechecked():
    alice = make_participant("Alice")
    store = FakeMeetingStore(
        [alice],
        [make_meeting(utc(2025, 5, 30, 8), utc(2025, 5, 30, 9), [alice])],
        prefilter=False,
    )

    slots = await _engine(store).find_available_slots(
        [alice.id], utc(2025, 5, 30, 9), ONE_HOUR, count=1
    )

    assert _bounds(slots) == [(utc(2025, 5, 30, 9), utc(2025, 5, 30, 10))]
