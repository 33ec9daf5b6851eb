# meeting_scheduler/api/dependencies/scheduling.py
from datetime import timedelta

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_scheduler.core.config import get_settings
from meeting_scheduler.db.session import get_db
from meeting_scheduler.services.clock import Clock, SystemClock
from meeting_scheduler.services.meeting_store import SqlMeetingStore
from meeting_scheduler.services.scheduling import SchedulingService
from meeting_scheduler.services.slot_search import SlotSearchEngine


def get_clock() -> Clock:
    """
    Clock used by request handlers. Tests override this dependency with a
    fixed clock.
    """
    return SystemClock()


async def get_meeting_store(db: AsyncSession = Depends(get_db)) -> SqlMeetingStore:
    return SqlMeetingStore(db)


async def get_scheduling_service(
    store: SqlMeetingStore = Depends(get_meeting_store),
    clock: Clock = Depends(get_clock),
) -> SchedulingService:
    """
    Build a SchedulingService wired to the request's DB session and to the
    slot-search tuning from settings.
    """
    settings = get_settings()
    slot_search = SlotSearchEngine(
        store=store,
        clock=clock,
        horizon=timedelta(days=settings.SLOT_SEARCH_HORIZON_DAYS),
        progress_step=timedelta(minutes=settings.SLOT_PROGRESS_STEP_MINUTES),
    )
    return SchedulingService(
        store=store,
        clock=clock,
        slot_search=slot_search,
        suggestion_count=settings.SLOT_SUGGESTION_COUNT,
    )
