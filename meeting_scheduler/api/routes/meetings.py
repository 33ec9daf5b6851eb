# meeting_scheduler/api/routes/meetings.py
from http import HTTPStatus
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import JSONResponse

from meeting_scheduler.api.dependencies.scheduling import get_meeting_store, get_scheduling_service
from meeting_scheduler.schemas.meeting import MeetingRead
from meeting_scheduler.schemas.scheduling import (
    ScheduleMeetingOutcome,
    ScheduleMeetingRequest,
    SchedulingError,
)
from meeting_scheduler.services.meeting_store import SqlMeetingStore
from meeting_scheduler.services.scheduling import SchedulingService

router = APIRouter(prefix="/meetings", tags=["Meetings"])

_ERROR_STATUS = {
    SchedulingError.PARTICIPANTS_NOT_FOUND: HTTPStatus.NOT_FOUND,
    SchedulingError.INVALID_TIMEZONE: HTTPStatus.BAD_REQUEST,
    SchedulingError.PAST_START_TIME: HTTPStatus.BAD_REQUEST,
    SchedulingError.INVALID_REQUEST: HTTPStatus.BAD_REQUEST,
    SchedulingError.TIME_CONFLICT: HTTPStatus.CONFLICT,
    SchedulingError.PERSISTENCE_FAILURE: HTTPStatus.SERVICE_UNAVAILABLE,
}


@router.post(
    "/schedule",
    response_model=ScheduleMeetingOutcome,
    status_code=HTTPStatus.CREATED,
    summary="Schedule a meeting for a set of participants",
    description=(
        "Book a meeting if every participant is free for the requested slot.\n\n"
        "`start_time` is a local wall-clock time interpreted in `timezone_id` "
        "(UTC when empty) and normalized to UTC before any check.\n\n"
        "When the slot conflicts with an existing meeting of any participant, "
        "nothing is booked and up to 3 free alternatives, searched from the end "
        "of the requested slot, are returned in `suggested_slots`."
    ),
    responses={
        201: {
            "description": "Meeting booked.",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "meeting_id": "1b6f0d3a-2f63-4bde-9f0e-6d5f8c7f6a11",
                        "message": "Meeting scheduled successfully.",
                        "error": None,
                        "suggested_slots": [],
                    }
                }
            },
        },
        400: {"description": "Invalid timezone, start in the past or invalid request."},
        404: {"description": "One or more participants do not exist."},
        409: {
            "description": "Time conflict. Alternatives are returned in `suggested_slots`.",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "meeting_id": None,
                        "message": "Scheduling failed due to a time conflict. See suggestions.",
                        "error": "TIME_CONFLICT",
                        "suggested_slots": [
                            {
                                "start_utc": "2025-05-30T14:00:00Z",
                                "end_utc": "2025-05-30T15:00:00Z",
                            },
                            {
                                "start_utc": "2025-05-30T16:15:00Z",
                                "end_utc": "2025-05-30T17:15:00Z",
                            },
                        ],
                    }
                }
            },
        },
        503: {"description": "The meeting could not be persisted."},
    },
)
async def schedule_meeting(
    payload: ScheduleMeetingRequest,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """
    Run the scheduling pipeline and map its outcome to an HTTP status.
    """
    outcome = await service.schedule_meeting(
        title=payload.title,
        start_local=payload.start_time,
        duration_seconds=payload.duration_seconds,
        participant_ids=payload.participant_ids,
        timezone_id=payload.timezone_id,
    )

    if outcome.success:
        return outcome

    return JSONResponse(
        status_code=_ERROR_STATUS.get(outcome.error, HTTPStatus.BAD_REQUEST),
        content=outcome.model_dump(mode="json"),
    )


@router.get(
    "/{meeting_id}",
    response_model=MeetingRead,
    summary="Get a meeting by ID",
    responses={
        404: {"description": "No meeting exists with the given ID."},
    },
)
async def get_meeting(
    meeting_id: UUID = Path(..., description="Identifier of the meeting."),
    store: SqlMeetingStore = Depends(get_meeting_store),
) -> MeetingRead:
    meeting = await store.get_meeting(meeting_id)
    if meeting is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=f"Meeting with id {meeting_id} not found.",
        )
    return MeetingRead.from_meeting(meeting)
