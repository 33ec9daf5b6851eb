# meeting_scheduler/api/routes/participants.py
from datetime import datetime
from http import HTTPStatus
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from meeting_scheduler.api.dependencies.scheduling import get_meeting_store
from meeting_scheduler.schemas.meeting import MeetingRead
from meeting_scheduler.schemas.participant import ParticipantCreate, ParticipantRead
from meeting_scheduler.services.meeting_store import SqlMeetingStore

router = APIRouter(prefix="/participants", tags=["Participants"])


@router.post(
    "",
    response_model=ParticipantRead,
    status_code=HTTPStatus.CREATED,
    summary="Register a participant",
    description=(
        "Create a participant that meetings can be booked for.\n\n"
        "`timezone_id` must be a valid IANA timezone (e.g. `America/Sao_Paulo`); "
        "unknown zones are rejected with 422."
    ),
)
async def create_participant(
    payload: ParticipantCreate,
    store: SqlMeetingStore = Depends(get_meeting_store),
) -> ParticipantRead:
    participant = await store.add_participant(
        name=payload.name,
        timezone_id=payload.timezone_id,
    )
    return ParticipantRead.model_validate(participant)


@router.get(
    "",
    response_model=list[ParticipantRead],
    summary="List participants",
)
async def list_participants(
    store: SqlMeetingStore = Depends(get_meeting_store),
) -> list[ParticipantRead]:
    participants = await store.list_participants()
    return [ParticipantRead.model_validate(p) for p in participants]


@router.get(
    "/{participant_id}",
    response_model=ParticipantRead,
    summary="Get participant details by ID",
    responses={
        404: {"description": "No participant exists with the given ID."},
    },
)
async def get_participant(
    participant_id: UUID = Path(..., description="Identifier of the participant."),
    store: SqlMeetingStore = Depends(get_meeting_store),
) -> ParticipantRead:
    participant = await store.get_participant(participant_id)
    if participant is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=f"Participant with id {participant_id} not found.",
        )
    return ParticipantRead.model_validate(participant)


@router.get(
    "/{participant_id}/meetings",
    response_model=list[MeetingRead],
    summary="List a participant's meetings",
    description=(
        "Return the meetings a participant attends, ordered by start time.\n\n"
        "- `from_utc` / `to_utc` restrict the result to meetings overlapping "
        "that window (half-open, touching meetings are excluded).\n"
        "- Both bounds are optional."
    ),
    responses={
        404: {"description": "No participant exists with the given ID."},
    },
)
async def list_participant_meetings(
    participant_id: UUID = Path(..., description="Identifier of the participant."),
    from_utc: datetime | None = Query(
        default=None,
        description="Lower bound of the window (ISO 8601 with offset).",
    ),
    to_utc: datetime | None = Query(
        default=None,
        description="Upper bound of the window (ISO 8601 with offset).",
    ),
    store: SqlMeetingStore = Depends(get_meeting_store),
) -> list[MeetingRead]:
    for name, value in (("from_utc", from_utc), ("to_utc", to_utc)):
        if value is not None and value.tzinfo is None:
            raise HTTPException(
                status_code=HTTPStatus.BAD_REQUEST,
                detail=f"{name} must include a UTC offset.",
            )

    participant = await store.get_participant(participant_id)
    if participant is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=f"Participant with id {participant_id} not found.",
        )

    meetings = await store.meetings_for_participant(participant_id, from_utc, to_utc)
    return [MeetingRead.from_meeting(m) for m in meetings]
