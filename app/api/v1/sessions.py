from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.v1.schemas import (
    AvailabilityRequestSchema, ConfirmRequestSchema, ConfirmResponseSchema,
    CreateSessionRequestSchema, FinalizedDaySchema, FinalizedEntrySchema,
    MemberRequestSchema, SessionSchema, SessionSummarySchema,
    SlotMembersSchema, SlotSummarySchema,
)
from app.application.exceptions import BookingValidationError, PermissionDeniedError, SessionNotFoundError
from app.application.use_cases.create_session import CreateSessionUseCase
from app.application.use_cases.finalize_confirmation import FinalizeConfirmationUseCase
from app.application.use_cases.manage_sessions import (
    DeleteSessionUseCase, GetSessionUseCase, ListSessionsUseCase,
)
from app.application.use_cases.submit_availability import JoinSessionUseCase, SubmitAvailabilityUseCase
from app.application.utils.availability import availability_counts, members_available_at
from app.domain.entities.slot import SlotKey
from app.wiring.dependencies import (
    get_create_session_use_case, get_delete_session_use_case, get_finalize_use_case,
    get_get_session_use_case, get_join_session_use_case, get_list_sessions_use_case,
    get_submit_availability_use_case,
)

router = APIRouter()


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session not found: {session_id}")


@router.post("/sessions", response_model=SessionSchema, status_code=status.HTTP_201_CREATED)
def create_session(
    req: CreateSessionRequestSchema,
    uc: CreateSessionUseCase = Depends(get_create_session_use_case),
):
    try:
        session = uc.execute(
            creator=req.creator,
            group_code=req.group_code,
            title=req.title,
            start_date=req.start_date,
            end_date=req.end_date,
        )
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SessionSchema.from_entity(session)


@router.get("/sessions", response_model=list[SessionSummarySchema])
def list_sessions(
    group_code: str,
    member: str,
    today: date | None = None,
    uc: ListSessionsUseCase = Depends(get_list_sessions_use_case),
):
    return [
        SessionSummarySchema(
            id=s.id, creator=s.creator, group_code=s.group_code,
            title=s.title, start_date=s.start_date, end_date=s.end_date,
        )
        for s in uc.execute(group_code=group_code, member=member, today=today)
    ]


@router.get("/sessions/{session_id}", response_model=SessionSchema)
def get_session(session_id: str, uc: GetSessionUseCase = Depends(get_get_session_use_case)):
    try:
        return SessionSchema.from_entity(uc.execute(session_id))
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    actor: str = "",
    uc: DeleteSessionUseCase = Depends(get_delete_session_use_case),
):
    try:
        uc.execute(session_id, actor)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except SessionNotFoundError:
        raise _not_found(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/sessions/{session_id}/participants", response_model=SessionSchema)
def join_session(
    session_id: str,
    req: MemberRequestSchema,
    uc: JoinSessionUseCase = Depends(get_join_session_use_case),
):
    try:
        return SessionSchema.from_entity(uc.execute(session_id, req.member))
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.put("/sessions/{session_id}/availability/{member}", response_model=SessionSchema)
def submit_availability(
    session_id: str,
    member: str,
    req: AvailabilityRequestSchema,
    uc: SubmitAvailabilityUseCase = Depends(get_submit_availability_use_case),
):
    try:
        return SessionSchema.from_entity(uc.execute(session_id, member, req.slots))
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.get("/sessions/{session_id}/slots", response_model=list[SlotSummarySchema])
def slot_grid(session_id: str, uc: GetSessionUseCase = Depends(get_get_session_use_case)):
    try:
        session = uc.execute(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return [SlotSummarySchema.from_summary(s) for s in availability_counts(session)]


@router.get("/sessions/{session_id}/slots/{slot_key}/members", response_model=SlotMembersSchema)
def slot_members(
    session_id: str,
    slot_key: str,
    uc: GetSessionUseCase = Depends(get_get_session_use_case),
):
    try:
        session = uc.execute(session_id)
        slot = SlotKey.parse(slot_key)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SlotMembersSchema(slot=slot.encode(), members=members_available_at(session, slot))


@router.post("/sessions/{session_id}/confirmations", response_model=ConfirmResponseSchema)
def confirm_slots(
    session_id: str,
    req: ConfirmRequestSchema,
    uc: FinalizeConfirmationUseCase = Depends(get_finalize_use_case),
):
    try:
        outcome = uc.execute(
            session_id=session_id,
            actor=req.actor,
            slot_keys=req.slots,
            room=req.room,
            equipment=req.equipment,
        )
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except SessionNotFoundError:
        raise _not_found(session_id)
    return ConfirmResponseSchema(entries=[FinalizedEntrySchema.from_entity(e) for e in outcome.entries])


@router.get("/sessions/{session_id}/confirmations", response_model=list[FinalizedDaySchema])
def list_confirmations(session_id: str, uc: GetSessionUseCase = Depends(get_get_session_use_case)):
    try:
        session = uc.execute(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)

    by_date: dict[date, list[FinalizedEntrySchema]] = {}
    for entry in session.finalized:
        by_date.setdefault(entry.date, []).append(FinalizedEntrySchema.from_entity(entry))
    return [FinalizedDaySchema(date=day, entries=by_date[day]) for day in sorted(by_date)]
