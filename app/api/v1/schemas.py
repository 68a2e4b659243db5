from datetime import date
from pydantic import BaseModel, Field

from app.application.utils.availability import SlotSummary
from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.practice_session import PracticeSession


class CreateSessionRequestSchema(BaseModel):
    creator: str
    group_code: str
    title: str
    start_date: date
    end_date: date


class MemberRequestSchema(BaseModel):
    member: str


class AvailabilityRequestSchema(BaseModel):
    slots: list[str] = Field(default_factory=list)


class ConfirmRequestSchema(BaseModel):
    actor: str = ""
    slots: list[str] = Field(default_factory=list)
    room: str = ""
    equipment: list[str] = Field(default_factory=list)


class FinalizedEntrySchema(BaseModel):
    date: date
    periods: list[str]
    room: str
    equipment: list[str] = Field(default_factory=list)
    participants: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @staticmethod
    def from_entity(entry: FinalizedEntry) -> "FinalizedEntrySchema":
        return FinalizedEntrySchema(
            date=entry.date,
            periods=[p.value for p in entry.periods],
            room=entry.room,
            equipment=list(entry.equipment),
            participants=list(entry.participants),
            warnings=list(entry.warnings),
        )


class SessionSummarySchema(BaseModel):
    id: str
    creator: str
    group_code: str
    title: str
    start_date: date
    end_date: date


class SessionSchema(SessionSummarySchema):
    participants: list[str] = Field(default_factory=list)
    availability: dict[str, list[str]] = Field(default_factory=dict)
    finalized: list[FinalizedEntrySchema] = Field(default_factory=list)

    @staticmethod
    def from_entity(session: PracticeSession) -> "SessionSchema":
        return SessionSchema(
            id=session.id,
            creator=session.creator,
            group_code=session.group_code,
            title=session.title,
            start_date=session.start_date,
            end_date=session.end_date,
            participants=list(session.participants),
            availability={m: [s.encode() for s in slots] for m, slots in session.availability.items()},
            finalized=[FinalizedEntrySchema.from_entity(e) for e in session.finalized],
        )


class ConfirmResponseSchema(BaseModel):
    entries: list[FinalizedEntrySchema]


class FinalizedDaySchema(BaseModel):
    date: date
    entries: list[FinalizedEntrySchema]


class SlotSummarySchema(BaseModel):
    slot: str
    available_count: int
    finalized: bool

    @staticmethod
    def from_summary(summary: SlotSummary) -> "SlotSummarySchema":
        return SlotSummarySchema(
            slot=summary.slot.encode(),
            available_count=summary.available_count,
            finalized=summary.finalized,
        )


class SlotMembersSchema(BaseModel):
    slot: str
    members: list[str]
