from datetime import datetime
from typing import ClassVar

from pydantic import Field

from .common import InputModel, IsoDateTime, RecordId, RecordModel, UpdateModel


class MeetingCreate(InputModel):
    association_id: RecordId
    title: str | None = Field(default=None, max_length=255)
    scheduled_at: IsoDateTime


class MeetingUpdate(UpdateModel):
    """``completedAt`` set marks the meeting done; ``completedAt: null`` clears it."""
    NON_NULLABLE: ClassVar = frozenset({"scheduled_at"})

    id: RecordId
    title: str | None = Field(default=None, max_length=255)
    scheduled_at: IsoDateTime | None = None
    completed_at: IsoDateTime | None = None


class Meeting(RecordModel):
    id: int
    association_id: int
    title: str | None = None
    scheduled_at: datetime
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class MeetingRef(InputModel):
    meeting_id: RecordId


class MeetingNoteCreate(InputModel):
    meeting_id: RecordId
    content: str


class MeetingNoteUpdate(UpdateModel):
    id: RecordId
    content: str | None = None


class MeetingNote(RecordModel):
    id: int
    meeting_id: int
    user_id: int
    content: str | None = None
    created_at: datetime
    updated_at: datetime
