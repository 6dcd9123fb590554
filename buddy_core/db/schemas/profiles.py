from datetime import datetime
from typing import ClassVar

from pydantic import Field

from .common import InputModel, IsoDateTime, RecordId, RecordModel, UpdateModel
from buddy_core.utils.statuses import BuddyStatus, NewHireStatus

_NICKNAME = dict(max_length=100)
_TEAM = dict(max_length=100)
_LEVEL = dict(max_length=50)


class BuddyCreate(InputModel):
    user_id: RecordId
    nickname: str | None = Field(default=None, **_NICKNAME)
    team: str | None = Field(default=None, **_TEAM)
    level: str | None = Field(default=None, **_LEVEL)
    status: BuddyStatus = BuddyStatus.available


class BuddyUpdate(UpdateModel):
    NON_NULLABLE: ClassVar = frozenset({"status"})

    id: RecordId
    nickname: str | None = Field(default=None, **_NICKNAME)
    team: str | None = Field(default=None, **_TEAM)
    level: str | None = Field(default=None, **_LEVEL)
    status: BuddyStatus | None = None


class Buddy(RecordModel):
    id: int
    user_id: int
    nickname: str | None = None
    team: str | None = None
    level: str | None = None
    status: BuddyStatus
    created_at: datetime
    updated_at: datetime


class NewHireCreate(InputModel):
    user_id: RecordId
    nickname: str | None = Field(default=None, **_NICKNAME)
    team: str | None = Field(default=None, **_TEAM)
    level: str | None = Field(default=None, **_LEVEL)
    status: NewHireStatus = NewHireStatus.onboarding
    start_date: IsoDateTime | None = None


class NewHireUpdate(UpdateModel):
    NON_NULLABLE: ClassVar = frozenset({"status"})

    id: RecordId
    nickname: str | None = Field(default=None, **_NICKNAME)
    team: str | None = Field(default=None, **_TEAM)
    level: str | None = Field(default=None, **_LEVEL)
    status: NewHireStatus | None = None
    start_date: IsoDateTime | None = None


class NewHire(RecordModel):
    id: int
    user_id: int
    nickname: str | None = None
    team: str | None = None
    level: str | None = None
    status: NewHireStatus
    start_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
