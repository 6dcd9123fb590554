from datetime import datetime
from typing import ClassVar

from pydantic import Field

from .common import InputModel, IsoDateTime, RecordId, RecordModel, UpdateModel
from buddy_core.utils.statuses import TaskStatus


class TaskCreate(InputModel):
    association_id: RecordId
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    useful_link: str | None = Field(default=None, max_length=500)
    status: TaskStatus = TaskStatus.pending
    due_date: IsoDateTime | None = None


class TaskUpdate(UpdateModel):
    NON_NULLABLE: ClassVar = frozenset({"title", "status"})

    id: RecordId
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    useful_link: str | None = Field(default=None, max_length=500)
    status: TaskStatus | None = None
    due_date: IsoDateTime | None = None


class Task(RecordModel):
    id: int
    association_id: int
    title: str
    description: str | None = None
    useful_link: str | None = None
    status: TaskStatus
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class TaskAssignmentCreate(InputModel):
    task_id: RecordId
    user_id: RecordId


class TaskRef(InputModel):
    task_id: RecordId


class TaskAssignment(RecordModel):
    id: int
    task_id: int
    user_id: int
    created_at: datetime
