from datetime import datetime
from typing import ClassVar

from .common import InputModel, IsoDateTime, RecordId, RecordModel, UpdateModel
from buddy_core.utils.statuses import AssociationStatus


class AssociationCreate(InputModel):
    buddy_id: RecordId
    new_hire_id: RecordId
    start_date: IsoDateTime


class AssociationUpdate(UpdateModel):
    NON_NULLABLE: ClassVar = frozenset({"status"})

    id: RecordId
    status: AssociationStatus | None = None
    end_date: IsoDateTime | None = None


class Association(RecordModel):
    id: int
    buddy_id: int
    new_hire_id: int
    status: AssociationStatus
    start_date: datetime
    end_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AssociationRef(InputModel):
    association_id: RecordId
