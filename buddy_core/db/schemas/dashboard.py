from pydantic import Field

from .common import RecordModel


class DashboardMetrics(RecordModel):
    buddy_count: int = Field(default=0, ge=0)
    new_hire_count: int = Field(default=0, ge=0)
    active_associations: int = Field(default=0, ge=0)
    pending_tasks: int = Field(default=0, ge=0)
