"""
Domain-split Pydantic schemas.

Operation inputs (``*Create``, ``*Update``, ``*Ref``) and record outputs are
re-exported here so callers can use ``schemas.Buddy`` and friends.
"""

from .common import RecordId, WireModel, InputModel, UpdateModel, RecordModel, IdInput
from .users import User, UserUpsert, UserRoleUpdate, LogoutResult
from .profiles import BuddyCreate, BuddyUpdate, Buddy, NewHireCreate, NewHireUpdate, NewHire
from .associations import AssociationCreate, AssociationUpdate, Association, AssociationRef
from .tasks import (
    TaskCreate,
    TaskUpdate,
    Task,
    TaskRef,
    TaskAssignmentCreate,
    TaskAssignment,
)
from .meetings import (
    MeetingCreate,
    MeetingUpdate,
    Meeting,
    MeetingRef,
    MeetingNoteCreate,
    MeetingNoteUpdate,
    MeetingNote,
)
from .dashboard import DashboardMetrics

__all__ = [
    "RecordId",
    "WireModel",
    "InputModel",
    "UpdateModel",
    "RecordModel",
    "IdInput",
    "User",
    "UserUpsert",
    "UserRoleUpdate",
    "LogoutResult",
    "BuddyCreate",
    "BuddyUpdate",
    "Buddy",
    "NewHireCreate",
    "NewHireUpdate",
    "NewHire",
    "AssociationCreate",
    "AssociationUpdate",
    "Association",
    "AssociationRef",
    "TaskCreate",
    "TaskUpdate",
    "Task",
    "TaskRef",
    "TaskAssignmentCreate",
    "TaskAssignment",
    "MeetingCreate",
    "MeetingUpdate",
    "Meeting",
    "MeetingRef",
    "MeetingNoteCreate",
    "MeetingNoteUpdate",
    "MeetingNote",
    "DashboardMetrics",
]
