"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes. Child tables reference their
parents with ``ondelete='CASCADE'`` so deleting a profile, association, task or
meeting removes every dependent row in the store itself.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .profiles import Buddy, NewHire
from .associations import Association
from .tasks import Task, TaskAssignment
from .meetings import Meeting, MeetingNote

__all__ = [
    # base
    "Base",
    "now_utc",
    # users/profiles
    "User",
    "Buddy",
    "NewHire",
    # pairing
    "Association",
    # onboarding work
    "Task",
    "TaskAssignment",
    "Meeting",
    "MeetingNote",
]
