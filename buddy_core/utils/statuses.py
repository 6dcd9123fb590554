"""
Status constants for profiles, associations and tasks.

Each status column is a closed set; these are the only values the store
accepts (CHECK constraints) and the only values operation inputs validate.
"""

from typing import FrozenSet
from enum import Enum

# Buddy availability
BUDDY_AVAILABLE = "available"
BUDDY_UNAVAILABLE = "unavailable"
BUDDY_INACTIVE = "inactive"

BUDDY_STATUSES: FrozenSet[str] = frozenset({BUDDY_AVAILABLE, BUDDY_UNAVAILABLE, BUDDY_INACTIVE})

# New hire onboarding progress
NEW_HIRE_ONBOARDING = "onboarding"
NEW_HIRE_ACTIVE = "active"
NEW_HIRE_COMPLETED = "completed"
NEW_HIRE_INACTIVE = "inactive"

NEW_HIRE_STATUSES: FrozenSet[str] = frozenset(
    {NEW_HIRE_ONBOARDING, NEW_HIRE_ACTIVE, NEW_HIRE_COMPLETED, NEW_HIRE_INACTIVE}
)

# Buddy <-> new hire pairing
ASSOCIATION_ACTIVE = "active"
ASSOCIATION_COMPLETED = "completed"
ASSOCIATION_PAUSED = "paused"
ASSOCIATION_INACTIVE = "inactive"

ASSOCIATION_STATUSES: FrozenSet[str] = frozenset(
    {ASSOCIATION_ACTIVE, ASSOCIATION_COMPLETED, ASSOCIATION_PAUSED, ASSOCIATION_INACTIVE}
)

# Onboarding tasks
TASK_PENDING = "pending"
TASK_IN_PROGRESS = "inProgress"
TASK_COMPLETED = "completed"
TASK_OVERDUE = "overdue"

TASK_STATUSES: FrozenSet[str] = frozenset({TASK_PENDING, TASK_IN_PROGRESS, TASK_COMPLETED, TASK_OVERDUE})


def check_constraint_sql(column: str, values: FrozenSet[str]) -> str:
    """Render a CHECK constraint expression restricting ``column`` to ``values``."""
    quoted = ",".join(f"'{v}'" for v in sorted(values))
    return f"{column} in ({quoted})"


class BuddyStatus(str, Enum):
    available = BUDDY_AVAILABLE
    unavailable = BUDDY_UNAVAILABLE
    inactive = BUDDY_INACTIVE


class NewHireStatus(str, Enum):
    onboarding = NEW_HIRE_ONBOARDING
    active = NEW_HIRE_ACTIVE
    completed = NEW_HIRE_COMPLETED
    inactive = NEW_HIRE_INACTIVE


class AssociationStatus(str, Enum):
    active = ASSOCIATION_ACTIVE
    completed = ASSOCIATION_COMPLETED
    paused = ASSOCIATION_PAUSED
    inactive = ASSOCIATION_INACTIVE


class TaskStatus(str, Enum):
    pending = TASK_PENDING
    inProgress = TASK_IN_PROGRESS
    completed = TASK_COMPLETED
    overdue = TASK_OVERDUE
