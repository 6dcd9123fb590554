"""
User role constants.

A user's role selects which policy rules apply to them: admins bypass every
check, buddies and new hires are scoped to the associations their profile
participates in, and plain users see nothing participant-scoped.
"""

from typing import FrozenSet
from enum import Enum


ROLE_ADMIN = "admin"
ROLE_BUDDY = "buddy"
ROLE_NEW_HIRE = "newHire"
ROLE_USER = "user"

ALLOWED_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN, ROLE_BUDDY, ROLE_NEW_HIRE, ROLE_USER})

DEFAULT_ROLE = ROLE_USER


class RoleEnum(str, Enum):
    """Enum for user roles used in schemas and validation."""
    admin = ROLE_ADMIN
    buddy = ROLE_BUDDY
    newHire = ROLE_NEW_HIRE
    user = ROLE_USER


def is_admin_role(role: str) -> bool:
    return role == ROLE_ADMIN
