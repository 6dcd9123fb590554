"""
Access policy evaluation.

Every operation in the catalog is bound to exactly one ``Rule`` in
``OPERATION_RULES``; the dispatcher resolves the rule's subject (the target
record's owner, its owning association, its author) and asks ``decide`` for a
verdict before any repository write or participant-scoped read.

Key helpers:
- decide(rule, caller, subject)
- is_participant(caller, association)
- association_list_scope(caller)
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from buddy_core.utils.roles import ROLE_BUDDY, ROLE_NEW_HIRE, is_admin_role


class Decision(str, Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"


class Rule(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"
    # caller.id must equal the subject's owner user id
    SELF_OR_ADMIN = "self_or_admin"
    # caller must hold the buddy or new hire profile of the subject's association
    PARTICIPANT_OR_ADMIN = "participant_or_admin"
    # participant and author of the subject
    AUTHOR_OR_ADMIN = "author_or_admin"


OPERATION_RULES: Dict[str, Rule] = {
    # auth
    "auth.me": Rule.PUBLIC,
    "auth.logout": Rule.PUBLIC,
    # users
    "users.list": Rule.ADMIN,
    "users.updateRole": Rule.ADMIN,
    # dashboard
    "dashboard.getMetrics": Rule.AUTHENTICATED,
    # buddies
    "buddies.list": Rule.AUTHENTICATED,
    "buddies.get": Rule.AUTHENTICATED,
    "buddies.create": Rule.SELF_OR_ADMIN,
    "buddies.update": Rule.SELF_OR_ADMIN,
    "buddies.delete": Rule.ADMIN,
    # new hires
    "newHires.list": Rule.AUTHENTICATED,
    "newHires.get": Rule.AUTHENTICATED,
    "newHires.create": Rule.SELF_OR_ADMIN,
    "newHires.update": Rule.SELF_OR_ADMIN,
    "newHires.delete": Rule.ADMIN,
    # associations (list is scoped by association_list_scope instead of denied)
    "associations.list": Rule.AUTHENTICATED,
    "associations.get": Rule.PARTICIPANT_OR_ADMIN,
    "associations.create": Rule.ADMIN,
    "associations.update": Rule.ADMIN,
    "associations.delete": Rule.ADMIN,
    # tasks
    "tasks.listByAssociation": Rule.PARTICIPANT_OR_ADMIN,
    "tasks.get": Rule.PARTICIPANT_OR_ADMIN,
    "tasks.create": Rule.PARTICIPANT_OR_ADMIN,
    "tasks.update": Rule.PARTICIPANT_OR_ADMIN,
    "tasks.delete": Rule.PARTICIPANT_OR_ADMIN,
    # task assignments
    "taskAssignments.listByTask": Rule.PARTICIPANT_OR_ADMIN,
    "taskAssignments.create": Rule.PARTICIPANT_OR_ADMIN,
    "taskAssignments.delete": Rule.PARTICIPANT_OR_ADMIN,
    # meetings
    "meetings.listByAssociation": Rule.PARTICIPANT_OR_ADMIN,
    "meetings.get": Rule.PARTICIPANT_OR_ADMIN,
    "meetings.create": Rule.PARTICIPANT_OR_ADMIN,
    "meetings.update": Rule.PARTICIPANT_OR_ADMIN,
    "meetings.delete": Rule.PARTICIPANT_OR_ADMIN,
    # meeting notes
    "meetingNotes.listByMeeting": Rule.PARTICIPANT_OR_ADMIN,
    "meetingNotes.create": Rule.PARTICIPANT_OR_ADMIN,
    "meetingNotes.update": Rule.AUTHOR_OR_ADMIN,
    "meetingNotes.delete": Rule.AUTHOR_OR_ADMIN,
}

# Rules whose evaluation needs the caller's buddy/new hire profile ids
PROFILE_RULES = frozenset({Rule.PARTICIPANT_OR_ADMIN, Rule.AUTHOR_OR_ADMIN})


@dataclass(frozen=True)
class Caller:
    """Authenticated identity plus the profile ids used for participant checks."""
    id: int
    role: str
    buddy_id: Optional[int] = None
    new_hire_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return is_admin_role(self.role)

    def with_profiles(self, buddy_id: Optional[int], new_hire_id: Optional[int]) -> "Caller":
        return dataclasses.replace(self, buddy_id=buddy_id, new_hire_id=new_hire_id)


@dataclass(frozen=True)
class Subject:
    """What a rule is evaluated against; unused fields stay None."""
    owner_user_id: Optional[int] = None
    association: Any = None
    author_user_id: Optional[int] = None


def rule_for(operation: str) -> Rule:
    try:
        return OPERATION_RULES[operation]
    except KeyError:
        raise KeyError(f"No access rule registered for operation '{operation}'") from None


def is_participant(caller: Optional[Caller], association) -> bool:
    """True if the caller holds the buddy or the new hire profile of ``association``.

    A caller without either profile is never a participant.
    """
    if caller is None or association is None:
        return False
    buddy_id = getattr(association, "buddy_id", None)
    new_hire_id = getattr(association, "new_hire_id", None)
    if caller.buddy_id is not None and buddy_id == caller.buddy_id:
        return True
    if caller.new_hire_id is not None and new_hire_id == caller.new_hire_id:
        return True
    return False


def decide(rule: Rule, caller: Optional[Caller], subject: Optional[Subject] = None) -> Decision:
    """Return ALLOW or FORBIDDEN for ``caller`` under ``rule``. Never mutates state."""
    if rule == Rule.PUBLIC:
        return Decision.ALLOW
    if caller is None:
        return Decision.FORBIDDEN
    if caller.is_admin:
        return Decision.ALLOW

    subject = subject or Subject()
    if rule == Rule.AUTHENTICATED:
        allowed = True
    elif rule == Rule.ADMIN:
        allowed = False
    elif rule == Rule.SELF_OR_ADMIN:
        allowed = subject.owner_user_id is not None and subject.owner_user_id == caller.id
    elif rule == Rule.PARTICIPANT_OR_ADMIN:
        allowed = is_participant(caller, subject.association)
    elif rule == Rule.AUTHOR_OR_ADMIN:
        allowed = (
            is_participant(caller, subject.association)
            and subject.author_user_id is not None
            and subject.author_user_id == caller.id
        )
    else:
        allowed = False
    return Decision.ALLOW if allowed else Decision.FORBIDDEN


@dataclass(frozen=True)
class AssociationScope:
    """Which associations a caller may list.

    ``kind`` is one of ``all``, ``buddy``, ``new_hire`` or ``none``; for the
    profile kinds ``profile_id`` names the profile to filter on.
    """
    kind: str
    profile_id: Optional[int] = None

    ALL = "all"
    BUDDY = "buddy"
    NEW_HIRE = "new_hire"
    NONE = "none"


def association_list_scope(caller: Optional[Caller]) -> AssociationScope:
    if caller is None:
        return AssociationScope(AssociationScope.NONE)
    if caller.is_admin:
        return AssociationScope(AssociationScope.ALL)
    if caller.role == ROLE_BUDDY and caller.buddy_id is not None:
        return AssociationScope(AssociationScope.BUDDY, caller.buddy_id)
    if caller.role == ROLE_NEW_HIRE and caller.new_hire_id is not None:
        return AssociationScope(AssociationScope.NEW_HIRE, caller.new_hire_id)
    return AssociationScope(AssociationScope.NONE)
