"""
Target loaders used by the dispatcher.

Each loader reads the record an operation acts on, walks up to its owning
association where the access rule needs it, and raises ``NotFound`` for any
missing link before the policy is consulted.
"""
from __future__ import annotations

from buddy_core.api.dispatcher import CallContext, Target
from buddy_core.api.permissions import Subject
from buddy_core.db.repositories import associations as association_repo
from buddy_core.db.repositories import buddies as buddy_repo
from buddy_core.db.repositories import meetings as meeting_repo
from buddy_core.db.repositories import new_hires as new_hire_repo
from buddy_core.db.repositories import tasks as task_repo
from buddy_core.errors import NotFound


def _require(record, label: str):
    if record is None:
        raise NotFound(f"{label} not found")
    return record


def _association(ctx: CallContext, association_id: int):
    return _require(association_repo.get_association(ctx.db, association_id), "Association")


def _task_with_association(ctx: CallContext, task_id: int):
    task = _require(task_repo.get_task(ctx.db, task_id), "Task")
    return task, _association(ctx, task.association_id)


def _meeting_with_association(ctx: CallContext, meeting_id: int):
    meeting = _require(meeting_repo.get_meeting(ctx.db, meeting_id), "Meeting")
    return meeting, _association(ctx, meeting.association_id)


# Profiles


def buddy(ctx: CallContext, payload) -> Target:
    record = _require(buddy_repo.get_buddy(ctx.db, payload.id), "Buddy")
    return Target(record, Subject(owner_user_id=record.user_id))


def new_hire(ctx: CallContext, payload) -> Target:
    record = _require(new_hire_repo.get_new_hire(ctx.db, payload.id), "New hire")
    return Target(record, Subject(owner_user_id=record.user_id))


def profile_owner(ctx: CallContext, payload) -> Target:
    """Profile creation: the subject is the user the profile will belong to."""
    return Target(None, Subject(owner_user_id=payload.user_id))


# Associations and their children


def association(ctx: CallContext, payload) -> Target:
    record = _association(ctx, payload.id)
    return Target(record, Subject(association=record))


def association_ref(ctx: CallContext, payload) -> Target:
    record = _association(ctx, payload.association_id)
    return Target(record, Subject(association=record))


def task(ctx: CallContext, payload) -> Target:
    record, parent = _task_with_association(ctx, payload.id)
    return Target(record, Subject(association=parent))


def task_ref(ctx: CallContext, payload) -> Target:
    record, parent = _task_with_association(ctx, payload.task_id)
    return Target(record, Subject(association=parent))


def task_assignment(ctx: CallContext, payload) -> Target:
    record = _require(task_repo.get_task_assignment(ctx.db, payload.id), "Task assignment")
    _task, parent = _task_with_association(ctx, record.task_id)
    return Target(record, Subject(association=parent))


def meeting(ctx: CallContext, payload) -> Target:
    record, parent = _meeting_with_association(ctx, payload.id)
    return Target(record, Subject(association=parent))


def meeting_ref(ctx: CallContext, payload) -> Target:
    record, parent = _meeting_with_association(ctx, payload.meeting_id)
    return Target(record, Subject(association=parent))


def meeting_note(ctx: CallContext, payload) -> Target:
    record = _require(meeting_repo.get_meeting_note(ctx.db, payload.id), "Meeting note")
    _meeting, parent = _meeting_with_association(ctx, record.meeting_id)
    return Target(record, Subject(association=parent, author_user_id=record.user_id))
