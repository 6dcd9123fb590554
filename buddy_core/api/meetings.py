"""
Meeting operations.

Mirrors tasks: the owning association's participants (or an admin) manage its
meetings. Setting ``completedAt`` marks a meeting done; sending it as null
clears the mark.
"""
from buddy_core.api import targets
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import meetings as meeting_repo
from buddy_core.errors import NotFound


@registry.query(
    "meetings.listByAssociation",
    input_model=schemas.AssociationRef,
    output=schemas.Meeting,
    many=True,
    load=targets.association_ref,
)
def list_meetings(ctx: CallContext, payload: schemas.AssociationRef, target: Target):
    return meeting_repo.get_meetings_by_association_id(ctx.db, payload.association_id)


@registry.query("meetings.get", input_model=schemas.IdInput, output=schemas.Meeting, load=targets.meeting)
def get_meeting(ctx: CallContext, payload: schemas.IdInput, target: Target):
    return target.record


@registry.mutation(
    "meetings.create",
    input_model=schemas.MeetingCreate,
    output=schemas.Meeting,
    load=targets.association_ref,
)
def create_meeting(ctx: CallContext, payload: schemas.MeetingCreate, target: Target):
    return meeting_repo.create_meeting(ctx.db, payload)


@registry.mutation("meetings.update", input_model=schemas.MeetingUpdate, output=schemas.Meeting, load=targets.meeting)
def update_meeting(ctx: CallContext, payload: schemas.MeetingUpdate, target: Target):
    meeting = meeting_repo.update_meeting(ctx.db, payload.id, payload)
    if meeting is None:
        raise NotFound("Meeting not found")
    return meeting


@registry.mutation("meetings.delete", input_model=schemas.IdInput, load=targets.meeting)
def delete_meeting(ctx: CallContext, payload: schemas.IdInput, target: Target):
    meeting_repo.delete_meeting(ctx.db, payload.id)
    return None
