"""
Meeting note operations.

Notes are written by participants of the meeting's association. The author is
always the caller; only the author (still a participant) or an admin may edit
or remove a note.
"""
from buddy_core.api import targets
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import meetings as meeting_repo
from buddy_core.errors import NotFound


@registry.query(
    "meetingNotes.listByMeeting",
    input_model=schemas.MeetingRef,
    output=schemas.MeetingNote,
    many=True,
    load=targets.meeting_ref,
)
def list_notes(ctx: CallContext, payload: schemas.MeetingRef, target: Target):
    return meeting_repo.get_meeting_notes_by_meeting_id(ctx.db, payload.meeting_id)


@registry.mutation(
    "meetingNotes.create",
    input_model=schemas.MeetingNoteCreate,
    output=schemas.MeetingNote,
    load=targets.meeting_ref,
)
def create_note(ctx: CallContext, payload: schemas.MeetingNoteCreate, target: Target):
    return meeting_repo.create_meeting_note(ctx.db, payload, author_user_id=ctx.caller.id)


@registry.mutation(
    "meetingNotes.update",
    input_model=schemas.MeetingNoteUpdate,
    output=schemas.MeetingNote,
    load=targets.meeting_note,
)
def update_note(ctx: CallContext, payload: schemas.MeetingNoteUpdate, target: Target):
    note = meeting_repo.update_meeting_note(ctx.db, payload.id, payload)
    if note is None:
        raise NotFound("Meeting note not found")
    return note


@registry.mutation("meetingNotes.delete", input_model=schemas.IdInput, load=targets.meeting_note)
def delete_note(ctx: CallContext, payload: schemas.IdInput, target: Target):
    meeting_repo.delete_meeting_note(ctx.db, payload.id)
    return None
