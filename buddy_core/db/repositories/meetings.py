"""
Meeting and meeting note repository functions.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import apply_changes, reads, writes


@reads(list)
def get_meetings_by_association_id(db: Session, association_id: int):
    return (
        db.query(models.Meeting)
        .filter(models.Meeting.association_id == association_id)
        .order_by(models.Meeting.scheduled_at, models.Meeting.id)
        .all()
    )


@reads(lambda: None)
def get_meeting(db: Session, meeting_id: int):
    return db.query(models.Meeting).filter(models.Meeting.id == meeting_id).first()


@writes
def create_meeting(db: Session, meeting: schemas.MeetingCreate):
    db_meeting = models.Meeting(**meeting.model_dump())
    db.add(db_meeting)
    db.commit()
    db.refresh(db_meeting)
    return db_meeting


@writes
def update_meeting(db: Session, meeting_id: int, meeting: schemas.MeetingUpdate):
    db_meeting = db.query(models.Meeting).filter(models.Meeting.id == meeting_id).first()
    if db_meeting:
        apply_changes(db_meeting, meeting.changes())
        db.commit()
        db.refresh(db_meeting)
    return db_meeting


@writes
def delete_meeting(db: Session, meeting_id: int) -> bool:
    deleted = db.query(models.Meeting).filter(models.Meeting.id == meeting_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)


# Notes
@reads(list)
def get_meeting_notes_by_meeting_id(db: Session, meeting_id: int):
    return (
        db.query(models.MeetingNote)
        .filter(models.MeetingNote.meeting_id == meeting_id)
        .order_by(models.MeetingNote.id)
        .all()
    )


@reads(lambda: None)
def get_meeting_note(db: Session, note_id: int):
    return db.query(models.MeetingNote).filter(models.MeetingNote.id == note_id).first()


@writes
def create_meeting_note(db: Session, note: schemas.MeetingNoteCreate, *, author_user_id: int):
    db_note = models.MeetingNote(meeting_id=note.meeting_id, content=note.content, user_id=author_user_id)
    db.add(db_note)
    db.commit()
    db.refresh(db_note)
    return db_note


@writes
def update_meeting_note(db: Session, note_id: int, note: schemas.MeetingNoteUpdate):
    db_note = db.query(models.MeetingNote).filter(models.MeetingNote.id == note_id).first()
    if db_note:
        apply_changes(db_note, note.changes())
        db.commit()
        db.refresh(db_note)
    return db_note


@writes
def delete_meeting_note(db: Session, note_id: int) -> bool:
    deleted = db.query(models.MeetingNote).filter(models.MeetingNote.id == note_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)
