"""
Buddy repository functions.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import apply_changes, reads, writes


@reads(list)
def get_buddies(db: Session):
    return db.query(models.Buddy).order_by(models.Buddy.id).all()


@reads(lambda: None)
def get_buddy(db: Session, buddy_id: int):
    return db.query(models.Buddy).filter(models.Buddy.id == buddy_id).first()


@reads(lambda: None)
def get_buddy_by_user_id(db: Session, user_id: int):
    return db.query(models.Buddy).filter(models.Buddy.user_id == user_id).order_by(models.Buddy.id).first()


@writes
def create_buddy(db: Session, buddy: schemas.BuddyCreate):
    db_buddy = models.Buddy(**buddy.model_dump())
    db.add(db_buddy)
    db.commit()
    db.refresh(db_buddy)
    return db_buddy


@writes
def update_buddy(db: Session, buddy_id: int, buddy: schemas.BuddyUpdate):
    db_buddy = db.query(models.Buddy).filter(models.Buddy.id == buddy_id).first()
    if db_buddy:
        apply_changes(db_buddy, buddy.changes())
        db.commit()
        db.refresh(db_buddy)
    return db_buddy


@writes
def delete_buddy(db: Session, buddy_id: int) -> bool:
    # Associations (and their tasks/meetings) go with it via ON DELETE CASCADE
    deleted = db.query(models.Buddy).filter(models.Buddy.id == buddy_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)
