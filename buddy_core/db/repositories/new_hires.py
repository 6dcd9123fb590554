"""
New hire repository functions.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import apply_changes, reads, writes


@reads(list)
def get_new_hires(db: Session):
    return db.query(models.NewHire).order_by(models.NewHire.id).all()


@reads(lambda: None)
def get_new_hire(db: Session, new_hire_id: int):
    return db.query(models.NewHire).filter(models.NewHire.id == new_hire_id).first()


@reads(lambda: None)
def get_new_hire_by_user_id(db: Session, user_id: int):
    return db.query(models.NewHire).filter(models.NewHire.user_id == user_id).order_by(models.NewHire.id).first()


@writes
def create_new_hire(db: Session, new_hire: schemas.NewHireCreate):
    db_new_hire = models.NewHire(**new_hire.model_dump())
    db.add(db_new_hire)
    db.commit()
    db.refresh(db_new_hire)
    return db_new_hire


@writes
def update_new_hire(db: Session, new_hire_id: int, new_hire: schemas.NewHireUpdate):
    db_new_hire = db.query(models.NewHire).filter(models.NewHire.id == new_hire_id).first()
    if db_new_hire:
        apply_changes(db_new_hire, new_hire.changes())
        db.commit()
        db.refresh(db_new_hire)
    return db_new_hire


@writes
def delete_new_hire(db: Session, new_hire_id: int) -> bool:
    deleted = db.query(models.NewHire).filter(models.NewHire.id == new_hire_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)
