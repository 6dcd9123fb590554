"""
Association repository functions.

Implements create/read/update/delete for buddy/new hire pairings plus the
per-participant listings used to scope non-admin reads.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import apply_changes, reads, writes
from buddy_core.utils.statuses import ASSOCIATION_ACTIVE


@reads(list)
def get_associations(db: Session):
    return db.query(models.Association).order_by(models.Association.id).all()


@reads(lambda: None)
def get_association(db: Session, association_id: int):
    return db.query(models.Association).filter(models.Association.id == association_id).first()


@reads(list)
def get_associations_by_buddy_id(db: Session, buddy_id: int):
    return (
        db.query(models.Association)
        .filter(models.Association.buddy_id == buddy_id)
        .order_by(models.Association.id)
        .all()
    )


@reads(list)
def get_associations_by_new_hire_id(db: Session, new_hire_id: int):
    return (
        db.query(models.Association)
        .filter(models.Association.new_hire_id == new_hire_id)
        .order_by(models.Association.id)
        .all()
    )


@writes
def create_association(db: Session, association: schemas.AssociationCreate, *, status: str = ASSOCIATION_ACTIVE):
    db_association = models.Association(**association.model_dump(), status=status)
    db.add(db_association)
    db.commit()
    db.refresh(db_association)
    return db_association


@writes
def update_association(db: Session, association_id: int, association: schemas.AssociationUpdate):
    db_association = db.query(models.Association).filter(models.Association.id == association_id).first()
    if db_association:
        apply_changes(db_association, association.changes())
        db.commit()
        db.refresh(db_association)
    return db_association


@writes
def delete_association(db: Session, association_id: int) -> bool:
    deleted = (
        db.query(models.Association)
        .filter(models.Association.id == association_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return bool(deleted)
