"""
Task and task assignment repository functions.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import apply_changes, reads, writes


@reads(list)
def get_tasks_by_association_id(db: Session, association_id: int):
    return (
        db.query(models.Task)
        .filter(models.Task.association_id == association_id)
        .order_by(models.Task.id)
        .all()
    )


@reads(lambda: None)
def get_task(db: Session, task_id: int):
    return db.query(models.Task).filter(models.Task.id == task_id).first()


@writes
def create_task(db: Session, task: schemas.TaskCreate):
    db_task = models.Task(**task.model_dump())
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


@writes
def update_task(db: Session, task_id: int, task: schemas.TaskUpdate):
    db_task = db.query(models.Task).filter(models.Task.id == task_id).first()
    if db_task:
        apply_changes(db_task, task.changes())
        db.commit()
        db.refresh(db_task)
    return db_task


@writes
def delete_task(db: Session, task_id: int) -> bool:
    deleted = db.query(models.Task).filter(models.Task.id == task_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)


# Assignments
@reads(list)
def get_task_assignments_by_task_id(db: Session, task_id: int):
    return (
        db.query(models.TaskAssignment)
        .filter(models.TaskAssignment.task_id == task_id)
        .order_by(models.TaskAssignment.id)
        .all()
    )


@reads(lambda: None)
def get_task_assignment(db: Session, assignment_id: int):
    return db.query(models.TaskAssignment).filter(models.TaskAssignment.id == assignment_id).first()


@writes
def create_task_assignment(db: Session, assignment: schemas.TaskAssignmentCreate):
    db_assignment = models.TaskAssignment(task_id=assignment.task_id, user_id=assignment.user_id)
    db.add(db_assignment)
    db.commit()
    db.refresh(db_assignment)
    return db_assignment


@writes
def delete_task_assignment(db: Session, assignment_id: int) -> bool:
    deleted = (
        db.query(models.TaskAssignment)
        .filter(models.TaskAssignment.id == assignment_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return bool(deleted)
