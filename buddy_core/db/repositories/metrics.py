"""
Dashboard counters.

Each count is an independent read that falls back to 0 when the store cannot
answer, so one failing count never hides the others.
"""
from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import reads
from buddy_core.utils.statuses import ASSOCIATION_ACTIVE, TASK_PENDING


def _zero() -> int:
    return 0


@reads(_zero, always_degrade=True)
def count_buddies(db: Session) -> int:
    return db.query(func.count(models.Buddy.id)).scalar() or 0


@reads(_zero, always_degrade=True)
def count_new_hires(db: Session) -> int:
    return db.query(func.count(models.NewHire.id)).scalar() or 0


@reads(_zero, always_degrade=True)
def count_active_associations(db: Session) -> int:
    return (
        db.query(func.count(models.Association.id))
        .filter(models.Association.status == ASSOCIATION_ACTIVE)
        .scalar()
        or 0
    )


@reads(_zero, always_degrade=True)
def count_pending_tasks(db: Session) -> int:
    return (
        db.query(func.count(models.Task.id))
        .filter(models.Task.status == TASK_PENDING)
        .scalar()
        or 0
    )


def get_dashboard_metrics(db: Session) -> schemas.DashboardMetrics:
    return schemas.DashboardMetrics(
        buddy_count=count_buddies(db),
        new_hire_count=count_new_hires(db),
        active_associations=count_active_associations(db),
        pending_tasks=count_pending_tasks(db),
    )
