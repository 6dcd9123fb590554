from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from .base import Base, now_utc
from buddy_core.utils.statuses import TASK_PENDING, TASK_STATUSES, check_constraint_sql


class Task(Base):
    __tablename__ = 'tasks'
    id = Column(Integer, primary_key=True, autoincrement=True)
    association_id = Column(Integer, ForeignKey('associations.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    useful_link = Column(String(500), nullable=True)
    status = Column(String(16), nullable=False, default=TASK_PENDING)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_tasks_association_id', 'association_id'),
        Index('idx_tasks_status', 'status'),
        CheckConstraint(check_constraint_sql('status', TASK_STATUSES), name='ck_tasks_status'),
    )


class TaskAssignment(Base):
    __tablename__ = 'task_assignments'
    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_task_assignments_task_id', 'task_id'),
    )
