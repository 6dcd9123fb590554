from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint
from .base import Base, now_utc
from buddy_core.utils.statuses import (
    BUDDY_AVAILABLE,
    BUDDY_STATUSES,
    NEW_HIRE_ONBOARDING,
    NEW_HIRE_STATUSES,
    check_constraint_sql,
)


class Buddy(Base):
    __tablename__ = 'buddies'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    nickname = Column(String(100), nullable=True)
    team = Column(String(100), nullable=True)
    level = Column(String(50), nullable=True)  # junior, mid, senior, lead, manager
    status = Column(String(16), nullable=False, default=BUDDY_AVAILABLE)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_buddies_user_id', 'user_id', unique=True),
        CheckConstraint(check_constraint_sql('status', BUDDY_STATUSES), name='ck_buddies_status'),
    )


class NewHire(Base):
    __tablename__ = 'new_hires'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    nickname = Column(String(100), nullable=True)
    team = Column(String(100), nullable=True)
    level = Column(String(50), nullable=True)  # intern, junior, mid, senior
    status = Column(String(16), nullable=False, default=NEW_HIRE_ONBOARDING)
    start_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_new_hires_user_id', 'user_id', unique=True),
        CheckConstraint(check_constraint_sql('status', NEW_HIRE_STATUSES), name='ck_new_hires_status'),
    )
