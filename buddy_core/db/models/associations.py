from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint
from .base import Base, now_utc
from buddy_core.utils.statuses import ASSOCIATION_ACTIVE, ASSOCIATION_STATUSES, check_constraint_sql


class Association(Base):
    __tablename__ = 'associations'
    id = Column(Integer, primary_key=True, autoincrement=True)
    buddy_id = Column(Integer, ForeignKey('buddies.id', ondelete='CASCADE'), nullable=False)
    new_hire_id = Column(Integer, ForeignKey('new_hires.id', ondelete='CASCADE'), nullable=False)
    status = Column(String(16), nullable=False, default=ASSOCIATION_ACTIVE)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_associations_buddy_id', 'buddy_id'),
        Index('idx_associations_new_hire_id', 'new_hire_id'),
        CheckConstraint(check_constraint_sql('status', ASSOCIATION_STATUSES), name='ck_associations_status'),
    )
