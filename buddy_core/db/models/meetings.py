from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from .base import Base, now_utc


class Meeting(Base):
    __tablename__ = 'meetings'
    id = Column(Integer, primary_key=True, autoincrement=True)
    association_id = Column(Integer, ForeignKey('associations.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(255), nullable=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    # Set marks the meeting done; cleared un-marks it
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_meetings_association_id', 'association_id'),
    )


class MeetingNote(Base):
    __tablename__ = 'meeting_notes'
    id = Column(Integer, primary_key=True, autoincrement=True)
    meeting_id = Column(Integer, ForeignKey('meetings.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_meeting_notes_meeting_id', 'meeting_id'),
    )
