from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from .base import Base, now_utc
from buddy_core.utils.roles import ALLOWED_ROLES, DEFAULT_ROLE
from buddy_core.utils.statuses import check_constraint_sql


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Identity-provider subject; the login upsert is keyed on it
    external_id = Column(String(320), nullable=False, unique=True, index=True)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    login_method = Column(String(64), nullable=True)
    role = Column(String(16), nullable=False, default=DEFAULT_ROLE)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)
    last_signed_in = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        CheckConstraint(check_constraint_sql('role', ALLOWED_ROLES), name='ck_users_role'),
    )
