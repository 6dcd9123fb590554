"""
User repository functions.

Users are created and refreshed by the login upsert (keyed by external id)
and are never deleted here.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from buddy_core.db import models, schemas
from buddy_core.db.repositories.base import reads, writes
from buddy_core.utils.roles import DEFAULT_ROLE, ROLE_ADMIN

logger = logging.getLogger(__name__)


@reads(lambda: None)
def get_user(db: Session, user_id: int):
    return db.query(models.User).filter(models.User.id == user_id).first()


@reads(lambda: None)
def get_user_by_external_id(db: Session, external_id: str):
    return db.query(models.User).filter(models.User.external_id == external_id).first()


@reads(list)
def get_users(db: Session):
    return db.query(models.User).order_by(models.User.id).all()


def _apply_upsert(user: models.User, data: schemas.UserUpsert, *, is_owner: bool) -> None:
    for field in ("name", "email", "login_method"):
        value = getattr(data, field)
        if value is not None:
            setattr(user, field, value)
    if data.role is not None:
        user.role = data.role.value if hasattr(data.role, "value") else data.role
    elif is_owner:
        user.role = ROLE_ADMIN
    user.last_signed_in = data.last_signed_in or models.now_utc()


@writes
def upsert_user(db: Session, data: schemas.UserUpsert, *, owner_external_id: Optional[str] = None):
    """Insert or refresh the user identified by ``data.external_id``.

    The owner identity is granted ``admin`` on every upsert; other users keep
    their stored role unless ``data.role`` is given.
    """
    is_owner = bool(owner_external_id) and data.external_id == owner_external_id
    user = db.query(models.User).filter(models.User.external_id == data.external_id).first()
    if user is None:
        user = models.User(external_id=data.external_id, role=DEFAULT_ROLE)
        _apply_upsert(user, data, is_owner=is_owner)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent login for the same identity
            db.rollback()
            user = db.query(models.User).filter(models.User.external_id == data.external_id).first()
            _apply_upsert(user, data, is_owner=is_owner)
            db.commit()
        else:
            logger.info("user_created: id=%s role=%s", user.id, user.role)
    else:
        _apply_upsert(user, data, is_owner=is_owner)
        db.commit()
    db.refresh(user)
    return user


@writes
def update_user_role(db: Session, user_id: int, role: str):
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if user:
        user.role = role
        db.commit()
        db.refresh(user)
    return user
