"""
API dependency helpers.

Resolves the calling user for each request and exposes it as an
``(orm_user, Caller)`` pair; both are None for anonymous callers.
"""
import logging
from typing import Optional, Tuple

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from buddy_core.api.auth import (
    DEV_EXTERNAL_ID,
    DEV_NAME,
    LOGIN_METHOD_DEV,
    LOGIN_METHOD_PROXY,
    external_id_for,
    login_upsert,
    resolve_identity_from_headers,
)
from buddy_core.api.permissions import Caller
from buddy_core.db import models
from buddy_core.db.database import get_db
from buddy_core.db.repositories import users as user_repo
from buddy_core.errors import StoreUnavailable
from buddy_core.utils import config
from buddy_core.utils.session_tokens import decode_session_token

logger = logging.getLogger(__name__)

CallerContext = Tuple[Optional[models.User], Optional[Caller]]


def _user_from_cookie(request: Request, db: Session) -> Optional[models.User]:
    token = request.cookies.get(config.session_cookie_name())
    if not token:
        return None
    external_id = decode_session_token(token)
    if external_id is None:
        logger.info("identity: ignoring invalid or expired session cookie")
        return None
    return user_repo.get_user_by_external_id(db, external_id)


def resolve_user(
    request: Request,
    db: Session,
    *,
    x_auth_request_user: Optional[str] = None,
    x_auth_request_email: Optional[str] = None,
    x_forwarded_user: Optional[str] = None,
    x_forwarded_email: Optional[str] = None,
) -> Optional[models.User]:
    """Session cookie first, then proxy headers (upserting), then the dev user."""
    user = _user_from_cookie(request, db)
    if user is not None:
        return user

    name, email = resolve_identity_from_headers(
        x_auth_request_user=x_auth_request_user,
        x_auth_request_email=x_auth_request_email,
        x_forwarded_user=x_forwarded_user,
        x_forwarded_email=x_forwarded_email,
    )
    external_id = external_id_for(name, email)
    if external_id:
        return login_upsert(db, external_id=external_id, name=name, email=email, login_method=LOGIN_METHOD_PROXY)

    if config.dev_mode_active():
        return login_upsert(
            db,
            external_id=DEV_EXTERNAL_ID,
            name=DEV_NAME,
            email=DEV_EXTERNAL_ID,
            login_method=LOGIN_METHOD_DEV,
        )
    return None


def get_caller_context(
    request: Request,
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> CallerContext:
    try:
        user = resolve_user(
            request,
            db,
            x_auth_request_user=x_auth_request_user,
            x_auth_request_email=x_auth_request_email,
            x_forwarded_user=x_forwarded_user,
            x_forwarded_email=x_forwarded_email,
        )
    except StoreUnavailable:
        # Without a store no identity can be confirmed; continue as anonymous
        logger.warning("identity: store unavailable, treating request as anonymous")
        user = None
    if user is None:
        return None, None
    return user, Caller(id=user.id, role=user.role)
