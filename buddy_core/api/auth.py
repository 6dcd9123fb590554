"""
Authentication helpers and identity resolution.

Parses proxy headers, upserts users keyed by their external id, and issues or
clears the session cookie. The bootstrap owner (OWNER_EXTERNAL_ID) is elevated
to admin on every login.
"""
import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.orm import Session

from buddy_core.api.dispatcher import result_envelope
from buddy_core.db import models, schemas
from buddy_core.db.database import get_db
from buddy_core.db.repositories import users as user_repo
from buddy_core.errors import Unauthorized
from buddy_core.utils import config
from buddy_core.utils.session_tokens import create_session_token

logger = logging.getLogger(__name__)

LOGIN_METHOD_PROXY = "proxy"
LOGIN_METHOD_DEV = "dev"

DEV_EXTERNAL_ID = "dev@localhost"
DEV_NAME = "Development User"


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def resolve_identity_from_headers(
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    user = (x_auth_request_user or x_forwarded_user or "").strip() or None
    email = _normalize_email(x_auth_request_email or x_forwarded_email)
    return user, email


def external_id_for(user: Optional[str], email: Optional[str]) -> Optional[str]:
    """The proxy's user subject identifies the account; email is the fallback."""
    return user or email


def login_upsert(
    db: Session,
    *,
    external_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    login_method: Optional[str] = None,
) -> models.User:
    data = schemas.UserUpsert(
        external_id=external_id,
        name=name,
        email=email,
        login_method=login_method,
    )
    return user_repo.upsert_user(db, data, owner_external_id=config.owner_external_id())


def set_session_cookie(response: Response, user: models.User) -> None:
    token = create_session_token(user.external_id, name=user.name)
    response.set_cookie(
        config.session_cookie_name(),
        token,
        max_age=config.session_ttl_days() * 24 * 60 * 60,
        path="/",
        secure=True,
        httponly=True,
        samesite="none",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        config.session_cookie_name(),
        "",
        max_age=-1,
        path="/",
        secure=True,
        httponly=True,
        samesite="none",
    )


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(
    response: Response,
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
):
    """Upsert the proxy-authenticated user and issue a session cookie."""
    name, email = resolve_identity_from_headers(
        x_auth_request_user=x_auth_request_user,
        x_auth_request_email=x_auth_request_email,
        x_forwarded_user=x_forwarded_user,
        x_forwarded_email=x_forwarded_email,
    )
    external_id = external_id_for(name, email)
    if not external_id:
        raise Unauthorized()
    user = login_upsert(db, external_id=external_id, name=name, email=email, login_method=LOGIN_METHOD_PROXY)
    set_session_cookie(response, user)
    logger.info("login: user_id=%s role=%s", user.id, user.role)
    return result_envelope(schemas.User.model_validate(user).model_dump(by_alias=True, mode="json"))
