"""
Session token helpers (JWT carried in the session cookie).

The token only names the user's external id; role and profile data are
re-read from the store on every request.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from buddy_core.utils import config

_ALGORITHM = "HS256"


def create_session_token(external_id: str, *, name: Optional[str] = None, ttl_days: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    days = ttl_days if ttl_days is not None else config.session_ttl_days()
    payload = {
        "sub": external_id,
        "name": name or "",
        "iat": now,
        "exp": now + timedelta(days=days),
    }
    return jwt.encode(payload, config.session_secret(), algorithm=_ALGORITHM)


def decode_session_token(token: str) -> Optional[str]:
    """Return the external id named by ``token``, or None if it is invalid or expired."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, config.session_secret(), algorithms=[_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    sub = payload.get("sub")
    return sub if isinstance(sub, str) and sub else None
