"""Environment-driven configuration helpers.

All settings are read from the process environment at call time so tests can
monkeypatch them per case.
"""

import os
from typing import List, Optional
from urllib.parse import urlparse

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}

_DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
]

# Development fallback only; deployments must set SESSION_SECRET.
_DEV_SESSION_SECRET = "buddy-tracker-dev-session-secret"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def database_url() -> Optional[str]:
    """Return DATABASE_URL, or None when no backing store is configured."""
    url = (os.getenv("DATABASE_URL") or "").strip()
    return url or None


def allow_degraded_reads() -> bool:
    return _env_flag("ALLOW_DEGRADED_READS", True)


def owner_external_id() -> Optional[str]:
    value = (os.getenv("OWNER_EXTERNAL_ID") or "").strip()
    return value or None


def session_secret() -> str:
    return os.getenv("SESSION_SECRET") or _DEV_SESSION_SECRET


def session_cookie_name() -> str:
    return os.getenv("SESSION_COOKIE_NAME", "app_session_id")


def session_ttl_days() -> int:
    try:
        return int(os.getenv("SESSION_TTL_DAYS", "365"))
    except ValueError:
        return 365


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or list(_DEFAULT_CORS_ORIGINS)


def dev_mode_requested() -> bool:
    """Return True when DEV_MODE env var is set to a truthy value."""
    return os.getenv("DEV_MODE", "false").lower() == "true"


def dev_mode_active() -> bool:
    """Return True if dev mode is enabled and allowed; raise if misconfigured.

    DEV_MODE impersonates a local user, so it is only honoured when
    APP_BASE_URL points at a local host or ALLOW_DEV_MODE=true is set.
    """
    if not dev_mode_requested():
        return False

    base_url = (os.getenv("APP_BASE_URL") or "").strip()
    hostname = None
    if base_url:
        candidate = base_url if "://" in base_url else f"http://{base_url}"
        hostname = urlparse(candidate).hostname

    if hostname:
        if hostname.lower() not in _LOCAL_HOSTS:
            raise RuntimeError(
                "DEV_MODE=true is not permitted when APP_BASE_URL points to "
                f"'{hostname}'. Allowed hosts: {sorted(_LOCAL_HOSTS)}"
            )
    elif not _env_flag("ALLOW_DEV_MODE", False):
        raise RuntimeError(
            "DEV_MODE=true requires APP_BASE_URL to be set to a localhost URL "
            "or ALLOW_DEV_MODE=true for non-local execution."
        )
    return True
