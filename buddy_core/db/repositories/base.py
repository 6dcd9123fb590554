"""
Store-failure handling shared by every repository.

Reads wrapped with ``reads(...)`` degrade to an empty value when the store is
absent or unreachable and the session allows degraded reads; otherwise they
raise ``StoreUnavailable``. Writes wrapped with ``writes`` always raise
``StoreUnavailable`` on the same conditions, report rejected values and
constraint violations as ``ValidationError``, and roll the session back.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError, UnboundExecutionError
from sqlalchemy.orm import Session

from buddy_core.db.database import DEGRADED_READS_KEY
from buddy_core.errors import StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)

STORE_FAILURES = (OperationalError, InterfaceError, UnboundExecutionError)


def _rollback_quietly(db: Session) -> None:
    try:
        db.rollback()
    except STORE_FAILURES as exc:
        logger.debug("store: rollback after failure also failed: %s", exc.__class__.__name__)


def degraded_reads_allowed(db: Session) -> bool:
    return bool(db.info.get(DEGRADED_READS_KEY, False))


def reads(default: Callable[[], Any], *, always_degrade: bool = False):
    """Decorate a read so an unavailable store yields ``default()``.

    ``always_degrade`` ignores the session flag (used by dashboard counts).
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return fn(db, *args, **kwargs)
            except STORE_FAILURES as exc:
                _rollback_quietly(db)
                if always_degrade or degraded_reads_allowed(db):
                    logger.warning("store: degraded read in %s: %s", fn.__name__, exc.__class__.__name__)
                    return default()
                raise StoreUnavailable() from exc

        return wrapper

    return decorator


def writes(fn):
    @functools.wraps(fn)
    def wrapper(db: Session, *args, **kwargs):
        try:
            return fn(db, *args, **kwargs)
        except IntegrityError as exc:
            _rollback_quietly(db)
            logger.info("store: constraint violated in %s: %s", fn.__name__, exc.orig)
            raise ValidationError("Write rejected by a store constraint") from exc
        except DataError as exc:
            _rollback_quietly(db)
            logger.info("store: value rejected in %s: %s", fn.__name__, exc.orig)
            raise ValidationError("Value rejected by the store") from exc
        except STORE_FAILURES as exc:
            _rollback_quietly(db)
            logger.error("store: write failed in %s: %s", fn.__name__, exc)
            raise StoreUnavailable() from exc

    return wrapper


def apply_changes(record, changes: dict):
    """Copy explicitly provided fields onto an ORM row."""
    for key, value in changes.items():
        setattr(record, key, value)
    return record
