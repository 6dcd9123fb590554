"""
Store client: engine and session management.

A ``StoreClient`` is constructed once at process start (see
``buddy_core.api.main.create_app``) and carried on ``app.state.store``. When no
database URL is configured the client has no engine; sessions it hands out are
unbound, so every statement fails with ``UnboundExecutionError`` and the
repository layer applies its degrade-to-empty policy for reads.
"""
import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from buddy_core.db.models import Base
from buddy_core.utils import config

logger = logging.getLogger(__name__)

# Session.info key read by the repository layer
DEGRADED_READS_KEY = "allow_degraded_reads"


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _create_engine(url: str) -> Optional[Engine]:
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            # Keep a single connection so the in-memory schema survives across sessions
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    try:
        engine = create_engine(url, **kwargs)
    except (ArgumentError, NoSuchModuleError, ImportError) as exc:
        logger.warning("store: failed to create engine for configured DATABASE_URL: %s", exc)
        return None
    if engine.dialect.name == "sqlite":
        _enable_sqlite_foreign_keys(engine)
    return engine


class StoreClient:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(self, url: Optional[str] = None, *, allow_degraded_reads: bool = True, engine: Optional[Engine] = None):
        self.url = url
        self.allow_degraded_reads = allow_degraded_reads
        if engine is None and url:
            engine = _create_engine(url)
        self.engine = engine
        self._sessionmaker = sessionmaker(
            autoflush=False,
            bind=self.engine,
            info={DEGRADED_READS_KEY: allow_degraded_reads},
        )

    @classmethod
    def from_env(cls) -> "StoreClient":
        return cls(config.database_url(), allow_degraded_reads=config.allow_degraded_reads())

    @property
    def available(self) -> bool:
        """True when an engine exists; says nothing about reachability."""
        return self.engine is not None

    def create_all(self) -> None:
        """Create every table directly from metadata (tests and local SQLite runs)."""
        if self.engine is None:
            raise RuntimeError("Cannot create schema: no database configured")
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        if self.engine is not None:
            Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as exc:
            logger.warning("store: ping failed: %s", exc)
            return False

    def new_session(self) -> Session:
        return self._sessionmaker()

    def session_scope(self) -> Iterator[Session]:
        db = self.new_session()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def get_store(request: Request) -> StoreClient:
    return request.app.state.store


def get_db(request: Request) -> Iterator[Session]:
    """Dependency to get a database session from the application's store client."""
    yield from get_store(request).session_scope()
