import os

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from buddy_core.db.models import Base


def _service_root() -> str:
    here = os.path.dirname(__file__)
    return os.path.abspath(os.path.join(here, "..", ".."))


def _alembic_config(db_url: str, monkeypatch) -> Config:
    # env.py reads DATABASE_URL first
    monkeypatch.setenv("DATABASE_URL", db_url)
    return Config(os.path.join(_service_root(), "alembic.ini"))


def _assert_schema_matches_models(db_url: str):
    engine = create_engine(db_url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert tables == set(Base.metadata.tables) | {"alembic_version"}
        for name, table in Base.metadata.tables.items():
            columns = {c["name"] for c in inspector.get_columns(name)}
            assert columns == {c.name for c in table.columns}, name
            fks = inspector.get_foreign_keys(name)
            assert all(fk["options"].get("ondelete") == "CASCADE" for fk in fks), name
        for name, index_name in (("buddies", "idx_buddies_user_id"), ("new_hires", "idx_new_hires_user_id")):
            indexes = {ix["name"]: ix for ix in inspector.get_indexes(name)}
            assert bool(indexes[index_name]["unique"]), name
        user_columns = {c["name"]: c for c in inspector.get_columns("users")}
        assert user_columns["external_id"]["type"].length == 320
    finally:
        engine.dispose()


def _upgrade_then_downgrade(db_url: str, monkeypatch):
    cfg = _alembic_config(db_url, monkeypatch)
    command.upgrade(cfg, "head")
    _assert_schema_matches_models(db_url)

    command.downgrade(cfg, "base")
    engine = create_engine(db_url)
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()


def test_migrations_round_trip_on_sqlite(tmp_path, monkeypatch):
    _upgrade_then_downgrade(f"sqlite:///{tmp_path / 'buddies.db'}", monkeypatch)


@pytest.mark.e2e
def test_migrations_round_trip_on_postgres(monkeypatch):
    postgres = pytest.importorskip("testcontainers.postgres")
    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    try:
        container = postgres.PostgresContainer(image)
        container.start()
    except Exception as exc:  # docker missing or daemon unreachable
        pytest.skip(f"PostgreSQL container unavailable: {exc}")
    try:
        url = container.get_connection_url()
        _upgrade_then_downgrade(url, monkeypatch)
    finally:
        container.stop()
