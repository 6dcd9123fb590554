from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from buddy_core.api.main import create_app
from buddy_core.db.database import StoreClient

from helpers import (
    OWNER_ID,
    RpcCaller,
    seed_association,
    seed_buddy,
    seed_new_hire,
    seed_user,
)


@pytest.fixture(autouse=True)
def _identity_env(monkeypatch):
    """Deterministic identity settings for every test."""
    monkeypatch.setenv("OWNER_EXTERNAL_ID", OWNER_ID)
    monkeypatch.setenv("SESSION_SECRET", "test-session-secret")
    monkeypatch.delenv("SESSION_COOKIE_NAME", raising=False)
    monkeypatch.delenv("SESSION_TTL_DAYS", raising=False)
    monkeypatch.delenv("DEV_MODE", raising=False)
    yield


# In-memory SQLite store with foreign keys on, fresh per test
@pytest.fixture
def store():
    client = StoreClient("sqlite://", allow_degraded_reads=True)
    client.create_all()
    yield client
    client.drop_all()
    client.dispose()


@pytest.fixture
def db(store):
    session = store.new_session()
    yield session
    session.close()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def rpc(client):
    def _as(external_id: str | None = None) -> RpcCaller:
        return RpcCaller(client, external_id)

    return _as


@pytest.fixture
def world(store):
    """Admin owner, one paired buddy/new hire, an unpaired buddy and a plain user.

    External ids double as the identity header values used by ``rpc``.
    """
    admin_id = seed_user(store, OWNER_ID, role="admin")
    buddy_user = seed_user(store, "buddy-ann", role="buddy")
    new_hire_user = seed_user(store, "hire-ben", role="newHire")
    other_buddy_user = seed_user(store, "buddy-cy", role="buddy")
    plain_user = seed_user(store, "plain-dee", role="user")

    buddy_id = seed_buddy(store, buddy_user, nickname="Ann", team="Platform")
    new_hire_id = seed_new_hire(store, new_hire_user, nickname="Ben")
    other_buddy_id = seed_buddy(store, other_buddy_user, nickname="Cy")
    association_id = seed_association(store, buddy_id, new_hire_id)

    return SimpleNamespace(
        admin=OWNER_ID,
        buddy="buddy-ann",
        new_hire="hire-ben",
        other_buddy="buddy-cy",
        plain="plain-dee",
        admin_user_id=admin_id,
        buddy_user_id=buddy_user,
        new_hire_user_id=new_hire_user,
        other_buddy_user_id=other_buddy_user,
        plain_user_id=plain_user,
        buddy_id=buddy_id,
        new_hire_id=new_hire_id,
        other_buddy_id=other_buddy_id,
        association_id=association_id,
    )
