"""Shared test helpers: RPC calls by identity and direct store seeding."""
import json
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from buddy_core.db import models
from buddy_core.db.database import StoreClient

OWNER_ID = "owner-1"


def auth_headers(external_id: str) -> dict:
    return {
        "X-Auth-Request-User": external_id,
        "X-Auth-Request-Email": f"{external_id}@example.com",
    }


class RpcCaller:
    """Issues RPC calls as one identity (or anonymously)."""

    def __init__(self, client: TestClient, external_id: str | None = None):
        self.client = client
        self.headers = auth_headers(external_id) if external_id else {}

    def query(self, name: str, payload=None):
        params = {"input": json.dumps(payload)} if payload is not None else None
        return self.client.get(f"/rpc/{name}", params=params, headers=self.headers)

    def mutate(self, name: str, payload=None):
        return self.client.post(f"/rpc/{name}", json=payload, headers=self.headers)


def data_of(response):
    assert response.status_code == 200, response.text
    return response.json()["result"]["data"]


def error_code(response):
    return response.json()["error"]["code"]


# Seeding helpers write through a short-lived session and return ids


def _persist(store: StoreClient, row) -> int:
    session = store.new_session()
    try:
        session.add(row)
        session.commit()
        return row.id
    finally:
        session.close()


def seed_user(store: StoreClient, external_id: str, role: str = "user") -> int:
    return _persist(store, models.User(external_id=external_id, name=external_id, role=role))


def seed_buddy(store: StoreClient, user_id: int, **fields) -> int:
    return _persist(store, models.Buddy(user_id=user_id, **fields))


def seed_new_hire(store: StoreClient, user_id: int, **fields) -> int:
    return _persist(store, models.NewHire(user_id=user_id, **fields))


def seed_association(store: StoreClient, buddy_id: int, new_hire_id: int, status: str = "active") -> int:
    return _persist(
        store,
        models.Association(
            buddy_id=buddy_id,
            new_hire_id=new_hire_id,
            status=status,
            start_date=datetime(2025, 1, 6, tzinfo=timezone.utc),
        ),
    )


def seed_task(store: StoreClient, association_id: int, title: str = "Setup laptop", status: str = "pending") -> int:
    return _persist(store, models.Task(association_id=association_id, title=title, status=status))


def seed_meeting(store: StoreClient, association_id: int, title: str = "Week one check-in") -> int:
    return _persist(
        store,
        models.Meeting(
            association_id=association_id,
            title=title,
            scheduled_at=datetime(2025, 1, 10, 15, 0, tzinfo=timezone.utc),
        ),
    )


def seed_note(store: StoreClient, meeting_id: int, user_id: int, content: str = "Went well") -> int:
    return _persist(store, models.MeetingNote(meeting_id=meeting_id, user_id=user_id, content=content))
