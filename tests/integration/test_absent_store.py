from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from buddy_core.api.main import create_app
from buddy_core.db.database import StoreClient
from buddy_core.utils.session_tokens import create_session_token

from helpers import auth_headers, data_of, error_code


@pytest.fixture
def absent_client():
    with TestClient(create_app(StoreClient(None, allow_degraded_reads=True))) as c:
        yield c


def _failing_list_reads():
    """Make every ``Query.all()`` fail as if the connection dropped.

    Identity resolution only uses single-row lookups, so the caller still
    authenticates while list reads hit the outage.
    """
    return patch.object(
        Query,
        "all",
        side_effect=OperationalError("SELECT", {}, Exception("server closed the connection")),
    )


def test_health_reports_absent_store(absent_client):
    assert absent_client.get("/health").json()["store"] == "absent"


def test_identity_check_still_answers(absent_client):
    # the login upsert cannot be written, so the caller stays anonymous
    response = absent_client.get("/rpc/auth.me", headers=auth_headers("ann"))
    assert data_of(response) is None


def test_logout_works_without_store(absent_client):
    response = absent_client.post("/rpc/auth.logout")
    assert data_of(response) == {"success": True}


def test_protected_operations_are_unauthorized_without_identity(absent_client):
    response = absent_client.get("/rpc/buddies.list", headers=auth_headers("ann"))
    assert response.status_code == 401
    assert error_code(response) == "UNAUTHORIZED"


def test_list_reads_degrade_to_empty(store, world):
    with TestClient(create_app(StoreClient(engine=store.engine, allow_degraded_reads=True))) as c:
        with _failing_list_reads():
            response = c.get("/rpc/buddies.list", headers=auth_headers(world.admin))
            scoped = c.get("/rpc/associations.list", headers=auth_headers(world.buddy))
    assert data_of(response) == []
    assert data_of(scoped) == []


def test_strict_store_reports_unavailable(store, world):
    with TestClient(create_app(StoreClient(engine=store.engine, allow_degraded_reads=False))) as c:
        with _failing_list_reads():
            response = c.get("/rpc/buddies.list", headers=auth_headers(world.admin))
    assert response.status_code == 503
    assert response.json()["error"] == {
        "code": "SERVICE_UNAVAILABLE",
        "message": "Database not available",
        "operation": "buddies.list",
    }


def test_dashboard_never_fails(store, world):
    strict = StoreClient(engine=store.engine, allow_degraded_reads=False)
    with TestClient(create_app(strict)) as c:
        with patch.object(
            Query,
            "scalar",
            side_effect=OperationalError("SELECT", {}, Exception("server closed the connection")),
        ):
            response = c.get("/rpc/dashboard.getMetrics", headers=auth_headers(world.admin))
    assert data_of(response) == {"buddyCount": 0, "newHireCount": 0, "activeAssociations": 0, "pendingTasks": 0}


def test_writes_fail_with_service_unavailable(store, world):
    with TestClient(create_app(StoreClient(engine=store.engine))) as c:
        # cookie identity needs no write, so only the operation's own commit fails
        c.cookies.set("app_session_id", create_session_token(world.admin))
        with patch("sqlalchemy.orm.Session.commit", side_effect=OperationalError("COMMIT", {}, Exception("gone"))):
            response = c.post("/rpc/tasks.create", json={"associationId": world.association_id, "title": "Setup laptop"})
    assert response.status_code == 503
    assert error_code(response) == "SERVICE_UNAVAILABLE"
