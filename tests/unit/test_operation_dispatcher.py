from unittest.mock import MagicMock

import pytest

from buddy_core.api.catalog import registry
from buddy_core.api.dispatcher import QUERY, MUTATION, CallContext, OperationRegistry
from buddy_core.api.permissions import OPERATION_RULES, Caller, Rule
from buddy_core.errors import Forbidden, NotFound, Unauthorized, ValidationError

from helpers import seed_association, seed_buddy, seed_new_hire, seed_task, seed_user


def test_catalog_covers_every_rule():
    assert set(registry.names()) == set(OPERATION_RULES)


def test_operation_kinds():
    assert registry.get("buddies.list").kind == QUERY
    assert registry.get("tasks.get").kind == QUERY
    assert registry.get("auth.logout").kind == MUTATION
    assert registry.get("associations.create").kind == MUTATION


def test_operations_carry_their_access_rule():
    assert registry.get("associations.delete").rule == Rule.ADMIN
    assert registry.get("meetingNotes.update").rule == Rule.AUTHOR_OR_ADMIN


def test_unknown_operation_is_not_found():
    with pytest.raises(NotFound):
        registry.get("buddies.explode")


def test_register_requires_a_rule_and_a_unique_name():
    local = OperationRegistry()
    with pytest.raises(KeyError):
        local.query("nothing.here")

    local.query("buddies.list")(lambda ctx, payload, target: [])
    with pytest.raises(ValueError):
        local.query("buddies.list")


def test_anonymous_caller_is_unauthorized_before_validation():
    db = MagicMock()
    with pytest.raises(Unauthorized):
        registry.call("tasks.create", CallContext(db=db), {"associationId": "nope"})
    db.query.assert_not_called()


def test_public_operation_runs_without_a_caller():
    assert registry.call("auth.me", CallContext(db=MagicMock())) is None


def test_invalid_input_fails_before_any_store_access():
    db = MagicMock()
    ctx = CallContext(db=db, caller=Caller(id=3, role="buddy"))
    with pytest.raises(ValidationError) as exc:
        registry.call("tasks.create", ctx, {"associationId": "1", "title": "x"})
    assert "associationId" in exc.value.message
    db.query.assert_not_called()


def test_unknown_input_keys_are_rejected():
    ctx = CallContext(db=MagicMock(), caller=Caller(id=1, role="admin"))
    with pytest.raises(ValidationError):
        registry.call("buddies.get", ctx, {"id": 1, "extra": True})


def test_input_must_be_an_object():
    ctx = CallContext(db=MagicMock(), caller=Caller(id=1, role="admin"))
    with pytest.raises(ValidationError):
        registry.call("buddies.get", ctx, [1])


def test_no_input_operations_reject_payloads():
    ctx = CallContext(db=MagicMock(), caller=Caller(id=1, role="admin"))
    with pytest.raises(ValidationError):
        registry.call("buddies.list", ctx, {"id": 1})


def test_admin_only_denial_precedes_validation():
    db = MagicMock()
    ctx = CallContext(db=db, caller=Caller(id=3, role="buddy"))
    with pytest.raises(Forbidden):
        registry.call("associations.create", ctx, {"garbage": True})
    with pytest.raises(Forbidden):
        registry.call("buddies.delete", ctx, {"id": 999})
    db.query.assert_not_called()


def test_missing_target_is_not_found_before_policy(store, db):
    seed_user(store, "someone")
    ctx = CallContext(db=db, caller=Caller(id=1, role="user"))
    with pytest.raises(NotFound):
        registry.call("tasks.update", ctx, {"id": 404, "title": "x"})


def test_non_participant_is_forbidden(store, db):
    buddy_user = seed_user(store, "b", role="buddy")
    hire_user = seed_user(store, "h", role="newHire")
    outsider = seed_user(store, "o", role="buddy")
    association = seed_association(
        store, seed_buddy(store, buddy_user), seed_new_hire(store, hire_user)
    )
    seed_buddy(store, outsider)
    task = seed_task(store, association)

    with pytest.raises(Forbidden):
        registry.call("tasks.get", CallContext(db=db, caller=Caller(id=outsider, role="buddy")), {"id": task})

    ctx = CallContext(db=db, caller=Caller(id=buddy_user, role="buddy"))
    assert registry.call("tasks.get", ctx, {"id": task}).id == task
    # profile ids were resolved for the participant check
    assert ctx.caller.buddy_id is not None
    assert ctx.profiles_resolved is True


def test_dispatch_serializes_with_camel_case_keys(store, db):
    user = seed_user(store, "b", role="buddy")
    seed_buddy(store, user, nickname="Ann")
    ctx = CallContext(db=db, caller=Caller(id=user, role="buddy"))
    rows = registry.dispatch("buddies.list", ctx)
    assert rows[0]["userId"] == user
    assert rows[0]["nickname"] == "Ann"
    assert "createdAt" in rows[0]
    assert "user_id" not in rows[0]


def test_delete_returns_none(store, db):
    admin = seed_user(store, "a", role="admin")
    buddy = seed_buddy(store, seed_user(store, "b", role="buddy"))
    ctx = CallContext(db=db, caller=Caller(id=admin, role="admin"))
    assert registry.dispatch("buddies.delete", ctx, {"id": buddy}) is None
