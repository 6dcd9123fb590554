from datetime import datetime, timezone

from buddy_core.db import schemas
from buddy_core.db.repositories import users as user_repo

from helpers import seed_user


def test_new_user_gets_default_role(db):
    user = user_repo.upsert_user(db, schemas.UserUpsert(external_id="ann", name="Ann", email="ann@example.com"))
    assert user.id is not None
    assert user.role == "user"
    assert user.name == "Ann"
    assert user.last_signed_in is not None


def test_owner_is_promoted_to_admin(db):
    user = user_repo.upsert_user(db, schemas.UserUpsert(external_id="boss"), owner_external_id="boss")
    assert user.role == "admin"


def test_existing_owner_is_promoted_on_next_login(store, db):
    seed_user(store, "boss", role="user")
    user = user_repo.upsert_user(db, schemas.UserUpsert(external_id="boss"), owner_external_id="boss")
    assert user.role == "admin"


def test_upsert_keeps_role_and_missing_fields(store, db):
    seed_user(store, "ann", role="buddy")
    user = user_repo.upsert_user(db, schemas.UserUpsert(external_id="ann", email="ann@example.com"))
    assert user.role == "buddy"
    assert user.name == "ann"
    assert user.email == "ann@example.com"


def test_upsert_refreshes_last_signed_in(db):
    first = datetime(2025, 1, 1, tzinfo=timezone.utc)
    user = user_repo.upsert_user(db, schemas.UserUpsert(external_id="ann", last_signed_in=first))
    assert user.last_signed_in.year == 2025 and user.last_signed_in.month == 1

    again = user_repo.upsert_user(db, schemas.UserUpsert(external_id="ann"))
    assert again.id == user.id
    assert again.last_signed_in.replace(tzinfo=None) > first.replace(tzinfo=None)


def test_update_user_role(store, db):
    user_id = seed_user(store, "ann")
    assert user_repo.update_user_role(db, user_id, "newHire").role == "newHire"
    assert user_repo.update_user_role(db, 999, "admin") is None
