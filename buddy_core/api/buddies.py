"""
Buddy profile operations.

A user holds at most one buddy profile and may create or edit only their own;
admins may manage any.
Deleting a buddy cascades to its associations in the store.
"""
from buddy_core.api import targets
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import buddies as buddy_repo
from buddy_core.db.repositories import users as user_repo
from buddy_core.errors import NotFound, ValidationError


@registry.query("buddies.list", output=schemas.Buddy, many=True)
def list_buddies(ctx: CallContext, payload, target: Target):
    return buddy_repo.get_buddies(ctx.db)


@registry.query("buddies.get", input_model=schemas.IdInput, output=schemas.Buddy)
def get_buddy(ctx: CallContext, payload: schemas.IdInput, target: Target):
    buddy = buddy_repo.get_buddy(ctx.db, payload.id)
    if buddy is None:
        raise NotFound("Buddy not found")
    return buddy


@registry.mutation(
    "buddies.create",
    input_model=schemas.BuddyCreate,
    output=schemas.Buddy,
    load=targets.profile_owner,
)
def create_buddy(ctx: CallContext, payload: schemas.BuddyCreate, target: Target):
    if user_repo.get_user(ctx.db, payload.user_id) is None:
        raise NotFound("User not found")
    if buddy_repo.get_buddy_by_user_id(ctx.db, payload.user_id) is not None:
        raise ValidationError("User already has a buddy profile")
    return buddy_repo.create_buddy(ctx.db, payload)


@registry.mutation(
    "buddies.update",
    input_model=schemas.BuddyUpdate,
    output=schemas.Buddy,
    load=targets.buddy,
)
def update_buddy(ctx: CallContext, payload: schemas.BuddyUpdate, target: Target):
    buddy = buddy_repo.update_buddy(ctx.db, payload.id, payload)
    if buddy is None:
        raise NotFound("Buddy not found")
    return buddy


@registry.mutation("buddies.delete", input_model=schemas.IdInput, load=targets.buddy)
def delete_buddy(ctx: CallContext, payload: schemas.IdInput, target: Target):
    buddy_repo.delete_buddy(ctx.db, payload.id)
    return None
