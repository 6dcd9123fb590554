"""
New hire profile operations.

A user holds at most one new hire profile and may create or edit only their
own; admins may manage any.
Deleting a new hire cascades to its associations in the store.
"""
from buddy_core.api import targets
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import new_hires as new_hire_repo
from buddy_core.db.repositories import users as user_repo
from buddy_core.errors import NotFound, ValidationError


@registry.query("newHires.list", output=schemas.NewHire, many=True)
def list_new_hires(ctx: CallContext, payload, target: Target):
    return new_hire_repo.get_new_hires(ctx.db)


@registry.query("newHires.get", input_model=schemas.IdInput, output=schemas.NewHire)
def get_new_hire(ctx: CallContext, payload: schemas.IdInput, target: Target):
    new_hire = new_hire_repo.get_new_hire(ctx.db, payload.id)
    if new_hire is None:
        raise NotFound("New hire not found")
    return new_hire


@registry.mutation(
    "newHires.create",
    input_model=schemas.NewHireCreate,
    output=schemas.NewHire,
    load=targets.profile_owner,
)
def create_new_hire(ctx: CallContext, payload: schemas.NewHireCreate, target: Target):
    if user_repo.get_user(ctx.db, payload.user_id) is None:
        raise NotFound("User not found")
    if new_hire_repo.get_new_hire_by_user_id(ctx.db, payload.user_id) is not None:
        raise ValidationError("User already has a new hire profile")
    return new_hire_repo.create_new_hire(ctx.db, payload)


@registry.mutation(
    "newHires.update",
    input_model=schemas.NewHireUpdate,
    output=schemas.NewHire,
    load=targets.new_hire,
)
def update_new_hire(ctx: CallContext, payload: schemas.NewHireUpdate, target: Target):
    new_hire = new_hire_repo.update_new_hire(ctx.db, payload.id, payload)
    if new_hire is None:
        raise NotFound("New hire not found")
    return new_hire


@registry.mutation("newHires.delete", input_model=schemas.IdInput, load=targets.new_hire)
def delete_new_hire(ctx: CallContext, payload: schemas.IdInput, target: Target):
    new_hire_repo.delete_new_hire(ctx.db, payload.id)
    return None
