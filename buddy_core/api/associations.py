"""
Association (buddy / new hire pairing) operations.

Listing is scoped by role rather than denied: admins see every pairing, a
buddy or new hire sees only their own, anyone else gets an empty list.
Every mutation is admin-only.
"""
from buddy_core.api import targets
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.api.permissions import AssociationScope, association_list_scope
from buddy_core.db import schemas
from buddy_core.db.repositories import associations as association_repo
from buddy_core.db.repositories import buddies as buddy_repo
from buddy_core.db.repositories import new_hires as new_hire_repo
from buddy_core.errors import NotFound
from buddy_core.utils.statuses import ASSOCIATION_ACTIVE


@registry.query("associations.list", output=schemas.Association, many=True, scoped=True)
def list_associations(ctx: CallContext, payload, target: Target):
    scope = association_list_scope(ctx.caller)
    if scope.kind == AssociationScope.ALL:
        return association_repo.get_associations(ctx.db)
    if scope.kind == AssociationScope.BUDDY:
        return association_repo.get_associations_by_buddy_id(ctx.db, scope.profile_id)
    if scope.kind == AssociationScope.NEW_HIRE:
        return association_repo.get_associations_by_new_hire_id(ctx.db, scope.profile_id)
    return []


@registry.query(
    "associations.get",
    input_model=schemas.IdInput,
    output=schemas.Association,
    load=targets.association,
)
def get_association(ctx: CallContext, payload: schemas.IdInput, target: Target):
    return target.record


@registry.mutation("associations.create", input_model=schemas.AssociationCreate, output=schemas.Association)
def create_association(ctx: CallContext, payload: schemas.AssociationCreate, target: Target):
    if buddy_repo.get_buddy(ctx.db, payload.buddy_id) is None:
        raise NotFound("Buddy not found")
    if new_hire_repo.get_new_hire(ctx.db, payload.new_hire_id) is None:
        raise NotFound("New hire not found")
    return association_repo.create_association(ctx.db, payload, status=ASSOCIATION_ACTIVE)


@registry.mutation(
    "associations.update",
    input_model=schemas.AssociationUpdate,
    output=schemas.Association,
    load=targets.association,
)
def update_association(ctx: CallContext, payload: schemas.AssociationUpdate, target: Target):
    association = association_repo.update_association(ctx.db, payload.id, payload)
    if association is None:
        raise NotFound("Association not found")
    return association


@registry.mutation("associations.delete", input_model=schemas.IdInput, load=targets.association)
def delete_association(ctx: CallContext, payload: schemas.IdInput, target: Target):
    association_repo.delete_association(ctx.db, payload.id)
    return None
