"""
Task and task-assignment operations.

Every operation is resolved to the owning association first; only that
association's buddy or new hire (or an admin) may read or change its tasks.
"""
from buddy_core.api import targets
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import tasks as task_repo
from buddy_core.db.repositories import users as user_repo
from buddy_core.errors import NotFound


@registry.query(
    "tasks.listByAssociation",
    input_model=schemas.AssociationRef,
    output=schemas.Task,
    many=True,
    load=targets.association_ref,
)
def list_tasks(ctx: CallContext, payload: schemas.AssociationRef, target: Target):
    return task_repo.get_tasks_by_association_id(ctx.db, payload.association_id)


@registry.query("tasks.get", input_model=schemas.IdInput, output=schemas.Task, load=targets.task)
def get_task(ctx: CallContext, payload: schemas.IdInput, target: Target):
    return target.record


@registry.mutation(
    "tasks.create",
    input_model=schemas.TaskCreate,
    output=schemas.Task,
    load=targets.association_ref,
)
def create_task(ctx: CallContext, payload: schemas.TaskCreate, target: Target):
    return task_repo.create_task(ctx.db, payload)


@registry.mutation("tasks.update", input_model=schemas.TaskUpdate, output=schemas.Task, load=targets.task)
def update_task(ctx: CallContext, payload: schemas.TaskUpdate, target: Target):
    task = task_repo.update_task(ctx.db, payload.id, payload)
    if task is None:
        raise NotFound("Task not found")
    return task


@registry.mutation("tasks.delete", input_model=schemas.IdInput, load=targets.task)
def delete_task(ctx: CallContext, payload: schemas.IdInput, target: Target):
    task_repo.delete_task(ctx.db, payload.id)
    return None


# Assignments


@registry.query(
    "taskAssignments.listByTask",
    input_model=schemas.TaskRef,
    output=schemas.TaskAssignment,
    many=True,
    load=targets.task_ref,
)
def list_assignments(ctx: CallContext, payload: schemas.TaskRef, target: Target):
    return task_repo.get_task_assignments_by_task_id(ctx.db, payload.task_id)


@registry.mutation(
    "taskAssignments.create",
    input_model=schemas.TaskAssignmentCreate,
    output=schemas.TaskAssignment,
    load=targets.task_ref,
)
def create_assignment(ctx: CallContext, payload: schemas.TaskAssignmentCreate, target: Target):
    if user_repo.get_user(ctx.db, payload.user_id) is None:
        raise NotFound("User not found")
    return task_repo.create_task_assignment(ctx.db, payload)


@registry.mutation("taskAssignments.delete", input_model=schemas.IdInput, load=targets.task_assignment)
def delete_assignment(ctx: CallContext, payload: schemas.IdInput, target: Target):
    task_repo.delete_task_assignment(ctx.db, payload.id)
    return None
