"""
Identity and user-administration operations.

``auth.me`` and ``auth.logout`` are open to anonymous callers; user listing and
role changes are admin-only. Role is never changed anywhere else.
"""
import logging

from buddy_core.api.auth import clear_session_cookie
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import users as user_repo
from buddy_core.errors import NotFound

logger = logging.getLogger(__name__)


@registry.query("auth.me", output=schemas.User)
def me(ctx: CallContext, payload, target: Target):
    return ctx.user


@registry.mutation("auth.logout", output=schemas.LogoutResult)
def logout(ctx: CallContext, payload, target: Target):
    if ctx.response is not None:
        clear_session_cookie(ctx.response)
    logger.info("logout: user_id=%s", getattr(ctx.user, "id", None))
    return schemas.LogoutResult(success=True)


@registry.query("users.list", output=schemas.User, many=True)
def list_users(ctx: CallContext, payload, target: Target):
    return user_repo.get_users(ctx.db)


@registry.mutation("users.updateRole", input_model=schemas.UserRoleUpdate, output=schemas.User)
def update_role(ctx: CallContext, payload: schemas.UserRoleUpdate, target: Target):
    user = user_repo.update_user_role(ctx.db, payload.id, payload.role)
    if user is None:
        raise NotFound("User not found")
    logger.info("role_changed: user_id=%s role=%s by=%s", user.id, user.role, ctx.caller.id)
    return user
