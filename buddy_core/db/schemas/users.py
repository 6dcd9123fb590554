from datetime import datetime
from pydantic import BaseModel

from .common import InputModel, RecordId, RecordModel
from buddy_core.utils.roles import RoleEnum


class User(RecordModel):
    id: int
    external_id: str
    name: str | None = None
    email: str | None = None
    login_method: str | None = None
    role: RoleEnum
    created_at: datetime
    updated_at: datetime
    last_signed_in: datetime


class UserUpsert(BaseModel):
    """Identity fields captured at login; absent values leave stored ones untouched."""
    external_id: str
    name: str | None = None
    email: str | None = None
    login_method: str | None = None
    role: RoleEnum | None = None
    last_signed_in: datetime | None = None


class UserRoleUpdate(InputModel):
    id: RecordId
    role: RoleEnum


class LogoutResult(RecordModel):
    success: bool
