"""Pydantic schemas for admin API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from skillflow.constants import CREATABLE_ROLES, AnnouncementType, UserRole
from skillflow.models import User


class UserCounts(BaseModel):
    skills: int = 0
    entries: int = 0


class AdminUserResponse(User):
    """User record with its skill and entry counts."""

    stats: UserCounts = Field(default_factory=UserCounts)


class CreateUserRequest(BaseModel):
    """Request schema for admin-created accounts.

    Only ``user`` and ``admin`` are offered here; ``editor`` can be assigned
    through an update.
    """

    name: str = Field(min_length=1)
    email: str
    password: str
    role: UserRole = UserRole.USER

    @field_validator("role")
    @classmethod
    def _creatable_role(cls, role: UserRole) -> UserRole:
        if role not in CREATABLE_ROLES:
            raise ValueError(f"role must be one of: {', '.join(CREATABLE_ROLES)}")
        return role


class UpdateUserRequest(BaseModel):
    name: str | None = Field(None, description="New display name")
    email: str | None = Field(None, description="New login email")
    role: UserRole | None = Field(None, description="user, editor or admin")


class ResetPasswordRequest(BaseModel):
    password: str


class AnnouncementCreateRequest(BaseModel):
    message: str
    type: AnnouncementType = AnnouncementType.INFO


class RestoreResponse(BaseModel):
    restored: bool
