"""User accounts and the login session."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from skillflow.constants import UserRole
from skillflow.models.base import DocumentModel, new_id, utc_now
from skillflow.utils.passwords import hash_password


class User(DocumentModel):
    """Public view of an account, safe to hand to callers and sessions."""

    id: str = Field(default_factory=new_id)
    name: str
    email: str
    role: UserRole = UserRole.USER
    joined_at: datetime = Field(default_factory=utc_now)


class StoredUser(User):
    """Account record as kept in the user directory.

    Legacy documents that still carry a plaintext ``password`` are hashed on
    load; the plaintext never survives validation.
    """

    password_hash: str = ""

    @model_validator(mode="before")
    @classmethod
    def _hash_legacy_password(cls, data: Any) -> Any:
        if isinstance(data, dict) and "password" in data:
            data = dict(data)
            password = data.pop("password")
            if not data.get("passwordHash") and not data.get("password_hash") and password:
                data["passwordHash"] = hash_password(str(password))
        return data

    def public(self) -> User:
        """Return the account without its credential."""
        return User.model_validate(self.model_dump(exclude={"password_hash"}))


class SessionState(DocumentModel):
    """Snapshot of the signed-in user plus the API token, if any."""

    user: User
    token: str | None = None
