"""User directory: registration, login and admin account management.

Validation failures (bad email, duplicate email, unknown id) are reported
as ``False`` / ``None``; nothing here raises for user input.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TypedDict

from pydantic import ValidationError

from skillflow.config import DEFAULT_ADMIN_EMAIL
from skillflow.constants import ASSIGNABLE_ROLES, USERS_COLLECTION_KEY, AuditAction, UserRole
from skillflow.models import StoredUser, User
from skillflow.services.audit_log import AuditLog
from skillflow.services.skills import SkillRepository
from skillflow.storage import RecordStore
from skillflow.utils.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

__all__ = [
    "UserDirectory",
    "UserUpdate",
    "filter_users",
    "is_valid_admin_email",
    "is_valid_email",
]

# Registration form: local and domain parts share one character set.
_EMAIL_RE = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9._-]+\.[A-Za-z]{2,6}$")
# Admin panel: the domain part may not contain underscores.
_ADMIN_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}$")

_UPDATABLE_FIELDS = ("name", "email", "role")


class UserUpdate(TypedDict, total=False):
    """Fields an admin may change on an account."""

    name: str
    email: str
    role: UserRole


def is_valid_email(email: str) -> bool:
    """Pattern used by self-registration."""
    return bool(_EMAIL_RE.fullmatch(email))


def is_valid_admin_email(email: str) -> bool:
    """Stricter pattern used by the admin panel."""
    return bool(_ADMIN_EMAIL_RE.fullmatch(email))


def filter_users(users: Iterable[User], term: str) -> list[User]:
    """Case-insensitive substring match on name or email."""
    needle = term.lower()
    return [user for user in users if needle in user.name.lower() or needle in user.email.lower()]


class UserDirectory:
    """Account records stored as one list in the record store.

    Args:
        store: Record store holding the directory.
        audit: Audit log receiving every account event.
        skills: Repository whose per-user data is removed with the account.
        admin_email: Bootstrap address granted the admin role on registration.
    """

    def __init__(
        self,
        store: RecordStore,
        audit: AuditLog,
        skills: SkillRepository,
        admin_email: str = DEFAULT_ADMIN_EMAIL,
    ) -> None:
        self._store = store
        self._audit = audit
        self._skills = skills
        self.admin_email = admin_email

    def _load(self) -> list[StoredUser]:
        raw = self._store.get(USERS_COLLECTION_KEY) or []
        try:
            return [StoredUser.model_validate(item) for item in raw]
        except ValidationError:
            logger.exception("Stored user directory is corrupt")
            return []

    def _save(self, users: list[StoredUser]) -> None:
        self._store.set(USERS_COLLECTION_KEY, [user.to_document() for user in users])

    @staticmethod
    def _index_of(users: list[StoredUser], user_id: str) -> int | None:
        return next((i for i, user in enumerate(users) if user.id == user_id), None)

    def list_users(self) -> list[User]:
        return [user.public() for user in self._load()]

    def stored_users(self) -> list[StoredUser]:
        """Full records including password hashes (backup only)."""
        return self._load()

    def replace_all(self, users: Iterable[StoredUser]) -> None:
        self._save(list(users))

    def get_user(self, user_id: str) -> User | None:
        return next((user.public() for user in self._load() if user.id == user_id), None)

    def find_by_email(self, email: str) -> User | None:
        """Exact, case-sensitive lookup."""
        return next((user.public() for user in self._load() if user.email == email), None)

    def register(self, name: str, email: str, password: str) -> bool:
        """Create a self-service account.

        The bootstrap admin address receives the admin role; everyone else
        starts as a regular user.
        """
        if not is_valid_email(email):
            return False
        users = self._load()
        if any(user.email == email for user in users):
            return False

        role = UserRole.ADMIN if email == self.admin_email else UserRole.USER
        users.append(
            StoredUser(name=name, email=email, role=role, password_hash=hash_password(password))
        )
        self._save(users)
        self._audit.log(AuditAction.USER_REGISTERED, f"New user registered: {email}", email)
        return True

    def verify_login(self, email: str, password: str) -> User | None:
        """Return the account for matching credentials, else None."""
        user = next((user for user in self._load() if user.email == email), None)
        if user is None or not verify_password(password, user.password_hash):
            return None
        self._audit.log(AuditAction.USER_LOGIN, "Successful login", email)
        return user.public()

    def admin_create_user(
        self,
        name: str,
        email: str,
        role: UserRole | str,
        password: str,
        performed_by: str | None = None,
    ) -> bool:
        """Create an account with a caller-chosen role."""
        if not is_valid_admin_email(email):
            return False
        users = self._load()
        if any(user.email == email for user in users):
            return False

        try:
            role = UserRole(role)
        except ValueError:
            return False
        users.append(
            StoredUser(name=name, email=email, role=role, password_hash=hash_password(password))
        )
        self._save(users)
        self._audit.log(AuditAction.ADMIN_CREATE_USER, f"Created {role}: {email}", performed_by)
        return True

    def update_user(
        self, user_id: str, updates: UserUpdate, performed_by: str | None = None
    ) -> bool:
        """Apply name/email/role changes.

        A changed email is re-validated and must not belong to anyone else.
        """
        users = self._load()
        index = self._index_of(users, user_id)
        if index is None:
            return False

        role = updates.get("role")
        if role and role not in ASSIGNABLE_ROLES:
            return False

        current = users[index]
        old_email = current.email
        new_email = updates.get("email")
        if new_email and new_email != old_email:
            if not is_valid_admin_email(new_email):
                return False
            if any(user.email == new_email for user in users if user.id != user_id):
                return False

        changes = {field: updates[field] for field in _UPDATABLE_FIELDS if updates.get(field)}
        try:
            users[index] = StoredUser.model_validate({**current.model_dump(), **changes})
        except ValidationError:
            return False
        self._save(users)
        self._audit.log(AuditAction.UPDATE_USER, f"Updated info for {old_email}", performed_by)
        return True

    def reset_password(
        self, user_id: str, new_password: str, performed_by: str | None = None
    ) -> bool:
        """Overwrite the password; length rules belong to the caller."""
        users = self._load()
        index = self._index_of(users, user_id)
        if index is None:
            return False
        users[index].password_hash = hash_password(new_password)
        self._save(users)
        self._audit.log(
            AuditAction.RESET_PASSWORD,
            f"Forced password reset for {users[index].email}",
            performed_by,
        )
        return True

    def delete_user(self, user_id: str, performed_by: str | None = None) -> bool:
        """Remove the account and all of its skills.

        Callers must refuse self-deletion themselves.
        """
        users = self._load()
        index = self._index_of(users, user_id)
        if index is None:
            return False
        deleted = users.pop(index)
        self._save(users)
        self._skills.clear(user_id)
        self._audit.log(
            AuditAction.DELETE_USER, f"Permanently deleted user: {deleted.email}", performed_by
        )
        return True

    def seed_super_admin(self, password: str, name: str = "Super Admin") -> bool:
        """Create the bootstrap admin account if it does not exist yet."""
        users = self._load()
        if any(user.email == self.admin_email for user in users):
            return False
        users.append(
            StoredUser(
                name=name,
                email=self.admin_email,
                role=UserRole.ADMIN,
                password_hash=hash_password(password),
            )
        )
        self._save(users)
        logger.info("Seeded bootstrap admin %s", self.admin_email)
        return True
