"""Account roles and announcement categories."""

from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    """Role attached to every user account."""

    USER = "user"
    ADMIN = "admin"
    EDITOR = "editor"


# Editors can be assigned when an account is edited but not chosen at creation.
CREATABLE_ROLES: tuple[UserRole, ...] = (UserRole.USER, UserRole.ADMIN)
ASSIGNABLE_ROLES: tuple[UserRole, ...] = (UserRole.USER, UserRole.EDITOR, UserRole.ADMIN)


class AnnouncementType(StrEnum):
    """Visual category of an announcement."""

    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
