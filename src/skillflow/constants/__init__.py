from __future__ import annotations

from skillflow.constants.audit_actions import AuditAction
from skillflow.constants.roles import (
    ASSIGNABLE_ROLES,
    CREATABLE_ROLES,
    AnnouncementType,
    UserRole,
)
from skillflow.constants.skill_constants import (
    THEME_COLORS,
    UNCATEGORIZED_MODULE,
    ProgressLevel,
)
from skillflow.constants.storage_keys import (
    ANNOUNCEMENTS_KEY,
    AUDIT_LOG_LIMIT,
    AUDIT_LOGS_KEY,
    IMPERSONATOR_KEY,
    MAX_TOKENS_PER_USER,
    SESSION_KEY,
    STORAGE_LIMIT_KB,
    TOKENS_KEY,
    USERS_COLLECTION_KEY,
    user_data_key,
)

__all__ = [
    "ANNOUNCEMENTS_KEY",
    "ASSIGNABLE_ROLES",
    "AUDIT_LOGS_KEY",
    "AUDIT_LOG_LIMIT",
    "AnnouncementType",
    "AuditAction",
    "CREATABLE_ROLES",
    "IMPERSONATOR_KEY",
    "MAX_TOKENS_PER_USER",
    "ProgressLevel",
    "SESSION_KEY",
    "STORAGE_LIMIT_KB",
    "THEME_COLORS",
    "TOKENS_KEY",
    "UNCATEGORIZED_MODULE",
    "USERS_COLLECTION_KEY",
    "UserRole",
    "user_data_key",
]
