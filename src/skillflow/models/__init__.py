"""Domain models for users, skills and administration data."""

from skillflow.models.admin import (
    BACKUP_VERSION,
    AdminStats,
    Announcement,
    AuditLogEntry,
    BackupDocument,
    SystemHealth,
    UserStats,
)
from skillflow.models.base import DocumentModel, new_id, utc_now
from skillflow.models.skill import Entry, EntryDraft, Skill
from skillflow.models.user import SessionState, StoredUser, User

__all__ = [
    "BACKUP_VERSION",
    "AdminStats",
    "Announcement",
    "AuditLogEntry",
    "BackupDocument",
    "DocumentModel",
    "Entry",
    "EntryDraft",
    "SessionState",
    "Skill",
    "StoredUser",
    "SystemHealth",
    "User",
    "UserStats",
    "new_id",
    "utc_now",
]
