"""Announcements, audit entries, statistics and backup documents."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from skillflow.constants import STORAGE_LIMIT_KB, AnnouncementType
from skillflow.models.base import DocumentModel, new_id, utc_now
from skillflow.models.skill import Skill
from skillflow.models.user import StoredUser, User

BACKUP_VERSION = "2.0"


class Announcement(DocumentModel):
    id: str = Field(default_factory=new_id)
    message: str
    type: AnnouncementType = AnnouncementType.INFO
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)


class AuditLogEntry(DocumentModel):
    id: str = Field(default_factory=new_id)
    action: str
    details: str
    performed_by: str
    timestamp: datetime = Field(default_factory=utc_now)


class UserStats(DocumentModel):
    """Skill and entry counts of one account."""

    user: User
    skills_count: int = 0
    entries_count: int = 0


class SystemHealth(DocumentModel):
    storage_used_kb: int = 0
    storage_limit_kb: int = STORAGE_LIMIT_KB


class AdminStats(DocumentModel):
    """System-wide figures shown on the admin dashboard."""

    total_users: int = 0
    total_skills: int = 0
    total_entries: int = 0
    per_user_stats: list[UserStats] = Field(default_factory=list)
    storage_used_kb: int = 0
    storage_limit_kb: int = STORAGE_LIMIT_KB


class BackupDocument(DocumentModel):
    """Full-system export.

    Only ``users`` and ``allUserData`` are required; everything else is
    optional so older exports still restore.
    """

    version: str = BACKUP_VERSION
    timestamp: datetime | None = None
    users: list[StoredUser]
    all_user_data: dict[str, list[Skill]]
    announcements: list[Announcement] | None = None
    audit_logs: list[AuditLogEntry] | None = None
