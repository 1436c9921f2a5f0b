"""Services

``build_services`` wires the record store and either the local or the
remote implementations into one container, chosen once from settings.
"""

from __future__ import annotations

from dataclasses import dataclass

from skillflow.config import BACKEND_REMOTE, Settings, get_settings
from skillflow.services.admin_stats import AdminAggregator
from skillflow.services.announcements import AnnouncementBoard
from skillflow.services.audit_log import AuditLog
from skillflow.services.backup import SystemBackup
from skillflow.services.context import ActorContext
from skillflow.services.remote import (
    RemoteAdminAggregator,
    RemoteSkillRepository,
    RemoteUserDirectory,
)
from skillflow.services.session import SessionManager
from skillflow.services.skills import LocalSkillRepository, SkillRepository, UserSkills
from skillflow.services.tokens import TokenRegistry
from skillflow.services.users import UserDirectory
from skillflow.storage import RecordStore, SkillFlowApiClient, SqlRecordStore


@dataclass(slots=True)
class SkillFlowServices:
    """Everything a front end needs, already wired together."""

    settings: Settings
    store: RecordStore
    audit: AuditLog
    sessions: SessionManager
    announcements: AnnouncementBoard
    skills: SkillRepository
    users: UserDirectory | RemoteUserDirectory
    stats: AdminAggregator | RemoteAdminAggregator
    backup: SystemBackup
    tokens: TokenRegistry
    client: SkillFlowApiClient | None = None

    def user_skills(self, user_id: str) -> UserSkills:
        """Return a loaded working copy of ``user_id``'s skills."""
        workspace = UserSkills(user_id, self.skills)
        workspace.load()
        return workspace


def build_services(
    settings: Settings | None = None,
    store: RecordStore | None = None,
    client: SkillFlowApiClient | None = None,
) -> SkillFlowServices:
    """Create the service container for the configured backend."""
    settings = settings or get_settings()
    store = store if store is not None else SqlRecordStore()
    audit = AuditLog(store)
    sessions = SessionManager(store, audit)
    announcements = AnnouncementBoard(store, audit)

    # Backups always cover the local store.
    local_skills = LocalSkillRepository(store)
    local_users = UserDirectory(store, audit, local_skills, admin_email=settings.admin_email)
    backup = SystemBackup(local_users, local_skills, announcements, audit)

    if settings.backend == BACKEND_REMOTE:
        session_state = sessions.get_state()
        client = client or SkillFlowApiClient(
            settings.api_url,
            token=session_state.token if session_state else None,
            timeout=settings.api_timeout,
        )
        return SkillFlowServices(
            settings=settings,
            store=store,
            audit=audit,
            sessions=sessions,
            announcements=announcements,
            skills=RemoteSkillRepository(client),
            users=RemoteUserDirectory(client, sessions),
            stats=RemoteAdminAggregator(client, store),
            backup=backup,
            tokens=TokenRegistry(store),
            client=client,
        )

    return SkillFlowServices(
        settings=settings,
        store=store,
        audit=audit,
        sessions=sessions,
        announcements=announcements,
        skills=local_skills,
        users=local_users,
        stats=AdminAggregator(store, local_users, local_skills),
        backup=backup,
        tokens=TokenRegistry(store),
    )


__all__ = [
    "ActorContext",
    "AdminAggregator",
    "AnnouncementBoard",
    "AuditLog",
    "LocalSkillRepository",
    "RemoteAdminAggregator",
    "RemoteSkillRepository",
    "RemoteUserDirectory",
    "SessionManager",
    "SkillFlowServices",
    "SkillRepository",
    "SystemBackup",
    "TokenRegistry",
    "UserDirectory",
    "UserSkills",
    "build_services",
]
