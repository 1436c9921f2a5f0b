"""Full-system backup and restore.

A backup bundles the user directory (with password hashes), every user's
skills, the announcements and the audit log into one JSON document.
Restore validates the whole document before writing anything, then
overwrites each collection independently; there is no merge and no
rollback once writing has started.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from skillflow.constants import AuditAction
from skillflow.models import BackupDocument, Skill, utc_now
from skillflow.services.announcements import AnnouncementBoard
from skillflow.services.audit_log import AuditLog
from skillflow.services.skills import LocalSkillRepository
from skillflow.services.users import UserDirectory

logger = logging.getLogger(__name__)

__all__ = ["SystemBackup"]


class SystemBackup:
    def __init__(
        self,
        users: UserDirectory,
        skills: LocalSkillRepository,
        announcements: AnnouncementBoard,
        audit: AuditLog,
    ) -> None:
        self._users = users
        self._skills = skills
        self._announcements = announcements
        self._audit = audit

    def export_all(self) -> dict[str, Any]:
        """Return the backup document as plain JSON-compatible data."""
        users = self._users.stored_users()
        all_user_data: dict[str, list[Skill]] = {
            user.id: self._skills.load(user.id)
            for user in users
            if self._skills.has_data(user.id)
        }
        document = BackupDocument(
            timestamp=utc_now(),
            users=users,
            all_user_data=all_user_data,
            announcements=self._announcements.list(),
            audit_logs=self._audit.list(),
        )
        return document.to_document()

    def export_json(self) -> str:
        return json.dumps(self.export_all(), indent=2)

    def import_all(
        self, document: dict[str, Any] | str | bytes, performed_by: str = "Admin"
    ) -> bool:
        """Restore from a backup document.

        Returns:
            False, leaving current data untouched, when the input is not
            JSON or lacks ``users`` / ``allUserData``.
        """
        try:
            if isinstance(document, (str, bytes)):
                backup = BackupDocument.model_validate_json(document)
            else:
                backup = BackupDocument.model_validate(document)
        except (ValidationError, ValueError):
            logger.exception("Import failed")
            return False

        self._users.replace_all(backup.users)
        for user_id, skills in backup.all_user_data.items():
            self._skills.save(user_id, skills)
        if backup.announcements is not None:
            self._announcements.replace_all(backup.announcements)
        if backup.audit_logs is not None:
            self._audit.replace_all(backup.audit_logs)

        self._audit.log(
            AuditAction.SYSTEM_RESTORE, "Full system restoration performed", performed_by
        )
        return True
