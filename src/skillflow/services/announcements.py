"""Admin-authored broadcast messages."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from skillflow.constants import ANNOUNCEMENTS_KEY, AnnouncementType, AuditAction
from skillflow.models import Announcement
from skillflow.services.audit_log import AuditLog
from skillflow.storage import RecordStore

logger = logging.getLogger(__name__)

__all__ = ["AnnouncementBoard"]

_PREVIEW_CHARS = 20


class AnnouncementBoard:
    """Global announcement list, newest first."""

    def __init__(self, store: RecordStore, audit: AuditLog) -> None:
        self._store = store
        self._audit = audit

    def list(self) -> list[Announcement]:
        raw = self._store.get(ANNOUNCEMENTS_KEY) or []
        try:
            return [Announcement.model_validate(item) for item in raw]
        except ValidationError:
            logger.exception("Stored announcements are corrupt")
            return []

    def create(
        self,
        message: str,
        type: AnnouncementType | str = AnnouncementType.INFO,
        created_by: str = "Admin",
    ) -> Announcement | None:
        """Post a new announcement, or return None for an unknown type.

        The caller is responsible for rejecting blank messages.
        """
        try:
            kind = AnnouncementType(type)
        except ValueError:
            logger.warning("Rejected announcement with unknown type %r", type)
            return None
        item = Announcement(message=message, type=kind, created_by=created_by)
        self._save([item, *self.list()])
        self._audit.log(
            AuditAction.CREATE_ANNOUNCEMENT,
            f'Posted: "{message[:_PREVIEW_CHARS]}..."',
            created_by,
        )
        return item

    def delete(self, announcement_id: str, performed_by: str) -> None:
        """Remove an announcement; unknown ids leave the list unchanged."""
        self._save([item for item in self.list() if item.id != announcement_id])
        self._audit.log(
            AuditAction.DELETE_ANNOUNCEMENT,
            f"Deleted announcement ID: {announcement_id}",
            performed_by,
        )

    def replace_all(self, items: Iterable[Announcement]) -> None:
        self._save(list(items))

    def _save(self, items: list[Announcement]) -> None:
        self._store.set(ANNOUNCEMENTS_KEY, [item.to_document() for item in items])
