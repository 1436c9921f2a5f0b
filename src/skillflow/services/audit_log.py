"""Append-only, size-capped audit log kept in the record store."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from skillflow.constants import AUDIT_LOG_LIMIT, AUDIT_LOGS_KEY
from skillflow.models import AuditLogEntry
from skillflow.services.context import SYSTEM_ACTOR
from skillflow.storage import RecordStore

logger = logging.getLogger(__name__)

__all__ = ["AuditLog", "filter_audit_logs"]


class AuditLog:
    """Newest-first log capped at ``limit`` entries (oldest evicted first)."""

    def __init__(self, store: RecordStore, limit: int = AUDIT_LOG_LIMIT) -> None:
        self._store = store
        self._limit = limit

    def log(
        self, action: str, details: str, performed_by: str | None = SYSTEM_ACTOR
    ) -> AuditLogEntry | None:
        """Prepend an entry and truncate; failures are logged, never raised."""
        try:
            entry = AuditLogEntry(
                action=str(action), details=details, performed_by=performed_by or SYSTEM_ACTOR
            )
            logs = [entry, *self.list()][: self._limit]
            self._store.set(AUDIT_LOGS_KEY, [log.to_document() for log in logs])
        except Exception:
            logger.exception("Failed to log activity %s", action)
            return None
        return entry

    def list(self) -> list[AuditLogEntry]:
        raw = self._store.get(AUDIT_LOGS_KEY) or []
        try:
            return [AuditLogEntry.model_validate(item) for item in raw]
        except ValidationError:
            logger.exception("Stored audit log is corrupt")
            return []

    def replace_all(self, entries: Iterable[AuditLogEntry]) -> None:
        """Overwrite the whole log (system restore)."""
        self._store.set(AUDIT_LOGS_KEY, [entry.to_document() for entry in entries])


def filter_audit_logs(logs: Iterable[AuditLogEntry], term: str) -> list[AuditLogEntry]:
    """Case-insensitive substring match over actor, action and details."""
    needle = term.lower()
    return [
        log
        for log in logs
        if needle in log.performed_by.lower()
        or needle in log.action.lower()
        or needle in log.details.lower()
    ]
