"""Key-value record store.

Blobs are JSON documents stored under string keys. Writers race per key
and the last write wins; nothing spans more than one key. Storage and
serialization failures are logged and swallowed so callers see an empty
result or a no-op, never an exception.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from skillflow.data.db import get_session
from skillflow.data.models import Record

logger = logging.getLogger(__name__)

__all__ = ["RecordStore", "SqlRecordStore", "MemoryRecordStore"]


class RecordStore(ABC):
    """Abstract key-value store of JSON documents."""

    @abstractmethod
    def get_raw(self, key: str) -> str | None:
        """Return the serialized document stored under ``key``."""

    @abstractmethod
    def set_raw(self, key: str, raw: str) -> None:
        """Store an already serialized document under ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; missing keys are ignored."""

    @abstractmethod
    def raw_items(self) -> dict[str, str]:
        """Return every key with its serialized document."""

    def keys(self) -> list[str]:
        return list(self.raw_items())

    def get(self, key: str) -> Any | None:
        """Return the decoded document under ``key``, or None if absent or corrupt."""
        try:
            raw = self.get_raw(key)
        except SQLAlchemyError:
            logger.exception("Failed to read record %s", key)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.exception("Corrupt record %s", key)
            return None

    def set(self, key: str, value: Any) -> None:
        """Serialize ``value`` and store it under ``key``."""
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Failed to serialize record %s", key)
            return
        try:
            self.set_raw(key, raw)
        except SQLAlchemyError:
            logger.exception("Failed to write record %s", key)


class SqlRecordStore(RecordStore):
    """Record store backed by the ``records`` table."""

    def get_raw(self, key: str) -> str | None:
        with get_session() as session:
            record = session.get(Record, key)
            return record.value if record else None

    def set_raw(self, key: str, raw: str) -> None:
        with get_session() as session:
            record = session.get(Record, key)
            if record is None:
                session.add(Record(key=key, value=raw))
            else:
                record.value = raw

    def remove(self, key: str) -> None:
        try:
            with get_session() as session:
                record = session.get(Record, key)
                if record is not None:
                    session.delete(record)
        except SQLAlchemyError:
            logger.exception("Failed to remove record %s", key)

    def raw_items(self) -> dict[str, str]:
        try:
            with get_session() as session:
                rows = session.execute(select(Record.key, Record.value)).all()
        except SQLAlchemyError:
            logger.exception("Failed to list records")
            return {}
        return {key: value for key, value in rows}


class MemoryRecordStore(RecordStore):
    """Process-local store; contents vanish with the object."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get_raw(self, key: str) -> str | None:
        return self._data.get(key)

    def set_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def raw_items(self) -> dict[str, str]:
        return dict(self._data)
