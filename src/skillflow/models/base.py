"""Shared pydantic base for stored documents."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Return a fresh random identifier."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class DocumentModel(BaseModel):
    """Model persisted as JSON with camelCase keys (``joinedAt``, ``videoUrl``...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-compatible representation used in storage and backups."""
        return self.model_dump(mode="json", by_alias=True)
