"""Skills and their dated entries."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from skillflow.constants import UNCATEGORIZED_MODULE, ProgressLevel
from skillflow.models.base import DocumentModel, new_id, utc_now


class EntryDraft(DocumentModel):
    """Entry fields supplied by the caller when adding or replacing an entry."""

    date: dt.date = Field(default_factory=dt.date.today)
    topic: str
    subject: str = ""
    module: str | None = None
    progress: ProgressLevel = ProgressLevel.NOT_STARTED
    video_url: str | None = None
    website_url: str | None = None
    docs_url: str | None = None
    other_url: str | None = None


class Entry(EntryDraft):
    """One dated learning record within a skill."""

    id: str = Field(default_factory=new_id)

    @property
    def module_label(self) -> str:
        """Module name used for grouping; blank modules are ``Uncategorized``."""
        return self.module or UNCATEGORIZED_MODULE


class Skill(DocumentModel):
    """A user-defined topic area. ``entries`` is kept newest-first."""

    id: str = Field(default_factory=new_id)
    name: str
    description: str | None = None
    entries: list[Entry] = Field(default_factory=list)
    created_at: dt.datetime = Field(default_factory=utc_now)
    theme_color: str
