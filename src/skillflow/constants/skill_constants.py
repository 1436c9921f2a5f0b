"""Constants describing skills and their entries."""

from __future__ import annotations

from enum import StrEnum


class ProgressLevel(StrEnum):
    """Progress state of a single entry.

    Values are the labels persisted in stored blobs and written to CSV.
    """

    NOT_STARTED = "Not Started Yet"
    ON_GOING = "On Going"
    COMPLETE = "Complete"
    HOLD = "Hold"


UNCATEGORIZED_MODULE = "Uncategorized"

THEME_COLORS: tuple[str, ...] = (
    "#6366f1",
    "#10b981",
    "#f59e0b",
    "#ec4899",
    "#8b5cf6",
    "#3b82f6",
)
