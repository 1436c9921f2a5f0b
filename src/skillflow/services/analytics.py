"""Figures behind the dashboard and analytics charts."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from skillflow.constants import ProgressLevel
from skillflow.models import Skill
from skillflow.services.skills import count_entries


def entries_per_skill(skills: Sequence[Skill]) -> list[dict[str, str | int]]:
    return [
        {"name": skill.name, "entries": len(skill.entries), "fill": skill.theme_color}
        for skill in skills
    ]


def progress_distribution(skills: Sequence[Skill]) -> dict[ProgressLevel, int]:
    """Entry count per progress level, omitting levels with no entries."""
    counts = Counter(entry.progress for skill in skills for entry in skill.entries)
    return {level: counts[level] for level in ProgressLevel if counts[level] > 0}


def completion_rate(skills: Sequence[Skill]) -> int:
    """Percentage of entries marked complete, rounded; 0 when there are none."""
    total = count_entries(skills)
    if total == 0:
        return 0
    completed = sum(
        1
        for skill in skills
        for entry in skill.entries
        if entry.progress == ProgressLevel.COMPLETE
    )
    return round(completed / total * 100)
