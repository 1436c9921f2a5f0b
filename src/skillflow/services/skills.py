"""Per-user skill collections and the entries inside them.

A user's skills are loaded and saved as one list; there is no partial
sync. ``UserSkills`` holds the caller's in-memory copy and writes the whole
collection back after every mutation.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import ValidationError

from skillflow.constants import THEME_COLORS, UNCATEGORIZED_MODULE, ProgressLevel, user_data_key
from skillflow.models import Entry, EntryDraft, Skill
from skillflow.storage import RecordStore

logger = logging.getLogger(__name__)

__all__ = [
    "SkillRepository",
    "LocalSkillRepository",
    "UserSkills",
    "count_entries",
    "existing_modules",
    "filter_entries",
    "group_entries_by_module",
    "parse_bulk_topics",
]


class SkillRepository(ABC):
    """Loads and saves a user's whole skill list."""

    @abstractmethod
    def load(self, user_id: str) -> list[Skill]:
        """Return the user's skills; empty when none are stored or loading fails."""

    @abstractmethod
    def save(self, user_id: str, skills: Sequence[Skill]) -> None:
        """Overwrite the user's collection."""

    @abstractmethod
    def clear(self, user_id: str) -> None:
        """Drop everything stored for the user."""


class LocalSkillRepository(SkillRepository):
    """Skill lists stored in the record store, one key per user."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def load(self, user_id: str) -> list[Skill]:
        raw = self._store.get(user_data_key(user_id))
        if not raw:
            return []
        try:
            return [Skill.model_validate(item) for item in raw]
        except ValidationError:
            logger.exception("Failed to load skills for user %s", user_id)
            return []

    def save(self, user_id: str, skills: Sequence[Skill]) -> None:
        self._store.set(user_data_key(user_id), [skill.to_document() for skill in skills])

    def clear(self, user_id: str) -> None:
        self._store.remove(user_data_key(user_id))

    def has_data(self, user_id: str) -> bool:
        return self._store.get(user_data_key(user_id)) is not None


class UserSkills:
    """Working copy of one user's skills.

    Mutators return the created object (or a success flag) and persist the
    full collection through the repository.
    """

    def __init__(self, user_id: str, repository: SkillRepository) -> None:
        self.user_id = user_id
        self._repository = repository
        self.skills: list[Skill] = []

    def load(self) -> list[Skill]:
        self.skills = self._repository.load(self.user_id)
        return self.skills

    def save(self) -> None:
        self._repository.save(self.user_id, self.skills)

    def get_skill(self, skill_id: str) -> Skill | None:
        return next((skill for skill in self.skills if skill.id == skill_id), None)

    def add_skill(self, name: str, theme_color: str | None = None) -> Skill:
        skill = Skill(name=name, theme_color=theme_color or random.choice(THEME_COLORS))
        self.skills.append(skill)
        self.save()
        return skill

    def delete_skill(self, skill_id: str) -> bool:
        remaining = [skill for skill in self.skills if skill.id != skill_id]
        if len(remaining) == len(self.skills):
            return False
        self.skills = remaining
        self.save()
        return True

    def rename_skill(self, skill_id: str, name: str) -> bool:
        skill = self.get_skill(skill_id)
        if skill is None:
            return False
        skill.name = name
        self.save()
        return True

    def add_entry(self, skill_id: str, draft: EntryDraft) -> Entry | None:
        """Add an entry at the front of the skill's list."""
        skill = self.get_skill(skill_id)
        if skill is None:
            return None
        entry = Entry(**draft.model_dump(exclude={"id"}))
        skill.entries.insert(0, entry)
        self.save()
        return entry

    def add_bulk_entries(self, skill_id: str, module: str, topics: Iterable[str]) -> list[Entry]:
        """Create one not-started entry per topic, all in ``module``.

        The new entries go in front of the existing ones as one block, in
        the order the topics were given.
        """
        skill = self.get_skill(skill_id)
        if skill is None:
            return []
        today = date.today()
        new_entries = [
            Entry(
                date=today,
                topic=topic.strip(),
                subject="",
                module=module.strip(),
                progress=ProgressLevel.NOT_STARTED,
                video_url="",
                website_url="",
                docs_url="",
                other_url="",
            )
            for topic in topics
        ]
        if not new_entries:
            return []
        skill.entries[:0] = new_entries
        self.save()
        return new_entries

    def update_entry(self, skill_id: str, entry_id: str, draft: EntryDraft) -> Entry | None:
        skill = self.get_skill(skill_id)
        if skill is None:
            return None
        for index, entry in enumerate(skill.entries):
            if entry.id == entry_id:
                replacement = Entry(**draft.model_dump(exclude={"id"}), id=entry_id)
                skill.entries[index] = replacement
                self.save()
                return replacement
        return None

    def delete_entry(self, skill_id: str, entry_id: str) -> bool:
        skill = self.get_skill(skill_id)
        if skill is None:
            return False
        remaining = [entry for entry in skill.entries if entry.id != entry_id]
        if len(remaining) == len(skill.entries):
            return False
        skill.entries = remaining
        self.save()
        return True

    def reset(self) -> None:
        """Delete all of the user's skills."""
        self._repository.clear(self.user_id)
        self.skills = []


def count_entries(skills: Iterable[Skill]) -> int:
    return sum(len(skill.entries) for skill in skills)


def parse_bulk_topics(text: str) -> list[str]:
    """Split multi-line text into trimmed topics, dropping blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def existing_modules(skill: Skill) -> list[str]:
    """Distinct non-empty module names in first-seen order."""
    return list(dict.fromkeys(entry.module for entry in skill.entries if entry.module))


def filter_entries(
    entries: Iterable[Entry], query: str = "", progress: ProgressLevel | None = None
) -> list[Entry]:
    """Case-insensitive search over topic, subject and module plus an optional status filter."""
    needle = query.lower()
    return [
        entry
        for entry in entries
        if (
            needle in entry.topic.lower()
            or needle in entry.subject.lower()
            or needle in (entry.module or "").lower()
        )
        and (progress is None or entry.progress == progress)
    ]


def group_entries_by_module(entries: Sequence[Entry]) -> list[tuple[str, list[Entry]]]:
    """Group a newest-first entry list by module for display.

    Modules are ordered by when they were started: the module whose oldest
    entry sits furthest down the list comes first. ``Uncategorized`` always
    leads. Entries keep their newest-first order inside each group.
    """
    groups: dict[str, list[Entry]] = {}
    last_index: dict[str, int] = {}
    for index, entry in enumerate(entries):
        label = entry.module_label
        groups.setdefault(label, []).append(entry)
        last_index[label] = index

    def sort_key(label: str) -> tuple[int, int]:
        return (0 if label == UNCATEGORIZED_MODULE else 1, -last_index[label])

    return [(label, groups[label]) for label in sorted(groups, key=sort_key)]
