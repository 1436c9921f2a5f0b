"""System-wide statistics for the admin dashboard."""

from __future__ import annotations

import logging

from skillflow.constants import STORAGE_LIMIT_KB
from skillflow.models import AdminStats, SystemHealth, UserStats
from skillflow.services.skills import SkillRepository, count_entries
from skillflow.services.users import UserDirectory
from skillflow.storage import RecordStore

logger = logging.getLogger(__name__)

__all__ = ["AdminAggregator", "system_health"]


def system_health(store: RecordStore) -> SystemHealth:
    """Approximate storage usage of the whole record store.

    Every stored character is counted as two bytes, matching the wide
    character accounting of browser storage quotas.
    """
    total_chars = sum(len(raw) for raw in store.raw_items().values())
    return SystemHealth(
        storage_used_kb=round(total_chars * 2 / 1024),
        storage_limit_kb=STORAGE_LIMIT_KB,
    )


class AdminAggregator:
    """Walks every account and totals its skills and entries."""

    def __init__(self, store: RecordStore, users: UserDirectory, skills: SkillRepository) -> None:
        self._store = store
        self._users = users
        self._skills = skills

    def compute_stats(self) -> AdminStats:
        per_user: list[UserStats] = []
        for user in self._users.list_users():
            # A corrupt collection loads as empty and simply counts as zero.
            skills = self._skills.load(user.id)
            per_user.append(
                UserStats(user=user, skills_count=len(skills), entries_count=count_entries(skills))
            )

        health = system_health(self._store)
        return AdminStats(
            total_users=len(per_user),
            total_skills=sum(stats.skills_count for stats in per_user),
            total_entries=sum(stats.entries_count for stats in per_user),
            per_user_stats=per_user,
            storage_used_kb=health.storage_used_kb,
            storage_limit_kb=health.storage_limit_kb,
        )
