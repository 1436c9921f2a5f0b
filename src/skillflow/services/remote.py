"""Service implementations backed by the remote HTTP API.

Remote failures are logged and degrade to the same empty results as "no
data", so callers cannot tell an outage from an empty account.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from skillflow.models import AdminStats, Skill, User, UserStats
from skillflow.services.admin_stats import system_health
from skillflow.services.session import SessionManager
from skillflow.services.skills import SkillRepository
from skillflow.storage import ApiError, RecordStore, SkillFlowApiClient

logger = logging.getLogger(__name__)

__all__ = ["RemoteAdminAggregator", "RemoteSkillRepository", "RemoteUserDirectory"]


class RemoteSkillRepository(SkillRepository):
    """Skill lists kept by the backend for the token's owner.

    The backend identifies the user from the token, so ``user_id`` is only
    used for logging.
    """

    def __init__(self, client: SkillFlowApiClient) -> None:
        self._client = client

    def load(self, user_id: str) -> list[Skill]:
        try:
            return [Skill.model_validate(item) for item in self._client.get_skills()]
        except (ApiError, ValidationError):
            logger.exception("API load failed for user %s", user_id)
            return []

    def save(self, user_id: str, skills: Sequence[Skill]) -> None:
        try:
            self._client.sync_skills([skill.to_document() for skill in skills])
        except ApiError:
            logger.exception("API save failed for user %s", user_id)

    def clear(self, user_id: str) -> None:
        self.save(user_id, [])


class RemoteUserDirectory:
    """Registration and login through ``/auth``.

    Account administration is not part of the remote surface; those calls
    report failure.
    """

    def __init__(self, client: SkillFlowApiClient, sessions: SessionManager) -> None:
        self._client = client
        self._sessions = sessions

    def register(self, name: str, email: str, password: str) -> bool:
        """Register and, when the backend issues a token, sign the user in."""
        try:
            payload = self._client.register(name, email, password)
            token = payload.get("token")
            if not token:
                return False
            user = User.model_validate(payload["user"])
        except (ApiError, ValidationError, KeyError):
            logger.exception("Remote registration failed for %s", email)
            return False
        self._sessions.create_session(user, token)
        return True

    def verify_login(self, email: str, password: str) -> User | None:
        """Return the user for valid credentials and sign them in with the issued token."""
        try:
            payload = self._client.login(email, password)
            token = payload.get("token")
            if not token:
                return None
            user = User.model_validate(payload["user"])
        except (ApiError, ValidationError, KeyError):
            logger.exception("Remote login failed for %s", email)
            return None
        self._sessions.create_session(user, token)
        return user

    @property
    def token(self) -> str | None:
        return self._client.token

    def list_users(self) -> list[User]:
        try:
            return [User.model_validate(item) for item in self._client.admin_users()]
        except (ApiError, ValidationError):
            logger.exception("Failed to fetch users")
            return []

    def _unsupported(self, operation: str) -> bool:
        logger.warning("%s is not supported by the remote backend", operation)
        return False

    def admin_create_user(self, *args: object, **kwargs: object) -> bool:
        return self._unsupported("admin_create_user")

    def update_user(self, *args: object, **kwargs: object) -> bool:
        return self._unsupported("update_user")

    def reset_password(self, *args: object, **kwargs: object) -> bool:
        return self._unsupported("reset_password")

    def delete_user(self, *args: object, **kwargs: object) -> bool:
        return self._unsupported("delete_user")

    def seed_super_admin(self, *args: object, **kwargs: object) -> bool:
        # The backend seeds its own bootstrap admin.
        return False


class RemoteAdminAggregator:
    """Statistics from ``GET /admin/users``; storage figures stay local."""

    def __init__(self, client: SkillFlowApiClient, store: RecordStore) -> None:
        self._client = client
        self._store = store

    def compute_stats(self) -> AdminStats:
        health = system_health(self._store)
        try:
            users = self._client.admin_users()
            per_user = [
                UserStats(
                    user=User.model_validate(item),
                    skills_count=(item.get("stats") or {}).get("skills", 0),
                    entries_count=(item.get("stats") or {}).get("entries", 0),
                )
                for item in users
            ]
        except (ApiError, ValidationError):
            logger.exception("Failed to fetch admin stats")
            per_user = []

        return AdminStats(
            total_users=len(per_user),
            total_skills=sum(stats.skills_count for stats in per_user),
            total_entries=sum(stats.entries_count for stats in per_user),
            per_user_stats=per_user,
            storage_used_kb=health.storage_used_kb,
            storage_limit_kb=health.storage_limit_kb,
        )
