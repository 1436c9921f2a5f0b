"""Logical keys of the record store and storage limits."""

from __future__ import annotations

USERS_COLLECTION_KEY = "skillflow_users_v2"
SESSION_KEY = "skillflow_session_v2"
ANNOUNCEMENTS_KEY = "skillflow_announcements"
AUDIT_LOGS_KEY = "skillflow_audit_logs"
TOKENS_KEY = "skillflow_tokens"
IMPERSONATOR_KEY = "skillflow_admin_impersonator"

_USER_DATA_PREFIX = "skillflow_data_"

AUDIT_LOG_LIMIT = 500

# Oldest tokens of a user are dropped once this many are live.
MAX_TOKENS_PER_USER = 5

# Display-only budget for the admin usage gauge; nothing enforces it.
STORAGE_LIMIT_KB = 5120


def user_data_key(user_id: str) -> str:
    """Return the key under which a user's skill collection is stored."""
    return f"{_USER_DATA_PREFIX}{user_id}"
