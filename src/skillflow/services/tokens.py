"""API tokens issued on login and registration."""

from __future__ import annotations

import secrets

from skillflow.constants import MAX_TOKENS_PER_USER, TOKENS_KEY
from skillflow.storage import RecordStore

__all__ = ["TokenRegistry"]


class TokenRegistry:
    """Maps opaque bearer tokens to user ids, persisted in the record store."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def _load(self) -> dict[str, str]:
        raw = self._store.get(TOKENS_KEY)
        return raw if isinstance(raw, dict) else {}

    def issue(self, user_id: str) -> str:
        """Create a token for ``user_id``, dropping that user's oldest beyond the cap."""
        token = secrets.token_urlsafe(32)
        tokens = self._load()
        owned = [existing for existing, owner in tokens.items() if owner == user_id]
        for stale in owned[: max(len(owned) - MAX_TOKENS_PER_USER + 1, 0)]:
            del tokens[stale]
        tokens[token] = user_id
        self._store.set(TOKENS_KEY, tokens)
        return token

    def resolve(self, token: str) -> str | None:
        return self._load().get(token)

    def revoke(self, token: str) -> None:
        tokens = self._load()
        if tokens.pop(token, None) is not None:
            self._store.set(TOKENS_KEY, tokens)

    def revoke_user(self, user_id: str) -> None:
        """Drop every token belonging to ``user_id``."""
        tokens = self._load()
        kept = {token: owner for token, owner in tokens.items() if owner != user_id}
        if len(kept) != len(tokens):
            self._store.set(TOKENS_KEY, kept)
