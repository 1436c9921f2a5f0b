"""Current-session tracking and admin impersonation."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from skillflow.constants import IMPERSONATOR_KEY, SESSION_KEY, AuditAction, UserRole
from skillflow.models import SessionState, User
from skillflow.services.audit_log import AuditLog
from skillflow.services.context import ActorContext
from skillflow.storage import MemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)

__all__ = ["SessionManager"]


class SessionManager:
    """Keeps at most one signed-in user per client.

    The session lives in the persistent ``store``. The admin identity saved
    during impersonation lives in ``transient`` and is discarded when the
    impersonation ends.
    """

    def __init__(
        self,
        store: RecordStore,
        audit: AuditLog,
        transient: RecordStore | None = None,
    ) -> None:
        self._store = store
        self._audit = audit
        self._transient = transient if transient is not None else MemoryRecordStore()

    def create_session(self, user: User, token: str | None = None) -> None:
        """Persist ``user`` as the current session, replacing any previous one."""
        state = SessionState(user=User.model_validate(user.model_dump()), token=token)
        self._store.set(SESSION_KEY, state.to_document())

    def get_state(self) -> SessionState | None:
        raw = self._store.get(SESSION_KEY)
        if raw is None:
            return None
        try:
            return SessionState.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding corrupt session record")
            return None

    def get_session(self) -> User | None:
        """Return the current user, or None if signed out or the record is corrupt."""
        state = self.get_state()
        return state.user if state else None

    def clear_session(self) -> None:
        """Sign out, logging the outgoing user when there was one."""
        user = self.get_session()
        if user is not None:
            self._audit.log(AuditAction.USER_LOGOUT, "Logged out", user.email)
        self._store.remove(SESSION_KEY)

    def impersonator(self) -> User | None:
        raw = self._transient.get(IMPERSONATOR_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding corrupt impersonation record")
            return None

    def start_impersonation(self, target: User) -> bool:
        """Act as ``target`` while remembering the signed-in admin.

        Returns:
            False when nobody is signed in, the signed-in user is not an
            admin, or an impersonation is already running.
        """
        admin = self.get_session()
        if admin is None or admin.role != UserRole.ADMIN or self.impersonator() is not None:
            return False

        self._transient.set(IMPERSONATOR_KEY, admin.to_document())
        self.create_session(target)
        self._audit.log(AuditAction.IMPERSONATE_USER, f"Logged in as {target.email}", admin.email)
        return True

    def stop_impersonation(self) -> bool:
        """Restore the admin identity saved by ``start_impersonation``."""
        admin = self.impersonator()
        if admin is None:
            return False
        self.create_session(admin)
        self._transient.remove(IMPERSONATOR_KEY)
        return True

    def logout(self) -> None:
        """Leave an impersonation if one is running, otherwise sign out."""
        if not self.stop_impersonation():
            self.clear_session()

    def context(self) -> ActorContext:
        """Build the actor context for the current client."""
        state = self.get_state()
        if state is None:
            return ActorContext()
        admin = self.impersonator()
        return ActorContext(
            acting_as=state.user,
            real_identity=admin or state.user,
            token=state.token,
        )
