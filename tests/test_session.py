"""Tests for sessions, impersonation and the actor context."""

from __future__ import annotations

import pytest

from skillflow.constants import IMPERSONATOR_KEY, SESSION_KEY, AuditAction, UserRole
from skillflow.models import User
from skillflow.services import ActorContext, AuditLog, SessionManager
from skillflow.storage import MemoryRecordStore, SqlRecordStore


@pytest.fixture
def audit(store: SqlRecordStore) -> AuditLog:
    return AuditLog(store)


@pytest.fixture
def transient() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def sessions(
    store: SqlRecordStore, audit: AuditLog, transient: MemoryRecordStore
) -> SessionManager:
    return SessionManager(store, audit, transient)


@pytest.fixture
def admin() -> User:
    return User(name="Admin", email="admin@skillflow.app", role=UserRole.ADMIN)


@pytest.fixture
def learner() -> User:
    return User(name="Learner", email="learner@example.com")


def test_no_session_by_default(sessions: SessionManager) -> None:
    assert sessions.get_session() is None
    assert not sessions.context().is_authenticated


def test_create_session_replaces_previous(
    sessions: SessionManager, admin: User, learner: User
) -> None:
    sessions.create_session(admin, token="t1")
    sessions.create_session(learner)

    assert sessions.get_session() == learner
    state = sessions.get_state()
    assert state is not None and state.token is None


def test_corrupt_session_reads_as_signed_out(
    sessions: SessionManager, store: SqlRecordStore
) -> None:
    store.set(SESSION_KEY, {"user": {"name": "missing email"}})
    assert sessions.get_session() is None


def test_clear_session_logs_logout(
    sessions: SessionManager, audit: AuditLog, learner: User
) -> None:
    sessions.create_session(learner)
    sessions.clear_session()

    assert sessions.get_session() is None
    latest = audit.list()[0]
    assert latest.action == AuditAction.USER_LOGOUT
    assert latest.performed_by == learner.email


def test_clear_session_without_user_logs_nothing(sessions: SessionManager, audit: AuditLog) -> None:
    sessions.clear_session()
    assert audit.list() == []


def test_admin_can_impersonate_and_return(
    sessions: SessionManager,
    audit: AuditLog,
    transient: MemoryRecordStore,
    admin: User,
    learner: User,
) -> None:
    sessions.create_session(admin)

    assert sessions.start_impersonation(learner) is True
    assert sessions.get_session() == learner
    assert transient.get(IMPERSONATOR_KEY) is not None

    ctx = sessions.context()
    assert ctx.is_impersonating
    assert ctx.acting_as == learner
    assert ctx.real_identity == admin
    assert not ctx.can_administer

    entry = audit.list()[0]
    assert entry.action == AuditAction.IMPERSONATE_USER
    assert entry.details == f"Logged in as {learner.email}"
    assert entry.performed_by == admin.email

    assert sessions.stop_impersonation() is True
    assert sessions.get_session() == admin
    assert transient.get(IMPERSONATOR_KEY) is None
    assert sessions.context().can_administer


def test_non_admin_cannot_impersonate(
    sessions: SessionManager, admin: User, learner: User
) -> None:
    sessions.create_session(learner)
    assert sessions.start_impersonation(admin) is False
    assert sessions.get_session() == learner


def test_nested_impersonation_is_refused(
    sessions: SessionManager, admin: User, learner: User
) -> None:
    other = User(name="Other", email="other@example.com")
    sessions.create_session(admin)
    sessions.start_impersonation(learner)

    assert sessions.start_impersonation(other) is False


def test_logout_while_impersonating_returns_to_admin(
    sessions: SessionManager, admin: User, learner: User
) -> None:
    sessions.create_session(admin)
    sessions.start_impersonation(learner)

    sessions.logout()
    assert sessions.get_session() == admin

    sessions.logout()
    assert sessions.get_session() is None


def test_impersonation_slot_does_not_outlive_transient_store(
    store: SqlRecordStore, audit: AuditLog, admin: User, learner: User
) -> None:
    first = SessionManager(store, audit)
    first.create_session(admin)
    first.start_impersonation(learner)

    # A new client shares the persistent session but not the saved admin.
    second = SessionManager(store, audit)
    assert second.get_session() == learner
    assert second.impersonator() is None
    assert second.stop_impersonation() is False


def test_actor_context_defaults_to_system() -> None:
    ctx = ActorContext()
    assert ctx.actor_email == "System"
    assert not ctx.is_impersonating
    assert not ctx.can_administer


def test_actor_context_for_admin(admin: User) -> None:
    ctx = ActorContext.for_user(admin, token="abc")
    assert ctx.can_administer
    assert ctx.actor_email == admin.email
    assert ctx.token == "abc"
