"""Tests for the user directory."""

from __future__ import annotations

import pytest

from skillflow.constants import USERS_COLLECTION_KEY, AuditAction, UserRole, user_data_key
from skillflow.services import AuditLog, LocalSkillRepository, UserDirectory, UserSkills
from skillflow.services.users import filter_users, is_valid_admin_email, is_valid_email
from skillflow.storage import SqlRecordStore
from skillflow.utils.passwords import verify_password


@pytest.fixture
def audit(store: SqlRecordStore) -> AuditLog:
    return AuditLog(store)


@pytest.fixture
def skills(store: SqlRecordStore) -> LocalSkillRepository:
    return LocalSkillRepository(store)


@pytest.fixture
def directory(
    store: SqlRecordStore, audit: AuditLog, skills: LocalSkillRepository
) -> UserDirectory:
    return UserDirectory(store, audit, skills)


@pytest.mark.parametrize("email", ["a@b.co", "first.last@mail-host.org", "x_y@d.info"])
def test_valid_emails(email: str) -> None:
    assert is_valid_email(email)
    assert is_valid_admin_email(email)


@pytest.mark.parametrize("email", ["a@b", "a.com", "a@@b.com", "a@b.c", "a b@c.com"])
def test_invalid_emails(email: str) -> None:
    assert not is_valid_email(email)
    assert not is_valid_admin_email(email)


def test_admin_pattern_rejects_underscore_in_domain() -> None:
    assert is_valid_email("a@my_host.com")
    assert not is_valid_admin_email("a@my_host.com")


def test_register_creates_user_with_hashed_password(
    directory: UserDirectory, store: SqlRecordStore, audit: AuditLog
) -> None:
    assert directory.register("Ada", "ada@example.com", "secret1") is True

    user = directory.find_by_email("ada@example.com")
    assert user is not None
    assert user.role == UserRole.USER

    stored = store.get(USERS_COLLECTION_KEY)[0]
    assert "password" not in stored
    assert stored["passwordHash"] != "secret1"
    assert verify_password("secret1", stored["passwordHash"])

    entry = audit.list()[0]
    assert entry.action == AuditAction.USER_REGISTERED
    assert entry.details == "New user registered: ada@example.com"


def test_register_rejects_duplicate_and_invalid_email(directory: UserDirectory) -> None:
    assert directory.register("Ada", "ada@example.com", "secret1")
    assert directory.register("Other", "ada@example.com", "secret2") is False
    assert directory.register("Bad", "not-an-email", "secret2") is False
    assert len(directory.list_users()) == 1


def test_bootstrap_email_registers_as_admin(directory: UserDirectory) -> None:
    directory.register("Boss", "admin@skillflow.app", "admin123")
    user = directory.find_by_email("admin@skillflow.app")
    assert user is not None and user.role == UserRole.ADMIN


def test_verify_login(directory: UserDirectory, audit: AuditLog) -> None:
    directory.register("Ada", "ada@example.com", "secret1")

    assert directory.verify_login("ada@example.com", "wrong") is None
    assert directory.verify_login("nobody@example.com", "secret1") is None

    user = directory.verify_login("ada@example.com", "secret1")
    assert user is not None and user.email == "ada@example.com"
    assert audit.list()[0].action == AuditAction.USER_LOGIN


def test_email_lookup_is_case_sensitive(directory: UserDirectory) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    assert directory.find_by_email("ADA@example.com") is None


def test_admin_create_user(directory: UserDirectory, audit: AuditLog) -> None:
    assert directory.admin_create_user(
        "Ed", "ed@example.com", UserRole.EDITOR, "pw1234", performed_by="admin@skillflow.app"
    )
    user = directory.find_by_email("ed@example.com")
    assert user is not None and user.role == UserRole.EDITOR

    entry = audit.list()[0]
    assert entry.action == AuditAction.ADMIN_CREATE_USER
    assert entry.details == "Created editor: ed@example.com"
    assert entry.performed_by == "admin@skillflow.app"


def test_admin_create_user_rejects_duplicates_and_bad_input(directory: UserDirectory) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    assert directory.admin_create_user("Ada", "ada@example.com", "user", "pw1234") is False
    assert directory.admin_create_user("X", "x@bad_host.com", "user", "pw1234") is False
    assert directory.admin_create_user("X", "x@example.com", "owner", "pw1234") is False


def test_update_user(directory: UserDirectory, audit: AuditLog) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    user = directory.find_by_email("ada@example.com")
    assert user is not None

    assert directory.update_user(
        user.id, {"name": "Ada L.", "email": "ada@lovelace.org", "role": UserRole.ADMIN}
    )
    updated = directory.get_user(user.id)
    assert updated is not None
    assert (updated.name, updated.email, updated.role) == ("Ada L.", "ada@lovelace.org", "admin")
    assert updated.joined_at == user.joined_at
    assert audit.list()[0].details == "Updated info for ada@example.com"
    assert directory.verify_login("ada@lovelace.org", "secret1") is not None


def test_update_user_rejects_taken_email(directory: UserDirectory) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    directory.register("Bob", "bob@example.com", "secret1")
    bob = directory.find_by_email("bob@example.com")
    assert bob is not None

    assert directory.update_user(bob.id, {"email": "ada@example.com"}) is False
    assert directory.update_user("missing", {"name": "x"}) is False
    assert directory.update_user(bob.id, {"role": "owner"}) is False  # type: ignore[typeddict-item]
    assert directory.get_user(bob.id).email == "bob@example.com"


def test_update_user_keeps_own_email(directory: UserDirectory) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    ada = directory.find_by_email("ada@example.com")
    assert directory.update_user(ada.id, {"email": "ada@example.com", "name": "Ada"})


def test_reset_password(directory: UserDirectory, audit: AuditLog) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    ada = directory.find_by_email("ada@example.com")

    assert directory.reset_password(ada.id, "newpass", performed_by="admin@skillflow.app")
    assert directory.verify_login("ada@example.com", "secret1") is None
    assert directory.verify_login("ada@example.com", "newpass") is not None
    assert any(
        log.details == "Forced password reset for ada@example.com" for log in audit.list()
    )
    assert directory.reset_password("missing", "whatever") is False


def test_delete_user_cascades_to_skills(
    directory: UserDirectory,
    skills: LocalSkillRepository,
    store: SqlRecordStore,
    audit: AuditLog,
) -> None:
    directory.register("Ada", "ada@example.com", "secret1")
    ada = directory.find_by_email("ada@example.com")
    workspace = UserSkills(ada.id, skills)
    workspace.add_skill("Python")
    assert store.get(user_data_key(ada.id)) is not None

    assert directory.delete_user(ada.id, performed_by="admin@skillflow.app")

    assert directory.get_user(ada.id) is None
    assert store.get(user_data_key(ada.id)) is None
    assert skills.load(ada.id) == []
    assert audit.list()[0].details == "Permanently deleted user: ada@example.com"
    assert directory.delete_user(ada.id) is False


def test_seed_super_admin_is_idempotent(directory: UserDirectory) -> None:
    assert directory.seed_super_admin("admin123") is True
    assert directory.seed_super_admin("admin123") is False

    admin = directory.verify_login("admin@skillflow.app", "admin123")
    assert admin is not None and admin.role == UserRole.ADMIN
    assert len(directory.list_users()) == 1


def test_legacy_plaintext_password_is_hashed_on_load(
    directory: UserDirectory, store: SqlRecordStore
) -> None:
    store.set(
        USERS_COLLECTION_KEY,
        [
            {
                "id": "u1",
                "name": "Legacy",
                "email": "legacy@example.com",
                "password": "oldpass",
                "role": "user",
                "joinedAt": "2024-01-01T00:00:00Z",
            }
        ],
    )
    assert directory.verify_login("legacy@example.com", "oldpass") is not None


def test_filter_users() -> None:
    from skillflow.models import User

    users = [
        User(name="Ada Lovelace", email="ada@example.com"),
        User(name="Bob", email="bob@lovelace.org"),
        User(name="Carol", email="carol@example.com"),
    ]
    assert [u.name for u in filter_users(users, "LOVELACE")] == ["Ada Lovelace", "Bob"]
