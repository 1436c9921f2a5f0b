"""Tests for the HTTP client and the remote service implementations."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from skillflow.config import BACKEND_REMOTE, Settings
from skillflow.models import Skill, User
from skillflow.services import (
    AuditLog,
    RemoteAdminAggregator,
    RemoteSkillRepository,
    RemoteUserDirectory,
    SessionManager,
    build_services,
)
from skillflow.storage import ApiError, MemoryRecordStore, SkillFlowApiClient

USER_DOC = {
    "id": "u1",
    "name": "Ada",
    "email": "ada@example.com",
    "role": "user",
    "joinedAt": "2024-01-01T00:00:00Z",
}

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler, token: str | None = None) -> SkillFlowApiClient:
    return SkillFlowApiClient(
        "http://backend.test/api", token=token, transport=httpx.MockTransport(handler)
    )


def _failing(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, json={"msg": "boom"})


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_login_keeps_token_and_sends_it_afterwards() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/api/auth/login":
            return httpx.Response(200, json={"user": USER_DOC, "token": "tok-1"})
        return httpx.Response(200, json=[])

    client = _client(handler)
    payload = client.login("ada@example.com", "secret1")
    client.get_skills()

    assert payload["token"] == "tok-1"
    assert client.token == "tok-1"
    assert json.loads(seen[0].content) == {"email": "ada@example.com", "password": "secret1"}
    assert "x-auth-token" not in seen[0].headers
    assert seen[1].url.path == "/api/skills"
    assert seen[1].headers["x-auth-token"] == "tok-1"


def test_sync_skills_posts_collection() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"synced": 1})

    with _client(handler, token="tok") as client:
        client.sync_skills([{"name": "Python"}])

    assert bodies == [{"skills": [{"name": "Python"}]}]


def test_http_error_raises_api_error_with_status() -> None:
    with pytest.raises(ApiError) as excinfo:
        _client(_failing).get_skills()
    assert excinfo.value.status_code == 500


def test_transport_error_raises_api_error() -> None:
    with pytest.raises(ApiError) as excinfo:
        _client(_unreachable).get_skills()
    assert excinfo.value.status_code is None


def test_remote_skill_repository_round_trip() -> None:
    stored: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            stored[:] = json.loads(request.content)["skills"]
            return httpx.Response(200, json={"synced": len(stored)})
        return httpx.Response(200, json=stored)

    repository = RemoteSkillRepository(_client(handler, token="tok"))
    skill = Skill(name="Python", theme_color="#6366f1")
    repository.save("u1", [skill])

    loaded = repository.load("u1")
    assert [s.id for s in loaded] == [skill.id]

    repository.clear("u1")
    assert repository.load("u1") == []


def test_remote_skill_repository_degrades_on_failure() -> None:
    repository = RemoteSkillRepository(_client(_unreachable, token="tok"))
    assert repository.load("u1") == []
    repository.save("u1", [Skill(name="Python", theme_color="#6366f1")])


@pytest.fixture
def sessions() -> SessionManager:
    store = MemoryRecordStore()
    return SessionManager(store, AuditLog(store))


def test_remote_register_creates_session_with_token(sessions: SessionManager) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"user": USER_DOC, "token": "tok-2"})

    directory = RemoteUserDirectory(_client(handler), sessions)

    assert directory.register("Ada", "ada@example.com", "secret1") is True
    state = sessions.get_state()
    assert state is not None
    assert state.token == "tok-2"
    assert state.user.email == "ada@example.com"
    assert directory.token == "tok-2"


def test_remote_register_without_token_fails(sessions: SessionManager) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"user": USER_DOC})

    directory = RemoteUserDirectory(_client(handler), sessions)
    assert directory.register("Ada", "ada@example.com", "secret1") is False
    assert sessions.get_session() is None


def test_remote_login(sessions: SessionManager) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["password"] != "secret1":
            return httpx.Response(400, json={"msg": "Invalid Credentials"})
        return httpx.Response(200, json={"user": USER_DOC, "token": "tok-3"})

    directory = RemoteUserDirectory(_client(handler), sessions)

    assert directory.verify_login("ada@example.com", "wrong") is None
    user = directory.verify_login("ada@example.com", "secret1")
    assert user == User.model_validate(USER_DOC)


def test_remote_login_signs_in_with_issued_token() -> None:
    store = MemoryRecordStore()
    sessions = SessionManager(store, AuditLog(store))

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"user": USER_DOC, "token": "tok-3"})

    directory = RemoteUserDirectory(_client(handler), sessions)
    assert directory.verify_login("ada@example.com", "secret1") is not None

    state = sessions.get_state()
    assert state is not None
    assert state.token == "tok-3"
    assert state.user.email == "ada@example.com"

    # A container built later over the same store reuses the session token.
    rebuilt = build_services(Settings(backend=BACKEND_REMOTE), store=store)
    assert rebuilt.client is not None
    assert rebuilt.client.token == "tok-3"


def test_remote_admin_operations_are_unsupported(sessions: SessionManager) -> None:
    directory = RemoteUserDirectory(_client(_failing), sessions)
    assert directory.admin_create_user("X", "x@example.com", "user", "pw1234") is False
    assert directory.update_user("u1", {"name": "x"}) is False
    assert directory.reset_password("u1", "pw1234") is False
    assert directory.delete_user("u1") is False
    assert directory.seed_super_admin("admin123") is False


def test_remote_admin_stats() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/admin/users"
        return httpx.Response(
            200,
            json=[
                {**USER_DOC, "stats": {"skills": 2, "entries": 5}},
                {**USER_DOC, "id": "u2", "email": "bob@example.com"},
            ],
        )

    aggregator = RemoteAdminAggregator(_client(handler, token="tok"), MemoryRecordStore())
    stats = aggregator.compute_stats()

    assert stats.total_users == 2
    assert stats.total_skills == 2
    assert stats.total_entries == 5


def test_remote_admin_stats_on_failure_are_zero() -> None:
    stats = RemoteAdminAggregator(_client(_unreachable), MemoryRecordStore()).compute_stats()
    assert (stats.total_users, stats.total_skills, stats.total_entries) == (0, 0, 0)


def test_build_services_selects_remote_backend() -> None:
    store = MemoryRecordStore()
    client = _client(_failing)

    services = build_services(Settings(backend=BACKEND_REMOTE), store=store, client=client)

    assert isinstance(services.skills, RemoteSkillRepository)
    assert isinstance(services.users, RemoteUserDirectory)
    assert isinstance(services.stats, RemoteAdminAggregator)
    assert services.client is client
