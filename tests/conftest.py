from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

import skillflow.data.db as app_db
from skillflow.api.dependencies import get_services
from skillflow.config import Settings
from skillflow.data.db import init_db
from skillflow.services import SkillFlowServices, build_services
from skillflow.storage import MemoryRecordStore, SqlRecordStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in (
        "SKILLFLOW_BACKEND",
        "SKILLFLOW_API_URL",
        "SKILLFLOW_API_TIMEOUT",
        "SKILLFLOW_ADMIN_EMAIL",
        "SKILLFLOW_ADMIN_PASSWORD",
        "SKILLFLOW_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tmp_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point the record store at a temporary SQLite database."""
    db_path = tmp_path / "skillflow.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    app_db.reset_engine()
    get_services.cache_clear()
    init_db()
    yield
    get_services.cache_clear()
    app_db.reset_engine()


@pytest.fixture
def store(tmp_db: None) -> SqlRecordStore:
    return SqlRecordStore()


@pytest.fixture
def memory_store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def services(store: SqlRecordStore) -> SkillFlowServices:
    """Local service container over the temporary database."""
    return build_services(Settings(), store=store)

