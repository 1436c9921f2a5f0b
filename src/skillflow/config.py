"""Runtime configuration loaded from the environment.

Values can be supplied through a ``.env`` file in the working directory;
``load_dotenv`` never overrides variables that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BACKEND_LOCAL = "local"
BACKEND_REMOTE = "remote"
_BACKENDS = (BACKEND_LOCAL, BACKEND_REMOTE)

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_ADMIN_EMAIL = "admin@skillflow.app"
DEFAULT_ADMIN_PASSWORD = "admin123"


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings.

    Attributes:
        backend: ``local`` (SQL record store) or ``remote`` (HTTP backend).
        db_url: SQLAlchemy URL of the local record store.
        api_url: Base URL of the remote backend.
        api_timeout: Timeout in seconds for remote calls.
        admin_email: Bootstrap address that is granted the admin role.
        admin_password: Password used when seeding the bootstrap admin.
        log_level: Level name passed to ``logging.basicConfig``.
    """

    backend: str = BACKEND_LOCAL
    db_url: str | None = None
    api_url: str = DEFAULT_API_URL
    api_timeout: float = 10.0
    admin_email: str = DEFAULT_ADMIN_EMAIL
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    log_level: str = "INFO"


def get_database_url() -> str:
    """Return the database URL, allowing overrides via environment variable."""
    env_url = os.getenv("DB_URL")
    if env_url:
        return env_url

    project_root = Path(__file__).resolve().parents[2]
    return f"sqlite:///{(project_root / 'skillflow.db').as_posix()}"


def get_settings() -> Settings:
    """Build settings from the current environment.

    Raises:
        ValueError: If ``SKILLFLOW_BACKEND`` names an unknown backend.
    """
    backend = os.getenv("SKILLFLOW_BACKEND", BACKEND_LOCAL).strip().lower()
    if backend not in _BACKENDS:
        raise ValueError(f"Unknown SKILLFLOW_BACKEND {backend!r}; expected one of {_BACKENDS}")

    return Settings(
        backend=backend,
        db_url=get_database_url(),
        api_url=os.getenv("SKILLFLOW_API_URL", DEFAULT_API_URL).rstrip("/"),
        api_timeout=float(os.getenv("SKILLFLOW_API_TIMEOUT", "10")),
        admin_email=os.getenv("SKILLFLOW_ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL),
        admin_password=os.getenv("SKILLFLOW_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
        log_level=os.getenv("SKILLFLOW_LOG_LEVEL", "INFO").upper(),
    )
