"""HTTP client for the remote SkillFlow backend.

Covers the small surface the tracker consumes: authentication, the
per-user skill collection and the admin user listing. Once a token is
obtained from login or registration it is sent as ``x-auth-token`` on every
call.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from skillflow.config import DEFAULT_API_URL

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-auth-token"


class ApiError(RuntimeError):
    """Raised when a remote call fails at the transport or HTTP level."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SkillFlowApiClient:
    """Thin wrapper around ``httpx.Client`` for the remote backend.

    Args:
        base_url: API root, e.g. ``http://localhost:5000/api``.
        token: Previously issued auth token, if any.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SkillFlowApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, json: Any | None = None) -> Any:
        headers = {TOKEN_HEADER: self.token} if self.token else {}
        try:
            response = self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise ApiError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"{method} {path} returned invalid JSON") from exc

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """Register an account; returns ``{"user": ..., "token": ...}`` and keeps the token."""
        payload = self._request(
            "POST", "/auth/register", {"name": name, "email": email, "password": password}
        )
        self.token = payload.get("token") or self.token
        return payload

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in; returns ``{"user": ..., "token": ...}`` and keeps the token."""
        payload = self._request("POST", "/auth/login", {"email": email, "password": password})
        self.token = payload.get("token") or self.token
        return payload

    def get_skills(self) -> list[dict[str, Any]]:
        return self._request("GET", "/skills")

    def sync_skills(self, skills: list[dict[str, Any]]) -> Any:
        return self._request("POST", "/skills/sync", {"skills": skills})

    def admin_users(self) -> list[dict[str, Any]]:
        """Return every user with a ``stats`` object of skill and entry counts."""
        return self._request("GET", "/admin/users")
