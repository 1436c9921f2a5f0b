"""Route handlers for the API."""

from skillflow.api.routes import admin, announcements, auth, health, skills

__all__ = ["admin", "announcements", "auth", "health", "skills"]
