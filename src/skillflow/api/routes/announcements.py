"""Announcement feed for signed-in users."""

from __future__ import annotations

from fastapi import APIRouter

from skillflow.api.dependencies import ActorDep, ServicesDep
from skillflow.models import Announcement

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=list[Announcement])
def list_announcements(actor: ActorDep, services: ServicesDep) -> list[Announcement]:
    """Return all announcements, newest first."""
    return services.announcements.list()
