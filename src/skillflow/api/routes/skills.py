"""Skill collection routes for the API."""

from __future__ import annotations

from fastapi import APIRouter

from skillflow.api.dependencies import ActorDep, ServicesDep
from skillflow.api.schemas.skills import SkillAnalytics, SkillSyncRequest, SkillSyncResponse
from skillflow.models import Skill
from skillflow.services.analytics import completion_rate, entries_per_skill, progress_distribution
from skillflow.services.skills import count_entries

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("", response_model=list[Skill], summary="Get the caller's skills")
def get_skills(actor: ActorDep, services: ServicesDep) -> list[Skill]:
    return services.skills.load(actor.acting_as.id)


@router.post(
    "/sync",
    response_model=SkillSyncResponse,
    summary="Replace the caller's skills",
    description="Overwrites the whole collection; there is no merge.",
)
def sync_skills(
    body: SkillSyncRequest, actor: ActorDep, services: ServicesDep
) -> SkillSyncResponse:
    services.skills.save(actor.acting_as.id, body.skills)
    return SkillSyncResponse(synced=len(body.skills))


@router.get("/analytics", response_model=SkillAnalytics, summary="Dashboard figures")
def get_analytics(actor: ActorDep, services: ServicesDep) -> SkillAnalytics:
    skills = services.skills.load(actor.acting_as.id)
    return SkillAnalytics(
        total_skills=len(skills),
        total_entries=count_entries(skills),
        completion_rate=completion_rate(skills),
        entries_per_skill=entries_per_skill(skills),
        progress_distribution={
            str(level): count for level, count in progress_distribution(skills).items()
        },
    )
