"""Pydantic schemas for the skill sync API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from skillflow.models import Skill


class SkillSyncRequest(BaseModel):
    """Full replacement of the caller's skill collection."""

    skills: list[Skill] = Field(default_factory=list)


class SkillSyncResponse(BaseModel):
    synced: int = Field(description="Number of skills stored")


class SkillAnalytics(BaseModel):
    """Dashboard figures for the caller's skills."""

    total_skills: int
    total_entries: int
    completion_rate: int = Field(description="Percent of entries marked complete")
    entries_per_skill: list[dict[str, str | int]]
    progress_distribution: dict[str, int]
