"""FastAPI application entry point for the SkillFlow API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillflow.api.routes import admin, announcements, auth, health, skills

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and seed the bootstrap admin on startup."""
    from skillflow.api.dependencies import get_services
    from skillflow.data.db import init_db

    init_db()
    services = get_services()
    services.users.seed_super_admin(services.settings.admin_password)
    yield


app = FastAPI(
    title="SkillFlow API",
    description="Learning tracker backend: accounts, skill collections and administration",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router, prefix="/api")
app.include_router(skills.router, prefix="/api")
app.include_router(announcements.router, prefix="/api")
app.include_router(admin.router, prefix="/api")


def main(host: str = "0.0.0.0", port: int = 5000, reload: bool = False) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run("skillflow.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
