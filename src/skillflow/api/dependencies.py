"""Shared dependencies for API routes."""

from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from skillflow.config import BACKEND_LOCAL, get_settings
from skillflow.services import ActorContext, SkillFlowServices, UserDirectory, build_services


@lru_cache(maxsize=1)
def get_services() -> SkillFlowServices:
    """Return the service container; the API always serves the local store."""
    return build_services(replace(get_settings(), backend=BACKEND_LOCAL))


ServicesDep = Annotated[SkillFlowServices, Depends(get_services)]


def get_user_directory(services: ServicesDep) -> UserDirectory:
    users = services.users
    if not isinstance(users, UserDirectory):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="User directory is not available on this server.",
        )
    return users


UsersDep = Annotated[UserDirectory, Depends(get_user_directory)]


def get_actor(
    services: ServicesDep,
    x_auth_token: Annotated[
        str | None,
        Header(description="Token returned by /auth/login or /auth/register."),
    ] = None,
) -> ActorContext:
    """Resolve the auth token into the acting user.

    Raises:
        HTTPException: If the token is missing or unknown (401).
    """
    if not x_auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication. Please provide x-auth-token header.",
        )
    user_id = services.tokens.resolve(x_auth_token)
    user = get_user_directory(services).get_user(user_id) if user_id else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
        )
    return ActorContext.for_user(user, token=x_auth_token)


ActorDep = Annotated[ActorContext, Depends(get_actor)]


def require_admin(actor: ActorDep) -> ActorContext:
    """Raises 403 unless the acting user is an admin."""
    if not actor.can_administer:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required.",
        )
    return actor


AdminDep = Annotated[ActorContext, Depends(require_admin)]
