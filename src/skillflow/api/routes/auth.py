"""Registration, login and logout routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from skillflow.api.dependencies import ActorDep, ServicesDep, UsersDep
from skillflow.api.schemas.auth import (
    MIN_PASSWORD_LENGTH,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from skillflow.constants import AuditAction
from skillflow.services.users import is_valid_email

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input"}, 409: {"description": "Email taken"}},
)
def register(body: RegisterRequest, services: ServicesDep, users: UsersDep) -> AuthResponse:
    """Create an account and return it with a fresh token.

    Raises:
        HTTPException: 400 for a malformed email or short password,
            409 when the email is already registered.
    """
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
        )
    if not is_valid_email(body.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email format.",
        )
    if not users.register(body.name, body.email, body.password):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists.",
        )

    user = users.find_by_email(body.email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration could not be stored.",
        )
    return AuthResponse(user=user, token=services.tokens.issue(user.id))


@router.post("/login", response_model=AuthResponse, responses={401: {"description": "Bad login"}})
def login(body: LoginRequest, services: ServicesDep, users: UsersDep) -> AuthResponse:
    user = users.verify_login(body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    return AuthResponse(user=user, token=services.tokens.issue(user.id))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(actor: ActorDep, services: ServicesDep) -> None:
    """Revoke the caller's token."""
    if actor.token:
        services.tokens.revoke(actor.token)
    services.audit.log(AuditAction.USER_LOGOUT, "Logged out", actor.actor_email)
