"""Admin routes: accounts, statistics, announcements, audit log and backups."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from skillflow.api.dependencies import AdminDep, ServicesDep, UsersDep, require_admin
from skillflow.api.schemas.admin import (
    AdminUserResponse,
    AnnouncementCreateRequest,
    CreateUserRequest,
    ResetPasswordRequest,
    RestoreResponse,
    UpdateUserRequest,
    UserCounts,
)
from skillflow.api.schemas.auth import MIN_PASSWORD_LENGTH
from skillflow.models import AdminStats, Announcement, AuditLogEntry, User
from skillflow.services.audit_log import filter_audit_logs
from skillflow.services.users import UserUpdate, is_valid_admin_email

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _check_password_length(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
        )


def _user_not_found(user_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User '{user_id}' not found",
    )


@router.get("/users", response_model=list[AdminUserResponse])
def list_users(services: ServicesDep) -> list[AdminUserResponse]:
    """Return every user together with skill and entry counts."""
    stats = services.stats.compute_stats()
    return [
        AdminUserResponse(
            **item.user.model_dump(),
            stats=UserCounts(skills=item.skills_count, entries=item.entries_count),
        )
        for item in stats.per_user_stats
    ]


@router.get("/stats", response_model=AdminStats)
def get_stats(services: ServicesDep) -> AdminStats:
    return services.stats.compute_stats()


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(body: CreateUserRequest, actor: AdminDep, users: UsersDep) -> User:
    """Create an account with the requested role.

    Raises:
        HTTPException: 400 for an invalid email or short password,
            409 when the email is taken.
    """
    _check_password_length(body.password)
    if not is_valid_admin_email(body.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email format. Please check for typos.",
        )
    if not users.admin_create_user(
        body.name, body.email, body.role, body.password, performed_by=actor.actor_email
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists.",
        )
    created = users.find_by_email(body.email)
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Account could not be stored.",
        )
    return created


@router.patch("/users/{user_id}", response_model=User)
def update_user(
    user_id: Annotated[str, Path(description="Id of the user to update")],
    body: UpdateUserRequest,
    actor: AdminDep,
    users: UsersDep,
) -> User:
    if users.get_user(user_id) is None:
        raise _user_not_found(user_id)

    updates: UserUpdate = body.model_dump(exclude_none=True)  # type: ignore[assignment]
    if not users.update_user(user_id, updates, performed_by=actor.actor_email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update user. Email might be taken.",
        )
    updated = users.get_user(user_id)
    if updated is None:
        raise _user_not_found(user_id)
    return updated


@router.post("/users/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def reset_password(
    user_id: Annotated[str, Path(description="Id of the user whose password is reset")],
    body: ResetPasswordRequest,
    actor: AdminDep,
    users: UsersDep,
) -> None:
    _check_password_length(body.password)
    if not users.reset_password(user_id, body.password, performed_by=actor.actor_email):
        raise _user_not_found(user_id)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: Annotated[str, Path(description="Id of the user to delete")],
    actor: AdminDep,
    services: ServicesDep,
    users: UsersDep,
) -> None:
    """Delete an account and its skills; admins cannot delete themselves."""
    if actor.real_identity is not None and actor.real_identity.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account.",
        )
    if not users.delete_user(user_id, performed_by=actor.actor_email):
        raise _user_not_found(user_id)
    services.tokens.revoke_user(user_id)


@router.post(
    "/announcements", response_model=Announcement, status_code=status.HTTP_201_CREATED
)
def create_announcement(
    body: AnnouncementCreateRequest, actor: AdminDep, services: ServicesDep
) -> Announcement:
    if not body.message.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Announcement message cannot be empty.",
        )
    item = services.announcements.create(body.message, body.type, actor.actor_email)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown announcement type."
        )
    return item


@router.delete("/announcements/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(announcement_id: str, actor: AdminDep, services: ServicesDep) -> None:
    services.announcements.delete(announcement_id, actor.actor_email)


@router.get("/audit-logs", response_model=list[AuditLogEntry])
def list_audit_logs(
    services: ServicesDep,
    q: str | None = Query(default=None, description="Substring filter over actor/action/details"),
) -> list[AuditLogEntry]:
    logs = services.audit.list()
    return filter_audit_logs(logs, q) if q else logs


@router.get("/backup")
def export_backup(services: ServicesDep) -> dict[str, Any]:
    """Return the full-system backup document."""
    return services.backup.export_all()


@router.post("/backup", response_model=RestoreResponse)
def restore_backup(
    document: Annotated[dict[str, Any], Body()], actor: AdminDep, services: ServicesDep
) -> RestoreResponse:
    """Overwrite the system with a backup document.

    Raises:
        HTTPException: 400 if the document lacks ``users`` or ``allUserData``.
    """
    if not services.backup.import_all(document, performed_by=actor.actor_email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid backup file.",
        )
    return RestoreResponse(restored=True)
