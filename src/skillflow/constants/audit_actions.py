"""Action labels written to the audit log."""

from __future__ import annotations

from enum import StrEnum


class AuditAction(StrEnum):
    USER_REGISTERED = "User Registered"
    USER_LOGIN = "User Login"
    USER_LOGOUT = "User Logout"
    ADMIN_CREATE_USER = "Admin Create User"
    UPDATE_USER = "Update User"
    RESET_PASSWORD = "Reset Password"
    DELETE_USER = "Delete User"
    CREATE_ANNOUNCEMENT = "Create Announcement"
    DELETE_ANNOUNCEMENT = "Delete Announcement"
    IMPERSONATE_USER = "Impersonate User"
    SYSTEM_RESTORE = "System Restore"
