"""Pydantic schemas for authentication requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from skillflow.models import User

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, description="Display name")
    email: str = Field(description="Login email, unique across accounts")
    password: str = Field(description=f"At least {MIN_PASSWORD_LENGTH} characters")


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    """Signed-in user plus the token to send as ``x-auth-token``."""

    user: User
    token: str
