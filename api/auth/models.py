# api/auth/models.py
"""
Pydantic models for authentication and user management endpoints.
"""
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from core.schemas import CamelModel


class LoginRequest(CamelModel):
    """Login credentials."""
    email: EmailStr
    password: str


class AuthProfile(CamelModel):
    """The identity a client keeps for the session."""
    id: str
    name: str
    email: str
    role: Literal["admin", "user"]
    employee_id: str | None = None


class LoginResponse(CamelModel):
    """Identity plus the opaque session token."""
    user: AuthProfile
    token: str


class UserCreate(CamelModel):
    """Request to create a login account."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Literal["admin", "user"] = "user"
    department: str | None = None
    should_create_employee: bool = False


class PasswordReset(CamelModel):
    password: str = Field(..., min_length=1)


class UserRead(CamelModel):
    """User data response."""
    id: str
    name: str
    email: str
    role: str
    employee_id: str | None = None
    created_at: datetime | None = None
