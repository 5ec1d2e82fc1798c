"""
Auth & Profile Schemas

Request/response models for authentication and team management.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.shared.models.enums import UserRole
from src.shared.schemas.common import BaseSchema


class RegisterRequest(BaseModel):
    """Schema for reader registration."""

    email: EmailStr
    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )
    full_name: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ProfileResponse(BaseSchema):
    """Schema for profile response."""

    id: UUID
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: UserRole
    created_at: datetime


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    user: ProfileResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class RoleUpdateRequest(BaseModel):
    role: UserRole
