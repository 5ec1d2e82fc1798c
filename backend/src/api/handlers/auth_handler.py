"""
Authentication Handler

Registration, login, the current profile and team management.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers only parse requests, call services and shape responses. Service
exceptions (InshortException subclasses) are turned into JSON errors by the
global handler in middleware/error_handler.py.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import AuthServiceDep
from src.shared.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    RoleUpdateRequest,
)


router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(user_data: RegisterRequest, auth_service: AuthServiceDep):
    """
    Register a new reader account and return a token.

    Raises:
        409: If email already registered
    """
    profile, access_token, expires_in = await auth_service.register(
        email=user_data.email,
        password=user_data.password,
        full_name=user_data.full_name,
    )
    return AuthResponse(
        user=ProfileResponse.model_validate(profile),
        access_token=access_token,
        expires_in=expires_in,
    )


@router.post("/login", response_model=AuthResponse)
async def login(credentials: LoginRequest, auth_service: AuthServiceDep):
    """
    Authenticate and return a JWT.

    Raises:
        401: If credentials are invalid
    """
    profile, access_token, expires_in = await auth_service.login(
        email=credentials.email,
        password=credentials.password,
    )
    return AuthResponse(
        user=ProfileResponse.model_validate(profile),
        access_token=access_token,
        expires_in=expires_in,
    )


@router.get("/me", response_model=ProfileResponse)
async def get_me(current_profile: CurrentProfile):
    return current_profile


@router.get("/team", response_model=List[ProfileResponse])
async def list_team(current_profile: CurrentProfile, auth_service: AuthServiceDep):
    """Staff profiles (admins only)."""
    return await auth_service.list_team(current_profile)


@router.patch("/team/{user_id}/role", response_model=ProfileResponse)
async def update_role(
    user_id: UUID,
    request: RoleUpdateRequest,
    current_profile: CurrentProfile,
    auth_service: AuthServiceDep,
):
    """Change a user's role (admins only)."""
    return await auth_service.update_role(current_profile, user_id, request.role)
