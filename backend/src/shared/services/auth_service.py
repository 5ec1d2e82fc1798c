"""
Authentication Service

Business logic for registration, login and team management.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Repositories (data access)
- External services (if any)
- Domain logic

Usage:
======
    from src.shared.services.auth_service import AuthService

    service = AuthService(db)
    profile, token, expires = await service.register(email, password, full_name)
"""

from datetime import timedelta
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    ProfileNotFoundError,
)
from src.shared.core.logging import get_logger
from src.shared.models.enums import STAFF_ROLES, UserRole
from src.shared.models.profile import Profile
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.services.permissions import require_admin
from src.shared.utils.security import SecurityUtils

logger = get_logger(__name__)


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - Registration with email/password (new profiles are readers)
    - Login
    - JWT token generation
    - Team listing and role changes (admins only)

    Attributes:
        session: Database session
        repo: ProfileRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ProfileRepository(session)

    def _issue_token(self, profile: Profile) -> Tuple[str, int]:
        token = SecurityUtils.create_access_token(
            data={"user_id": str(profile.id), "email": profile.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def register(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> Tuple[Profile, str, int]:
        """
        Register a new reader account.

        Args:
            email: Email address (stored lower-cased)
            password: Plain text password (will be hashed)
            full_name: Display name

        Returns:
            Tuple of (profile, access_token, expires_in_seconds)

        Raises:
            DuplicateResourceError: If email already registered
        """
        email = email.strip().lower()
        if await self.repo.email_exists(email):
            raise DuplicateResourceError("Email already registered")

        profile = await self.repo.create(
            email=email,
            password_hash=SecurityUtils.hash_password(password),
            full_name=full_name,
            role=UserRole.READER,
        )
        logger.info("Profile registered", user_id=str(profile.id))

        token, expires_in = self._issue_token(profile)
        return profile, token, expires_in

    async def login(self, email: str, password: str) -> Tuple[Profile, str, int]:
        """
        Authenticate and issue a token.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        profile = await self.repo.get_by_email(email)
        if not profile or not SecurityUtils.verify_password(password, profile.password_hash):
            raise AuthenticationError("Invalid email or password")

        token, expires_in = self._issue_token(profile)
        return profile, token, expires_in

    async def get_profile(self, user_id: UUID) -> Profile:
        profile = await self.repo.get(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def list_team(self, user: Profile) -> List[Profile]:
        require_admin(user)
        return await self.repo.list_by_roles(STAFF_ROLES)

    async def update_role(self, user: Profile, user_id: UUID, role: UserRole) -> Profile:
        require_admin(user)
        profile = await self.get_profile(user_id)
        profile = await self.repo.apply(profile, role=role)
        logger.info("Role updated", user_id=str(user_id), role=role.value, by=str(user.id))
        return profile
