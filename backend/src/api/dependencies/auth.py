"""
Authentication Dependencies

FastAPI dependencies for user authentication and cron authorization.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and validate JWT from header
           │
           ▼
    get_current_profile()     ← Load the Profile row (role lives there)

    get_optional_profile()    ← Same, but anonymous requests get None

    verify_cron_secret()      ← "Authorization: Bearer {CRON_SECRET}"

Type Aliases:
=============
    CurrentProfile  - Authenticated Profile
    OptionalProfile - Profile or None (public endpoints that personalize)

Usage:
======
    from src.api.dependencies.auth import CurrentProfile

    @router.get("/me")
    async def get_me(profile: CurrentProfile):
        return profile

    @router.post("/cron/publish-scheduled", dependencies=[Depends(verify_cron_secret)])
    async def publish_scheduled(...): ...
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.database import get_db
from src.config.settings import settings
from src.shared.core.exceptions import AuthenticationError, ConfigurationError
from src.shared.core.logging import get_logger
from src.shared.models.profile import Profile
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.utils.security import SecurityUtils

logger = get_logger(__name__)

# Missing headers are reported as 401 by get_current_user_token, not 403
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def _load_profile(payload: dict, db: AsyncSession) -> Profile:
    user_id = payload.get("user_id")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        profile_id = UUID(str(user_id))
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    profile = await ProfileRepository(db).get(profile_id)
    if not profile:
        raise AuthenticationError("User no longer exists")
    return profile


async def get_current_profile(
    token: Annotated[dict, Depends(get_current_user_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Profile:
    """
    Get the authenticated Profile.

    The role is read from the database on every request, so a role change
    takes effect without re-issuing tokens.
    """
    return await _load_profile(token, db)


async def get_optional_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[Profile]:
    """Profile for a valid token, None for anonymous or invalid ones."""
    if not credentials:
        return None
    try:
        payload = SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        return await _load_profile(payload, db)
    except (ValueError, AuthenticationError):
        return None


async def verify_cron_secret(
    authorization: Annotated[Optional[str], Header()] = None,
) -> None:
    """
    Guard for scheduler-triggered endpoints.

    Without a configured secret, production refuses every call and
    development lets them through.
    """
    if not settings.CRON_SECRET:
        if settings.is_production:
            logger.error("CRON_SECRET is not configured")
            raise ConfigurationError("Server configuration error")
        return

    if not SecurityUtils.bearer_matches(authorization, settings.CRON_SECRET):
        raise AuthenticationError("Unauthorized")


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
OptionalProfile = Annotated[Optional[Profile], Depends(get_optional_profile)]
