"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_profile(), CurrentProfile, OptionalProfile
- Cron: verify_cron_secret()
- Pagination: get_pagination(), Pagination
- Services: get_*_service() functions and *ServiceDep aliases

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        service: PostService = Depends(get_post_service),
        user: Profile = Depends(get_current_profile),
    ):

    # Write this:
    async def handler(service: PostServiceDep, user: CurrentProfile):
"""

from src.api.dependencies.database import (
    get_db,
    DbSession,
)
from src.api.dependencies.auth import (
    get_current_user_token,
    get_current_profile,
    get_optional_profile,
    verify_cron_secret,
    CurrentProfile,
    OptionalProfile,
)
from src.api.dependencies.pagination import get_pagination, Pagination

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user_token",
    "get_current_profile",
    "get_optional_profile",
    "verify_cron_secret",
    "CurrentProfile",
    "OptionalProfile",
    # Pagination
    "get_pagination",
    "Pagination",
]
