"""
Profile Repository

Database operations specific to the Profile model.

Common Operations:
==================
- get_by_email()   → Find profile by (normalized) email
- email_exists()   → Check if email is already registered
- list_by_roles()  → Team listing for the admin console
"""

from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.enums import UserRole
from src.shared.models.profile import Profile
from src.shared.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Profile, session)

    async def get_by_email(self, email: str) -> Optional[Profile]:
        """Case-insensitive email lookup."""
        result = await self.session.execute(
            select(Profile).where(func.lower(Profile.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def list_by_roles(self, roles: Iterable[UserRole]) -> list[Profile]:
        result = await self.session.execute(
            select(Profile)
            .where(Profile.role.in_(list(roles)))
            .order_by(Profile.full_name.asc(), Profile.email.asc())
        )
        return list(result.scalars().all())
