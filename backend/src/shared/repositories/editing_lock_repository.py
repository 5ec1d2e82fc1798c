"""
EditingLock Repository

The unique constraint on editing_locks.post_id is the only mutual
exclusion: try_insert() runs inside a SAVEPOINT so a losing racer gets
False back and the surrounding transaction stays usable.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.editing_lock import EditingLock
from src.shared.repositories.base import BaseRepository


class EditingLockRepository(BaseRepository[EditingLock]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(EditingLock, session)

    async def get_for_post(self, post_id: UUID) -> Optional[EditingLock]:
        result = await self.session.execute(
            select(EditingLock).where(EditingLock.post_id == post_id)
        )
        return result.scalar_one_or_none()

    async def get_active(self, post_id: UUID, now: datetime) -> Optional[EditingLock]:
        result = await self.session.execute(
            select(EditingLock).where(
                EditingLock.post_id == post_id,
                EditingLock.expires_at > now,
            )
        )
        return result.scalar_one_or_none()

    async def delete_expired(self, post_id: UUID, now: datetime) -> None:
        await self.session.execute(
            delete(EditingLock).where(
                EditingLock.post_id == post_id,
                EditingLock.expires_at <= now,
            )
        )

    async def try_insert(
        self,
        *,
        post_id: UUID,
        user_id: UUID,
        user_email: str,
        expires_at: datetime,
    ) -> bool:
        """Insert-if-absent. Returns False when another lock row already exists."""
        try:
            async with self.session.begin_nested():
                self.session.add(
                    EditingLock(
                        post_id=post_id,
                        user_id=user_id,
                        user_email=user_email,
                        expires_at=expires_at,
                    )
                )
        except IntegrityError:
            return False
        return True

    async def delete_for_user(self, post_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            delete(EditingLock).where(
                EditingLock.post_id == post_id,
                EditingLock.user_id == user_id,
            )
        )
        return (result.rowcount or 0) > 0
