"""
PostRevision Repository
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.post_revision import PostRevision
from src.shared.repositories.base import BaseRepository


class PostRevisionRepository(BaseRepository[PostRevision]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PostRevision, session)

    async def list_for_post(self, post_id: UUID, limit: int = 20) -> list[PostRevision]:
        """Newest first."""
        result = await self.session.execute(
            select(PostRevision)
            .where(PostRevision.post_id == post_id)
            .order_by(PostRevision.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
