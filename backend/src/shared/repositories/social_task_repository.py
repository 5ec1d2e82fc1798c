"""
SocialTask Repository
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.enums import SocialPlatform, SocialTaskStatus
from src.shared.models.social_task import SocialTask, SocialTaskCompletion
from src.shared.repositories.base import BaseRepository


class SocialTaskRepository(BaseRepository[SocialTask]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(SocialTask, session)

    async def list_filtered(
        self,
        *,
        status: Optional[SocialTaskStatus] = None,
        platform: Optional[SocialPlatform] = None,
        assigned_to: Optional[UUID] = None,
    ) -> list[SocialTask]:
        query = self._apply_filters(
            select(SocialTask),
            {"status": status, "platform": platform, "assigned_to": assigned_to},
        )
        result = await self.session.execute(
            query.order_by(SocialTask.due_date.asc().nulls_last(), SocialTask.created_at.desc())
        )
        return list(result.scalars().all())

    async def add_completion(
        self,
        *,
        task_id: UUID,
        completed_by: UUID,
        completion_link: str,
        completion_notes: Optional[str],
    ) -> SocialTaskCompletion:
        completion = SocialTaskCompletion(
            task_id=task_id,
            completed_by=completed_by,
            completion_link=completion_link,
            completion_notes=completion_notes,
        )
        self.session.add(completion)
        await self.session.flush()
        await self.session.refresh(completion)
        return completion
