"""
Social Task Service

Work items for sharing articles on social platforms, and their proof of
completion.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.core.exceptions import (
    AuthorizationError,
    SocialTaskNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.enums import (
    SocialPlatform,
    SocialTaskPriority,
    SocialTaskStatus,
)
from src.shared.models.profile import Profile
from src.shared.models.social_task import SocialTask, SocialTaskCompletion
from src.shared.repositories.post_repository import PostRepository
from src.shared.repositories.social_task_repository import SocialTaskRepository
from src.shared.services.permissions import is_owner_or_staff, require_login

logger = get_logger(__name__)


class SocialService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = SocialTaskRepository(session)
        self.post_repo = PostRepository(session)

    async def create_task(
        self,
        user: Optional[Profile],
        *,
        platform: SocialPlatform,
        task_title: str,
        post_id: Optional[UUID] = None,
        assigned_to: Optional[UUID] = None,
        task_description: Optional[str] = None,
        post_text: Optional[str] = None,
        due_date: Optional[datetime] = None,
        scheduled_date: Optional[datetime] = None,
        priority: SocialTaskPriority = SocialTaskPriority.MEDIUM,
    ) -> SocialTask:
        user = require_login(user)

        article_url = None
        if post_id:
            post = await self.post_repo.get(post_id)
            if post:
                article_url = f"{settings.SITE_URL}/news/{post.slug}"

        task = await self.repo.create(
            post_id=post_id,
            assigned_to=assigned_to,
            assigned_by=user.id,
            platform=platform,
            task_title=task_title,
            task_description=task_description,
            post_text=post_text,
            article_url=article_url,
            due_date=due_date,
            scheduled_date=scheduled_date,
            priority=priority,
            status=SocialTaskStatus.PENDING,
        )
        logger.info("Social task created", task_id=str(task.id), platform=platform.value)
        return task

    async def list_tasks(
        self,
        *,
        status: Optional[SocialTaskStatus] = None,
        platform: Optional[SocialPlatform] = None,
        assigned_to: Optional[UUID] = None,
    ) -> List[SocialTask]:
        return await self.repo.list_filtered(status=status, platform=platform, assigned_to=assigned_to)

    async def complete_task(
        self,
        user: Optional[Profile],
        task_id: UUID,
        completion_link: Optional[str],
        notes: Optional[str] = None,
    ) -> SocialTaskCompletion:
        """
        Record proof of completion and mark the task completed.

        Raises:
            ValidationError: Missing link
            SocialTaskNotFoundError: Unknown task
            AuthorizationError: Caller is neither the assignee nor staff
        """
        user = require_login(user)
        if not completion_link or not completion_link.strip():
            raise ValidationError("Completion link is required")

        task = await self.repo.get(task_id)
        if not task:
            raise SocialTaskNotFoundError(str(task_id))
        if not is_owner_or_staff(user, task.assigned_to):
            raise AuthorizationError("You do not have permission to complete this task")

        completion = await self.repo.add_completion(
            task_id=task.id,
            completed_by=user.id,
            completion_link=completion_link.strip(),
            completion_notes=notes,
        )
        await self.repo.apply(task, status=SocialTaskStatus.COMPLETED)
        logger.info("Social task completed", task_id=str(task.id), by=str(user.id))
        return completion
