"""
Comment Service

Public reader comments. New comments are sanitized and start as pending;
only approved comments are ever shown on the site.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import (
    CommentNotFoundError,
    PostNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.comment import Comment
from src.shared.models.enums import CommentStatus
from src.shared.models.profile import Profile
from src.shared.repositories.comment_repository import CommentRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.services.cache_service import CacheService
from src.shared.services.permissions import require_login, require_staff
from src.shared.utils.comment_tree import ThreadNode, build_thread
from src.shared.utils.constants import MAX_COMMENT_LENGTH
from src.shared.utils.sanitize import sanitize_html

logger = get_logger(__name__)


MODERATION_STATUSES = frozenset({CommentStatus.APPROVED, CommentStatus.REJECTED, CommentStatus.SPAM})


class CommentService:
    def __init__(self, session: AsyncSession, cache: Optional[CacheService] = None) -> None:
        self.session = session
        self.repo = CommentRepository(session)
        self.post_repo = PostRepository(session)
        self.cache = cache or CacheService()

    async def create_comment(
        self,
        user: Optional[Profile],
        post_id: UUID,
        content: Optional[str],
        parent_id: Optional[UUID] = None,
    ) -> Comment:
        """
        Submit a comment for moderation.

        Raises:
            AuthenticationError: Anonymous caller
            ValidationError: Empty or over-long content
            PostNotFoundError: Unknown post
        """
        user = require_login(user, "You must be logged in to comment")

        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment cannot be empty")
        if len(text) > MAX_COMMENT_LENGTH:
            raise ValidationError(f"Comment is too long (max {MAX_COMMENT_LENGTH} characters)")

        if not await self.post_repo.exists(post_id):
            raise PostNotFoundError(str(post_id))

        comment = await self.repo.create(
            post_id=post_id,
            user_id=user.id,
            parent_id=parent_id,
            content=sanitize_html(text),
            status=CommentStatus.PENDING,
        )
        logger.info("Comment submitted", comment_id=str(comment.id), post_id=str(post_id))

        self.cache.revalidate_on_commit(self.session, f"/news/{post_id}")
        return comment

    async def get_comments(self, post_id: UUID) -> List[ThreadNode[Comment]]:
        """Approved comments only, threaded oldest first."""
        return build_thread(await self.repo.list_for_post(post_id, status=CommentStatus.APPROVED))

    async def list_for_moderation(
        self,
        user: Profile,
        status: Optional[CommentStatus] = CommentStatus.PENDING,
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Comment], int]:
        require_staff(user)
        return await self.repo.list_by_status(status, offset=(page - 1) * page_size, limit=page_size)

    async def moderate_comment(self, user: Profile, comment_id: UUID, status: CommentStatus) -> Comment:
        require_staff(user)
        if status not in MODERATION_STATUSES:
            raise ValidationError("Status must be approved, rejected or spam")

        comment = await self.repo.get(comment_id)
        if not comment:
            raise CommentNotFoundError(str(comment_id))

        comment = await self.repo.apply(comment, status=status)
        logger.info("Comment moderated", comment_id=str(comment_id), status=status.value, by=str(user.id))
        self.cache.revalidate_on_commit(self.session, f"/news/{comment.post_id}")
        return comment
