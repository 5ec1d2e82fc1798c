"""
Comment Repositories

CommentRepository handles public comments (moderation queue, approved
threads); PostCommentRepository handles the internal workflow thread.
Both return flat rows ordered oldest first; threading happens in
utils/comment_tree.py.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.comment import Comment, PostComment
from src.shared.models.enums import CommentStatus
from src.shared.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    async def list_for_post(
        self,
        post_id: UUID,
        status: Optional[CommentStatus] = CommentStatus.APPROVED,
    ) -> list[Comment]:
        query = select(Comment).where(Comment.post_id == post_id)
        if status is not None:
            query = query.where(Comment.status == status)
        result = await self.session.execute(query.order_by(Comment.created_at.asc()))
        return list(result.scalars().all())

    async def list_by_status(
        self,
        status: Optional[CommentStatus],
        *,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Comment], int]:
        """Moderation queue, newest first."""
        conditions = [Comment.status == status] if status is not None else []
        total = await self.session.execute(
            select(sql_count()).select_from(Comment).where(*conditions)
        )
        result = await self.session.execute(
            select(Comment)
            .where(*conditions)
            .order_by(Comment.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total.scalar() or 0


class PostCommentRepository(BaseRepository[PostComment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PostComment, session)

    async def list_for_post(self, post_id: UUID) -> list[PostComment]:
        result = await self.session.execute(
            select(PostComment)
            .where(PostComment.post_id == post_id)
            .order_by(PostComment.created_at.asc())
        )
        return list(result.scalars().all())
