"""
Post Repository

Database operations specific to the Post model.

Common Operations:
==================
- get_by_slug()              → Public article lookup
- slug_exists()              → Uniqueness pre-check before insert/update
- search()                   → Admin listing with filters + total count
- increment_views()          → Atomic views = views + 1
- list_published()           → Feeds, sitemaps and the search index
- list_published_since()     → Trending candidates, IndexNow, news sitemap
- list_due_scheduled()       → Drafts whose scheduled time has passed
- list_related_candidates()  → Same category or overlapping tags
- delete_with_dependents()   → Analytics events, comments, then posts
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.analytics import AnalyticsEvent
from src.shared.models.comment import Comment
from src.shared.models.enums import PostStatus
from src.shared.models.post import Post
from src.shared.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Post, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_slug(self, slug: str, *, published_only: bool = False) -> Optional[Post]:
        query = select(Post).where(Post.slug == slug)
        if published_only:
            query = query.where(Post.status == PostStatus.PUBLISHED)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(sql_count()).select_from(Post).where(Post.slug == slug)
        if exclude_id is not None:
            query = query.where(Post.id != exclude_id)
        result = await self.session.execute(query)
        return (result.scalar() or 0) > 0

    async def search(
        self,
        *,
        status: Optional[PostStatus] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        author_id: Optional[UUID] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Post], int]:
        """
        Filtered listing, newest first.

        Returns:
            (page of posts, total matching count)
        """
        conditions = []
        if status is not None:
            conditions.append(Post.status == status)
        if category:
            conditions.append(Post.category == category)
        if tag:
            conditions.append(Post.tags.contains([tag]))
        if author_id is not None:
            conditions.append(Post.author_id == author_id)
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(Post.title.ilike(pattern), Post.excerpt.ilike(pattern)))

        total_result = await self.session.execute(
            select(sql_count()).select_from(Post).where(*conditions)
        )
        result = await self.session.execute(
            select(Post)
            .where(*conditions)
            .order_by(Post.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total_result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLISHED CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_published(self, limit: int = 1000) -> list[Post]:
        result = await self.session.execute(
            select(Post)
            .where(Post.status == PostStatus.PUBLISHED)
            .order_by(Post.published_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_published_since(
        self,
        since: datetime,
        *,
        limit: int = 1000,
        exclude_ids: Sequence[UUID] = (),
        with_views_only: bool = False,
    ) -> list[Post]:
        query = select(Post).where(
            Post.status == PostStatus.PUBLISHED,
            Post.published_at >= since,
        )
        if exclude_ids:
            query = query.where(Post.id.not_in(list(exclude_ids)))
        if with_views_only:
            query = query.where(Post.views.is_not(None))
        result = await self.session.execute(
            query.order_by(Post.published_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def latest_published_at(self) -> Optional[datetime]:
        result = await self.session.execute(
            select(Post.published_at)
            .where(Post.status == PostStatus.PUBLISHED)
            .order_by(Post.published_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_due_scheduled(self, now: datetime) -> list[Post]:
        """Drafts with a scheduled published_at at or before now."""
        result = await self.session.execute(
            select(Post).where(
                Post.status == PostStatus.DRAFT,
                Post.published_at.is_not(None),
                Post.published_at <= now,
            )
        )
        return list(result.scalars().all())

    async def list_related_candidates(
        self,
        post_id: UUID,
        category: str,
        tags: Sequence[str],
        limit: int = 50,
    ) -> list[Post]:
        """Published posts sharing the category or at least one tag."""
        match = [Post.category == category]
        match.extend(Post.tags.contains([tag]) for tag in tags)
        result = await self.session.execute(
            select(Post)
            .where(
                Post.status == PostStatus.PUBLISHED,
                Post.id != post_id,
                or_(*match),
            )
            .order_by(Post.published_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment_views(self, post_id: UUID) -> None:
        await self.session.execute(
            update(Post).where(Post.id == post_id).values(views=Post.views + 1)
        )

    async def delete_with_dependents(self, ids: Sequence[UUID]) -> int:
        """
        Delete posts along with their analytics events and comments.

        Runs inside the caller's transaction, so a failure part-way rolls
        all three deletes back.

        Returns:
            Number of posts deleted
        """
        id_list = list(ids)
        await self.session.execute(
            delete(AnalyticsEvent).where(AnalyticsEvent.post_id.in_(id_list))
        )
        await self.session.execute(delete(Comment).where(Comment.post_id.in_(id_list)))
        result = await self.session.execute(delete(Post).where(Post.id.in_(id_list)))
        return result.rowcount or 0
