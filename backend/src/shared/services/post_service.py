"""
Post Service

Business logic for articles: authoring, listing, scheduling, ranking.

Status changes between review states live in WorkflowService; this
service only creates posts as drafts and, for scheduled posts, promotes
them to published once their time comes.

Usage:
======
    from src.shared.services.post_service import PostService

    service = PostService(db)
    post = await service.create_post(user, {"title": ..., "slug": ..., ...})
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import (
    AuthorizationError,
    ConflictError,
    PostNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.base import utcnow
from src.shared.models.enums import PostStatus
from src.shared.models.post import Post
from src.shared.models.post_revision import PostRevision
from src.shared.models.profile import Profile
from src.shared.repositories.collection_repository import CollectionPostRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.repositories.revision_repository import PostRevisionRepository
from src.shared.services.cache_service import CacheService
from src.shared.services.permissions import is_owner_or_staff, require_staff
from src.shared.utils.constants import (
    MAX_REVISIONS_RETURNED,
    NEXT_ARTICLES_DEFAULT_LIMIT,
    SEARCH_INDEX_LIMIT,
    TRENDING_DEFAULT_LIMIT,
    TRENDING_WINDOW_DAYS,
)
from src.shared.utils.content import calculate_reading_time
from src.shared.utils.related import rank_related
from src.shared.utils.trending import rank_trending
from src.shared.utils.validation import validate_post

logger = get_logger(__name__)


EDITABLE_FIELDS = (
    "title",
    "slug",
    "excerpt",
    "content",
    "featured_image_url",
    "meta_description",
    "category",
    "tags",
)

# Changes to these fields are kept in the revision history
REVISIONED_FIELDS = ("title", "excerpt", "content")


@dataclass
class PaginatedPosts:
    """Paginated list of posts."""

    items: List[Post]
    total: int
    page: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class PostService:
    """
    Service for post-related business logic.

    Handles:
    - Create/update with validation, slug uniqueness and revisions
    - Filtered listing and slug lookup
    - Bulk delete with dependent rows
    - Editor's pick, view counting, scheduling
    - Trending and "read next" ranking
    """

    def __init__(self, session: AsyncSession, cache: Optional[CacheService] = None) -> None:
        self.session = session
        self.repo = PostRepository(session)
        self.revision_repo = PostRevisionRepository(session)
        self.collection_post_repo = CollectionPostRepository(session)
        self.cache = cache or CacheService()

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_post(self, post_id: UUID) -> Post:
        post = await self.repo.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def get_published_by_slug(self, slug: str) -> Post:
        post = await self.repo.get_by_slug(slug, published_only=True)
        if not post:
            raise PostNotFoundError(slug)
        return post

    async def list_posts(
        self,
        *,
        status: Optional[PostStatus] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        author_id: Optional[UUID] = None,
        search: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> PaginatedPosts:
        items, total = await self.repo.search(
            status=status,
            category=category,
            tag=tag,
            author_id=author_id,
            search=search,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return PaginatedPosts(items=items, total=total, page=page, page_size=page_size)

    async def get_revisions(self, post_id: UUID) -> List[PostRevision]:
        await self.get_post(post_id)
        return await self.revision_repo.list_for_post(post_id, limit=MAX_REVISIONS_RETURNED)

    async def search_index(self) -> List[Dict[str, Any]]:
        """Lightweight records for client-side search, newest first."""
        posts = await self.repo.list_published(limit=SEARCH_INDEX_LIMIT)
        return [
            {
                "id": str(p.id),
                "title": p.title,
                "slug": p.slug,
                "excerpt": p.excerpt,
                "category": p.category,
                "published_at": p.published_at.isoformat() if p.published_at else None,
                "tags": p.tags or [],
            }
            for p in posts
        ]

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHORING
    # ═══════════════════════════════════════════════════════════════════════════

    def _validate(self, data: Mapping[str, Any]) -> None:
        result = validate_post(data)
        if not result.valid:
            raise ValidationError("Post validation failed", details=result.to_details())

    async def create_post(self, user: Profile, data: Mapping[str, Any]) -> Post:
        """
        Create a draft.

        Raises:
            AuthorizationError: Caller is not admin/editor
            ValidationError: Field rules failed (details.errors lists them)
            ConflictError: Slug already taken
        """
        require_staff(user)
        self._validate(data)

        if await self.repo.slug_exists(data["slug"]):
            raise ConflictError("A post with this slug already exists")

        fields = {k: data[k] for k in EDITABLE_FIELDS if k in data}
        post = await self.repo.create(
            **fields,
            author_id=user.id,
            status=PostStatus.DRAFT,
            reading_time=calculate_reading_time(data.get("content")),
        )
        logger.info("Post created", post_id=str(post.id), author_id=str(user.id))
        return post

    async def update_post(self, user: Profile, post_id: UUID, data: Mapping[str, Any]) -> Post:
        """
        Partial update; the merged post must still validate.

        A revision holding the previous title/excerpt/content is written
        whenever any of them changes.
        """
        post = await self.get_post(post_id)
        if not is_owner_or_staff(user, post.author_id):
            raise AuthorizationError("You do not have permission to edit this post")

        changes = {k: data[k] for k in EDITABLE_FIELDS if k in data}
        merged = {k: getattr(post, k) for k in EDITABLE_FIELDS}
        merged.update(changes)
        self._validate(merged)

        if "slug" in changes and changes["slug"] != post.slug:
            if await self.repo.slug_exists(changes["slug"], exclude_id=post.id):
                raise ConflictError("A post with this slug already exists")

        if any(k in changes and changes[k] != getattr(post, k) for k in REVISIONED_FIELDS):
            await self.revision_repo.create(
                post_id=post.id,
                author_id=user.id,
                title=post.title,
                excerpt=post.excerpt,
                content=post.content,
            )

        if "content" in changes:
            changes["reading_time"] = calculate_reading_time(changes["content"])

        post = await self.repo.apply(post, **changes)
        if post.status == PostStatus.PUBLISHED:
            self.cache.revalidate_posts_on_commit(self.session, [post.slug])
        return post

    async def delete_posts(self, user: Profile, ids: Sequence[UUID]) -> int:
        """Delete posts with their analytics events and comments in one transaction."""
        require_staff(user)
        if not ids:
            return 0

        posts = await self.repo.get_by_ids(list(ids))
        deleted = await self.repo.delete_with_dependents(ids)
        logger.info("Posts deleted", count=deleted, by=str(user.id))
        self.cache.revalidate_posts_on_commit(self.session, [p.slug for p in posts])
        return deleted

    async def toggle_editors_pick(self, user: Profile, post_id: UUID, is_pick: bool) -> Post:
        require_staff(user)
        post = await self.get_post(post_id)
        post = await self.repo.apply(post, is_editors_pick=is_pick)
        self.cache.revalidate_on_commit(self.session, "/", f"/news/{post.slug}")
        return post

    async def increment_view_count(self, post_id: UUID) -> bool:
        """Atomic views + 1. Never raises; a lost view is not worth a 500."""
        try:
            async with self.session.begin_nested():
                await self.repo.increment_views(post_id)
        except Exception as e:
            logger.warning("View count increment failed", post_id=str(post_id), error=str(e))
            return False
        return True

    async def schedule_post(self, user: Profile, post_id: UUID, publish_at: datetime) -> Post:
        """Set published_at; the post stays a draft until the scheduled job runs."""
        require_staff(user)
        post = await self.get_post(post_id)
        return await self.repo.apply(post, published_at=publish_at)

    async def publish_scheduled_posts(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Promote due drafts to published.

        This is a system action and skips the workflow transition table.

        Returns:
            {"published": n, "posts": [{"id", "title"}]}
        """
        now = now or utcnow()
        due = await self.repo.list_due_scheduled(now)
        for post in due:
            await self.repo.apply(post, status=PostStatus.PUBLISHED)

        if due:
            logger.info("Scheduled posts published", count=len(due))
            self.cache.revalidate_posts_on_commit(self.session, [p.slug for p in due])

        return {
            "published": len(due),
            "posts": [{"id": str(p.id), "title": p.title} for p in due],
        }

    # ═══════════════════════════════════════════════════════════════════════════
    # RANKING
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_trending(
        self,
        exclude_ids: Sequence[UUID] = (),
        limit: int = TRENDING_DEFAULT_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[Post]:
        now = now or utcnow()
        candidates = await self.repo.list_published_since(
            now - timedelta(days=TRENDING_WINDOW_DAYS),
            exclude_ids=exclude_ids,
            with_views_only=True,
        )
        return rank_trending(candidates, now, limit)

    async def _next_in_collection(self, post_id: UUID) -> Optional[Post]:
        for membership in await self.collection_post_repo.memberships_for_post(post_id):
            members = await self.collection_post_repo.list_posts(
                membership.collection_id, published_only=True
            )
            for item in members:
                if item.order_index > membership.order_index and item.post_id != post_id:
                    return item.post
        return None

    async def get_next_articles(
        self,
        post_id: UUID,
        limit: int = NEXT_ARTICLES_DEFAULT_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[Post]:
        """
        "Read next" rail: the next post in the same collection first, then
        related posts by score, then the latest posts to fill any gap.
        """
        now = now or utcnow()
        current = await self.get_post(post_id)

        picked: List[Post] = []
        seen = {current.id}

        def take(posts: Sequence[Post]) -> None:
            for p in posts:
                if len(picked) >= limit:
                    return
                if p.id not in seen:
                    seen.add(p.id)
                    picked.append(p)

        series_next = await self._next_in_collection(current.id)
        if series_next is not None:
            take([series_next])

        candidates = await self.repo.list_related_candidates(
            current.id, current.category, current.tags or []
        )
        take(rank_related(current, candidates, now))

        if len(picked) < limit:
            take(await self.repo.list_published(limit=limit + len(seen)))

        return picked
