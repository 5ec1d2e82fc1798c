"""
Collection Service

Curated series of posts. Any signed-in user may start a collection and
edit their own; membership and ordering are editorial actions.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import (
    AuthorizationError,
    CollectionNotFoundError,
    ConflictError,
    PostNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.collection import Collection
from src.shared.models.post import Post
from src.shared.models.profile import Profile
from src.shared.repositories.collection_repository import (
    CollectionPostRepository,
    CollectionRepository,
)
from src.shared.repositories.post_repository import PostRepository
from src.shared.services.cache_service import CacheService
from src.shared.services.permissions import is_owner_or_staff, require_login, require_staff

logger = get_logger(__name__)


COLLECTION_PATHS = ("/collections", "/admin/collections")
EDITABLE_FIELDS = ("title", "slug", "description", "featured_image_url")


class CollectionService:
    def __init__(self, session: AsyncSession, cache: Optional[CacheService] = None) -> None:
        self.session = session
        self.repo = CollectionRepository(session)
        self.member_repo = CollectionPostRepository(session)
        self.post_repo = PostRepository(session)
        self.cache = cache or CacheService()

    def _revalidate(self, slug: Optional[str] = None) -> None:
        paths = list(COLLECTION_PATHS)
        if slug:
            paths.append(f"/collections/{slug}")
        self.cache.revalidate_on_commit(self.session, *paths)

    async def _get(self, collection_id: UUID) -> Collection:
        collection = await self.repo.get(collection_id)
        if not collection:
            raise CollectionNotFoundError(str(collection_id))
        return collection

    async def list_collections(self) -> List[Collection]:
        return await self.repo.list_all()

    async def get_collection_by_slug(self, slug: str) -> Tuple[Collection, List[Post]]:
        """Collection with its published posts in order."""
        collection = await self.repo.get_by_slug(slug)
        if not collection:
            raise CollectionNotFoundError(slug)
        members = await self.member_repo.list_posts(collection.id, published_only=True)
        return collection, [m.post for m in members]

    async def get_post_collections(self, post_id: UUID) -> List[UUID]:
        return await self.member_repo.collection_ids_for_post(post_id)

    async def create_collection(self, user: Optional[Profile], data: Mapping[str, Any]) -> Collection:
        user = require_login(user)
        if not data.get("title") or not data.get("slug"):
            raise ValidationError("Title and slug are required")
        if await self.repo.get_by_slug(data["slug"]):
            raise ConflictError("A collection with this slug already exists")

        collection = await self.repo.create(
            **{k: data[k] for k in EDITABLE_FIELDS if k in data},
            created_by=user.id,
        )
        logger.info("Collection created", collection_id=str(collection.id), by=str(user.id))
        self._revalidate()
        return collection

    async def update_collection(
        self,
        user: Optional[Profile],
        collection_id: UUID,
        data: Mapping[str, Any],
    ) -> Collection:
        user = require_login(user)
        collection = await self._get(collection_id)
        if not is_owner_or_staff(user, collection.created_by):
            raise AuthorizationError("You do not have permission to edit this collection")

        changes = {k: data[k] for k in EDITABLE_FIELDS if k in data}
        if "title" in changes and not changes["title"]:
            raise ValidationError("Title and slug are required")
        if "slug" in changes:
            if not changes["slug"]:
                raise ValidationError("Title and slug are required")
            other = await self.repo.get_by_slug(changes["slug"])
            if other and other.id != collection.id:
                raise ConflictError("A collection with this slug already exists")

        collection = await self.repo.apply(collection, **changes)
        self._revalidate(collection.slug)
        return collection

    async def delete_collection(self, user: Profile, collection_id: UUID) -> None:
        require_staff(user)
        collection = await self._get(collection_id)
        await self.repo.delete(collection.id)
        logger.info("Collection deleted", collection_id=str(collection_id), by=str(user.id))
        self._revalidate(collection.slug)

    # ═══════════════════════════════════════════════════════════════════════════
    # MEMBERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    async def add_post(
        self,
        user: Profile,
        collection_id: UUID,
        post_id: UUID,
        order_index: int = 0,
    ) -> None:
        require_staff(user)
        collection = await self._get(collection_id)
        if not await self.post_repo.exists(post_id):
            raise PostNotFoundError(str(post_id))

        await self.member_repo.upsert(collection.id, post_id, order_index)
        self._revalidate(collection.slug)

    async def remove_post(self, user: Profile, collection_id: UUID, post_id: UUID) -> bool:
        require_staff(user)
        collection = await self._get(collection_id)
        removed = await self.member_repo.remove(collection.id, post_id)
        self._revalidate(collection.slug)
        return removed

    async def reorder_posts(
        self,
        user: Profile,
        collection_id: UUID,
        order: Sequence[Dict[str, Any]],
    ) -> None:
        """order: [{"post_id": UUID, "new_index": int}, ...]"""
        require_staff(user)
        collection = await self._get(collection_id)
        for entry in order:
            await self.member_repo.upsert(collection.id, entry["post_id"], entry["new_index"])
        self._revalidate(collection.slug)
