"""
Collection Repositories

CollectionRepository for the collection rows, CollectionPostRepository for
membership and ordering (upserts on the (collection_id, post_id) key).
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.base import utcnow
from src.shared.models.collection import Collection, CollectionPost
from src.shared.models.enums import PostStatus
from src.shared.models.post import Post
from src.shared.repositories.base import BaseRepository


class CollectionRepository(BaseRepository[Collection]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Collection, session)

    async def get_by_slug(self, slug: str) -> Optional[Collection]:
        result = await self.session.execute(select(Collection).where(Collection.slug == slug))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Collection]:
        result = await self.session.execute(select(Collection).order_by(Collection.created_at.desc()))
        return list(result.scalars().all())


class CollectionPostRepository(BaseRepository[CollectionPost]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(CollectionPost, session)

    async def upsert(self, collection_id: UUID, post_id: UUID, order_index: int) -> None:
        stmt = (
            pg_insert(CollectionPost)
            .values(collection_id=collection_id, post_id=post_id, order_index=order_index)
            .on_conflict_do_update(
                index_elements=[CollectionPost.collection_id, CollectionPost.post_id],
                set_={"order_index": order_index, "updated_at": utcnow()},
            )
        )
        await self.session.execute(stmt)

    async def remove(self, collection_id: UUID, post_id: UUID) -> bool:
        result = await self.session.execute(
            delete(CollectionPost).where(
                CollectionPost.collection_id == collection_id,
                CollectionPost.post_id == post_id,
            )
        )
        return (result.rowcount or 0) > 0

    async def collection_ids_for_post(self, post_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(CollectionPost.collection_id).where(CollectionPost.post_id == post_id)
        )
        return list(result.scalars().all())

    async def list_posts(
        self,
        collection_id: UUID,
        *,
        published_only: bool = False,
    ) -> list[CollectionPost]:
        """Members ordered by order_index."""
        query = select(CollectionPost).where(CollectionPost.collection_id == collection_id)
        if published_only:
            query = query.join(Post, Post.id == CollectionPost.post_id).where(
                Post.status == PostStatus.PUBLISHED
            )
        result = await self.session.execute(query.order_by(CollectionPost.order_index.asc()))
        return list(result.scalars().all())

    async def memberships_for_post(self, post_id: UUID) -> list[CollectionPost]:
        result = await self.session.execute(
            select(CollectionPost).where(CollectionPost.post_id == post_id)
        )
        return list(result.scalars().all())
