"""
Feed Service

Builds the public XML/text documents and the search index, caching each
rendered body in Redis under "page:{path}" until a post mutation
revalidates it (see cache_service.FEED_PATHS) or the TTL runs out.

    GET /feed.xml
      If-Modified-Since >= latest published_at → 304, nothing rendered
      cached body                              → served as is
      otherwise                                → render, cache, serve
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
import json
from typing import Awaitable, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from src.shared.core.logging import get_logger
from src.shared.models.base import utcnow
from src.shared.repositories.collection_repository import CollectionRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.services.post_service import PostService
from src.shared.utils import feeds

logger = get_logger(__name__)


# Google caps a sitemap at 50k URLs
SITEMAP_POST_LIMIT = 45000


@dataclass
class FeedDocument:
    body: Optional[str]
    not_modified: bool = False
    last_modified: Optional[datetime] = None


class FeedService:
    def __init__(self, session: AsyncSession, redis: Optional[RedisAdapter] = None) -> None:
        self.session = session
        self.post_repo = PostRepository(session)
        self.collection_repo = CollectionRepository(session)
        self.redis = redis or get_redis_adapter()

    async def _cached(self, path: str, build: Callable[[], Awaitable[str]]) -> str:
        body = self.redis.get_page(path)
        if body is not None:
            return body

        body = await build()
        self.redis.set_page(path, body)
        logger.debug("Page rendered", path=path, size=len(body))
        return body

    async def sitemap(self, now: Optional[datetime] = None) -> str:
        now = now or utcnow()

        async def build() -> str:
            posts = await self.post_repo.list_published(limit=SITEMAP_POST_LIMIT)
            collections = await self.collection_repo.list_all()
            return feeds.render_sitemap(feeds.sitemap_entries(posts, collections, now))

        return await self._cached("/sitemap.xml", build)

    async def news_sitemap(self, now: Optional[datetime] = None) -> str:
        now = now or utcnow()

        async def build() -> str:
            posts = await self.post_repo.list_published_since(
                now - timedelta(hours=feeds.NEWS_WINDOW_HOURS),
                limit=feeds.NEWS_ITEM_LIMIT,
            )
            return feeds.render_news_sitemap(posts)

        return await self._cached("/sitemap-news.xml", build)

    async def rss(self, if_modified_since: Optional[str] = None, now: Optional[datetime] = None) -> FeedDocument:
        now = now or utcnow()
        latest = await self.post_repo.latest_published_at()
        if feeds.is_not_modified(if_modified_since, latest):
            return FeedDocument(body=None, not_modified=True, last_modified=latest)

        async def build() -> str:
            posts = await self.post_repo.list_published(limit=feeds.RSS_ITEM_LIMIT)
            return feeds.render_rss([p for p in posts if p.published_at], now)

        body = await self._cached("/feed.xml", build)
        return FeedDocument(body=body, last_modified=latest or now)

    def robots(self) -> str:
        return feeds.render_robots()

    async def search_index(self) -> str:
        """JSON array of lightweight post records."""

        async def build() -> str:
            records = await PostService(self.session).search_index()
            return json.dumps(records, ensure_ascii=False)

        return await self._cached("/api/search-index", build)
