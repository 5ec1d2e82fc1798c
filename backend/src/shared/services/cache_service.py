"""
Cache Revalidation

Generated public documents (feed, sitemaps, search index, robots.txt) are
cached in Redis under "page:{path}". Mutations that change what those
documents contain call revalidate() with the affected paths.

Services purge through the *_on_commit variants, which wait for the
transaction to commit so a concurrent reader cannot re-cache the old
document in between.

Revalidation is best effort: a Redis outage means stale pages until the
TTL runs out, never a failed mutation.
"""

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from src.shared.core.logging import get_logger
from src.shared.db.session import after_commit

logger = get_logger(__name__)


# Documents derived from the set of published posts
FEED_PATHS = (
    "/feed.xml",
    "/sitemap.xml",
    "/sitemap-news.xml",
    "/api/search-index",
)


def post_paths(slugs: Iterable[Optional[str]]) -> List[str]:
    return [*FEED_PATHS, "/", *(f"/news/{slug}" for slug in slugs if slug)]


class CacheService:
    def __init__(self, redis: Optional[RedisAdapter] = None) -> None:
        self.redis = redis or get_redis_adapter()

    def revalidate(self, *paths: str) -> int:
        """Drop cached pages for paths. Returns how many entries were removed."""
        if not paths:
            return 0
        removed = self.redis.delete_pages(*paths)
        logger.debug("Revalidated paths", paths=list(paths), removed=removed)
        return removed

    def revalidate_on_commit(self, session: AsyncSession, *paths: str) -> None:
        if paths:
            after_commit(session, lambda: self.revalidate(*paths))

    def revalidate_posts_on_commit(self, session: AsyncSession, slugs: Iterable[Optional[str]] = ()) -> None:
        """Feed documents plus each post's own page."""
        self.revalidate_on_commit(session, *post_paths(slugs))
