"""
Integration Service

Third-party lookups used by the editor (stock photos, link previews)
and the search-engine notification cron.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.adapters.indexing_adapter import IndexingAdapter, get_indexing_adapter
from src.shared.adapters.link_preview_adapter import (
    LinkPreviewAdapter,
    get_link_preview_adapter,
    normalize_url,
)
from src.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from src.shared.adapters.unsplash_adapter import UnsplashAdapter, get_unsplash_adapter
from src.shared.core.exceptions import ConfigurationError, ExternalServiceError, ValidationError
from src.shared.core.logging import get_logger
from src.shared.models.base import utcnow
from src.shared.repositories.post_repository import PostRepository

logger = get_logger(__name__)


LINK_PREVIEW_TTL_SECONDS = 3600
LINK_PREVIEW_PREFIX = "link-preview:"
INDEXNOW_WINDOW_HOURS = 24


class IntegrationService:
    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        unsplash: Optional[UnsplashAdapter] = None,
        link_preview: Optional[LinkPreviewAdapter] = None,
        indexing: Optional[IndexingAdapter] = None,
        redis: Optional[RedisAdapter] = None,
    ) -> None:
        self.session = session
        self.unsplash = unsplash or get_unsplash_adapter()
        self.link_preview = link_preview or get_link_preview_adapter()
        self.indexing = indexing or get_indexing_adapter()
        self.redis = redis or get_redis_adapter()

    async def search_photos(self, query: str, page: int = 1) -> Dict[str, Any]:
        return await self.unsplash.search_photos(query, page)

    async def link_preview(self, url: Optional[str]) -> Dict[str, Any]:
        """Preview for url, served from Redis for an hour after the first fetch."""
        if not url:
            raise ValidationError("URL is required")

        key = f"{LINK_PREVIEW_PREFIX}{normalize_url(url)}"
        cached = self.redis.get_json(key)
        if cached is not None:
            return cached

        preview = await self.link_preview.fetch(url)
        self.redis.set_json(key, preview, ttl=LINK_PREVIEW_TTL_SECONDS)
        return preview

    async def submit_indexnow(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Submit posts published in the last 24h to IndexNow, then ping the
        WebSub hub for the feed.

        Raises:
            ConfigurationError: No IndexNow key
            ExternalServiceError: IndexNow rejected the submission (502)
        """
        if not self.indexing.is_configured:
            raise ConfigurationError("IndexNow key not configured")

        now = now or utcnow()
        posts = await PostRepository(self.session).list_published_since(
            now - timedelta(hours=INDEXNOW_WINDOW_HOURS)
        )
        urls = [f"{settings.SITE_URL}/news/{p.slug}" for p in posts]

        if not urls:
            return {"success": True, "submitted": 0, "message": "No recent posts to submit"}

        result = await self.indexing.submit_urls(urls)
        if not result.ok:
            raise ExternalServiceError(
                "IndexNow",
                "IndexNow submission failed",
                details={"status": result.status_code, "error": result.error},
            )
        logger.info("IndexNow submitted", count=len(urls))

        ping = await self.indexing.ping_websub()
        if not ping.ok:
            logger.warning("WebSub ping failed", status=ping.status_code, error=ping.error)

        return {"success": True, "submitted": len(urls), "websub": ping.ok}
