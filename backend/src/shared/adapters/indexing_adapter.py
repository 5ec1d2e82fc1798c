"""
Indexing adapter - search engine and feed hub notifications.

Provides:
- IndexNow URL submission (Bing, Yandex, Seznam, ...)
- WebSub (PubSubHubbub) publish pings for the RSS feed
"""

from dataclasses import dataclass
import functools
import logging
from typing import List, Optional

import httpx

from ...config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class PingResult:
    """Outcome of an outbound notification."""

    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class IndexingAdapter:
    """
    Adapter for IndexNow and WebSub.

    Both endpoints are fire-and-forget from the site's point of view; the
    result is returned so the caller can decide how loud a failure is.
    """

    TIMEOUT_SECONDS = 15.0

    def __init__(
        self,
        key: Optional[str] = None,
        endpoint: Optional[str] = None,
        hub_url: Optional[str] = None,
    ):
        self.key = key or settings.INDEXNOW_KEY
        self.endpoint = endpoint or settings.INDEXNOW_ENDPOINT
        self.hub_url = hub_url or settings.WEBSUB_HUB_URL

    @property
    def is_configured(self) -> bool:
        return bool(self.key)

    async def _post(self, url: str, **kwargs) -> PingResult:
        try:
            async with httpx.AsyncClient(timeout=self.TIMEOUT_SECONDS) as client:
                response = await client.post(url, **kwargs)
        except httpx.HTTPError as e:
            return PingResult(ok=False, error=str(e))

        if response.is_success:
            return PingResult(ok=True, status_code=response.status_code)
        return PingResult(ok=False, status_code=response.status_code, error=response.text)

    async def submit_urls(self, urls: List[str]) -> PingResult:
        """
        Submit URLs to IndexNow.

        Args:
            urls: Absolute article URLs on SITE_URL's host

        Returns:
            PingResult
        """
        if not self.is_configured:
            return PingResult(ok=False, error="IndexNow key not configured")

        result = await self._post(
            self.endpoint,
            json={
                "host": settings.site_host,
                "key": self.key,
                "keyLocation": settings.indexnow_key_location,
                "urlList": urls,
            },
        )
        if result.ok:
            logger.info("Submitted %d URLs to IndexNow", len(urls))
        else:
            logger.error("IndexNow submission failed: %s", result.error)
        return result

    async def ping_websub(self, feed_url: Optional[str] = None) -> PingResult:
        """Tell the hub the feed changed. Failures are logged only."""
        result = await self._post(
            self.hub_url,
            data={
                "hub.mode": "publish",
                "hub.url": feed_url or f"{settings.SITE_URL}/feed.xml",
            },
        )
        if not result.ok:
            logger.warning("WebSub ping failed: %s", result.error)
        return result


@functools.lru_cache(maxsize=1)
def get_indexing_adapter() -> IndexingAdapter:
    """Get or create indexing adapter singleton."""
    return IndexingAdapter()
