"""
Unsplash adapter - stock photo search for the media picker.
"""

import functools
import logging
from typing import Any, Dict, Optional

import httpx

from ...config.settings import settings
from ..core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


class UnsplashAdapter:
    """Thin proxy over GET /search/photos."""

    PER_PAGE = 24
    ORIENTATION = "landscape"
    TIMEOUT_SECONDS = 10.0

    def __init__(self, access_key: Optional[str] = None, api_url: Optional[str] = None):
        self.access_key = access_key if access_key is not None else settings.UNSPLASH_ACCESS_KEY
        self.api_url = (api_url or settings.UNSPLASH_API_URL).rstrip("/")

    async def search_photos(self, query: str, page: int = 1) -> Dict[str, Any]:
        """
        Search photos.

        Returns:
            Unsplash's response body unchanged ({total, total_pages, results})

        Raises:
            ConfigurationError: No access key
            AuthenticationError: Key rejected upstream
            ServiceUnavailableError: Unsplash could not be reached
            ExternalServiceError: Any other upstream failure
        """
        if not self.access_key:
            raise ConfigurationError("Unsplash API key not configured")

        if not query:
            return {"results": []}

        try:
            async with httpx.AsyncClient(timeout=self.TIMEOUT_SECONDS) as client:
                response = await client.get(
                    f"{self.api_url}/search/photos",
                    params={
                        "page": page,
                        "query": query,
                        "per_page": self.PER_PAGE,
                        "orientation": self.ORIENTATION,
                    },
                    headers={"Authorization": f"Client-ID {self.access_key}"},
                )
        except httpx.HTTPError as e:
            logger.error("Unsplash request failed: %s", e)
            raise ServiceUnavailableError(
                "Unsplash is unreachable", details={"service": "Unsplash"}
            ) from e

        if response.status_code in (401, 403):
            raise AuthenticationError("Invalid API Key")
        if response.status_code >= 400:
            raise ExternalServiceError(
                "Unsplash",
                "Failed to fetch from Unsplash",
                status_code=response.status_code,
            )
        return response.json()


@functools.lru_cache(maxsize=1)
def get_unsplash_adapter() -> UnsplashAdapter:
    """Get or create Unsplash adapter singleton."""
    return UnsplashAdapter()
