"""
Link preview adapter - fetches a page and reads its Open Graph metadata.

Provides:
- URL normalisation (https:// is assumed when no scheme is given)
- Metadata extraction with the standard library HTML parser
- The editor's link-tool response shape
"""

from dataclasses import dataclass
import functools
from html.parser import HTMLParser
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx

from ..core.exceptions import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)


USER_AGENT = "Inshort-CMS-Bot/1.0"


@dataclass
class PageMetadata:
    title: str = ""
    description: str = ""
    image: str = ""
    site_name: str = ""


class _MetaParser(HTMLParser):
    """Collects <meta> property/name content and the first <title> text."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.meta: Dict[str, str] = {}
        self.title: Optional[str] = None
        self._in_title = False
        self._title_parts: list[str] = []

    def handle_starttag(self, tag: str, attrs) -> None:
        attributes = {k.lower(): (v or "") for k, v in attrs}
        if tag == "meta":
            key = attributes.get("property") or attributes.get("name")
            if key and "content" in attributes:
                self.meta.setdefault(key.lower(), attributes["content"])
        elif tag == "title" and self.title is None:
            self._in_title = True

    def handle_data(self, data: str) -> None:
        if self._in_title:
            self._title_parts.append(data)

    def handle_endtag(self, tag: str) -> None:
        if tag == "title" and self._in_title:
            self._in_title = False
            self.title = "".join(self._title_parts).strip()


def normalize_url(url: str) -> str:
    url = url.strip()
    return url if url.startswith("http") else f"https://{url}"


def extract_metadata(html: str, url: str) -> PageMetadata:
    """og:* tags first, then <title> / meta description / hostname."""
    parser = _MetaParser()
    parser.feed(html)
    parser.close()
    meta = parser.meta

    return PageMetadata(
        title=meta.get("og:title") or parser.title or "",
        description=meta.get("og:description") or meta.get("description") or "",
        image=meta.get("og:image") or "",
        site_name=meta.get("og:site_name") or urlparse(url).hostname or "",
    )


class LinkPreviewAdapter:
    """Fetches pages for the editor's embed/link tool."""

    TIMEOUT_SECONDS = 10.0

    async def fetch(self, url: Optional[str]) -> Dict[str, Any]:
        """
        Build a preview for url.

        Returns:
            {"success": 1, "link", "meta": {"title", "description", "image": {"url"}, "siteName"}}

        Raises:
            ValidationError: url is empty
            ExternalServiceError: The page could not be fetched
        """
        if not url:
            raise ValidationError("URL is required")

        target = normalize_url(url)
        try:
            async with httpx.AsyncClient(
                timeout=self.TIMEOUT_SECONDS,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                response = await client.get(target)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Link preview fetch failed for %s: %s", target, e)
            raise ExternalServiceError(
                "LinkPreview", "Failed to fetch link preview", status_code=500
            ) from e

        meta = extract_metadata(response.text, target)
        return {
            "success": 1,
            "link": target,
            "meta": {
                "title": meta.title,
                "description": meta.description,
                "image": {"url": meta.image},
                "siteName": meta.site_name,
            },
        }


@functools.lru_cache(maxsize=1)
def get_link_preview_adapter() -> LinkPreviewAdapter:
    """Get or create link preview adapter singleton."""
    return LinkPreviewAdapter()
