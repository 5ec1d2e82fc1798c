"""
Feeds Handler

Crawler-facing documents: sitemaps, RSS, robots.txt, the IndexNow key file
and the client-side search index. Bodies come from the Redis page cache
when warm.
"""

from typing import Optional

from fastapi import APIRouter, Header, Response

from src.api.dependencies.services import FeedServiceDep
from src.config.settings import settings
from src.shared.core.exceptions import NotFoundError
from src.shared.utils.feeds import CACHE_CONTROL, http_date


router = APIRouter()

XML = "application/xml; charset=utf-8"
RSS = "application/rss+xml; charset=utf-8"
TEXT = "text/plain; charset=utf-8"
JSON = "application/json; charset=utf-8"


def _document(body: str, media_type: str) -> Response:
    return Response(
        content=body,
        media_type=media_type,
        headers={"Cache-Control": CACHE_CONTROL},
    )


@router.get("/sitemap.xml")
async def sitemap(service: FeedServiceDep):
    return _document(await service.sitemap(), XML)


@router.get("/sitemap-news.xml")
async def news_sitemap(service: FeedServiceDep):
    """Google News sitemap: the last 48 hours of posts."""
    return _document(await service.news_sitemap(), XML)


@router.get("/feed.xml")
async def rss_feed(
    service: FeedServiceDep,
    if_modified_since: Optional[str] = Header(None),
):
    """RSS 2.0 with a WebSub hub link. Answers 304 when nothing newer was published."""
    document = await service.rss(if_modified_since)
    headers = {"Cache-Control": CACHE_CONTROL}
    if document.last_modified is not None:
        headers["Last-Modified"] = http_date(document.last_modified)

    if document.not_modified:
        return Response(status_code=304, headers=headers)
    return Response(content=document.body, media_type=RSS, headers=headers)


@router.get("/robots.txt")
async def robots(service: FeedServiceDep):
    return _document(service.robots(), TEXT)


@router.get("/api/search-index")
async def search_index(service: FeedServiceDep):
    return _document(await service.search_index(), JSON)


@router.get("/{key}.txt")
async def indexnow_key(key: str):
    """Ownership proof for IndexNow: the key file holds the key itself."""
    if not settings.INDEXNOW_KEY or key != settings.INDEXNOW_KEY:
        raise NotFoundError("File", f"{key}.txt")
    return Response(content=settings.INDEXNOW_KEY, media_type=TEXT)
