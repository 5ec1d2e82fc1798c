"""
Integrations Handler

Editor helpers that proxy third-party services: Unsplash photo search and
link previews for embeds.
"""

from typing import Optional

from fastapi import APIRouter, Query

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import IntegrationServiceDep


router = APIRouter()


@router.get("/unsplash")
async def search_photos(
    profile: CurrentProfile,
    service: IntegrationServiceDep,
    query: str = "",
    page: int = Query(1, ge=1),
) -> dict:
    """
    Raises:
        401: Unsplash rejected the key
        500: Unsplash key not configured
    """
    return await service.search_photos(query, page)


@router.get("/link-preview")
async def link_preview(service: IntegrationServiceDep, url: Optional[str] = None) -> dict:
    """
    Raises:
        400: URL is required
        500: Failed to fetch link preview
    """
    return await service.link_preview(url)
