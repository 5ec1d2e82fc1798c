"""
Posts Handler

Post CRUD, listing, ranking rails and per-post utilities.

Route order matters: the literal paths (/trending, /slug/{slug}, /delete)
are declared before /{post_id} so they are not parsed as UUIDs.
"""

from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.api.dependencies import CurrentProfile, OptionalProfile
from src.api.dependencies.services import PostServiceDep, SEOServiceDep
from src.shared.core.exceptions import PostNotFoundError
from src.shared.models.enums import PostStatus
from src.shared.schemas.common import PaginatedResponse, PaginationMeta
from src.shared.schemas.post import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    EditorsPickRequest,
    PostCreate,
    PostResponse,
    PostSummary,
    PostUpdate,
    RevisionResponse,
    ScheduleRequest,
    ViewResponse,
)
from src.shared.services.permissions import is_owner_or_staff, require_staff
from src.shared.utils.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    NEXT_ARTICLES_DEFAULT_LIMIT,
    TRENDING_DEFAULT_LIMIT,
)


router = APIRouter()


@router.get("", response_model=PaginatedResponse[PostSummary])
async def list_posts(
    service: PostServiceDep,
    profile: OptionalProfile,
    status_filter: Optional[PostStatus] = Query(None, alias="status"),
    category: Optional[str] = None,
    tag: Optional[str] = None,
    author_id: Optional[UUID] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """
    List posts. Anonymous and reader callers only ever see published posts;
    staff may filter by any status (or none).
    """
    if not (profile and profile.is_staff):
        status_filter = PostStatus.PUBLISHED

    result = await service.list_posts(
        status=status_filter,
        category=category,
        tag=tag,
        author_id=author_id,
        search=search,
        page=page,
        page_size=per_page,
    )
    return PaginatedResponse[PostSummary](
        data=[PostSummary.model_validate(p) for p in result.items],
        pagination=PaginationMeta.create(page=page, per_page=per_page, total=result.total),
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(request: PostCreate, profile: CurrentProfile, service: PostServiceDep):
    """
    Create a draft.

    Raises:
        400: Validation failed (details.errors lists each field)
        409: Slug already exists
    """
    return await service.create_post(profile, request.model_dump())


@router.get("/trending", response_model=List[PostSummary])
async def get_trending(
    service: PostServiceDep,
    exclude: List[UUID] = Query([]),
    limit: int = Query(TRENDING_DEFAULT_LIMIT, ge=1, le=20),
):
    return await service.get_trending(exclude_ids=exclude, limit=limit)


@router.get("/slug/{slug}", response_model=PostResponse)
async def get_post_by_slug(slug: str, service: PostServiceDep):
    return await service.get_published_by_slug(slug)


@router.post("/delete", response_model=BulkDeleteResponse)
async def delete_posts(request: BulkDeleteRequest, profile: CurrentProfile, service: PostServiceDep):
    deleted = await service.delete_posts(profile, request.ids)
    return BulkDeleteResponse(deleted=deleted)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: UUID, profile: OptionalProfile, service: PostServiceDep):
    """Unpublished posts are visible to their author and to staff only."""
    post = await service.get_post(post_id)
    if not post.is_published and not (
        profile and is_owner_or_staff(profile, post.author_id)
    ):
        raise PostNotFoundError(str(post_id))
    return post


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: UUID,
    request: PostUpdate,
    profile: CurrentProfile,
    service: PostServiceDep,
):
    return await service.update_post(profile, post_id, request.model_dump(exclude_unset=True))


@router.post("/{post_id}/editors-pick", response_model=PostResponse)
async def toggle_editors_pick(
    post_id: UUID,
    request: EditorsPickRequest,
    profile: CurrentProfile,
    service: PostServiceDep,
):
    return await service.toggle_editors_pick(profile, post_id, request.is_editors_pick)


@router.post("/{post_id}/view", response_model=ViewResponse)
async def record_view(post_id: UUID, service: PostServiceDep):
    """Count a page view. Always 200; a failed increment is only logged."""
    return ViewResponse(success=await service.increment_view_count(post_id))


@router.post("/{post_id}/schedule", response_model=PostResponse)
async def schedule_post(
    post_id: UUID,
    request: ScheduleRequest,
    profile: CurrentProfile,
    service: PostServiceDep,
):
    return await service.schedule_post(profile, post_id, request.publish_at)


@router.get("/{post_id}/revisions", response_model=List[RevisionResponse])
async def get_revisions(post_id: UUID, profile: CurrentProfile, service: PostServiceDep):
    post = await service.get_post(post_id)
    if not is_owner_or_staff(profile, post.author_id):
        raise PostNotFoundError(str(post_id))
    return await service.get_revisions(post_id)


@router.get("/{post_id}/next", response_model=List[PostSummary])
async def get_next_articles(
    post_id: UUID,
    service: PostServiceDep,
    limit: int = Query(NEXT_ARTICLES_DEFAULT_LIMIT, ge=1, le=12),
):
    return await service.get_next_articles(post_id, limit=limit)


@router.get("/{post_id}/seo")
async def analyze_post_seo(post_id: UUID, profile: CurrentProfile, service: SEOServiceDep) -> Any:
    """SEO, readability, meta, image and link analysis of the stored post."""
    require_staff(profile)
    return await service.analyze_post(post_id)
