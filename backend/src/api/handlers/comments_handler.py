"""
Comments Handler

Public reader comments. New comments wait in the moderation queue; only
approved ones are shown on the article.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.api.dependencies import CurrentProfile, OptionalProfile, Pagination
from src.api.dependencies.services import CommentServiceDep
from src.shared.models.enums import CommentStatus
from src.shared.schemas.common import PaginatedResponse, PaginationMeta
from src.shared.schemas.workflow import (
    CommentCreate,
    CommentResponse,
    ModerateRequest,
    ThreadedComment,
)


router = APIRouter()


@router.get("/posts/{post_id}/comments", response_model=List[ThreadedComment])
async def get_comments(post_id: UUID, service: CommentServiceDep):
    nodes = await service.get_comments(post_id)
    return [ThreadedComment.from_node(node) for node in nodes]


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CommentCreate,
    profile: OptionalProfile,
    service: CommentServiceDep,
):
    """
    Submit a comment. Anonymous callers get 401 with the login prompt
    message rather than a bare auth error.
    """
    return await service.create_comment(profile, post_id, request.content, request.parent_id)


@router.get("/comments", response_model=PaginatedResponse[CommentResponse])
async def list_for_moderation(
    profile: CurrentProfile,
    service: CommentServiceDep,
    pagination: Pagination,
    status_filter: Optional[CommentStatus] = Query(CommentStatus.PENDING, alias="status"),
):
    items, total = await service.list_for_moderation(
        profile, status=status_filter, page=pagination.page, page_size=pagination.per_page
    )
    return PaginatedResponse[CommentResponse](
        data=[CommentResponse.model_validate(c) for c in items],
        pagination=PaginationMeta.create(
            page=pagination.page, per_page=pagination.per_page, total=total
        ),
    )


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def moderate_comment(
    comment_id: UUID,
    request: ModerateRequest,
    profile: CurrentProfile,
    service: CommentServiceDep,
):
    return await service.moderate_comment(profile, comment_id, request.status)
