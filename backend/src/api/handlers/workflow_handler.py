"""
Workflow Handler

Editorial status transitions plus the internal review thread and reviewer
assignments of a single post. Mounted under /api/posts/{post_id}/workflow.

Illegal transitions come back as 409 with {current, target} in details.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import WorkflowServiceDep
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.post import PostResponse
from src.shared.schemas.workflow import (
    AssignmentResponse,
    AssignReviewerRequest,
    CommentCreate,
    CommentResponse,
    ReviewDecisionRequest,
    ThreadedComment,
)


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/request-review", response_model=PostResponse)
async def request_review(post_id: UUID, profile: CurrentProfile, service: WorkflowServiceDep):
    return await service.request_review(profile, post_id)


@router.post("/approve", response_model=PostResponse)
async def approve_post(
    post_id: UUID,
    profile: CurrentProfile,
    service: WorkflowServiceDep,
    request: ReviewDecisionRequest = ReviewDecisionRequest(),
):
    return await service.approve_post(profile, post_id, request.comment)


@router.post("/reject", response_model=PostResponse)
async def reject_post(
    post_id: UUID,
    request: ReviewDecisionRequest,
    profile: CurrentProfile,
    service: WorkflowServiceDep,
):
    """Send back to draft. A comment is required."""
    return await service.reject_post(profile, post_id, request.comment)


@router.post("/publish", response_model=PostResponse)
async def publish_post(post_id: UUID, profile: CurrentProfile, service: WorkflowServiceDep):
    """
    Publish an approved post.

    The new-article newsletter starts once the publish is committed and
    runs after the response; its failure never fails the publish.
    """
    return await service.publish_post(profile, post_id)


@router.post("/archive", response_model=PostResponse)
async def archive_post(post_id: UUID, profile: CurrentProfile, service: WorkflowServiceDep):
    return await service.archive_post(profile, post_id)


# ═══════════════════════════════════════════════════════════════════════════════
# REVIEW THREAD
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/comments", response_model=List[ThreadedComment])
async def get_post_comments(post_id: UUID, profile: CurrentProfile, service: WorkflowServiceDep):
    nodes = await service.get_post_comments(post_id)
    return [ThreadedComment.from_node(node) for node in nodes]


@router.post(
    "/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_post_comment(
    post_id: UUID,
    request: CommentCreate,
    profile: CurrentProfile,
    service: WorkflowServiceDep,
):
    return await service.add_post_comment(profile, post_id, request.content, request.parent_id)


# ═══════════════════════════════════════════════════════════════════════════════
# REVIEWERS
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/assignments", response_model=List[AssignmentResponse])
async def get_post_assignments(post_id: UUID, profile: CurrentProfile, service: WorkflowServiceDep):
    return await service.get_post_assignments(post_id)


@router.post(
    "/assignments",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_reviewer(
    post_id: UUID,
    request: AssignReviewerRequest,
    profile: CurrentProfile,
    service: WorkflowServiceDep,
):
    return await service.assign_reviewer(profile, post_id, request.assigned_to, request.role)


@router.delete("/assignments/{assigned_to}", response_model=MessageResponse)
async def unassign_reviewer(
    post_id: UUID,
    assigned_to: UUID,
    profile: CurrentProfile,
    service: WorkflowServiceDep,
):
    removed = await service.unassign_reviewer(profile, post_id, assigned_to)
    return MessageResponse(
        message="Reviewer removed" if removed else "Reviewer was not assigned",
        success=removed,
    )
