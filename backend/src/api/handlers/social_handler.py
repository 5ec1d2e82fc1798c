"""
Social Tasks Handler

Promotion tasks for social platforms and their proof-of-completion links.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import SocialServiceDep
from src.shared.models.enums import SocialPlatform, SocialTaskStatus
from src.shared.schemas.newsletter import (
    CompletionRequest,
    CompletionResponse,
    SocialTaskCreate,
    SocialTaskResponse,
)


router = APIRouter()


@router.get("", response_model=List[SocialTaskResponse])
async def list_tasks(
    profile: CurrentProfile,
    service: SocialServiceDep,
    status: Optional[SocialTaskStatus] = None,
    platform: Optional[SocialPlatform] = None,
    assigned_to: Optional[UUID] = None,
):
    return await service.list_tasks(status=status, platform=platform, assigned_to=assigned_to)


@router.post("", response_model=SocialTaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(request: SocialTaskCreate, profile: CurrentProfile, service: SocialServiceDep):
    """article_url is filled in from the linked post's slug."""
    return await service.create_task(profile, **request.model_dump())


@router.post("/{task_id}/complete", response_model=CompletionResponse)
async def complete_task(
    task_id: UUID,
    request: CompletionRequest,
    profile: CurrentProfile,
    service: SocialServiceDep,
):
    """
    Raises:
        400: Missing completion link
        403: Caller is neither the assignee nor staff
        404: Unknown task
    """
    return await service.complete_task(
        profile, task_id, request.completion_link, request.completion_notes
    )
