"""
Editing Lock Handler

Soft lock and editor presence for one post, mounted under
/api/posts/{post_id}/lock. Editors poll GET every 30 seconds and send a
presence heartbeat while the editor is open.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import LockServiceDep
from src.shared.schemas.analytics import LockResponse, LockStatusResponse, ViewerResponse
from src.shared.schemas.common import MessageResponse


router = APIRouter()


@router.get("", response_model=LockStatusResponse)
async def check_lock(post_id: UUID, profile: CurrentProfile, service: LockServiceDep):
    """is_locked is true only when somebody other than the caller holds it."""
    return await service.check_lock(post_id, profile.id)


@router.post("", response_model=LockResponse)
async def request_lock(post_id: UUID, profile: CurrentProfile, service: LockServiceDep):
    """Acquire or extend. A held lock is reported with acquired=false, not an error."""
    return await service.request_lock(post_id, profile)


@router.delete("", response_model=MessageResponse)
async def release_lock(post_id: UUID, profile: CurrentProfile, service: LockServiceDep):
    released = await service.release_lock(post_id, profile.id)
    return MessageResponse(
        message="Lock released" if released else "No lock held",
        success=released,
    )


@router.post("/presence", response_model=List[ViewerResponse])
async def touch_presence(post_id: UUID, profile: CurrentProfile, service: LockServiceDep):
    """Heartbeat; returns everyone currently viewing the post."""
    service.touch_presence(post_id, profile)
    return service.get_viewers(post_id)


@router.get("/presence", response_model=List[ViewerResponse])
async def get_viewers(post_id: UUID, profile: CurrentProfile, service: LockServiceDep):
    return service.get_viewers(post_id)


@router.delete("/presence", response_model=MessageResponse)
async def leave(post_id: UUID, profile: CurrentProfile, service: LockServiceDep):
    service.leave(post_id, profile.id)
    return MessageResponse(message="Left")
