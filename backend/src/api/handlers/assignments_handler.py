"""
Assignments Handler

Writer assignments with deadlines. Staff see every assignment; other
callers only see their own.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import AssignmentServiceDep
from src.shared.models.enums import AssignmentPriority, AssignmentStatus
from src.shared.schemas.workflow import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentStatusUpdate,
    AssignmentUpdate,
)


router = APIRouter()


@router.get("", response_model=List[AssignmentResponse])
async def list_assignments(
    profile: CurrentProfile,
    service: AssignmentServiceDep,
    assigned_to: Optional[UUID] = None,
    status: Optional[AssignmentStatus] = None,
    priority: Optional[AssignmentPriority] = None,
):
    if not profile.is_staff:
        assigned_to = profile.id
    return await service.get_assignments(assigned_to=assigned_to, status=status, priority=priority)


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    request: AssignmentCreate,
    profile: CurrentProfile,
    service: AssignmentServiceDep,
):
    """Status starts as overdue when the deadline is already past."""
    return await service.create_assignment(
        profile,
        post_id=request.post_id,
        assigned_to=request.assigned_to,
        deadline=request.deadline,
        priority=request.priority,
        notes=request.notes,
    )


@router.get("/post/{post_id}", response_model=Optional[AssignmentResponse])
async def get_assignment_by_post(post_id: UUID, profile: CurrentProfile, service: AssignmentServiceDep):
    return await service.get_assignment_by_post(post_id)


@router.patch("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: UUID,
    request: AssignmentUpdate,
    profile: CurrentProfile,
    service: AssignmentServiceDep,
):
    return await service.update_assignment(
        profile, assignment_id, request.model_dump(exclude_unset=True)
    )


@router.patch("/{assignment_id}/status", response_model=AssignmentResponse)
async def update_assignment_status(
    assignment_id: UUID,
    request: AssignmentStatusUpdate,
    profile: CurrentProfile,
    service: AssignmentServiceDep,
):
    return await service.update_assignment_status(profile, assignment_id, request.status)
