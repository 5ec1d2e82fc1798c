"""
Workflow, Comment & Assignment Schemas
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.enums import (
    AssignmentPriority,
    AssignmentRole,
    AssignmentStatus,
    CommentStatus,
)
from src.shared.schemas.common import BaseSchema
from src.shared.schemas.post import PostSummary
from src.shared.utils.comment_tree import ThreadNode


# ═══════════════════════════════════════════════════════════════════════════════
# WORKFLOW
# ═══════════════════════════════════════════════════════════════════════════════


class ReviewDecisionRequest(BaseModel):
    comment: Optional[str] = None


class AssignReviewerRequest(BaseModel):
    assigned_to: UUID
    role: AssignmentRole = AssignmentRole.REVIEWER


class PersonSummary(BaseSchema):
    id: UUID
    email: str
    full_name: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS
# ═══════════════════════════════════════════════════════════════════════════════


class CommentCreate(BaseModel):
    content: str
    parent_id: Optional[UUID] = None


class CommentResponse(BaseSchema):
    id: UUID
    post_id: UUID
    user_id: UUID
    parent_id: Optional[UUID] = None
    content: str
    status: Optional[CommentStatus] = None
    user: Optional[PersonSummary] = None
    created_at: datetime


class ThreadedComment(CommentResponse):
    replies: list[ThreadedComment] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: ThreadNode) -> ThreadedComment:
        base = CommentResponse.model_validate(node.item)
        return cls(
            **base.model_dump(),
            replies=[cls.from_node(child) for child in node.replies],
        )


class ModerateRequest(BaseModel):
    status: CommentStatus


# ═══════════════════════════════════════════════════════════════════════════════
# ASSIGNMENTS
# ═══════════════════════════════════════════════════════════════════════════════


class AssignmentCreate(BaseModel):
    post_id: UUID
    assigned_to: UUID
    deadline: Optional[datetime] = None
    priority: AssignmentPriority = AssignmentPriority.MEDIUM
    notes: Optional[str] = None


class AssignmentUpdate(BaseModel):
    deadline: Optional[datetime] = None
    status: Optional[AssignmentStatus] = None
    priority: Optional[AssignmentPriority] = None
    notes: Optional[str] = None


class AssignmentStatusUpdate(BaseModel):
    status: AssignmentStatus


class AssignmentResponse(BaseSchema):
    id: UUID
    post_id: UUID
    assigned_to: UUID
    assigned_by: Optional[UUID] = None
    role: AssignmentRole
    deadline: Optional[datetime] = None
    status: AssignmentStatus
    priority: AssignmentPriority
    notes: Optional[str] = None
    post: Optional[PostSummary] = None
    assignee: Optional[PersonSummary] = None
    assigner: Optional[PersonSummary] = None
    created_at: datetime


class RemindersResponse(BaseModel):
    success: bool
    sent: int
    error: Optional[str] = None
