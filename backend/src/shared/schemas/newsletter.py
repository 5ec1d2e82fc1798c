"""
Newsletter & Social Task Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.enums import (
    SocialPlatform,
    SocialTaskPriority,
    SocialTaskStatus,
    SubscriberStatus,
    VerificationStatus,
)
from src.shared.schemas.common import BaseSchema


# ═══════════════════════════════════════════════════════════════════════════════
# NEWSLETTER
# ═══════════════════════════════════════════════════════════════════════════════


class SubscribeRequest(BaseModel):
    # Validated in the service so the message matches the signup form
    email: str
    name: Optional[str] = None
    source: Optional[str] = None


class UnsubscribeRequest(BaseModel):
    token: Optional[str] = None


class SubscriberResponse(BaseSchema):
    id: UUID
    email: str
    name: Optional[str] = None
    source: Optional[str] = None
    status: SubscriberStatus
    subscribed_at: datetime
    unsubscribed_at: Optional[datetime] = None


class CampaignResult(BaseModel):
    success: bool
    sent: int
    error: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# SOCIAL TASKS
# ═══════════════════════════════════════════════════════════════════════════════


class SocialTaskCreate(BaseModel):
    platform: SocialPlatform
    task_title: str = Field(min_length=1, max_length=255)
    post_id: Optional[UUID] = None
    assigned_to: Optional[UUID] = None
    task_description: Optional[str] = None
    post_text: Optional[str] = None
    due_date: Optional[datetime] = None
    scheduled_date: Optional[datetime] = None
    priority: SocialTaskPriority = SocialTaskPriority.MEDIUM


class CompletionRequest(BaseModel):
    completion_link: Optional[str] = None
    completion_notes: Optional[str] = None


class CompletionResponse(BaseSchema):
    id: UUID
    task_id: UUID
    completed_by: Optional[UUID] = None
    completion_link: str
    completion_notes: Optional[str] = None
    verification_status: VerificationStatus
    created_at: datetime


class SocialTaskResponse(BaseSchema):
    id: UUID
    post_id: Optional[UUID] = None
    assigned_to: Optional[UUID] = None
    assigned_by: Optional[UUID] = None
    platform: SocialPlatform
    task_title: str
    task_description: Optional[str] = None
    post_text: Optional[str] = None
    article_url: Optional[str] = None
    due_date: Optional[datetime] = None
    scheduled_date: Optional[datetime] = None
    priority: SocialTaskPriority
    status: SocialTaskStatus
    completions: list[CompletionResponse] = Field(default_factory=list)
    created_at: datetime
