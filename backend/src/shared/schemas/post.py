"""
Post Schemas

Request/response models for the /api/posts endpoints.

Field rules (title length, slug format, non-empty content, ...) are not
duplicated here: they live in utils/validation.py so that a failed
create/update reports every broken field at once in details.errors.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.enums import PostStatus
from src.shared.schemas.common import BaseSchema


class PostCreate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[dict[str, Any]] = None
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    featured_image_url: Optional[str] = None
    meta_description: Optional[str] = None


class PostUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[dict[str, Any]] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    featured_image_url: Optional[str] = None
    meta_description: Optional[str] = None


class PostSummary(BaseSchema):
    """Card-sized post used in lists, trending and read-next rails."""

    id: UUID
    title: str
    slug: str
    excerpt: Optional[str] = None
    category: str
    tags: list[str] = Field(default_factory=list)
    status: PostStatus
    featured_image_url: Optional[str] = None
    is_editors_pick: bool = False
    views: int = 0
    reading_time: int = 1
    author_id: Optional[UUID] = None
    author_name: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime


class PostResponse(PostSummary):
    content: dict[str, Any]
    meta_description: Optional[str] = None
    updated_at: datetime


class RevisionResponse(BaseSchema):
    id: UUID
    post_id: UUID
    author_id: Optional[UUID] = None
    title: str
    excerpt: Optional[str] = None
    content: dict[str, Any]
    created_at: datetime


class BulkDeleteRequest(BaseModel):
    ids: list[UUID] = Field(min_length=1)


class BulkDeleteResponse(BaseModel):
    success: bool = True
    deleted: int


class EditorsPickRequest(BaseModel):
    is_editors_pick: bool


class ScheduleRequest(BaseModel):
    publish_at: datetime


class ViewResponse(BaseModel):
    success: bool


class PublishedPost(BaseModel):
    id: str
    title: str


class ScheduledPublishResponse(BaseModel):
    published: int
    posts: list[PublishedPost]
