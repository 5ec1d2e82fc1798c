"""
Collection & Media Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.schemas.common import BaseSchema
from src.shared.schemas.post import PostSummary


# ═══════════════════════════════════════════════════════════════════════════════
# COLLECTIONS
# ═══════════════════════════════════════════════════════════════════════════════


class CollectionCreate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    featured_image_url: Optional[str] = None


class CollectionUpdate(CollectionCreate):
    pass


class CollectionResponse(BaseSchema):
    id: UUID
    title: str
    slug: str
    description: Optional[str] = None
    featured_image_url: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: datetime


class CollectionDetailResponse(CollectionResponse):
    posts: list[PostSummary] = Field(default_factory=list)


class CollectionPostAdd(BaseModel):
    post_id: UUID
    order_index: int = 0


class ReorderItem(BaseModel):
    post_id: UUID
    new_index: int


class ReorderRequest(BaseModel):
    items: list[ReorderItem]


# ═══════════════════════════════════════════════════════════════════════════════
# MEDIA
# ═══════════════════════════════════════════════════════════════════════════════


class MediaUpdate(BaseModel):
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    credit: Optional[str] = None
    tags: Optional[list[str]] = None
    category: Optional[str] = None


class MediaResponse(BaseSchema):
    id: UUID
    file_path: str
    file_name: str
    mime_type: str
    file_size: int
    width: Optional[int] = None
    height: Optional[int] = None
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    credit: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    uploaded_by: Optional[UUID] = None
    uploaded_at: datetime
    url: Optional[str] = None


class MediaListResponse(BaseModel):
    data: list[MediaResponse]
    total: int
