"""
Analytics, Lock & SEO Schemas

Report bodies are the dataclasses from utils/analytics and utils/seo;
FastAPI serializes those directly, so only request models and the few
ORM-backed responses are declared here.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.enums import TrafficSource


# ═══════════════════════════════════════════════════════════════════════════════
# ANALYTICS
# ═══════════════════════════════════════════════════════════════════════════════


class SessionBeacon(BaseModel):
    session_id: Optional[str] = None
    post_id: Optional[UUID] = None
    referrer: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    device_type: Optional[str] = None
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    traffic_source: Optional[TrafficSource] = None
    page_url: Optional[str] = None


class EventBeacon(BaseModel):
    session_id: Optional[str] = None
    post_id: Optional[UUID] = None
    event_type: Optional[str] = None
    event_data: dict[str, Any] = Field(default_factory=dict)


class BeaconResponse(BaseModel):
    success: bool = True


class UTMRequest(BaseModel):
    base_url: str
    source: str = ""
    medium: str = ""
    campaign: str = ""
    term: Optional[str] = None
    content: Optional[str] = None


class UTMResponse(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    url: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# EDITING LOCK
# ═══════════════════════════════════════════════════════════════════════════════


class LockStatusResponse(BaseModel):
    is_locked: bool
    locked_by: Optional[UUID] = None
    locked_by_email: Optional[str] = None
    expires_at: Optional[datetime] = None


class LockResponse(BaseModel):
    acquired: bool
    lock: LockStatusResponse


class ViewerResponse(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    online_at: str


# ═══════════════════════════════════════════════════════════════════════════════
# SEO
# ═══════════════════════════════════════════════════════════════════════════════


class ImageInput(BaseModel):
    src: Optional[str] = None
    alt: Optional[str] = None


class SEOAnalyzeRequest(BaseModel):
    title: str = ""
    content: str = ""
    slug: str = ""
    meta_description: Optional[str] = None
    excerpt: Optional[str] = None
    headings: list[str] = Field(default_factory=list)
    images: list[ImageInput] = Field(default_factory=list)
    word_count: Optional[int] = None


class ReadabilityRequest(BaseModel):
    content: str = ""


class KeywordRequest(BaseModel):
    keyword: str = ""
    title: str = ""
    content: str = ""
    excerpt: str = ""
