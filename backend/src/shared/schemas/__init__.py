"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, pagination, error responses
- auth: Registration, login, profiles, roles
- post: Post CRUD, revisions, scheduling
- workflow: Review decisions, comments, assignments
- collection: Collections and the media library
- newsletter: Subscribers, campaigns, social tasks
- analytics: Beacons, UTM, editing locks, SEO requests

Usage:
======
    from src.shared.schemas.post import PostCreate, PostResponse
    from src.shared.schemas.common import PaginatedResponse, MessageResponse
"""

from src.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    PaginatedResponse,
    MessageResponse,
    HealthResponse,
)
from src.shared.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    ProfileResponse,
    AuthResponse,
    RoleUpdateRequest,
)
from src.shared.schemas.post import (
    PostCreate,
    PostUpdate,
    PostSummary,
    PostResponse,
    RevisionResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    "MessageResponse",
    "HealthResponse",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "ProfileResponse",
    "AuthResponse",
    "RoleUpdateRequest",
    # Post
    "PostCreate",
    "PostUpdate",
    "PostSummary",
    "PostResponse",
    "RevisionResponse",
]
