"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request around the request's db session. Adapters
(Redis, email, storage, third-party APIs) are process-wide singletons from
their get_*_adapter() factories, so tests override these getters through
app.dependency_overrides.

Usage:
======
    from src.api.dependencies.services import PostServiceDep

    @router.get("/posts/{post_id}")
    async def get_post(post_id: UUID, service: PostServiceDep):
        return await service.get_post(post_id)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.database import get_db
from src.shared.adapters.redis_adapter import get_redis_adapter
from src.shared.services.analytics_service import AnalyticsService
from src.shared.services.assignment_service import AssignmentService
from src.shared.services.auth_service import AuthService
from src.shared.services.collection_service import CollectionService
from src.shared.services.comment_service import CommentService
from src.shared.services.feed_service import FeedService
from src.shared.services.integration_service import IntegrationService
from src.shared.services.lock_service import LockService
from src.shared.services.media_service import MediaService
from src.shared.services.newsletter_service import NewsletterService
from src.shared.services.post_service import PostService
from src.shared.services.seo_service import SEOService
from src.shared.services.social_service import SocialService
from src.shared.services.workflow_service import WorkflowService


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db)


async def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


async def get_workflow_service(db: AsyncSession = Depends(get_db)) -> WorkflowService:
    return WorkflowService(db)


async def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db)


async def get_assignment_service(db: AsyncSession = Depends(get_db)) -> AssignmentService:
    return AssignmentService(db)


async def get_collection_service(db: AsyncSession = Depends(get_db)) -> CollectionService:
    return CollectionService(db)


async def get_media_service(db: AsyncSession = Depends(get_db)) -> MediaService:
    return MediaService(db)


async def get_newsletter_service(db: AsyncSession = Depends(get_db)) -> NewsletterService:
    return NewsletterService(db)


async def get_analytics_service(db: AsyncSession = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


async def get_lock_service(db: AsyncSession = Depends(get_db)) -> LockService:
    return LockService(db)


async def get_social_service(db: AsyncSession = Depends(get_db)) -> SocialService:
    return SocialService(db)


async def get_seo_service(db: AsyncSession = Depends(get_db)) -> SEOService:
    return SEOService(db)


async def get_feed_service(db: AsyncSession = Depends(get_db)) -> FeedService:
    return FeedService(db)


async def get_integration_service(db: AsyncSession = Depends(get_db)) -> IntegrationService:
    return IntegrationService(db)


def get_redis():
    """Shared Redis adapter (rate limiting on public endpoints)."""
    return get_redis_adapter()


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
WorkflowServiceDep = Annotated[WorkflowService, Depends(get_workflow_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]
CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]
NewsletterServiceDep = Annotated[NewsletterService, Depends(get_newsletter_service)]
AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
LockServiceDep = Annotated[LockService, Depends(get_lock_service)]
SocialServiceDep = Annotated[SocialService, Depends(get_social_service)]
SEOServiceDep = Annotated[SEOService, Depends(get_seo_service)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
IntegrationServiceDep = Annotated[IntegrationService, Depends(get_integration_service)]
