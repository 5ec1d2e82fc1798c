"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Adapters (email, storage, Redis, HTTP APIs)

Services should:
- Contain business logic and validation
- Check the caller's role (see permissions.py)
- Coordinate multiple repositories if needed
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Registration, login, team roles
- PostService: Authoring, listing, scheduling, trending, read-next
- WorkflowService: Review/approve/publish transitions and reviewers
- CommentService: Public comments and moderation
- AssignmentService: Writer deadlines and reminder digests
- CollectionService: Curated post series
- MediaService: Image library on object storage
- NewsletterService: Subscribers and new-article campaigns
- AnalyticsService: Session beacons and dashboard reports
- LockService: Soft editing locks and presence
- SocialService: Social sharing tasks
- SEOService: Scoring of stored posts
- FeedService: Sitemaps, RSS, robots.txt, search index
- IntegrationService: Unsplash, link previews, IndexNow

Usage:
======
    from src.shared.services import PostService

    service = PostService(db)
    post = await service.create_post(user, data)
"""

from src.shared.services.auth_service import AuthService
from src.shared.services.post_service import PostService
from src.shared.services.workflow_service import WorkflowService
from src.shared.services.comment_service import CommentService
from src.shared.services.assignment_service import AssignmentService
from src.shared.services.collection_service import CollectionService
from src.shared.services.media_service import MediaService
from src.shared.services.newsletter_service import NewsletterService
from src.shared.services.analytics_service import AnalyticsService
from src.shared.services.lock_service import LockService
from src.shared.services.social_service import SocialService
from src.shared.services.seo_service import SEOService
from src.shared.services.feed_service import FeedService
from src.shared.services.integration_service import IntegrationService

__all__ = [
    "AuthService",
    "PostService",
    "WorkflowService",
    "CommentService",
    "AssignmentService",
    "CollectionService",
    "MediaService",
    "NewsletterService",
    "AnalyticsService",
    "LockService",
    "SocialService",
    "SEOService",
    "FeedService",
    "IntegrationService",
]
