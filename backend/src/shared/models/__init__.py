"""
Inshort SQLAlchemy Models

Model Overview:
===============
    Profile
       └── posts (Post[])

    Post
       ├── post_revisions (PostRevision[])
       ├── comments (Comment[])            ← public, moderated
       ├── post_comments (PostComment[])   ← internal workflow thread
       ├── post_assignments (PostAssignment[])
       ├── collection_posts (CollectionPost[]) >── Collection
       ├── analytics_sessions / analytics_events
       ├── editing_locks (EditingLock, at most one)
       └── social_tasks (SocialTask[]) ── completions

    MediaFile
    NewsletterSubscriber, NewsletterCampaign ── NewsletterSend

Usage:
======
    from src.shared.models import Post, PostStatus

    post.status = PostStatus.REVIEW
"""

from src.shared.models.base import Base, TimestampMixin, utcnow
from src.shared.models.enums import (
    STAFF_ROLES,
    AssignmentPriority,
    AssignmentRole,
    AssignmentStatus,
    CampaignStatus,
    CommentStatus,
    PostStatus,
    SendStatus,
    SocialPlatform,
    SocialTaskPriority,
    SocialTaskStatus,
    SubscriberStatus,
    TrafficSource,
    UserRole,
    VerificationStatus,
)
from src.shared.models.profile import Profile
from src.shared.models.post import Post
from src.shared.models.post_revision import PostRevision
from src.shared.models.comment import Comment, PostComment
from src.shared.models.assignment import PostAssignment
from src.shared.models.collection import Collection, CollectionPost
from src.shared.models.media_file import MediaFile
from src.shared.models.newsletter import (
    NewsletterCampaign,
    NewsletterSend,
    NewsletterSubscriber,
)
from src.shared.models.analytics import AnalyticsEvent, AnalyticsSession
from src.shared.models.editing_lock import EditingLock
from src.shared.models.social_task import SocialTask, SocialTaskCompletion

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "utcnow",
    # Enums
    "STAFF_ROLES",
    "AssignmentPriority",
    "AssignmentRole",
    "AssignmentStatus",
    "CampaignStatus",
    "CommentStatus",
    "PostStatus",
    "SendStatus",
    "SocialPlatform",
    "SocialTaskPriority",
    "SocialTaskStatus",
    "SubscriberStatus",
    "TrafficSource",
    "UserRole",
    "VerificationStatus",
    # Models
    "Profile",
    "Post",
    "PostRevision",
    "Comment",
    "PostComment",
    "PostAssignment",
    "Collection",
    "CollectionPost",
    "MediaFile",
    "NewsletterSubscriber",
    "NewsletterCampaign",
    "NewsletterSend",
    "AnalyticsSession",
    "AnalyticsEvent",
    "EditingLock",
    "SocialTask",
    "SocialTaskCompletion",
]
