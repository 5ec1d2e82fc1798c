"""
Repository Pattern Implementations

Repositories encapsulate SQL for one aggregate each; services compose them.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         ├── ProfileRepository
         ├── PostRepository             ← Listing, scheduling, trending candidates
         ├── PostRevisionRepository
         ├── CommentRepository          ← Public comments
         ├── PostCommentRepository      ← Workflow discussion
         ├── AssignmentRepository       ← Upsert on (post, assignee)
         ├── CollectionRepository
         ├── CollectionPostRepository   ← Ordered membership
         ├── MediaRepository
         ├── SubscriberRepository
         ├── CampaignRepository
         ├── AnalyticsRepository
         ├── EditingLockRepository      ← Insert-if-absent soft lock
         └── SocialTaskRepository
"""

from src.shared.repositories.base import BaseRepository
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.repositories.revision_repository import PostRevisionRepository
from src.shared.repositories.comment_repository import CommentRepository, PostCommentRepository
from src.shared.repositories.assignment_repository import AssignmentRepository
from src.shared.repositories.collection_repository import (
    CollectionPostRepository,
    CollectionRepository,
)
from src.shared.repositories.media_repository import MediaRepository
from src.shared.repositories.newsletter_repository import CampaignRepository, SubscriberRepository
from src.shared.repositories.analytics_repository import AnalyticsRepository
from src.shared.repositories.editing_lock_repository import EditingLockRepository
from src.shared.repositories.social_task_repository import SocialTaskRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "PostRepository",
    "PostRevisionRepository",
    "CommentRepository",
    "PostCommentRepository",
    "AssignmentRepository",
    "CollectionRepository",
    "CollectionPostRepository",
    "MediaRepository",
    "SubscriberRepository",
    "CampaignRepository",
    "AnalyticsRepository",
    "EditingLockRepository",
    "SocialTaskRepository",
]
