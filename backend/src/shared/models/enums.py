"""
Enums used across the application.

All enums are stored by VALUE in PostgreSQL (see pg_enum()), so the
database labels match what the API sends and receives.
"""

from enum import Enum
from typing import Type

from sqlalchemy import Enum as SQLEnum


def pg_enum(enum_cls: Type[Enum], name: str) -> SQLEnum:
    """Column type storing the enum's lower-case values, not member names."""
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
    )


class UserRole(str, Enum):
    """Profile role used for authorization decisions."""

    ADMIN = "admin"
    EDITOR = "editor"
    READER = "reader"


# Roles allowed to run editorial actions
STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.EDITOR})


class PostStatus(str, Enum):
    """
    Editorial lifecycle of a post.

        draft ──▶ review ──▶ approved ──▶ published ──▶ archived
          ▲         │           │            │             │
          └─────────┴───────────┴────────────┴─────────────┘
                        (reject / unpublish / restore)
    """

    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CommentStatus(str, Enum):
    """Moderation state of a public comment."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SPAM = "spam"


class AssignmentRole(str, Enum):
    WRITER = "writer"
    REVIEWER = "reviewer"
    EDITOR = "editor"
    APPROVER = "approver"


class AssignmentStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class AssignmentPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SubscriberStatus(str, Enum):
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    SENDING = "sending"
    SENT = "sent"


class SendStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


class TrafficSource(str, Enum):
    """Where an analytics session came from."""

    DIRECT = "direct"
    SEARCH = "search"
    SOCIAL = "social"
    REFERRAL = "referral"
    EMAIL = "email"
    OTHER = "other"


class SocialPlatform(str, Enum):
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
    OTHER = "other"


class SocialTaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SocialTaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
