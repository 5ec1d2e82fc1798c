"""
Social Task Entity Models

    SocialTask             ← "share this article on <platform>" work item
    SocialTaskCompletion   ← proof of completion (link to the social post)

SAMPLE SOCIAL TASK RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ platform         │ facebook                                                  │
│ task_title       │ "Share budget explainer"                                  │
│ article_url      │ "https://inshortbd.com/news/budget-explainer"             │
│ priority         │ high                                                      │
│ status           │ pending                                                   │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import (
    SocialPlatform,
    SocialTaskPriority,
    SocialTaskStatus,
    VerificationStatus,
    pg_enum,
)


if TYPE_CHECKING:
    from src.shared.models.profile import Profile


class SocialTask(Base, TimestampMixin):
    __tablename__ = "social_tasks"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    post_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    assigned_to: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    assigned_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # TASK
    # ═══════════════════════════════════════════════════════════════════════════

    platform: Mapped[SocialPlatform] = mapped_column(
        pg_enum(SocialPlatform, "social_platform"),
        nullable=False,
    )

    task_title: Mapped[str] = mapped_column(String(255), nullable=False)
    task_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    post_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    article_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    priority: Mapped[SocialTaskPriority] = mapped_column(
        pg_enum(SocialTaskPriority, "social_task_priority"),
        nullable=False,
        default=SocialTaskPriority.MEDIUM,
    )

    status: Mapped[SocialTaskStatus] = mapped_column(
        pg_enum(SocialTaskStatus, "social_task_status"),
        nullable=False,
        default=SocialTaskStatus.PENDING,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    completions: Mapped[list["SocialTaskCompletion"]] = relationship(
        "SocialTaskCompletion",
        back_populates="task",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    assignee: Mapped[Optional["Profile"]] = relationship(
        "Profile",
        foreign_keys=[assigned_to],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<SocialTask(id={self.id}, platform={self.platform}, status={self.status})>"


class SocialTaskCompletion(Base, TimestampMixin):
    __tablename__ = "social_task_completions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("social_tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    completed_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    completion_link: Mapped[str] = mapped_column(Text, nullable=False)
    completion_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    verification_status: Mapped[VerificationStatus] = mapped_column(
        pg_enum(VerificationStatus, "verification_status"),
        nullable=False,
        default=VerificationStatus.PENDING,
    )

    task: Mapped["SocialTask"] = relationship("SocialTask", back_populates="completions")
