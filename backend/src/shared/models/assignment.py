"""
PostAssignment Entity Model

Links a post to a profile that has work to do on it: a writer with a
deadline, or a reviewer/approver in the editorial workflow. One row per
(post, assignee); reassigning updates the row in place.

The assignment's status tracks the assignee's task and is independent of
the post's own status.

SAMPLE ASSIGNMENT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ post_id          │ 3f2a9c1e-...                                              │
│ assigned_to      │ 550e8400-...                                              │
│ assigned_by      │ 660e8400-...                                              │
│ role             │ writer                                                    │
│ deadline         │ 2025-03-05T17:00:00Z                                      │
│ status           │ in_progress                                               │
│ priority         │ high                                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import (
    AssignmentPriority,
    AssignmentRole,
    AssignmentStatus,
    pg_enum,
)


if TYPE_CHECKING:
    from src.shared.models.post import Post
    from src.shared.models.profile import Profile


class PostAssignment(Base, TimestampMixin):
    __tablename__ = "post_assignments"
    __table_args__ = (
        UniqueConstraint("post_id", "assigned_to", name="uq_post_assignments_post_user"),
    )

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

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    assigned_to: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    assigned_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # ASSIGNMENT DETAILS
    # ═══════════════════════════════════════════════════════════════════════════

    role: Mapped[AssignmentRole] = mapped_column(
        pg_enum(AssignmentRole, "assignment_role"),
        nullable=False,
        default=AssignmentRole.WRITER,
    )

    deadline: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    status: Mapped[AssignmentStatus] = mapped_column(
        pg_enum(AssignmentStatus, "assignment_status"),
        nullable=False,
        default=AssignmentStatus.PENDING,
        index=True,
    )

    priority: Mapped[AssignmentPriority] = mapped_column(
        pg_enum(AssignmentPriority, "assignment_priority"),
        nullable=False,
        default=AssignmentPriority.MEDIUM,
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    post: Mapped["Post"] = relationship("Post", lazy="selectin")

    assignee: Mapped["Profile"] = relationship(
        "Profile",
        foreign_keys=[assigned_to],
        lazy="selectin",
    )

    assigner: Mapped[Optional["Profile"]] = relationship(
        "Profile",
        foreign_keys=[assigned_by],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<PostAssignment(id={self.id}, post_id={self.post_id}, "
            f"assigned_to={self.assigned_to}, status={self.status})>"
        )
