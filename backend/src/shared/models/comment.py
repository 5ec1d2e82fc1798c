"""
Comment Entity Models

Two parallel comment shapes share this module:

    Comment       ← public reader comments, moderated before display
    PostComment   ← internal editorial discussion on a post (workflow)

Both are threaded through a nullable self-referencing parent_id. Threads
are rebuilt in memory from flat rows (see utils/comment_tree.py).

SAMPLE COMMENT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 9a8b7c6d-...                                              │
│ post_id          │ 3f2a9c1e-...                                              │
│ user_id          │ 550e8400-...                                              │
│ parent_id        │ null                                                      │
│ content          │ "<p>Great reporting.</p>"                                 │
│ status           │ pending                                                   │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import CommentStatus, pg_enum


if TYPE_CHECKING:
    from src.shared.models.profile import Profile


class Comment(Base, TimestampMixin):
    """Public comment awaiting or past moderation."""

    __tablename__ = "comments"

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

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    # Sanitized HTML
    content: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[CommentStatus] = mapped_column(
        pg_enum(CommentStatus, "comment_status"),
        nullable=False,
        default=CommentStatus.PENDING,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["Profile"] = relationship("Profile", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, status={self.status})>"


class PostComment(Base, TimestampMixin):
    """Internal workflow discussion (review notes, rejection reasons)."""

    __tablename__ = "post_comments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("post_comments.id", ondelete="CASCADE"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["Profile"] = relationship("Profile", lazy="selectin")

    def __repr__(self) -> str:
        return f"<PostComment(id={self.id}, post_id={self.post_id})>"
