"""
Post Entity Model

A news article and its editorial state.

Content is the rich-text editor's JSON document tree, stored verbatim as
JSONB. The backend only walks it (text extraction, headings, images) and
never depends on the editor's node vocabulary beyond
{type, text?, attrs?, content?: [...]}.

SAMPLE POST RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 3f2a9c1e-7b4d-4e1a-9c2f-1d2e3f4a5b6c                      │
│ title            │ "Central bank holds policy rate for third quarter"        │
│ slug             │ "central-bank-holds-policy-rate"                          │
│ excerpt          │ "Rates unchanged as inflation eases..."                   │
│ content          │ {"type": "doc", "content": [...]}                         │
│ category         │ "Finance"                                                 │
│ tags             │ ["economy", "banking"]                                    │
│ status           │ published                                                 │
│ views            │ 1204                                                      │
│ is_editors_pick  │ false                                                     │
│ published_at     │ 2025-03-02T08:00:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘

A draft with a future published_at is a scheduled post; the scheduled
publish job flips it to published once that time passes.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import PostStatus, pg_enum


if TYPE_CHECKING:
    from src.shared.models.profile import Profile


class Post(Base, TimestampMixin):
    """
    Post model.

    Attributes:
        title, slug, excerpt, content: Article body and identity
        category, tags: Taxonomy used by feeds and related-article scoring
        status: Editorial lifecycle state
        author_id: Profile that wrote the post
        views: Page view counter (incremented atomically)
        published_at: Publication time, or scheduled time while a draft
    """

    __tablename__ = "posts"

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

    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    slug: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    excerpt: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)

    content: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
    )

    featured_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    reading_time: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # ═══════════════════════════════════════════════════════════════════════════
    # TAXONOMY
    # ═══════════════════════════════════════════════════════════════════════════

    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    tags: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EDITORIAL STATE
    # ═══════════════════════════════════════════════════════════════════════════

    status: Mapped[PostStatus] = mapped_column(
        pg_enum(PostStatus, "post_status"),
        nullable=False,
        default=PostStatus.DRAFT,
        index=True,
    )

    is_editors_pick: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    author: Mapped[Optional["Profile"]] = relationship(
        "Profile",
        back_populates="posts",
        lazy="selectin",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

    @property
    def author_name(self) -> Optional[str]:
        return self.author.display_name if self.author else None

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, slug={self.slug}, status={self.status})>"
