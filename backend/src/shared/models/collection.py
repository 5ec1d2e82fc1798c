"""
Collection Entity Models

Curated, ordered groups of posts (series, special coverage).

    Collection ──< CollectionPost >── Post
                   (order_index)

A post appears at most once per collection; re-adding it only moves it.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.post import Post


class Collection(Base, TimestampMixin):
    """
    Collection model.

    Attributes:
        title, slug, description, featured_image_url: Public identity
        created_by: Owner; owners may edit their collection without staff role
    """

    __tablename__ = "collections"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FIELDS
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    featured_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    items: Mapped[list["CollectionPost"]] = relationship(
        "CollectionPost",
        back_populates="collection",
        cascade="all, delete-orphan",
        order_by="CollectionPost.order_index",
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, slug={self.slug})>"


class CollectionPost(Base, TimestampMixin):
    """Junction row carrying a post's position inside a collection."""

    __tablename__ = "collection_posts"
    __table_args__ = (
        UniqueConstraint("collection_id", "post_id", name="uq_collection_posts_collection_post"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    collection_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    collection: Mapped["Collection"] = relationship("Collection", back_populates="items")
    post: Mapped["Post"] = relationship("Post", lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<CollectionPost(collection_id={self.collection_id}, "
            f"post_id={self.post_id}, order_index={self.order_index})>"
        )
