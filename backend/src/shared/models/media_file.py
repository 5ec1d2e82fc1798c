"""
MediaFile Entity Model

Metadata for an image stored in the media bucket. file_path is the object
key; the public URL is derived from settings at read time.

SAMPLE MEDIA RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ file_path        │ "1740902049123_k3j9x2.jpg"                                │
│ file_name        │ "parliament-session.jpg"                                  │
│ mime_type        │ "image/jpeg"                                              │
│ file_size        │ 482133                                                    │
│ alt_text         │ "Members gather for the budget session"                   │
│ tags             │ ["politics", "parliament"]                                │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base


class MediaFile(Base):
    __tablename__ = "media_files"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # STORAGE
    # ═══════════════════════════════════════════════════════════════════════════

    file_path: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # EDITORIAL METADATA
    # ═══════════════════════════════════════════════════════════════════════════

    alt_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    caption: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    credit: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)

    uploaded_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<MediaFile(id={self.id}, file_path={self.file_path})>"
