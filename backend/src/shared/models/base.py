"""
Base Model Classes

Declarative base and the timestamp mixin shared by every Inshort table.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Usage:
======
    from src.shared.models.base import Base, TimestampMixin

    class Collection(Base, TimestampMixin):
        __tablename__ = "collections"
        id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
        slug: Mapped[str] = mapped_column(String(100), unique=True)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware current time; every timestamp in the app uses UTC."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    JSON documents (post content, analytics event payloads) and string
    lists (tags) are stored as PostgreSQL JSONB.
    """

    type_annotation_map = {
        dict[str, Any]: JSONB,
        list[str]: JSONB,
    }


class TimestampMixin:
    """
    Adds created_at (set by PostgreSQL on INSERT) and updated_at
    (refreshed by SQLAlchemy on every UPDATE).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
