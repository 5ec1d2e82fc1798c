"""
EditingLock Entity Model

Cooperative soft lock on a post being edited. At most one row per post
(unique post_id); whoever inserts first holds the lock until expires_at.
Readers compare expires_at against "now" themselves; expired rows are
cleared lazily by the next requester.
"""

from datetime import datetime
import uuid

from sqlalchemy import DateTime, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base


class EditingLock(Base):
    __tablename__ = "editing_locks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Denormalized so lock checks need no profile join
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)

    locked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<EditingLock(post_id={self.post_id}, user_id={self.user_id}, "
            f"expires_at={self.expires_at})>"
        )
