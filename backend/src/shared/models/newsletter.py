"""
Newsletter Entity Models

    NewsletterSubscriber   ← one row per email, status flips on (un)subscribe
    NewsletterCampaign     ← one outbound mailing (e.g. a new article)
    NewsletterSend         ← per-subscriber delivery result of a campaign

SAMPLE SUBSCRIBER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ email             │ "reader@example.com"                                     │
│ status            │ active                                                   │
│ source            │ "footer"                                                 │
│ unsubscribe_token │ "b1946ac9-2e21-4b5a-8a43-..."                            │
│ subscribed_at     │ 2025-02-11T09:12:00Z                                     │
│ unsubscribed_at   │ null                                                     │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import (
    CampaignStatus,
    SendStatus,
    SubscriberStatus,
    pg_enum,
)


class NewsletterSubscriber(Base, TimestampMixin):
    __tablename__ = "newsletter_subscribers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[SubscriberStatus] = mapped_column(
        pg_enum(SubscriberStatus, "subscriber_status"),
        nullable=False,
        default=SubscriberStatus.ACTIVE,
        index=True,
    )

    unsubscribe_token: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )

    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )
    unsubscribed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<NewsletterSubscriber(email={self.email}, status={self.status})>"


class NewsletterCampaign(Base, TimestampMixin):
    __tablename__ = "newsletter_campaigns"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    subject: Mapped[str] = mapped_column(Text, nullable=False)
    # "article" for new-post mailings
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="article")

    post_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="SET NULL"),
        nullable=True,
    )

    status: Mapped[CampaignStatus] = mapped_column(
        pg_enum(CampaignStatus, "campaign_status"),
        nullable=False,
        default=CampaignStatus.DRAFT,
    )

    sent_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<NewsletterCampaign(id={self.id}, status={self.status})>"


class NewsletterSend(Base):
    __tablename__ = "newsletter_sends"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    campaign_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("newsletter_campaigns.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("newsletter_subscribers.id", ondelete="CASCADE"),
        nullable=False,
    )

    status: Mapped[SendStatus] = mapped_column(
        pg_enum(SendStatus, "send_status"),
        nullable=False,
    )

    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )
