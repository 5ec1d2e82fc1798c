"""
Analytics Entity Models

    AnalyticsSession   ← one row per client session per post (page views counted)
    AnalyticsEvent     ← scroll depth, time on page and other reader events

Sessions carry the attribution data (referrer, UTM parameters, derived
traffic source) and the client fingerprint (device, browser, os). Reports
aggregate these rows in memory; see utils/analytics/reports.py.

SAMPLE SESSION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ session_id       │ "s_1740902049_x8k2"                                       │
│ post_id          │ 3f2a9c1e-...                                              │
│ device_type      │ "mobile"                                                  │
│ browser          │ "Chrome" 122.0                                            │
│ traffic_source   │ social                                                    │
│ utm_campaign     │ "budget-2025"                                             │
│ page_views       │ 3                                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Any, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.models.base import Base
from src.shared.models.enums import TrafficSource, pg_enum


class AnalyticsSession(Base):
    __tablename__ = "analytics_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Client-generated, one per tab session
    session_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CLIENT
    # ═══════════════════════════════════════════════════════════════════════════

    device_type: Mapped[str] = mapped_column(String(20), nullable=False, default="unknown")
    browser: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    browser_version: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    os: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    os_version: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # ATTRIBUTION
    # ═══════════════════════════════════════════════════════════════════════════

    referrer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    traffic_source: Mapped[TrafficSource] = mapped_column(
        pg_enum(TrafficSource, "traffic_source"),
        nullable=False,
        default=TrafficSource.OTHER,
    )

    utm_source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    utm_medium: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    utm_campaign: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)

    page_views: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<AnalyticsSession(session_id={self.session_id}, post_id={self.post_id})>"


class AnalyticsEvent(Base):
    __tablename__ = "analytics_events"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Matches AnalyticsSession.session_id (not enforced; events may race the session row)
    session_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # e.g. "view", "scroll" {scrollDepth}, "time" {timeSeconds}
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    event_data: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AnalyticsEvent(session_id={self.session_id}, type={self.event_type})>"
