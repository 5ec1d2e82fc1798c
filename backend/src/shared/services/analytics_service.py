"""
Analytics Service

First-party reader analytics: session beacons, engagement events and the
dashboard reports built from them.

Sessions:
=========
The client generates a session_id per tab. The first beacon for it
inserts a row with the derived client fingerprint and traffic source;
every later beacon with the same id only bumps page_views.
"""

from datetime import datetime, timedelta
from typing import Any, List, Mapping, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.core.exceptions import ValidationError
from src.shared.core.logging import get_logger
from src.shared.models.analytics import AnalyticsEvent, AnalyticsSession
from src.shared.models.base import utcnow
from src.shared.models.enums import TrafficSource
from src.shared.models.profile import Profile
from src.shared.repositories.analytics_repository import AnalyticsRepository
from src.shared.services.permissions import require_staff
from src.shared.utils.analytics import (
    CampaignMetrics,
    TrafficReport,
    campaign_metrics,
    categorize_traffic_source,
    parse_user_agent,
    parse_utm,
    traffic_report,
)
from src.shared.utils.constants import ANALYTICS_DEFAULT_WINDOW_DAYS

logger = get_logger(__name__)


ENGAGEMENT_EVENTS = ("time", "scroll")

SESSION_FIELDS = (
    "country",
    "city",
    "referrer",
    "utm_source",
    "utm_medium",
    "utm_campaign",
)


def report_window(
    start: Optional[datetime],
    end: Optional[datetime],
    now: Optional[datetime] = None,
) -> Tuple[datetime, datetime]:
    end = end or now or utcnow()
    start = start or end - timedelta(days=ANALYTICS_DEFAULT_WINDOW_DAYS)
    return start, end


class AnalyticsService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = AnalyticsRepository(session)

    async def record_session(
        self,
        payload: Mapping[str, Any],
        user_id: Optional[UUID] = None,
        user_agent: Optional[str] = None,
    ) -> AnalyticsSession:
        """
        Insert a session or count another page view on an existing one.

        Client-supplied device/browser/os and traffic_source win over the
        values derived from the User-Agent and referrer.
        Missing utm_* values are read off the landing page_url.
        """
        session_id = payload.get("session_id")
        post_id = payload.get("post_id")
        if not session_id or not post_id:
            raise ValidationError("Missing required fields")

        existing = await self.repo.get_by_session_id(session_id)
        if existing:
            await self.repo.increment_page_views(session_id)
            return existing

        if payload.get("page_url"):
            landing = parse_utm(payload["page_url"])
            payload = {
                **{f"utm_{key}": value for key, value in landing.items()},
                **{k: v for k, v in payload.items() if v is not None},
            }

        device = parse_user_agent(user_agent)
        traffic_source = payload.get("traffic_source") or categorize_traffic_source(
            payload.get("referrer"),
            payload.get("utm_source"),
            payload.get("utm_medium"),
            site_host=settings.site_host,
        )

        row = await self.repo.create(
            session_id=session_id,
            post_id=post_id,
            user_id=user_id,
            device_type=payload.get("device_type") or device.device_type,
            browser=payload.get("browser") or device.browser,
            browser_version=payload.get("browser_version") or device.browser_version,
            os=payload.get("os") or device.os,
            os_version=payload.get("os_version") or device.os_version,
            traffic_source=TrafficSource(traffic_source),
            page_views=1,
            **{k: payload.get(k) for k in SESSION_FIELDS},
        )
        logger.debug("Analytics session started", session_id=session_id, source=row.traffic_source.value)
        return row

    async def record_event(
        self,
        session_id: Optional[str],
        post_id: Optional[UUID],
        event_type: Optional[str],
        event_data: Optional[Mapping[str, Any]] = None,
    ) -> AnalyticsEvent:
        if not session_id or not post_id or not event_type:
            raise ValidationError("Missing required fields")
        return await self.repo.create_event(
            session_id=session_id,
            post_id=post_id,
            event_type=event_type,
            event_data=dict(event_data or {}),
        )

    async def traffic_report(
        self,
        user: Profile,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> TrafficReport:
        require_staff(user)
        start, end = report_window(start, end)
        return traffic_report(await self.repo.list_sessions(start, end))

    async def campaign_metrics(
        self,
        user: Profile,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[CampaignMetrics]:
        require_staff(user)
        start, end = report_window(start, end)
        sessions = await self.repo.list_sessions(start, end, campaigns_only=True)
        events = await self.repo.list_events_for_sessions(
            (s.session_id for s in sessions),
            ENGAGEMENT_EVENTS,
        )
        return campaign_metrics(sessions, events)
