"""
Analytics Repository

Session upkeep for ingestion and windowed reads for the reports.
Aggregation itself is done in memory by utils/analytics/reports.py.
"""

from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.analytics import AnalyticsEvent, AnalyticsSession
from src.shared.repositories.base import BaseRepository


class AnalyticsRepository(BaseRepository[AnalyticsSession]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AnalyticsSession, session)

    async def get_by_session_id(self, session_id: str) -> Optional[AnalyticsSession]:
        result = await self.session.execute(
            select(AnalyticsSession).where(AnalyticsSession.session_id == session_id)
        )
        return result.scalar_one_or_none()

    async def increment_page_views(self, session_id: str) -> None:
        await self.session.execute(
            update(AnalyticsSession)
            .where(AnalyticsSession.session_id == session_id)
            .values(page_views=AnalyticsSession.page_views + 1)
        )

    async def create_event(
        self,
        *,
        session_id: str,
        post_id: UUID,
        event_type: str,
        event_data: dict[str, Any],
    ) -> AnalyticsEvent:
        event = AnalyticsEvent(
            session_id=session_id,
            post_id=post_id,
            event_type=event_type,
            event_data=event_data,
        )
        self.session.add(event)
        await self.session.flush()
        return event

    async def list_sessions(
        self,
        start: datetime,
        end: datetime,
        *,
        campaigns_only: bool = False,
    ) -> list[AnalyticsSession]:
        query = select(AnalyticsSession).where(
            AnalyticsSession.started_at >= start,
            AnalyticsSession.started_at <= end,
        )
        if campaigns_only:
            query = query.where(AnalyticsSession.utm_campaign.is_not(None))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_events_for_sessions(
        self,
        session_ids: Iterable[str],
        event_types: Iterable[str],
    ) -> list[AnalyticsEvent]:
        ids = list(session_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(AnalyticsEvent).where(
                AnalyticsEvent.session_id.in_(ids),
                AnalyticsEvent.event_type.in_(list(event_types)),
            )
        )
        return list(result.scalars().all())
