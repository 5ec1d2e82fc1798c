"""
Newsletter Repositories

Subscribers, campaigns and per-subscriber send records.
"""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.enums import SubscriberStatus
from src.shared.models.newsletter import (
    NewsletterCampaign,
    NewsletterSend,
    NewsletterSubscriber,
)
from src.shared.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository[NewsletterSubscriber]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(NewsletterSubscriber, session)

    async def get_by_email(self, email: str) -> Optional[NewsletterSubscriber]:
        result = await self.session.execute(
            select(NewsletterSubscriber).where(NewsletterSubscriber.email == email)
        )
        return result.scalar_one_or_none()

    async def get_by_token(self, token: str) -> Optional[NewsletterSubscriber]:
        result = await self.session.execute(
            select(NewsletterSubscriber).where(NewsletterSubscriber.unsubscribe_token == token)
        )
        return result.scalar_one_or_none()

    async def list_active(self) -> list[NewsletterSubscriber]:
        result = await self.session.execute(
            select(NewsletterSubscriber)
            .where(NewsletterSubscriber.status == SubscriberStatus.ACTIVE)
            .order_by(NewsletterSubscriber.subscribed_at.asc())
        )
        return list(result.scalars().all())

    async def list_by_status(
        self,
        status: Optional[SubscriberStatus],
        *,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[NewsletterSubscriber], int]:
        conditions = [NewsletterSubscriber.status == status] if status is not None else []
        total = await self.session.execute(
            select(sql_count()).select_from(NewsletterSubscriber).where(*conditions)
        )
        result = await self.session.execute(
            select(NewsletterSubscriber)
            .where(*conditions)
            .order_by(NewsletterSubscriber.subscribed_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total.scalar() or 0


class CampaignRepository(BaseRepository[NewsletterCampaign]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(NewsletterCampaign, session)

    async def record_sends(self, rows: list[dict]) -> None:
        """Bulk insert NewsletterSend rows ({campaign_id, subscriber_id, status})."""
        if rows:
            await self.session.execute(insert(NewsletterSend), rows)
