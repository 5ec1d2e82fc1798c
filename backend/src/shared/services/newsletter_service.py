"""
Newsletter Service

Subscription lifecycle and new-article mailings.

Flow:
=====
    subscribe(email)
      ├── new address         → insert (active, fresh token) → welcome mail
      ├── unsubscribed before → reactivate with a new token  → welcome mail
      └── already active      → ConflictError

    send_new_article(post_id)
      campaign(sending) → batches of 50, concurrent within a batch,
      1s pause between batches → one NewsletterSend row per subscriber
      → campaign(sent, sent_count)

Welcome mail is best effort; a failed send never undoes the subscription.

Publishing hands the mailing to dispatch_new_article() once the publish is
committed. It runs as its own task on its own session, so the request
returns without waiting for the batches.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.email_adapter import NOT_CONFIGURED, EmailAdapter, get_email_adapter
from src.shared.core.exceptions import (
    ConflictError,
    PostNotFoundError,
    SubscriberNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.db.session import session_scope
from src.shared.models.base import utcnow
from src.shared.models.enums import CampaignStatus, SendStatus, SubscriberStatus
from src.shared.models.newsletter import NewsletterSubscriber
from src.shared.models.profile import Profile
from src.shared.repositories.newsletter_repository import CampaignRepository, SubscriberRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.services.permissions import require_staff
from src.shared.utils.constants import NEWSLETTER_BATCH_DELAY_SECONDS, NEWSLETTER_BATCH_SIZE
from src.shared.utils.email_templates import new_article_email, welcome_email
from src.shared.utils.security import SecurityUtils

logger = get_logger(__name__)


def normalize_email(email: Optional[str]) -> str:
    """Lower-case and validate. Raises ValidationError for bad input."""
    value = (email or "").strip().lower()
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Please enter a valid email address")
    return value


class NewsletterService:
    def __init__(self, session: AsyncSession, email: Optional[EmailAdapter] = None) -> None:
        self.session = session
        self.repo = SubscriberRepository(session)
        self.campaign_repo = CampaignRepository(session)
        self.post_repo = PostRepository(session)
        self.email = email or get_email_adapter()

    async def subscribe(
        self,
        email: str,
        name: Optional[str] = None,
        source: Optional[str] = None,
    ) -> NewsletterSubscriber:
        """
        Add or reactivate a subscriber.

        Raises:
            ValidationError: Malformed address
            ConflictError: Address is already an active subscriber
        """
        address = normalize_email(email)
        existing = await self.repo.get_by_email(address)

        if existing and existing.status == SubscriberStatus.ACTIVE:
            raise ConflictError("This email is already subscribed to our newsletter")

        if existing:
            subscriber = await self.repo.apply(
                existing,
                status=SubscriberStatus.ACTIVE,
                unsubscribe_token=SecurityUtils.generate_token(),
                subscribed_at=utcnow(),
                unsubscribed_at=None,
                name=name or existing.name,
                source=source or existing.source,
            )
            logger.info("Subscriber reactivated", subscriber_id=str(subscriber.id))
        else:
            subscriber = await self.repo.create(
                email=address,
                name=name,
                source=source,
                status=SubscriberStatus.ACTIVE,
                unsubscribe_token=SecurityUtils.generate_token(),
            )
            logger.info("Subscriber added", subscriber_id=str(subscriber.id), source=source)

        message = welcome_email(subscriber.unsubscribe_token, name)
        result = await self.email.send(to=address, subject=message.subject, html=message.html)
        if not result.success:
            logger.warning("Welcome email failed", subscriber_id=str(subscriber.id), error=result.error)

        return subscriber

    async def unsubscribe(self, token: Optional[str]) -> str:
        """Returns the message shown to the reader."""
        if not token:
            raise ValidationError("Invalid unsubscribe link")

        subscriber = await self.repo.get_by_token(token)
        if not subscriber:
            raise SubscriberNotFoundError()

        if subscriber.status == SubscriberStatus.UNSUBSCRIBED:
            return "You are already unsubscribed."

        await self.repo.apply(
            subscriber,
            status=SubscriberStatus.UNSUBSCRIBED,
            unsubscribed_at=utcnow(),
        )
        logger.info("Subscriber unsubscribed", subscriber_id=str(subscriber.id))
        return "You have been unsubscribed successfully."

    async def list_subscribers(
        self,
        user: Profile,
        status: Optional[SubscriberStatus] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Tuple[List[NewsletterSubscriber], int]:
        require_staff(user)
        return await self.repo.list_by_status(
            status, offset=(page - 1) * page_size, limit=page_size
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # CAMPAIGNS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _send_one(self, post: Any, subscriber: NewsletterSubscriber) -> bool:
        message = new_article_email(post, subscriber.unsubscribe_token)
        result = await self.email.send(to=subscriber.email, subject=message.subject, html=message.html)
        if not result.success:
            logger.warning("Newsletter send failed", subscriber_id=str(subscriber.id), error=result.error)
        return result.success

    async def send_new_article(self, post_id: UUID) -> Dict[str, Any]:
        """
        Mail a published post to every active subscriber.

        Returns:
            {"success": bool, "sent": n} plus "error" when nothing was attempted
        """
        post = await self.post_repo.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        if not post.is_published:
            raise ValidationError("Only published posts can be sent to subscribers")

        if not self.email.is_configured:
            return {"success": False, "sent": 0, "error": NOT_CONFIGURED}

        subscribers = await self.repo.list_active()
        if not subscribers:
            logger.info("No active subscribers, campaign skipped", post_id=str(post.id))
            return {"success": True, "sent": 0}

        campaign = await self.campaign_repo.create(
            subject=f"New Article: {post.title}",
            type="article",
            post_id=post.id,
            status=CampaignStatus.SENDING,
        )

        sent = 0
        for start in range(0, len(subscribers), NEWSLETTER_BATCH_SIZE):
            if start:
                await asyncio.sleep(NEWSLETTER_BATCH_DELAY_SECONDS)

            batch = subscribers[start:start + NEWSLETTER_BATCH_SIZE]
            results = await asyncio.gather(*(self._send_one(post, s) for s in batch))
            await self.campaign_repo.record_sends([
                {
                    "campaign_id": campaign.id,
                    "subscriber_id": s.id,
                    "status": SendStatus.SENT if ok else SendStatus.FAILED,
                }
                for s, ok in zip(batch, results)
            ])
            sent += sum(1 for ok in results if ok)

        await self.campaign_repo.apply(
            campaign,
            status=CampaignStatus.SENT,
            sent_count=sent,
            sent_at=utcnow(),
        )
        logger.info(
            "Newsletter campaign sent",
            campaign_id=str(campaign.id),
            post_id=str(post.id),
            sent=sent,
            total=len(subscribers),
        )
        return {"success": True, "sent": sent}


# ═══════════════════════════════════════════════════════════════════════════════
# BACKGROUND MAILING
# ═══════════════════════════════════════════════════════════════════════════════

# Strong references so running mailings are not garbage collected
_mailings: "set[asyncio.Task]" = set()


async def send_new_article_in_background(post_id: UUID) -> Optional[Dict[str, Any]]:
    """Run send_new_article on a fresh session. Failures are logged, never raised."""
    try:
        async with session_scope() as session:
            result = await NewsletterService(session).send_new_article(post_id)
    except Exception as e:
        logger.warning("New article newsletter failed", post_id=str(post_id), error=str(e))
        return None

    if not result.get("success"):
        logger.warning("New article newsletter not sent", post_id=str(post_id), error=result.get("error"))
    return result


def dispatch_new_article(post_id: UUID) -> None:
    """Start the mailing without waiting for it."""
    task = asyncio.create_task(send_new_article_in_background(post_id))
    _mailings.add(task)
    task.add_done_callback(_mailings.discard)
