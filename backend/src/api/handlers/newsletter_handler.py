"""
Newsletter Handler

Public signup/unsignup plus staff views of the subscriber list and a
manual "send this article" trigger.

Signups are rate limited per client IP through Redis. When Redis is
unreachable the limiter lets requests through.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import NewsletterServiceDep, get_redis
from src.shared.adapters.redis_adapter import RedisAdapter
from src.shared.core.exceptions import RateLimitError
from src.shared.models.enums import SubscriberStatus
from src.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from src.shared.schemas.newsletter import (
    CampaignResult,
    SubscribeRequest,
    SubscriberResponse,
    UnsubscribeRequest,
)
from src.shared.services.permissions import require_staff
from src.shared.utils.constants import (
    MAX_PAGE_SIZE,
    SUBSCRIBE_RATE_LIMIT,
    SUBSCRIBE_RATE_WINDOW_SECONDS,
)


router = APIRouter()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def limit_signups(request: Request, redis: RedisAdapter = Depends(get_redis)) -> None:
    allowed, _ = redis.check_rate_limit(
        f"rate:subscribe:{client_ip(request)}",
        SUBSCRIBE_RATE_LIMIT,
        SUBSCRIBE_RATE_WINDOW_SECONDS,
    )
    if not allowed:
        raise RateLimitError(
            "Too many signup attempts. Please try again later.",
            retry_after=SUBSCRIBE_RATE_WINDOW_SECONDS,
        )


@router.post(
    "/subscribe",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_signups)],
)
async def subscribe(request: SubscribeRequest, service: NewsletterServiceDep):
    """
    Raises:
        400: Invalid email address
        409: Already subscribed
        429: Too many attempts from this IP
    """
    await service.subscribe(request.email, request.name, request.source)
    return MessageResponse(message="Successfully subscribed to the newsletter!")


@router.post("/unsubscribe", response_model=MessageResponse)
async def unsubscribe(request: UnsubscribeRequest, service: NewsletterServiceDep):
    message = await service.unsubscribe(request.token)
    return MessageResponse(message=message)


@router.get("/subscribers", response_model=PaginatedResponse[SubscriberResponse])
async def list_subscribers(
    profile: CurrentProfile,
    service: NewsletterServiceDep,
    status_filter: Optional[SubscriberStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
):
    items, total = await service.list_subscribers(
        profile, status=status_filter, page=page, page_size=per_page
    )
    return PaginatedResponse[SubscriberResponse](
        data=[SubscriberResponse.model_validate(s) for s in items],
        pagination=PaginationMeta.create(page=page, per_page=per_page, total=total),
    )


@router.post("/send/{post_id}", response_model=CampaignResult)
async def send_new_article(post_id: UUID, profile: CurrentProfile, service: NewsletterServiceDep):
    """Mail a published post to all active subscribers (staff only)."""
    require_staff(profile)
    return await service.send_new_article(post_id)
