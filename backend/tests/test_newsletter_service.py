"""
Tests for newsletter subscriptions and new-article campaigns.
"""
import asyncio
from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
import uuid

import pytest

from factories import make_post
from src.shared.adapters.email_adapter import NOT_CONFIGURED, EmailResult
from src.shared.core.exceptions import ConflictError, SubscriberNotFoundError, ValidationError
from src.shared.models import PostStatus, SendStatus, SubscriberStatus
from src.shared.services import newsletter_service
from src.shared.services.newsletter_service import (
    NewsletterService,
    dispatch_new_article,
    normalize_email,
    send_new_article_in_background,
)


def subscriber(**kwargs):
    values = {
        "id": uuid.uuid4(),
        "email": "reader@gmail.com",
        "name": None,
        "source": None,
        "status": SubscriberStatus.ACTIVE,
        "unsubscribe_token": "tok",
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


@pytest.fixture
def email():
    mock = MagicMock()
    mock.is_configured = True
    mock.send = AsyncMock(return_value=EmailResult(success=True, message_id="m1"))
    return mock


@pytest.fixture
def service(mock_session, email):
    svc = NewsletterService(mock_session, email=email)
    svc.repo = AsyncMock()
    svc.campaign_repo = AsyncMock()
    svc.post_repo = AsyncMock()
    return svc


def test_normalize_email():
    assert normalize_email("  Reader@Gmail.com ") == "reader@gmail.com"
    with pytest.raises(ValidationError):
        normalize_email("not-an-email")
    with pytest.raises(ValidationError):
        normalize_email(None)


class TestSubscribe:
    @pytest.mark.asyncio
    async def test_new_subscriber_gets_welcome_mail(self, service, email):
        service.repo.get_by_email.return_value = None
        service.repo.create.return_value = subscriber()

        await service.subscribe("Reader@Gmail.com", name="Rahim", source="footer")

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["email"] == "reader@gmail.com"
        assert kwargs["status"] == SubscriberStatus.ACTIVE
        assert kwargs["unsubscribe_token"]
        assert email.send.await_args.kwargs["to"] == "reader@gmail.com"

    @pytest.mark.asyncio
    async def test_active_subscriber_conflicts(self, service):
        service.repo.get_by_email.return_value = subscriber()

        with pytest.raises(ConflictError) as exc:
            await service.subscribe("reader@gmail.com")
        assert exc.value.status_code == 409

    @pytest.mark.asyncio
    async def test_reactivates_with_new_token(self, service):
        old = subscriber(status=SubscriberStatus.UNSUBSCRIBED, source="footer")
        service.repo.get_by_email.return_value = old
        service.repo.apply.return_value = subscriber(unsubscribe_token="fresh")

        await service.subscribe("reader@gmail.com")

        fields = service.repo.apply.await_args.kwargs
        assert fields["status"] == SubscriberStatus.ACTIVE
        assert fields["unsubscribed_at"] is None
        assert fields["unsubscribe_token"] != "tok"
        assert fields["source"] == "footer"

    @pytest.mark.asyncio
    async def test_welcome_failure_keeps_subscription(self, service, email):
        service.repo.get_by_email.return_value = None
        created = subscriber()
        service.repo.create.return_value = created
        email.send.return_value = EmailResult(success=False, error="boom")

        assert await service.subscribe("reader@gmail.com") is created


class TestUnsubscribe:
    @pytest.mark.asyncio
    async def test_missing_token(self, service):
        with pytest.raises(ValidationError):
            await service.unsubscribe(None)

    @pytest.mark.asyncio
    async def test_unknown_token(self, service):
        service.repo.get_by_token.return_value = None
        with pytest.raises(SubscriberNotFoundError):
            await service.unsubscribe("nope")

    @pytest.mark.asyncio
    async def test_already_unsubscribed(self, service):
        service.repo.get_by_token.return_value = subscriber(status=SubscriberStatus.UNSUBSCRIBED)
        assert await service.unsubscribe("tok") == "You are already unsubscribed."
        service.repo.apply.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsubscribes(self, service):
        service.repo.get_by_token.return_value = subscriber()
        assert await service.unsubscribe("tok") == "You have been unsubscribed successfully."
        assert service.repo.apply.await_args.kwargs["status"] == SubscriberStatus.UNSUBSCRIBED


class TestSendNewArticle:
    @pytest.mark.asyncio
    async def test_only_published_posts(self, service):
        service.post_repo.get.return_value = make_post(status=PostStatus.DRAFT)
        with pytest.raises(ValidationError):
            await service.send_new_article(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_not_configured(self, service, email):
        service.post_repo.get.return_value = make_post(status=PostStatus.PUBLISHED)
        email.is_configured = False

        result = await service.send_new_article(uuid.uuid4())

        assert result == {"success": False, "sent": 0, "error": NOT_CONFIGURED}
        service.campaign_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sends_in_batches_and_records_each_result(self, service, email):
        post = make_post(status=PostStatus.PUBLISHED)
        service.post_repo.get.return_value = post
        subscribers = [subscriber(email=f"r{i}@gmail.com") for i in range(3)]
        service.repo.list_active.return_value = subscribers
        campaign = SimpleNamespace(id=uuid.uuid4())
        service.campaign_repo.create.return_value = campaign

        async def send(to, subject, html):
            return EmailResult(success=to != "r1@gmail.com", error=None if to != "r1@gmail.com" else "bounced")

        email.send.side_effect = send

        with patch("src.shared.services.newsletter_service.NEWSLETTER_BATCH_SIZE", 2), \
             patch("src.shared.services.newsletter_service.NEWSLETTER_BATCH_DELAY_SECONDS", 0):
            result = await service.send_new_article(post.id)

        assert result == {"success": True, "sent": 2}
        assert service.campaign_repo.record_sends.await_count == 2
        first_batch = service.campaign_repo.record_sends.await_args_list[0].args[0]
        assert [row["status"] for row in first_batch] == [SendStatus.SENT, SendStatus.FAILED]
        final = service.campaign_repo.apply.await_args.kwargs
        assert final["sent_count"] == 2

    @pytest.mark.asyncio
    async def test_no_subscribers_skips_campaign(self, service):
        service.post_repo.get.return_value = make_post(status=PostStatus.PUBLISHED)
        service.repo.list_active.return_value = []

        assert await service.send_new_article(uuid.uuid4()) == {"success": True, "sent": 0}
        service.campaign_repo.create.assert_not_awaited()


class TestBackgroundMailing:
    @pytest.fixture
    def scope(self, mock_session):
        @asynccontextmanager
        async def fake_scope():
            yield mock_session

        with patch("src.shared.services.newsletter_service.session_scope", fake_scope):
            yield

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, scope):
        with patch.object(NewsletterService, "send_new_article", AsyncMock(side_effect=RuntimeError("smtp down"))):
            assert await send_new_article_in_background(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_dispatch_returns_before_the_mailing_finishes(self, scope):
        started, release = asyncio.Event(), asyncio.Event()

        async def slow_send(self, post_id):
            started.set()
            await release.wait()
            return {"success": True, "sent": 1}

        with patch.object(NewsletterService, "send_new_article", slow_send):
            assert dispatch_new_article(uuid.uuid4()) is None
            await asyncio.wait_for(started.wait(), timeout=1)
            assert len(newsletter_service._mailings) == 1
            release.set()
            await asyncio.gather(*newsletter_service._mailings)
