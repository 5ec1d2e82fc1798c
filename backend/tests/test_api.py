"""
HTTP-level tests: routing, auth guards and the error envelope.

Services and the database are replaced through app.dependency_overrides;
the app lifespan is never entered so nothing connects to Postgres.
"""
from unittest.mock import AsyncMock, MagicMock, patch
import uuid

import pytest
from fastapi.testclient import TestClient

from factories import make_post, make_profile
from src.api.dependencies import get_db, get_optional_profile
from src.api.dependencies.services import (
    get_newsletter_service,
    get_post_service,
    get_redis,
)
from src.api.main import app
from src.config.settings import settings
from src.shared.models import PostStatus, UserRole
from src.shared.services.post_service import PaginatedPosts


async def fake_db():
    yield MagicMock()


@pytest.fixture
def overrides():
    app.dependency_overrides[get_db] = fake_db
    app.dependency_overrides[get_optional_profile] = lambda: None
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
def client(overrides):
    return TestClient(app)


@pytest.fixture
def post_service(overrides):
    service = MagicMock()
    service.list_posts = AsyncMock(
        return_value=PaginatedPosts(items=[], total=0, page=1, page_size=20)
    )
    service.get_post = AsyncMock()
    service.publish_scheduled_posts = AsyncMock(return_value={"published": 0, "posts": []})
    overrides[get_post_service] = lambda: service
    return service


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_reports_database_down(self, client):
        redis = MagicMock()
        redis.ping.return_value = True
        with patch("src.api.handlers.health_handler.check_db", AsyncMock(return_value=False)), \
             patch("src.api.handlers.health_handler.get_redis_adapter", return_value=redis):
            response = client.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "not_ready", "database": False, "cache": True}

    def test_live(self, client):
        assert client.get("/live").json() == {"status": "alive"}


class TestCronGuard:
    def test_wrong_secret(self, client, post_service):
        with patch.object(settings, "CRON_SECRET", "s3cret"):
            response = client.get(
                "/api/cron/publish-scheduled", headers={"Authorization": "Bearer nope"}
            )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"
        post_service.publish_scheduled_posts.assert_not_awaited()

    def test_right_secret(self, client, post_service):
        with patch.object(settings, "CRON_SECRET", "s3cret"):
            response = client.get(
                "/api/cron/publish-scheduled", headers={"Authorization": "Bearer s3cret"}
            )

        assert response.status_code == 200
        assert response.json() == {"published": 0, "posts": []}

    def test_production_without_secret(self, client, post_service):
        with patch.object(settings, "CRON_SECRET", ""), patch.object(settings, "APP_ENV", "production"):
            response = client.get("/api/cron/publish-scheduled")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"


class TestNewsletterSignup:
    @pytest.fixture
    def newsletter(self, overrides):
        service = MagicMock()
        service.subscribe = AsyncMock()
        overrides[get_newsletter_service] = lambda: service
        return service

    def test_subscribe(self, client, overrides, newsletter):
        redis = MagicMock()
        redis.check_rate_limit.return_value = (True, 1)
        overrides[get_redis] = lambda: redis

        response = client.post(
            "/api/newsletter/subscribe",
            json={"email": "reader@gmail.com"},
            headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        )

        assert response.status_code == 201
        assert redis.check_rate_limit.call_args.args[0] == "rate:subscribe:203.0.113.7"
        newsletter.subscribe.assert_awaited_once()

    def test_rate_limited(self, client, overrides, newsletter):
        redis = MagicMock()
        redis.check_rate_limit.return_value = (False, 6)
        overrides[get_redis] = lambda: redis

        response = client.post("/api/newsletter/subscribe", json={"email": "reader@gmail.com"})

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        newsletter.subscribe.assert_not_awaited()


class TestPostVisibility:
    def test_anonymous_list_is_published_only(self, client, post_service):
        response = client.get("/api/posts", params={"status": "draft"})

        assert response.status_code == 200
        assert post_service.list_posts.await_args.kwargs["status"] == PostStatus.PUBLISHED

    def test_staff_can_filter_drafts(self, client, overrides, post_service):
        overrides[get_optional_profile] = lambda: make_profile(UserRole.EDITOR)

        client.get("/api/posts", params={"status": "draft"})

        assert post_service.list_posts.await_args.kwargs["status"] == PostStatus.DRAFT

    def test_draft_is_hidden_from_anonymous(self, client, post_service):
        post_service.get_post.return_value = make_post(status=PostStatus.DRAFT, author_id=uuid.uuid4())

        response = client.get(f"/api/posts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_author_sees_own_draft(self, client, overrides, post_service):
        author = make_profile(UserRole.READER)
        overrides[get_optional_profile] = lambda: author
        post = make_post(status=PostStatus.DRAFT, author_id=author.id)
        post_service.get_post.return_value = post

        response = client.get(f"/api/posts/{post.id}")

        assert response.status_code == 200
        assert response.json()["slug"] == post.slug

    def test_create_requires_token(self, client):
        response = client.post("/api/posts", json={"title": "x"})
        assert response.status_code == 401


class TestIndexNowKeyFile:
    def test_serves_configured_key(self, client):
        with patch.object(settings, "INDEXNOW_KEY", "abc123"):
            response = client.get("/abc123.txt")

        assert response.status_code == 200
        assert response.text == "abc123"

    def test_other_names_are_missing(self, client):
        with patch.object(settings, "INDEXNOW_KEY", "abc123"):
            assert client.get("/other.txt").status_code == 404
