"""
Tests for cached feed documents and collections.
"""
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from factories import NOW, make_post
from src.shared.core.exceptions import AuthorizationError, ConflictError, ValidationError
from src.shared.models import PostStatus
from src.shared.services.collection_service import CollectionService
from src.shared.services.feed_service import FeedService
from src.shared.utils.feeds import http_date


class TestFeedService:
    @pytest.fixture
    def redis(self):
        mock = MagicMock()
        mock.get_page.return_value = None
        return mock

    @pytest.fixture
    def service(self, mock_session, redis):
        svc = FeedService(mock_session, redis=redis)
        svc.post_repo = AsyncMock()
        svc.collection_repo = AsyncMock()
        return svc

    @pytest.mark.asyncio
    async def test_rss_not_modified_skips_render(self, service):
        service.post_repo.latest_published_at.return_value = NOW

        doc = await service.rss(if_modified_since=http_date(NOW), now=NOW)

        assert doc.not_modified is True
        assert doc.body is None
        service.post_repo.list_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rss_renders_and_caches(self, service, redis):
        service.post_repo.latest_published_at.return_value = NOW
        service.post_repo.list_published.return_value = [
            make_post(status=PostStatus.PUBLISHED, published_at=NOW, slug="budget"),
        ]

        doc = await service.rss(if_modified_since=http_date(NOW - timedelta(hours=1)), now=NOW)

        assert "/news/budget" in doc.body
        assert doc.last_modified == NOW
        redis.set_page.assert_called_once_with("/feed.xml", doc.body)

    @pytest.mark.asyncio
    async def test_cached_sitemap_is_served(self, service, redis):
        redis.get_page.return_value = "<urlset/>"

        assert await service.sitemap(now=NOW) == "<urlset/>"
        service.post_repo.list_published.assert_not_awaited()
        redis.set_page.assert_not_called()


class TestCollectionService:
    @pytest.fixture
    def service(self, mock_session):
        svc = CollectionService(mock_session, cache=MagicMock())
        svc.repo = AsyncMock()
        svc.member_repo = AsyncMock()
        svc.post_repo = AsyncMock()
        return svc

    @pytest.mark.asyncio
    async def test_create_requires_title_and_slug(self, service, reader):
        with pytest.raises(ValidationError):
            await service.create_collection(reader, {"title": "Elections"})

    @pytest.mark.asyncio
    async def test_create_duplicate_slug(self, service, reader):
        service.repo.get_by_slug.return_value = SimpleNamespace(id=uuid.uuid4())
        with pytest.raises(ConflictError):
            await service.create_collection(reader, {"title": "Elections", "slug": "elections"})

    @pytest.mark.asyncio
    async def test_create_by_any_user(self, service, reader):
        service.repo.get_by_slug.return_value = None
        service.repo.create.return_value = SimpleNamespace(id=uuid.uuid4())

        await service.create_collection(reader, {"title": "Elections", "slug": "elections", "extra": 1})

        service.repo.create.assert_awaited_once_with(
            title="Elections", slug="elections", created_by=reader.id
        )
        service.cache.revalidate_on_commit.assert_called_once_with(
            service.session, "/collections", "/admin/collections"
        )

    @pytest.mark.asyncio
    async def test_only_owner_or_staff_edits(self, service, reader):
        service.repo.get.return_value = SimpleNamespace(id=uuid.uuid4(), created_by=uuid.uuid4())
        with pytest.raises(AuthorizationError):
            await service.update_collection(reader, uuid.uuid4(), {"title": "Mine now"})

    @pytest.mark.asyncio
    async def test_reorder(self, service, editor):
        collection = SimpleNamespace(id=uuid.uuid4(), slug="elections")
        service.repo.get.return_value = collection
        first, second = uuid.uuid4(), uuid.uuid4()

        await service.reorder_posts(
            editor, collection.id, [{"post_id": first, "new_index": 1}, {"post_id": second, "new_index": 0}]
        )

        calls = [c.args for c in service.member_repo.upsert.await_args_list]
        assert calls == [(collection.id, first, 1), (collection.id, second, 0)]
        service.cache.revalidate_on_commit.assert_called_once_with(
            service.session, "/collections", "/admin/collections", "/collections/elections"
        )

    @pytest.mark.asyncio
    async def test_published_members_only(self, service):
        collection = SimpleNamespace(id=uuid.uuid4())
        service.repo.get_by_slug.return_value = collection
        post = make_post()
        service.member_repo.list_posts.return_value = [SimpleNamespace(post=post)]

        found, posts = await service.get_collection_by_slug("elections")

        assert found is collection and posts == [post]
        service.member_repo.list_posts.assert_awaited_once_with(collection.id, published_only=True)
