"""
Tests for post authoring, scheduling and the read-next rail.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from factories import NOW, doc, make_post
from src.shared.core.exceptions import (
    AuthorizationError,
    ConflictError,
    PostNotFoundError,
    ValidationError,
)
from src.shared.models import PostStatus
from src.shared.services.post_service import PaginatedPosts, PostService


def apply_fields(instance, **fields):
    for key, value in fields.items():
        setattr(instance, key, value)
    return instance


@pytest.fixture
def service(mock_session):
    svc = PostService(mock_session, cache=MagicMock())
    svc.repo = AsyncMock()
    svc.repo.apply.side_effect = apply_fields
    svc.revision_repo = AsyncMock()
    svc.collection_post_repo = AsyncMock()
    return svc


def post_data(**overrides):
    data = {
        "title": "Budget passes parliament",
        "slug": "budget-passes-parliament",
        "content": doc("The budget passed late on Thursday."),
        "category": "Politics",
        "tags": ["budget"],
    }
    data.update(overrides)
    return data


def test_pagination_flags():
    page = PaginatedPosts(items=[], total=41, page=2, page_size=20)
    assert page.has_next and page.has_prev
    assert not PaginatedPosts(items=[], total=20, page=1, page_size=20).has_next


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_draft(self, service, editor):
        service.repo.slug_exists.return_value = False
        service.repo.create.return_value = make_post()

        await service.create_post(editor, post_data(status="published"))

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["status"] == PostStatus.DRAFT
        assert kwargs["author_id"] == editor.id
        assert kwargs["reading_time"] == 1
        assert kwargs["slug"] == "budget-passes-parliament"

    @pytest.mark.asyncio
    async def test_reports_every_field_error(self, service, editor):
        with pytest.raises(ValidationError) as exc:
            await service.create_post(editor, {"title": "Hi", "slug": "Bad Slug"})

        fields = [e["field"] for e in exc.value.details["errors"]]
        assert fields == ["title", "slug", "category", "content"]
        service.repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_slug(self, service, editor):
        service.repo.slug_exists.return_value = True
        with pytest.raises(ConflictError):
            await service.create_post(editor, post_data())

    @pytest.mark.asyncio
    async def test_readers_cannot_create(self, service, reader):
        with pytest.raises(AuthorizationError):
            await service.create_post(reader, post_data())


class TestUpdate:
    @pytest.mark.asyncio
    async def test_snapshot_of_previous_version(self, service, editor):
        post = make_post()
        service.repo.get.return_value = post
        old_title = post.title

        await service.update_post(editor, post.id, {"title": "Central bank cuts policy rate"})

        kwargs = service.revision_repo.create.await_args.kwargs
        assert kwargs["title"] == old_title
        assert post.title == "Central bank cuts policy rate"

    @pytest.mark.asyncio
    async def test_category_change_skips_revision(self, service, editor):
        post = make_post()
        service.repo.get.return_value = post

        await service.update_post(editor, post.id, {"category": "Economy"})

        service.revision_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_published_post_revalidates(self, service, editor):
        post = make_post(status=PostStatus.PUBLISHED)
        service.repo.get.return_value = post

        await service.update_post(editor, post.id, {"excerpt": "New excerpt"})

        service.cache.revalidate_posts_on_commit.assert_called_once_with(service.session, [post.slug])

    @pytest.mark.asyncio
    async def test_non_owner_reader(self, service, reader):
        service.repo.get.return_value = make_post(author_id=uuid.uuid4())
        with pytest.raises(AuthorizationError):
            await service.update_post(reader, uuid.uuid4(), {"title": "Something else entirely"})

    @pytest.mark.asyncio
    async def test_missing(self, service, editor):
        service.repo.get.return_value = None
        with pytest.raises(PostNotFoundError):
            await service.update_post(editor, uuid.uuid4(), {})


class TestScheduling:
    @pytest.mark.asyncio
    async def test_publishes_due_posts(self, service):
        due = [make_post(slug="a", published_at=NOW), make_post(slug="b", published_at=NOW)]
        service.repo.list_due_scheduled.return_value = due

        result = await service.publish_scheduled_posts(now=NOW)

        assert result["published"] == 2
        assert [p["title"] for p in result["posts"]] == [due[0].title, due[1].title]
        assert all(p.status == PostStatus.PUBLISHED for p in due)
        service.repo.list_due_scheduled.assert_awaited_once_with(NOW)
        service.cache.revalidate_posts_on_commit.assert_called_once_with(service.session, ["a", "b"])

    @pytest.mark.asyncio
    async def test_nothing_due(self, service):
        service.repo.list_due_scheduled.return_value = []

        assert await service.publish_scheduled_posts(now=NOW) == {"published": 0, "posts": []}
        service.cache.revalidate_posts_on_commit.assert_not_called()


@pytest.mark.asyncio
async def test_view_count_failure_is_swallowed(service):
    service.repo.increment_views.side_effect = RuntimeError("db gone")
    assert await service.increment_view_count(uuid.uuid4()) is False


@pytest.mark.asyncio
async def test_delete_with_no_ids(service, editor):
    assert await service.delete_posts(editor, []) == 0
    service.repo.delete_with_dependents.assert_not_awaited()


class TestNextArticles:
    @pytest.mark.asyncio
    async def test_collection_successor_first_then_latest(self, service):
        current = make_post(status=PostStatus.PUBLISHED)
        successor = make_post(slug="part-3", status=PostStatus.PUBLISHED)
        latest = make_post(slug="latest", status=PostStatus.PUBLISHED)
        service.repo.get.return_value = current

        collection_id = uuid.uuid4()
        service.collection_post_repo.memberships_for_post.return_value = [
            SimpleNamespace(collection_id=collection_id, order_index=1)
        ]
        service.collection_post_repo.list_posts.return_value = [
            SimpleNamespace(post_id=uuid.uuid4(), order_index=0, post=make_post(slug="part-1")),
            SimpleNamespace(post_id=current.id, order_index=1, post=current),
            SimpleNamespace(post_id=successor.id, order_index=2, post=successor),
        ]
        service.repo.list_related_candidates.return_value = []
        service.repo.list_published.return_value = [current, successor, latest]

        picked = await service.get_next_articles(current.id, limit=2, now=NOW)

        assert [p.slug for p in picked] == ["part-3", "latest"]
