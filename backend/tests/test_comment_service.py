"""
Tests for reader comments and moderation.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from src.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    ValidationError,
)
from src.shared.models import CommentStatus
from src.shared.services.comment_service import CommentService


@pytest.fixture
def service(mock_session):
    svc = CommentService(mock_session, cache=MagicMock())
    svc.repo = AsyncMock()
    svc.post_repo = AsyncMock()
    svc.post_repo.exists.return_value = True
    return svc


class TestCreate:
    @pytest.mark.asyncio
    async def test_anonymous(self, service):
        with pytest.raises(AuthenticationError) as exc:
            await service.create_comment(None, uuid.uuid4(), "Hello")
        assert exc.value.message == "You must be logged in to comment"

    @pytest.mark.asyncio
    async def test_sanitized_and_pending(self, service, reader):
        post_id = uuid.uuid4()
        service.repo.create.return_value = SimpleNamespace(id=uuid.uuid4())

        await service.create_comment(
            reader, post_id, '  Great <strong>read</strong><script>alert(1)</script>  '
        )

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["status"] == CommentStatus.PENDING
        assert kwargs["user_id"] == reader.id
        assert "<script>" not in kwargs["content"]
        assert kwargs["content"].startswith("Great <strong>read</strong>")
        service.cache.revalidate_on_commit.assert_called_once_with(service.session, f"/news/{post_id}")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   ", "x" * 5001])
    async def test_rejects_empty_or_long(self, service, reader, content):
        with pytest.raises(ValidationError):
            await service.create_comment(reader, uuid.uuid4(), content)
        service.repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_post(self, service, reader):
        service.post_repo.exists.return_value = False
        with pytest.raises(PostNotFoundError):
            await service.create_comment(reader, uuid.uuid4(), "Hello")


@pytest.mark.asyncio
async def test_public_thread_only_shows_approved(service):
    service.repo.list_for_post.return_value = [
        SimpleNamespace(id=1, parent_id=None),
        SimpleNamespace(id=2, parent_id=1),
        SimpleNamespace(id=3, parent_id=None),
    ]
    post_id = uuid.uuid4()

    thread = await service.get_comments(post_id)

    service.repo.list_for_post.assert_awaited_once_with(post_id, status=CommentStatus.APPROVED)
    assert [node.item.id for node in thread] == [1, 3]


class TestModeration:
    @pytest.mark.asyncio
    async def test_approve(self, service, editor):
        comment = SimpleNamespace(id=uuid.uuid4(), post_id=uuid.uuid4())
        service.repo.get.return_value = comment
        service.repo.apply.return_value = comment

        await service.moderate_comment(editor, comment.id, CommentStatus.APPROVED)

        service.repo.apply.assert_awaited_once_with(comment, status=CommentStatus.APPROVED)
        service.cache.revalidate_on_commit.assert_called_once_with(service.session, f"/news/{comment.post_id}")

    @pytest.mark.asyncio
    async def test_pending_is_not_a_moderation_outcome(self, service, editor):
        with pytest.raises(ValidationError):
            await service.moderate_comment(editor, uuid.uuid4(), CommentStatus.PENDING)

    @pytest.mark.asyncio
    async def test_missing_comment(self, service, editor):
        service.repo.get.return_value = None
        with pytest.raises(CommentNotFoundError):
            await service.moderate_comment(editor, uuid.uuid4(), CommentStatus.SPAM)

    @pytest.mark.asyncio
    async def test_readers_cannot_moderate(self, service, reader):
        with pytest.raises(AuthorizationError):
            await service.moderate_comment(reader, uuid.uuid4(), CommentStatus.APPROVED)
