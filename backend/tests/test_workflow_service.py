"""
Tests for editorial status transitions and their side effects.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
import uuid

import pytest

from factories import NOW, make_post
from src.shared.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    PostNotFoundError,
    ValidationError,
)
from src.shared.db.session import discard_after_commit, run_after_commit
from src.shared.models import AssignmentRole, PostStatus
from src.shared.services.cache_service import CacheService
from src.shared.services.workflow_service import WorkflowService, can_transition


@pytest.fixture
def notifier():
    mock = MagicMock()
    mock.notify = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def redis():
    return MagicMock()


@pytest.fixture
def service(mock_session, notifier, redis):
    svc = WorkflowService(mock_session, notifier=notifier, cache=CacheService(redis=redis))
    svc.post_repo.get = AsyncMock()
    svc.profile_repo.get = AsyncMock()
    svc.assignment_repo = AsyncMock()
    svc.assignment_repo.list_for_post.return_value = []
    svc.comment_repo = AsyncMock()
    return svc


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        (PostStatus.DRAFT, PostStatus.REVIEW, True),
        (PostStatus.DRAFT, PostStatus.PUBLISHED, False),
        (PostStatus.REVIEW, PostStatus.APPROVED, True),
        (PostStatus.APPROVED, PostStatus.PUBLISHED, True),
        (PostStatus.PUBLISHED, PostStatus.REVIEW, False),
        (PostStatus.ARCHIVED, PostStatus.DRAFT, True),
        (PostStatus.ARCHIVED, PostStatus.PUBLISHED, False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


class TestRequestReview:
    @pytest.mark.asyncio
    async def test_author_submits_and_reviewers_are_notified(self, service, notifier, reader):
        post = make_post(author_id=reader.id)
        service.post_repo.get.return_value = post
        service.assignment_repo.list_for_post.return_value = [
            SimpleNamespace(assignee=SimpleNamespace(email="reviewer@inshortbd.com")),
            SimpleNamespace(assignee=None),
        ]

        result = await service.request_review(reader, post.id)

        assert result.status == PostStatus.REVIEW
        recipients = [c.args[0] for c in notifier.notify.await_args_list]
        assert "reviewer@inshortbd.com" in recipients
        reviewer_mail = notifier.notify.await_args_list[-1].args[1]
        assert reviewer_mail.subject == f"Review Requested: {post.title}"

    @pytest.mark.asyncio
    async def test_other_readers_cannot_submit(self, service, reader):
        post = make_post(author_id=uuid.uuid4())
        service.post_repo.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.request_review(reader, post.id)
        assert post.status == PostStatus.DRAFT

    @pytest.mark.asyncio
    async def test_missing_post(self, service, editor):
        service.post_repo.get.return_value = None
        with pytest.raises(PostNotFoundError):
            await service.request_review(editor, uuid.uuid4())


class TestReviewDecisions:
    @pytest.mark.asyncio
    async def test_approve_requires_review_status(self, service, editor):
        post = make_post(status=PostStatus.DRAFT)
        service.post_repo.get.return_value = post

        with pytest.raises(InvalidTransitionError) as exc:
            await service.approve_post(editor, post.id)

        assert exc.value.status_code == 409
        assert exc.value.details == {"current_status": "draft", "target_status": "approved"}

    @pytest.mark.asyncio
    async def test_approve_records_comment(self, service, editor):
        post = make_post(status=PostStatus.REVIEW)
        service.post_repo.get.return_value = post

        result = await service.approve_post(editor, post.id, comment="  Looks good  ")

        assert result.status == PostStatus.APPROVED
        service.comment_repo.create.assert_awaited_once_with(
            post_id=post.id, user_id=editor.id, content="Looks good"
        )

    @pytest.mark.asyncio
    async def test_readers_cannot_approve(self, service, reader):
        with pytest.raises(AuthorizationError):
            await service.approve_post(reader, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_reject_requires_comment(self, service, editor):
        with pytest.raises(ValidationError):
            await service.reject_post(editor, uuid.uuid4(), "   ")

    @pytest.mark.asyncio
    async def test_reject_returns_to_draft(self, service, editor):
        post = make_post(status=PostStatus.REVIEW)
        service.post_repo.get.return_value = post

        result = await service.reject_post(editor, post.id, "Fix the intro")

        assert result.status == PostStatus.DRAFT
        service.comment_repo.create.assert_awaited_once_with(
            post_id=post.id, user_id=editor.id, content="**Rejected:** Fix the intro"
        )


class TestPublish:
    @pytest.mark.asyncio
    async def test_side_effects_wait_for_commit(self, service, editor, redis, mock_session):
        post = make_post(status=PostStatus.APPROVED)
        service.post_repo.get.return_value = post

        with patch("src.shared.services.workflow_service.dispatch_new_article") as dispatch:
            result = await service.publish_post(editor, post.id)

            assert result.status == PostStatus.PUBLISHED
            assert result.published_at is not None
            redis.delete_pages.assert_not_called()
            dispatch.assert_not_called()

            await run_after_commit(mock_session)

        assert f"/news/{post.slug}" in redis.delete_pages.call_args.args
        dispatch.assert_called_once_with(post.id)

    @pytest.mark.asyncio
    async def test_rolled_back_publish_sends_nothing(self, service, editor, redis, mock_session):
        post = make_post(status=PostStatus.APPROVED)
        service.post_repo.get.return_value = post

        with patch("src.shared.services.workflow_service.dispatch_new_article") as dispatch:
            await service.publish_post(editor, post.id)
            discard_after_commit(mock_session)
            await run_after_commit(mock_session)

        dispatch.assert_not_called()
        redis.delete_pages.assert_not_called()

    @pytest.mark.asyncio
    async def test_keeps_existing_publish_time(self, service, editor):
        post = make_post(status=PostStatus.APPROVED, published_at=NOW)
        service.post_repo.get.return_value = post

        result = await service.publish_post(editor, post.id)

        assert result.published_at == NOW

    @pytest.mark.asyncio
    async def test_archive_published_revalidates(self, service, editor, redis, mock_session):
        post = make_post(status=PostStatus.PUBLISHED)
        service.post_repo.get.return_value = post

        result = await service.archive_post(editor, post.id)
        await run_after_commit(mock_session)

        assert result.status == PostStatus.ARCHIVED
        redis.delete_pages.assert_called_once()


class TestReviewers:
    @pytest.mark.asyncio
    async def test_writer_role_is_rejected(self, service, editor):
        with pytest.raises(ValidationError):
            await service.assign_reviewer(editor, uuid.uuid4(), uuid.uuid4(), AssignmentRole.WRITER)

    @pytest.mark.asyncio
    async def test_assign_notifies_reviewer(self, service, editor, reader, notifier):
        post = make_post()
        service.post_repo.get.return_value = post
        service.profile_repo.get.return_value = reader

        await service.assign_reviewer(editor, post.id, reader.id)

        service.assignment_repo.upsert.assert_awaited_once_with(
            post_id=post.id,
            assigned_to=reader.id,
            assigned_by=editor.id,
            role=AssignmentRole.REVIEWER,
        )
        notifier.notify.assert_awaited_once()
        assert notifier.notify.await_args.args[0] == reader.email


class TestDiscussion:
    @pytest.mark.asyncio
    async def test_empty_comment(self, service, editor):
        with pytest.raises(ValidationError):
            await service.add_post_comment(editor, uuid.uuid4(), "  ")

    @pytest.mark.asyncio
    async def test_thread(self, service):
        service.comment_repo.list_for_post.return_value = [
            SimpleNamespace(id=1, parent_id=None),
            SimpleNamespace(id=2, parent_id=1),
        ]

        thread = await service.get_post_comments(uuid.uuid4())

        assert len(thread) == 1
        assert thread[0].replies[0].item.id == 2
