"""
Tests for writer assignments and the deadline reminder digest.
"""
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from factories import NOW
from src.shared.adapters.email_adapter import NOT_CONFIGURED
from src.shared.core.exceptions import (
    DuplicateResourceError,
    PostNotFoundError,
    ProfileNotFoundError,
)
from src.shared.models import AssignmentRole, AssignmentStatus
from src.shared.services.assignment_service import (
    OPEN_STATUSES,
    AssignmentService,
    status_for_deadline,
)


@pytest.fixture
def notifier():
    mock = MagicMock()
    mock.is_configured = True
    mock.notify = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def service(mock_session, notifier):
    svc = AssignmentService(mock_session, notifier=notifier)
    svc.repo = AsyncMock()
    svc.post_repo = AsyncMock()
    svc.profile_repo = AsyncMock()
    return svc


def assignment(email, title, deadline):
    return SimpleNamespace(
        assignee=SimpleNamespace(email=email) if email else None,
        post=SimpleNamespace(title=title),
        deadline=deadline,
    )


def test_status_for_deadline():
    assert status_for_deadline(NOW - timedelta(minutes=1), NOW) == AssignmentStatus.OVERDUE
    assert status_for_deadline(NOW + timedelta(days=1), NOW) == AssignmentStatus.PENDING
    assert status_for_deadline(None, NOW) == AssignmentStatus.PENDING


class TestCreate:
    @pytest.mark.asyncio
    async def test_past_deadline_is_overdue(self, service, editor):
        post_id, writer_id = uuid.uuid4(), uuid.uuid4()
        service.post_repo.exists.return_value = True
        service.profile_repo.exists.return_value = True
        service.repo.get_for_post_user.return_value = None
        service.repo.create.return_value = SimpleNamespace(id=uuid.uuid4())

        await service.create_assignment(
            editor, post_id, writer_id, deadline=NOW - timedelta(days=1), now=NOW
        )

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["role"] == AssignmentRole.WRITER
        assert kwargs["status"] == AssignmentStatus.OVERDUE
        assert kwargs["assigned_by"] == editor.id

    @pytest.mark.asyncio
    async def test_unknown_post(self, service, editor):
        service.post_repo.exists.return_value = False
        with pytest.raises(PostNotFoundError):
            await service.create_assignment(editor, uuid.uuid4(), uuid.uuid4())

    @pytest.mark.asyncio
    async def test_unknown_assignee(self, service, editor):
        service.post_repo.exists.return_value = True
        service.profile_repo.exists.return_value = False
        with pytest.raises(ProfileNotFoundError):
            await service.create_assignment(editor, uuid.uuid4(), uuid.uuid4())

    @pytest.mark.asyncio
    async def test_existing_pair_is_not_overwritten(self, service, editor):
        service.post_repo.exists.return_value = True
        service.profile_repo.exists.return_value = True
        service.repo.get_for_post_user.return_value = SimpleNamespace(role=AssignmentRole.REVIEWER)

        with pytest.raises(DuplicateResourceError):
            await service.create_assignment(editor, uuid.uuid4(), uuid.uuid4())

        service.repo.create.assert_not_awaited()
        service.repo.upsert.assert_not_awaited()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_moving_deadline_recomputes_status(self, service, editor):
        current = SimpleNamespace(id=uuid.uuid4())
        service.repo.get.return_value = current

        await service.update_assignment(
            editor, current.id, {"deadline": NOW + timedelta(days=2)}, now=NOW
        )

        service.repo.apply.assert_awaited_once_with(
            current, deadline=NOW + timedelta(days=2), status=AssignmentStatus.PENDING
        )

    @pytest.mark.asyncio
    async def test_explicit_status_wins(self, service, editor):
        current = SimpleNamespace(id=uuid.uuid4())
        service.repo.get.return_value = current

        await service.update_assignment(
            editor,
            current.id,
            {"deadline": NOW - timedelta(days=2), "status": AssignmentStatus.COMPLETED},
            now=NOW,
        )

        assert service.repo.apply.await_args.kwargs["status"] == AssignmentStatus.COMPLETED


class TestDeadlineReminders:
    @pytest.mark.asyncio
    async def test_one_digest_per_assignee(self, service, notifier):
        service.repo.list_due_between.return_value = [
            assignment("a@inshortbd.com", "Budget", NOW + timedelta(hours=5)),
            assignment("b@inshortbd.com", "Floods", NOW + timedelta(days=2)),
            assignment("a@inshortbd.com", "Exports", NOW + timedelta(days=3)),
            assignment(None, "Orphan", NOW + timedelta(days=1)),
        ]

        result = await service.send_deadline_reminders(now=NOW)

        assert result == {"success": True, "sent": 2}
        service.repo.list_due_between.assert_awaited_once_with(
            NOW, NOW + timedelta(days=7), OPEN_STATUSES
        )
        recipients = [c.args[0] for c in notifier.notify.await_args_list]
        assert recipients == ["a@inshortbd.com", "b@inshortbd.com"]
        first_digest = notifier.notify.await_args_list[0].args[1]
        assert "2 articles" in first_digest.subject

    @pytest.mark.asyncio
    async def test_failed_delivery_is_not_counted(self, service, notifier):
        service.repo.list_due_between.return_value = [
            assignment("a@inshortbd.com", "Budget", NOW + timedelta(hours=5)),
        ]
        notifier.notify.return_value = False

        assert await service.send_deadline_reminders(now=NOW) == {"success": True, "sent": 0}

    @pytest.mark.asyncio
    async def test_not_configured(self, service, notifier):
        notifier.is_configured = False

        result = await service.send_deadline_reminders(now=NOW)

        assert result == {"success": False, "sent": 0, "error": NOT_CONFIGURED}
        service.repo.list_due_between.assert_not_awaited()
