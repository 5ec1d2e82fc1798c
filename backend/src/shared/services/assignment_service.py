"""
Assignment Service

Writer assignments with deadlines, and the daily deadline reminder digest.

Status rule:
============
A deadline already in the past makes the assignment overdue; otherwise it
is pending. The rule is applied on create and whenever the deadline moves
without an explicit status.
"""

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.email_adapter import NOT_CONFIGURED
from src.shared.core.exceptions import (
    AssignmentNotFoundError,
    DuplicateResourceError,
    PostNotFoundError,
    ProfileNotFoundError,
)
from src.shared.core.logging import get_logger
from src.shared.models.assignment import PostAssignment
from src.shared.models.base import utcnow
from src.shared.models.enums import (
    AssignmentPriority,
    AssignmentRole,
    AssignmentStatus,
)
from src.shared.models.profile import Profile
from src.shared.repositories.assignment_repository import AssignmentRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.services.notification_service import NotificationService
from src.shared.services.permissions import require_staff
from src.shared.utils.constants import REMINDER_WINDOW_DAYS
from src.shared.utils.email_templates import deadline_reminder_email

logger = get_logger(__name__)


OPEN_STATUSES = (AssignmentStatus.PENDING, AssignmentStatus.IN_PROGRESS)


def status_for_deadline(deadline: Optional[datetime], now: datetime) -> AssignmentStatus:
    if deadline is not None and deadline < now:
        return AssignmentStatus.OVERDUE
    return AssignmentStatus.PENDING


class AssignmentService:
    def __init__(self, session: AsyncSession, notifier: Optional[NotificationService] = None) -> None:
        self.session = session
        self.repo = AssignmentRepository(session)
        self.post_repo = PostRepository(session)
        self.profile_repo = ProfileRepository(session)
        self.notifier = notifier or NotificationService()

    async def _get(self, assignment_id: UUID) -> PostAssignment:
        assignment = await self.repo.get(assignment_id)
        if not assignment:
            raise AssignmentNotFoundError(str(assignment_id))
        return assignment

    async def create_assignment(
        self,
        user: Profile,
        post_id: UUID,
        assigned_to: UUID,
        deadline: Optional[datetime] = None,
        priority: AssignmentPriority = AssignmentPriority.MEDIUM,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PostAssignment:
        require_staff(user)
        if not await self.post_repo.exists(post_id):
            raise PostNotFoundError(str(post_id))
        if not await self.profile_repo.exists(assigned_to):
            raise ProfileNotFoundError(str(assigned_to))
        if await self.repo.get_for_post_user(post_id, assigned_to):
            raise DuplicateResourceError("This user is already assigned to the post")

        assignment = await self.repo.create(
            post_id=post_id,
            assigned_to=assigned_to,
            assigned_by=user.id,
            role=AssignmentRole.WRITER,
            deadline=deadline,
            priority=priority,
            notes=notes,
            status=status_for_deadline(deadline, now or utcnow()),
        )
        logger.info(
            "Assignment created",
            assignment_id=str(assignment.id),
            post_id=str(post_id),
            assigned_to=str(assigned_to),
        )
        return assignment

    async def get_assignments(
        self,
        *,
        assigned_to: Optional[UUID] = None,
        status: Optional[AssignmentStatus] = None,
        priority: Optional[AssignmentPriority] = None,
    ) -> List[PostAssignment]:
        return await self.repo.list_filtered(assigned_to=assigned_to, status=status, priority=priority)

    async def get_assignment_by_post(self, post_id: UUID) -> Optional[PostAssignment]:
        assignments = await self.repo.list_for_post(post_id, roles=[AssignmentRole.WRITER])
        return assignments[0] if assignments else None

    async def update_assignment(
        self,
        user: Profile,
        assignment_id: UUID,
        fields: Dict[str, Any],
        now: Optional[datetime] = None,
    ) -> PostAssignment:
        """
        Partial update of deadline, status, priority and notes. Only keys
        present in fields are touched; a deadline of None clears it.
        """
        require_staff(user)
        assignment = await self._get(assignment_id)

        changes = {k: fields[k] for k in ("deadline", "status", "priority", "notes") if k in fields}
        if "deadline" in changes and changes.get("status") is None:
            changes["status"] = status_for_deadline(changes["deadline"], now or utcnow())

        return await self.repo.apply(assignment, **changes)

    async def update_assignment_status(
        self,
        user: Profile,
        assignment_id: UUID,
        status: AssignmentStatus,
    ) -> PostAssignment:
        require_staff(user)
        assignment = await self._get(assignment_id)
        return await self.repo.apply(assignment, status=status)

    async def send_deadline_reminders(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        One digest per assignee for open assignments due within the window.

        Returns:
            {"success": bool, "sent": n}; sent counts delivered digests only
        """
        if not self.notifier.is_configured:
            return {"success": False, "sent": 0, "error": NOT_CONFIGURED}

        now = now or utcnow()
        due = await self.repo.list_due_between(now, now + timedelta(days=REMINDER_WINDOW_DAYS), OPEN_STATUSES)

        by_email: "OrderedDict[str, List[PostAssignment]]" = OrderedDict()
        for assignment in due:
            if assignment.assignee and assignment.assignee.email:
                by_email.setdefault(assignment.assignee.email, []).append(assignment)

        sent = 0
        for email, items in by_email.items():
            if await self.notifier.notify(email, deadline_reminder_email(items, now)):
                sent += 1

        logger.info("Deadline reminders sent", sent=sent, assignees=len(by_email), due=len(due))
        return {"success": True, "sent": sent}
