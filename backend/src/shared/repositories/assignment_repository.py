"""
PostAssignment Repository

Common Operations:
==================
- get_for_post_user()  → The (post, assignee) row, if any
- upsert()             → Insert or update on the (post_id, assigned_to) key
- list_filtered()      → Assignment board, soonest deadline first
- list_due_between()   → Open assignments with a deadline inside a window
"""

from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.models.assignment import PostAssignment
from src.shared.models.base import utcnow
from src.shared.models.enums import (
    AssignmentPriority,
    AssignmentRole,
    AssignmentStatus,
)
from src.shared.repositories.base import BaseRepository


class AssignmentRepository(BaseRepository[PostAssignment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PostAssignment, session)

    async def get_for_post_user(self, post_id: UUID, user_id: UUID) -> Optional[PostAssignment]:
        result = await self.session.execute(
            select(PostAssignment).where(
                PostAssignment.post_id == post_id,
                PostAssignment.assigned_to == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        *,
        post_id: UUID,
        assigned_to: UUID,
        assigned_by: Optional[UUID],
        role: AssignmentRole,
        **fields: Any,
    ) -> PostAssignment:
        """
        INSERT ... ON CONFLICT (post_id, assigned_to) DO UPDATE.

        Re-assigning an existing pair updates role, assigner and any extra
        fields instead of failing on the unique constraint.
        """
        values = {
            "post_id": post_id,
            "assigned_to": assigned_to,
            "assigned_by": assigned_by,
            "role": role,
            **fields,
        }
        update_values = {k: v for k, v in values.items() if k not in ("post_id", "assigned_to")}
        update_values["updated_at"] = utcnow()
        stmt = (
            pg_insert(PostAssignment)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[PostAssignment.post_id, PostAssignment.assigned_to],
                set_=update_values,
            )
            .returning(PostAssignment.id)
        )
        assignment_id = (await self.session.execute(stmt)).scalar_one()
        assignment = await self.get(assignment_id)
        await self.session.refresh(assignment)
        return assignment

    async def delete_for_post_user(self, post_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            delete(PostAssignment).where(
                PostAssignment.post_id == post_id,
                PostAssignment.assigned_to == user_id,
            )
        )
        return (result.rowcount or 0) > 0

    async def list_for_post(
        self,
        post_id: UUID,
        roles: Optional[Iterable[AssignmentRole]] = None,
    ) -> list[PostAssignment]:
        query = select(PostAssignment).where(PostAssignment.post_id == post_id)
        if roles is not None:
            query = query.where(PostAssignment.role.in_(list(roles)))
        result = await self.session.execute(query.order_by(PostAssignment.created_at.asc()))
        return list(result.scalars().all())

    async def list_filtered(
        self,
        *,
        assigned_to: Optional[UUID] = None,
        status: Optional[AssignmentStatus] = None,
        priority: Optional[AssignmentPriority] = None,
    ) -> list[PostAssignment]:
        query = self._apply_filters(
            select(PostAssignment),
            {"assigned_to": assigned_to, "status": status, "priority": priority},
        )
        result = await self.session.execute(
            query.order_by(PostAssignment.deadline.asc().nulls_last())
        )
        return list(result.scalars().all())

    async def list_due_between(
        self,
        start: datetime,
        end: datetime,
        statuses: Iterable[AssignmentStatus],
    ) -> list[PostAssignment]:
        result = await self.session.execute(
            select(PostAssignment)
            .where(
                PostAssignment.status.in_(list(statuses)),
                PostAssignment.deadline >= start,
                PostAssignment.deadline <= end,
            )
            .order_by(PostAssignment.deadline.asc())
        )
        return list(result.scalars().all())
