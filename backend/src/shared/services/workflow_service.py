"""
Workflow Service

Editorial status transitions, review assignments and internal discussion.

Transitions:
============
    draft     → review, archived
    review    → approved, draft
    approved  → published, draft
    published → archived, draft
    archived  → draft

Anything else raises InvalidTransitionError (409). The scheduled publish
job is the only path that moves draft → published directly, and it goes
through PostService rather than this table.

Notification mail is sent after the status change and never fails it.
Cache purges and the new-article mailing wait for the commit.
"""

from typing import Dict, FrozenSet, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    PostNotFoundError,
    ProfileNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.db.session import after_commit
from src.shared.models.assignment import PostAssignment
from src.shared.models.base import utcnow
from src.shared.models.comment import PostComment
from src.shared.models.enums import AssignmentRole, PostStatus
from src.shared.models.post import Post
from src.shared.models.profile import Profile
from src.shared.repositories.assignment_repository import AssignmentRepository
from src.shared.repositories.comment_repository import PostCommentRepository
from src.shared.repositories.post_repository import PostRepository
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.services.cache_service import CacheService
from src.shared.services.newsletter_service import dispatch_new_article
from src.shared.services.notification_service import NotificationService
from src.shared.services.permissions import is_owner_or_staff, require_login, require_staff
from src.shared.utils.comment_tree import ThreadNode, build_thread
from src.shared.utils.email_templates import (
    approved_email,
    review_requested_email,
    reviewer_assigned_email,
    revisions_needed_email,
)

logger = get_logger(__name__)


ALLOWED_TRANSITIONS: Dict[PostStatus, FrozenSet[PostStatus]] = {
    PostStatus.DRAFT: frozenset({PostStatus.REVIEW, PostStatus.ARCHIVED}),
    PostStatus.REVIEW: frozenset({PostStatus.APPROVED, PostStatus.DRAFT}),
    PostStatus.APPROVED: frozenset({PostStatus.PUBLISHED, PostStatus.DRAFT}),
    PostStatus.PUBLISHED: frozenset({PostStatus.ARCHIVED, PostStatus.DRAFT}),
    PostStatus.ARCHIVED: frozenset({PostStatus.DRAFT}),
}

REVIEW_ROLES = (AssignmentRole.REVIEWER, AssignmentRole.EDITOR, AssignmentRole.APPROVER)


def can_transition(current: PostStatus, target: PostStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: PostStatus, target: PostStatus) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(current.value, target.value)


class WorkflowService:
    """
    Service for the editorial workflow.

    Handles:
    - Status transitions guarded by ALLOWED_TRANSITIONS
    - Reviewer assignment on posts
    - Internal post comments (threaded)
    - Author and reviewer notifications
    """

    def __init__(
        self,
        session: AsyncSession,
        notifier: Optional[NotificationService] = None,
        cache: Optional[CacheService] = None,
    ) -> None:
        self.session = session
        self.post_repo = PostRepository(session)
        self.profile_repo = ProfileRepository(session)
        self.assignment_repo = AssignmentRepository(session)
        self.comment_repo = PostCommentRepository(session)
        self.notifier = notifier or NotificationService()
        self.cache = cache or CacheService()

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _get_post(self, post_id: UUID) -> Post:
        post = await self.post_repo.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _move(self, post: Post, target: PostStatus, **fields) -> Post:
        ensure_transition(post.status, target)
        previous = post.status
        post = await self.post_repo.apply(post, status=target, **fields)
        logger.info(
            "Post status changed",
            post_id=str(post.id),
            from_status=previous.value,
            to_status=target.value,
        )
        return post

    def _author_email(self, post: Post) -> Optional[str]:
        return post.author.email if post.author else None

    # ═══════════════════════════════════════════════════════════════════════════
    # TRANSITIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def request_review(self, user: Profile, post_id: UUID) -> Post:
        post = await self._get_post(post_id)
        if not is_owner_or_staff(user, post.author_id):
            raise AuthorizationError("You do not have permission to submit this post for review")

        post = await self._move(post, PostStatus.REVIEW)

        await self.notifier.notify(
            self._author_email(post),
            review_requested_email(post.title, post.id),
        )
        for assignment in await self.assignment_repo.list_for_post(post.id, roles=REVIEW_ROLES):
            if assignment.assignee:
                await self.notifier.notify(
                    assignment.assignee.email,
                    review_requested_email(post.title, post.id, for_reviewer=True),
                )
        return post

    async def approve_post(self, user: Profile, post_id: UUID, comment: Optional[str] = None) -> Post:
        require_staff(user)
        post = await self._move(await self._get_post(post_id), PostStatus.APPROVED)

        if comment and comment.strip():
            await self.comment_repo.create(post_id=post.id, user_id=user.id, content=comment.strip())

        await self.notifier.notify(
            self._author_email(post),
            approved_email(post.title, post.id, comment),
        )
        return post

    async def reject_post(self, user: Profile, post_id: UUID, comment: Optional[str]) -> Post:
        """Send back to draft with a required reason."""
        require_staff(user)
        if not comment or not comment.strip():
            raise ValidationError("Rejection comment is required")

        post = await self._move(await self._get_post(post_id), PostStatus.DRAFT)
        await self.comment_repo.create(
            post_id=post.id,
            user_id=user.id,
            content=f"**Rejected:** {comment.strip()}",
        )

        await self.notifier.notify(
            self._author_email(post),
            revisions_needed_email(post.title, post.id, comment.strip()),
        )
        return post

    async def publish_post(self, user: Profile, post_id: UUID) -> Post:
        require_staff(user)
        post = await self._get_post(post_id)
        fields = {} if post.published_at else {"published_at": utcnow()}
        post = await self._move(post, PostStatus.PUBLISHED, **fields)

        published_id = post.id
        self.cache.revalidate_posts_on_commit(self.session, [post.slug])
        after_commit(self.session, lambda: dispatch_new_article(published_id))
        return post

    async def archive_post(self, user: Profile, post_id: UUID) -> Post:
        require_staff(user)
        post = await self._get_post(post_id)
        was_published = post.status == PostStatus.PUBLISHED
        post = await self._move(post, PostStatus.ARCHIVED)
        if was_published:
            self.cache.revalidate_posts_on_commit(self.session, [post.slug])
        return post

    # ═══════════════════════════════════════════════════════════════════════════
    # REVIEWERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def assign_reviewer(
        self,
        user: Profile,
        post_id: UUID,
        assigned_to: UUID,
        role: AssignmentRole = AssignmentRole.REVIEWER,
    ) -> PostAssignment:
        require_staff(user)
        if role not in REVIEW_ROLES:
            raise ValidationError("Role must be reviewer, editor or approver")

        post = await self._get_post(post_id)
        reviewer = await self.profile_repo.get(assigned_to)
        if not reviewer:
            raise ProfileNotFoundError(str(assigned_to))

        assignment = await self.assignment_repo.upsert(
            post_id=post.id,
            assigned_to=reviewer.id,
            assigned_by=user.id,
            role=role,
        )
        await self.notifier.notify(
            reviewer.email,
            reviewer_assigned_email(post.title, post.id, role.value),
        )
        return assignment

    async def unassign_reviewer(self, user: Profile, post_id: UUID, assigned_to: UUID) -> bool:
        require_staff(user)
        return await self.assignment_repo.delete_for_post_user(post_id, assigned_to)

    async def get_post_assignments(self, post_id: UUID) -> List[PostAssignment]:
        return await self.assignment_repo.list_for_post(post_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # DISCUSSION
    # ═══════════════════════════════════════════════════════════════════════════

    async def add_post_comment(
        self,
        user: Profile,
        post_id: UUID,
        content: Optional[str],
        parent_id: Optional[UUID] = None,
    ) -> PostComment:
        require_login(user)
        if not content or not content.strip():
            raise ValidationError("Comment cannot be empty")

        await self._get_post(post_id)
        return await self.comment_repo.create(
            post_id=post_id,
            user_id=user.id,
            content=content.strip(),
            parent_id=parent_id,
        )

    async def get_post_comments(self, post_id: UUID) -> List[ThreadNode[PostComment]]:
        return build_thread(await self.comment_repo.list_for_post(post_id))
