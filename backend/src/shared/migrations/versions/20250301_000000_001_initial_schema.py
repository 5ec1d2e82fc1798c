# pylint: skip-file
# ruff: noqa
"""Initial schema - editorial CMS tables

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

Tables created:
- profiles: Accounts and roles
- posts, post_revisions: Articles and their pre-edit snapshots
- comments, post_comments: Public (moderated) and internal workflow threads
- post_assignments: Writer/reviewer work items
- collections, collection_posts: Ordered curated groups
- media_files: Media library metadata
- newsletter_subscribers, newsletter_campaigns, newsletter_sends
- analytics_sessions, analytics_events
- editing_locks: One soft lock per post
- social_tasks, social_task_completions

Enum labels are the lower-case API values.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUMS = {
    "user_role": ("admin", "editor", "reader"),
    "post_status": ("draft", "review", "approved", "published", "archived"),
    "comment_status": ("pending", "approved", "rejected", "spam"),
    "assignment_role": ("writer", "reviewer", "editor", "approver"),
    "assignment_status": ("pending", "in_progress", "completed", "overdue"),
    "assignment_priority": ("low", "medium", "high"),
    "subscriber_status": ("active", "unsubscribed"),
    "campaign_status": ("draft", "sending", "sent"),
    "send_status": ("sent", "failed"),
    "traffic_source": ("direct", "search", "social", "referral", "email", "other"),
    "social_platform": ("twitter", "facebook", "linkedin", "instagram", "other"),
    "social_task_priority": ("low", "medium", "high", "urgent"),
    "social_task_status": ("pending", "in_progress", "completed"),
    "verification_status": ("pending", "verified", "rejected"),
}


def enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def uuid_pk() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True)


def fk(name: str, target: str, ondelete: str, nullable: bool = False, **kwargs) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
        **kwargs,
    )


def created_column(name: str = "created_at", **kwargs) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
        **kwargs,
    )


def timestamps() -> list[sa.Column]:
    return [created_column("created_at"), created_column("updated_at")]


def upgrade() -> None:
    """Upgrade database schema."""
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"CREATE TYPE {name} AS ENUM ({labels})")

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCOUNTS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "profiles",
        uuid_pk(),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("role", enum("user_role"), nullable=False, server_default="reader"),
        *timestamps(),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # POSTS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "posts",
        uuid_pk(),
        fk("author_id", "profiles.id", "SET NULL", nullable=True, index=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True, index=True),
        sa.Column("excerpt", sa.String(300), nullable=True),
        sa.Column("content", postgresql.JSONB(), nullable=False),
        sa.Column("featured_image_url", sa.Text(), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("reading_time", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("category", sa.String(50), nullable=False, index=True),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("status", enum("post_status"), nullable=False, server_default="draft", index=True),
        sa.Column("is_editors_pick", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True, index=True),
        *timestamps(),
    )

    op.create_table(
        "post_revisions",
        uuid_pk(),
        fk("post_id", "posts.id", "CASCADE", index=True),
        fk("author_id", "profiles.id", "SET NULL", nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("excerpt", sa.String(300), nullable=True),
        sa.Column("content", postgresql.JSONB(), nullable=False),
        created_column(),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMENTS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "comments",
        uuid_pk(),
        fk("post_id", "posts.id", "CASCADE", index=True),
        fk("user_id", "profiles.id", "CASCADE", index=True),
        fk("parent_id", "comments.id", "CASCADE", nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", enum("comment_status"), nullable=False, server_default="pending", index=True),
        *timestamps(),
    )

    op.create_table(
        "post_comments",
        uuid_pk(),
        fk("post_id", "posts.id", "CASCADE", index=True),
        fk("user_id", "profiles.id", "CASCADE"),
        fk("parent_id", "post_comments.id", "CASCADE", nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        *timestamps(),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # ASSIGNMENTS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "post_assignments",
        uuid_pk(),
        fk("post_id", "posts.id", "CASCADE", index=True),
        fk("assigned_to", "profiles.id", "CASCADE", index=True),
        fk("assigned_by", "profiles.id", "SET NULL", nullable=True),
        sa.Column("role", enum("assignment_role"), nullable=False, server_default="writer"),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True, index=True),
        sa.Column("status", enum("assignment_status"), nullable=False, server_default="pending", index=True),
        sa.Column("priority", enum("assignment_priority"), nullable=False, server_default="medium"),
        sa.Column("notes", sa.Text(), nullable=True),
        *timestamps(),
        sa.UniqueConstraint("post_id", "assigned_to", name="uq_post_assignments_post_user"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # COLLECTIONS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "collections",
        uuid_pk(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True, index=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("featured_image_url", sa.Text(), nullable=True),
        fk("created_by", "profiles.id", "SET NULL", nullable=True),
        *timestamps(),
    )

    op.create_table(
        "collection_posts",
        uuid_pk(),
        fk("collection_id", "collections.id", "CASCADE", index=True),
        fk("post_id", "posts.id", "CASCADE", index=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        *timestamps(),
        sa.UniqueConstraint("collection_id", "post_id", name="uq_collection_posts_collection_post"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MEDIA
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "media_files",
        uuid_pk(),
        sa.Column("file_path", sa.Text(), nullable=False, unique=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("alt_text", sa.Text(), nullable=True),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("credit", sa.String(255), nullable=True),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("category", sa.String(50), nullable=True, index=True),
        fk("uploaded_by", "profiles.id", "SET NULL", nullable=True),
        created_column("uploaded_at", index=True),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # NEWSLETTER
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "newsletter_subscribers",
        uuid_pk(),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("source", sa.String(100), nullable=True),
        sa.Column("status", enum("subscriber_status"), nullable=False, server_default="active", index=True),
        sa.Column("unsubscribe_token", sa.String(64), nullable=False, unique=True, index=True),
        created_column("subscribed_at"),
        sa.Column("unsubscribed_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "newsletter_campaigns",
        uuid_pk(),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default="article"),
        fk("post_id", "posts.id", "SET NULL", nullable=True),
        sa.Column("status", enum("campaign_status"), nullable=False, server_default="draft"),
        sa.Column("sent_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "newsletter_sends",
        uuid_pk(),
        fk("campaign_id", "newsletter_campaigns.id", "CASCADE", index=True),
        fk("subscriber_id", "newsletter_subscribers.id", "CASCADE"),
        sa.Column("status", enum("send_status"), nullable=False),
        created_column("sent_at"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # ANALYTICS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "analytics_sessions",
        uuid_pk(),
        sa.Column("session_id", sa.String(100), nullable=False, unique=True, index=True),
        fk("post_id", "posts.id", "CASCADE", index=True),
        fk("user_id", "profiles.id", "SET NULL", nullable=True),
        sa.Column("device_type", sa.String(20), nullable=False, server_default="unknown"),
        sa.Column("browser", sa.String(50), nullable=True),
        sa.Column("browser_version", sa.String(20), nullable=True),
        sa.Column("os", sa.String(50), nullable=True),
        sa.Column("os_version", sa.String(20), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("referrer", sa.Text(), nullable=True),
        sa.Column("traffic_source", enum("traffic_source"), nullable=False, server_default="other"),
        sa.Column("utm_source", sa.String(100), nullable=True),
        sa.Column("utm_medium", sa.String(100), nullable=True),
        sa.Column("utm_campaign", sa.String(100), nullable=True, index=True),
        sa.Column("page_views", sa.Integer(), nullable=False, server_default="1"),
        created_column("started_at", index=True),
    )

    op.create_table(
        "analytics_events",
        uuid_pk(),
        sa.Column("session_id", sa.String(100), nullable=False, index=True),
        fk("post_id", "posts.id", "CASCADE", index=True),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("event_data", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        created_column("timestamp"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EDITING LOCKS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "editing_locks",
        uuid_pk(),
        fk("post_id", "posts.id", "CASCADE", unique=True),
        fk("user_id", "profiles.id", "CASCADE"),
        sa.Column("user_email", sa.String(255), nullable=False),
        created_column("locked_at"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # SOCIAL TASKS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "social_tasks",
        uuid_pk(),
        fk("post_id", "posts.id", "SET NULL", nullable=True, index=True),
        fk("assigned_to", "profiles.id", "SET NULL", nullable=True, index=True),
        fk("assigned_by", "profiles.id", "SET NULL", nullable=True),
        sa.Column("platform", enum("social_platform"), nullable=False),
        sa.Column("task_title", sa.String(255), nullable=False),
        sa.Column("task_description", sa.Text(), nullable=True),
        sa.Column("post_text", sa.Text(), nullable=True),
        sa.Column("article_url", sa.Text(), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("priority", enum("social_task_priority"), nullable=False, server_default="medium"),
        sa.Column("status", enum("social_task_status"), nullable=False, server_default="pending", index=True),
        *timestamps(),
    )

    op.create_table(
        "social_task_completions",
        uuid_pk(),
        fk("task_id", "social_tasks.id", "CASCADE", index=True),
        fk("completed_by", "profiles.id", "SET NULL", nullable=True),
        sa.Column("completion_link", sa.Text(), nullable=False),
        sa.Column("completion_notes", sa.Text(), nullable=True),
        sa.Column(
            "verification_status",
            enum("verification_status"),
            nullable=False,
            server_default="pending",
        ),
        *timestamps(),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Children before parents
    for table in (
        "social_task_completions",
        "social_tasks",
        "editing_locks",
        "analytics_events",
        "analytics_sessions",
        "newsletter_sends",
        "newsletter_campaigns",
        "newsletter_subscribers",
        "media_files",
        "collection_posts",
        "collections",
        "post_assignments",
        "post_comments",
        "comments",
        "post_revisions",
        "posts",
        "profiles",
    ):
        op.drop_table(table)

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
