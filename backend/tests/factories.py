"""In-memory model builders for tests (nothing here touches a database)."""

from datetime import datetime, timedelta, timezone
import uuid

from src.shared.models import Post, PostStatus, Profile, UserRole


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def doc(*paragraphs: str) -> dict:
    """Editor document with one paragraph per argument."""
    return {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": p}]}
            for p in paragraphs
        ],
    }


def make_profile(role: UserRole = UserRole.EDITOR, **overrides) -> Profile:
    values = {
        "id": uuid.uuid4(),
        "email": f"{role.value}@inshortbd.com",
        "password_hash": "x",
        "full_name": f"Test {role.value.title()}",
        "role": role,
    }
    values.update(overrides)
    return Profile(**values)


def make_post(**overrides) -> Post:
    values = {
        "id": uuid.uuid4(),
        "title": "Central bank holds policy rate",
        "slug": "central-bank-holds-policy-rate",
        "excerpt": "Rates unchanged as inflation eases.",
        "content": doc("The central bank held its policy rate on Sunday."),
        "category": "Finance",
        "tags": ["economy"],
        "status": PostStatus.DRAFT,
        "views": 0,
        "reading_time": 1,
        "is_editors_pick": False,
        "published_at": None,
        "created_at": NOW - timedelta(days=1),
        "updated_at": NOW - timedelta(days=1),
    }
    values.update(overrides)
    return Post(**values)
