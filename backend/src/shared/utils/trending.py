"""
Trending Score

    score = 0.6 * log10(views + 1) / log10(max_views + 1)
          + 0.4 * max(0, 1 - age_hours / 168)

max_views is the largest view count among the candidates (at least 1),
so popularity is normalised to 0..1 within the batch and freshness decays
linearly to zero over seven days.
"""

from datetime import datetime
import math
from typing import Optional, Protocol, Sequence, TypeVar


VIEW_WEIGHT = 0.6
RECENCY_WEIGHT = 0.4
RECENCY_WINDOW_HOURS = 7 * 24


class Rankable(Protocol):
    views: Optional[int]
    published_at: Optional[datetime]


R = TypeVar("R", bound=Rankable)


def trending_score(views: int, max_views: int, age_hours: float) -> float:
    view_score = math.log10(views + 1) / math.log10(max_views + 1)
    recency_score = max(0.0, 1 - age_hours / RECENCY_WINDOW_HOURS)
    return VIEW_WEIGHT * view_score + RECENCY_WEIGHT * recency_score


def rank_trending(posts: Sequence[R], now: datetime, limit: int = 5) -> list[R]:
    """Top `limit` posts by trending score, highest first."""
    if not posts:
        return []

    max_views = max([p.views or 0 for p in posts] + [1])

    def score(post: R) -> float:
        published = post.published_at or now
        age_hours = max(0.0, (now - published).total_seconds() / 3600)
        return trending_score(post.views or 0, max_views, age_hours)

    return sorted(posts, key=score, reverse=True)[:limit]
