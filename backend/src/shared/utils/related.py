"""
Related Article Scoring

Ranks candidate posts for the "read next" rail:

    +5  same category
    +3  per shared tag
    +2  published within the last 7 days

Ties keep the candidates' incoming order (newest first from the query).
"""

from datetime import datetime, timedelta
from typing import Sequence

from src.shared.models.post import Post


CATEGORY_POINTS = 5
TAG_POINTS = 3
RECENT_POINTS = 2
RECENT_WINDOW = timedelta(days=7)


def related_score(current: Post, candidate: Post, now: datetime) -> int:
    score = 0
    if candidate.category == current.category:
        score += CATEGORY_POINTS
    shared = set(candidate.tags or []) & set(current.tags or [])
    score += TAG_POINTS * len(shared)
    if candidate.published_at and now - candidate.published_at < RECENT_WINDOW:
        score += RECENT_POINTS
    return score


def rank_related(current: Post, candidates: Sequence[Post], now: datetime) -> list[Post]:
    return sorted(candidates, key=lambda c: related_score(current, c, now), reverse=True)
