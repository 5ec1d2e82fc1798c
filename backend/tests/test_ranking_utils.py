"""
Tests for trending and related-article ranking, comment threading and
number helpers.
"""
from datetime import timedelta
from types import SimpleNamespace

import pytest

from factories import NOW
from src.shared.utils.comment_tree import build_thread
from src.shared.utils.numbers import percentage, round_half_up
from src.shared.utils.related import rank_related, related_score
from src.shared.utils.trending import rank_trending, trending_score


def item(**kwargs):
    return SimpleNamespace(**kwargs)


class TestTrending:
    def test_score_components(self):
        assert trending_score(0, 1, 0) == pytest.approx(0.4)
        assert trending_score(99, 99, 168) == pytest.approx(0.6)
        assert trending_score(99, 99, 500) == pytest.approx(0.6)

    def test_ranks_by_views_and_freshness(self):
        popular_fresh = item(name="a", views=1000, published_at=NOW)
        unseen_fresh = item(name="b", views=0, published_at=NOW)
        popular_old = item(name="c", views=1000, published_at=NOW - timedelta(hours=200))

        ranked = rank_trending([unseen_fresh, popular_old, popular_fresh], NOW)

        assert [p.name for p in ranked] == ["a", "c", "b"]

    def test_limit_and_empty(self):
        posts = [item(views=i, published_at=NOW) for i in range(10)]
        assert len(rank_trending(posts, NOW, limit=3)) == 3
        assert rank_trending([], NOW) == []

    def test_all_zero_views(self):
        posts = [item(views=0, published_at=None), item(views=None, published_at=NOW)]
        assert len(rank_trending(posts, NOW)) == 2


class TestRelated:
    def test_score(self):
        current = item(category="Tech", tags=["ai", "chips"])
        candidate = item(category="Tech", tags=["ai", "chips", "x"], published_at=NOW - timedelta(days=1))
        assert related_score(current, candidate, NOW) == 5 + 3 * 2 + 2

    def test_old_unrelated_scores_zero(self):
        current = item(category="Tech", tags=["ai"])
        candidate = item(category="Sports", tags=None, published_at=NOW - timedelta(days=30))
        assert related_score(current, candidate, NOW) == 0

    def test_rank_keeps_order_on_ties(self):
        current = item(category="Tech", tags=[])
        first = item(name="first", category="World", tags=[], published_at=None)
        second = item(name="second", category="World", tags=[], published_at=None)
        best = item(name="best", category="Tech", tags=[], published_at=None)

        ranked = rank_related(current, [first, second, best], NOW)

        assert [c.name for c in ranked] == ["best", "first", "second"]


class TestCommentTree:
    def test_nests_replies_in_input_order(self):
        rows = [
            item(id=1, parent_id=None),
            item(id=2, parent_id=1),
            item(id=3, parent_id=None),
            item(id=4, parent_id=1),
            item(id=5, parent_id=2),
        ]

        roots = build_thread(rows)

        assert [n.item.id for n in roots] == [1, 3]
        assert [n.item.id for n in roots[0].replies] == [2, 4]
        assert [n.item.id for n in roots[0].replies[0].replies] == [5]

    def test_orphans_are_dropped_with_their_replies(self):
        rows = [item(id=1, parent_id=99), item(id=2, parent_id=1), item(id=3, parent_id=None)]
        roots = build_thread(rows)
        assert [n.item.id for n in roots] == [3]
        assert roots[0].replies == []


@pytest.mark.parametrize("value,expected", [(2.5, 3), (-2.5, -2), (1.4, 1)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_round_half_up_digits():
    assert round_half_up(2.25, 1) == pytest.approx(2.3)


def test_percentage():
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(5, 0) == 0
