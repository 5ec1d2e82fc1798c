"""
Analytics Report Aggregation
============================

Folds session and event rows into the dashboard shapes. Kept free of I/O
so the same code serves the API and tests.

    traffic_report(sessions)
        → totals, traffic sources, devices, browsers (top 10), top posts

    campaign_metrics(sessions, events)
        → one row per utm_campaign, busiest first
"""

import math
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from src.shared.utils.numbers import percentage, round_half_up


TOP_BROWSERS = 10
TOP_POSTS = 10


@dataclass
class Breakdown:
    name: str
    count: int
    percentage: int


@dataclass
class TrafficReport:
    total_sessions: int
    total_page_views: int
    traffic_sources: list[Breakdown] = field(default_factory=list)
    devices: list[Breakdown] = field(default_factory=list)
    browsers: list[Breakdown] = field(default_factory=list)
    top_posts: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class CampaignMetrics:
    campaign: str
    sessions: int
    page_views: int
    avg_time_on_page: int
    avg_scroll_depth: int
    top_source: str
    top_medium: str
    percentage: int


def _breakdown(counter: Counter, total: int, limit: Optional[int] = None) -> list[Breakdown]:
    return [
        Breakdown(name=name, count=count, percentage=percentage(count, total))
        for name, count in counter.most_common(limit)
    ]


def _value(enum_or_str: Any) -> str:
    return getattr(enum_or_str, "value", enum_or_str) or "unknown"


def traffic_report(sessions: Sequence[Any]) -> TrafficReport:
    """
    Aggregate session rows.

    Each session needs: post_id, traffic_source, device_type, browser,
    page_views.
    """
    total = len(sessions)
    sources: Counter = Counter()
    devices: Counter = Counter()
    browsers: Counter = Counter()
    posts: Counter = Counter()
    page_views = 0

    for s in sessions:
        sources[_value(s.traffic_source)] += 1
        devices[s.device_type or "unknown"] += 1
        browsers[s.browser or "unknown"] += 1
        posts[s.post_id] += 1
        page_views += s.page_views or 1

    return TrafficReport(
        total_sessions=total,
        total_page_views=page_views,
        traffic_sources=_breakdown(sources, total),
        devices=_breakdown(devices, total),
        browsers=_breakdown(browsers, total, TOP_BROWSERS),
        top_posts=[
            {"post_id": post_id, "sessions": count}
            for post_id, count in posts.most_common(TOP_POSTS)
        ],
    )


def _number(value: Any) -> float:
    """Client-sent metric as a float; anything unusable counts as 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _mean_of(events: Iterable[Any], key: str) -> int:
    values = [_number((e.event_data or {}).get(key)) for e in events]
    if not values:
        return 0
    return int(round_half_up(sum(values) / len(values)))


def _top(counter: Counter) -> str:
    most = counter.most_common(1)
    return most[0][0] if most else "unknown"


def campaign_metrics(sessions: Sequence[Any], events: Sequence[Any]) -> list[CampaignMetrics]:
    """
    Group campaign sessions by utm_campaign and attach engagement averages.

    Time on page comes from `time` events (event_data.timeSeconds), scroll
    depth from `scroll` events (event_data.scrollDepth).
    """
    campaign_sessions = [s for s in sessions if s.utm_campaign]
    total = len(campaign_sessions)

    grouped: dict[str, list[Any]] = defaultdict(list)
    for s in campaign_sessions:
        grouped[s.utm_campaign].append(s)

    events_by_session: dict[str, list[Any]] = defaultdict(list)
    for e in events:
        events_by_session[e.session_id].append(e)

    metrics = []
    for campaign, rows in grouped.items():
        session_events = [e for s in rows for e in events_by_session.get(s.session_id, [])]
        time_events = [e for e in session_events if e.event_type == "time"]
        scroll_events = [e for e in session_events if e.event_type == "scroll"]

        metrics.append(CampaignMetrics(
            campaign=campaign,
            sessions=len(rows),
            page_views=sum(s.page_views or 1 for s in rows),
            avg_time_on_page=_mean_of(time_events, "timeSeconds"),
            avg_scroll_depth=_mean_of(scroll_events, "scrollDepth"),
            top_source=_top(Counter(s.utm_source for s in rows if s.utm_source)),
            top_medium=_top(Counter(s.utm_medium for s in rows if s.utm_medium)),
            percentage=percentage(len(rows), total),
        ))

    # Stable sort keeps first-seen order for ties
    return sorted(metrics, key=lambda m: m.sessions, reverse=True)
